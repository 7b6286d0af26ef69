
from datetime import datetime, timezone
from sqlalchemy import (
    Column, Integer, String, Boolean, DateTime, Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from app.db.base import Base

from app.models.enums import UserRole

class User(Base):
    """Applicants, officers, approvers and admins"""
    __tablename__ = 'users'
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    login_id = Column(String(100), nullable=False, unique=True, index=True)
    name = Column(String(100), nullable=False)
    role = Column(SQLEnum(UserRole, name='user_role_enum'), nullable=False, default=UserRole.APPLICANT, index=True)
    phone = Column(String(30))
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
    
    # Relationships
    complaints = relationship("Complaint", back_populates="applicant")
    applicant_status = relationship("ApplicantStatus", back_populates="applicant", uselist=False, cascade="all, delete-orphan")
    
    def __repr__(self):
        return f"<User(id={self.id}, login_id='{self.login_id}', role='{self.role}')>"
