from datetime import datetime, timezone
from sqlalchemy import Column, Integer, String, Text, Boolean, DateTime
from sqlalchemy.orm import relationship
from app.db.base import Base


class ComplaintType(Base):
    """Configurable complaint categories managed by admins"""
    __tablename__ = 'complaint_types'

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False, unique=True, index=True)
    description = Column(Text)
    is_active = Column(Boolean, nullable=False, default=True, index=True)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    complaints = relationship("Complaint", back_populates="complaint_type")

    def __repr__(self):
        return f"<ComplaintType(id={self.id}, name='{self.name}', active={self.is_active})>"
