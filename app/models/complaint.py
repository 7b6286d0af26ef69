from datetime import datetime, timezone
from sqlalchemy import (
    Column, Integer, String, Text, DateTime, Date, ForeignKey, UniqueConstraint, Enum as SQLEnum,
)
from sqlalchemy.orm import relationship
from app.db.base import Base

from app.models.enums import ComplaintStatus


class Complaint(Base):
    """Citizen complaints; status only changes through ComplaintStateMachine"""
    __tablename__ = 'complaints'
    
    id = Column(Integer, primary_key=True, autoincrement=True)
    receipt_number = Column(String(32), nullable=False, unique=True, index=True, comment="CMP-YYYYMMDD-NNNN")
    issue_date = Column(Date, nullable=False, index=True)
    daily_sequence = Column(Integer, nullable=False)

    type_id = Column(Integer, ForeignKey('complaint_types.id', ondelete='RESTRICT'), nullable=False, index=True)
    applicant_id = Column(Integer, ForeignKey('users.id', ondelete='RESTRICT'), nullable=False, index=True)
    title = Column(String(255), nullable=False)
    content = Column(Text, nullable=False)
    contact_phone = Column(String(30), nullable=False)
    review_comment = Column(Text)

    status = Column(
        SQLEnum(ComplaintStatus, name='complaint_status_enum'),
        nullable=False, default=ComplaintStatus.RECEIVED, index=True,
    )
    version = Column(Integer, nullable=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), index=True)
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))
    resolved_at = Column(DateTime)
    closed_at = Column(DateTime)

    __table_args__ = (
        UniqueConstraint('issue_date', 'daily_sequence', name='uq_complaints_issue_date_sequence'),
    )
    # Optimistic lock: concurrent writers on the same row raise StaleDataError
    __mapper_args__ = {"version_id_col": version}
    
    # Relationships
    applicant = relationship("User", back_populates="complaints")
    complaint_type = relationship("ComplaintType", back_populates="complaints")
    
    def __repr__(self):
        return f"<Complaint(id={self.id}, receipt='{self.receipt_number}', status='{self.status}')>"
