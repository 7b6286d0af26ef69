from datetime import datetime, timezone
from sqlalchemy import (
    Column, Integer, BigInteger, Boolean, DateTime, ForeignKey, CheckConstraint,
)
from sqlalchemy.orm import relationship
from app.db.base import Base


class ApplicantStatus(Base):
    """Mock socio-economic snapshot of an applicant, shown to officers reviewing a complaint"""
    __tablename__ = 'applicant_statuses'

    id = Column(Integer, primary_key=True, autoincrement=True)
    applicant_id = Column(Integer, ForeignKey('users.id', ondelete='CASCADE'), nullable=False, unique=True, index=True)
    income_decile = Column(Integer, nullable=False, comment="1 (lowest) .. 10 (highest)")
    asset_amount = Column(BigInteger, nullable=False, default=0, comment="Assets, in units of 10,000 KRW")
    has_vehicle = Column(Boolean, nullable=False, default=False)
    has_disability = Column(Boolean, nullable=False, default=False)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint('income_decile BETWEEN 1 AND 10', name='ck_applicant_status_income_decile'),
        CheckConstraint('asset_amount >= 0', name='ck_applicant_status_asset_amount'),
    )

    applicant = relationship("User", back_populates="applicant_status")

    def __repr__(self):
        return f"<ApplicantStatus(id={self.id}, applicant_id={self.applicant_id}, decile={self.income_decile})>"
