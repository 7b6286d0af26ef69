from datetime import datetime, timezone
from sqlalchemy import Column, Integer, Date, DateTime, CheckConstraint
from app.db.base import Base


class ReceiptSequenceCounter(Base):
    """Highest daily sequence issued per calendar date (never deleted)"""
    __tablename__ = 'receipt_sequence_counters'

    issue_date = Column(Date, primary_key=True)
    last_sequence = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc))
    updated_at = Column(DateTime, nullable=False, default=lambda: datetime.now(timezone.utc), onupdate=lambda: datetime.now(timezone.utc))

    __table_args__ = (
        CheckConstraint('last_sequence >= 0', name='ck_receipt_sequence_non_negative'),
    )

    def __repr__(self):
        return f"<ReceiptSequenceCounter(date={self.issue_date}, last_sequence={self.last_sequence})>"
