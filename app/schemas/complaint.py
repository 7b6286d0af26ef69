from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from app.models.enums import ComplaintStatus


class ComplaintBase(BaseModel):
    title: str = Field(..., max_length=255)
    content: str
    contact_phone: str = Field(..., max_length=30)


class ComplaintCreate(ComplaintBase):
    type_id: int
    # no auth layer yet; the applicant is passed explicitly
    applicant_id: int


class ComplaintUpdate(BaseModel):
    title: Optional[str] = Field(None, max_length=255)
    content: Optional[str] = None
    contact_phone: Optional[str] = Field(None, max_length=30)
    review_comment: Optional[str] = None


class StatusChangeRequest(BaseModel):
    status: ComplaintStatus
    version: Optional[int] = Field(None, description="Expected complaint version (optimistic lock)")


class ComplaintRead(ComplaintBase):
    id: int
    receipt_number: str
    issue_date: date
    daily_sequence: int
    type_id: int
    applicant_id: int
    status: ComplaintStatus
    review_comment: Optional[str] = None
    version: int
    created_at: datetime
    updated_at: datetime
    resolved_at: Optional[datetime] = None
    closed_at: Optional[datetime] = None

    class Config:
        from_attributes = True


class ComplaintListItem(BaseModel):
    """Lightweight schema for list views"""
    id: int
    receipt_number: str
    title: str
    type_id: int
    applicant_id: int
    status: ComplaintStatus
    created_at: datetime

    class Config:
        from_attributes = True


class ComplaintPage(BaseModel):
    items: List[ComplaintListItem]
    total: int
    skip: int
    limit: int


class StatusInfo(BaseModel):
    status: ComplaintStatus
    next_statuses: List[ComplaintStatus]
    terminal: bool
