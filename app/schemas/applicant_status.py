from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class ApplicantStatusCreate(BaseModel):
    applicant_id: int
    income_decile: int = Field(..., ge=1, le=10)
    asset_amount: int = Field(..., ge=0)
    has_vehicle: bool = False
    has_disability: bool = False


class ApplicantStatusUpdate(BaseModel):
    income_decile: Optional[int] = Field(None, ge=1, le=10)
    asset_amount: Optional[int] = Field(None, ge=0)
    has_vehicle: Optional[bool] = None
    has_disability: Optional[bool] = None


class ApplicantStatusRead(BaseModel):
    id: int
    applicant_id: int
    income_decile: int
    asset_amount: int
    has_vehicle: bool
    has_disability: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True


class ApplicantStatusPage(BaseModel):
    items: List[ApplicantStatusRead]
    total: int
    skip: int
    limit: int
