from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field

from app.models.enums import UserRole


class UserBase(BaseModel):
    name: str = Field(..., min_length=1, max_length=100)
    role: UserRole = UserRole.APPLICANT
    phone: Optional[str] = Field(None, max_length=30)


class UserCreate(UserBase):
    login_id: str = Field(..., min_length=1, max_length=100)


class UserUpdate(BaseModel):
    name: Optional[str] = Field(None, min_length=1, max_length=100)
    role: Optional[UserRole] = None
    phone: Optional[str] = Field(None, max_length=30)
    is_active: Optional[bool] = None


class UserRead(UserBase):
    id: int
    login_id: str
    is_active: bool
    created_at: datetime
    updated_at: datetime

    class Config:
        from_attributes = True
