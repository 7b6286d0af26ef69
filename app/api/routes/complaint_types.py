from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.schemas.complaint_type import ComplaintTypeCreate, ComplaintTypeRead, ComplaintTypeUpdate
from app.services.complaint_type_service import ComplaintTypeService

router = APIRouter()


@router.get("", response_model=List[ComplaintTypeRead])
def list_complaint_types(
    active_only: bool = False,
    db: Session = Depends(get_db),
):
    return ComplaintTypeService.list_types(db, active_only=active_only)


@router.post("", response_model=ComplaintTypeRead, status_code=status.HTTP_201_CREATED)
def create_complaint_type(
    payload: ComplaintTypeCreate,
    db: Session = Depends(get_db),
):
    return ComplaintTypeService.create_type(db, payload)


@router.put("/{type_id}", response_model=ComplaintTypeRead)
def update_complaint_type(
    type_id: int,
    payload: ComplaintTypeUpdate,
    db: Session = Depends(get_db),
):
    return ComplaintTypeService.update_type(db, type_id, payload)


@router.delete("/{type_id}", response_model=ComplaintTypeRead)
def deactivate_complaint_type(
    type_id: int,
    db: Session = Depends(get_db),
):
    """Deactivate (types are never hard-deleted)."""
    return ComplaintTypeService.deactivate_type(db, type_id)
