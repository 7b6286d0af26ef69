from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db
from app.schemas.applicant_status import (
    ApplicantStatusCreate,
    ApplicantStatusPage,
    ApplicantStatusRead,
    ApplicantStatusUpdate,
)
from app.services.applicant_status_service import ApplicantStatusService

router = APIRouter()


@router.get("", response_model=ApplicantStatusPage)
def list_applicant_statuses(
    db: Session = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
) -> ApplicantStatusPage:
    items, total = ApplicantStatusService.list_statuses(db, skip=skip, limit=limit)
    return ApplicantStatusPage(
        items=[ApplicantStatusRead.model_validate(s) for s in items],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.post("", response_model=ApplicantStatusRead, status_code=status.HTTP_201_CREATED)
def create_applicant_status(
    payload: ApplicantStatusCreate,
    db: Session = Depends(get_db),
):
    return ApplicantStatusService.create_status(db, payload)


@router.put("/{status_id}", response_model=ApplicantStatusRead)
def update_applicant_status(
    status_id: int,
    payload: ApplicantStatusUpdate,
    db: Session = Depends(get_db),
):
    return ApplicantStatusService.update_status(db, status_id, payload)


@router.delete("/{status_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_applicant_status(
    status_id: int,
    db: Session = Depends(get_db),
) -> Response:
    ApplicantStatusService.delete_status(db, status_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
