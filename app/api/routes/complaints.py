from typing import List, Optional

from fastapi import APIRouter, Depends, Query, Response, status
from sqlalchemy.orm import Session

from app.api.deps import get_db, get_sequence_allocator
from app.models.enums import ComplaintStatus
from app.schemas.applicant_status import ApplicantStatusRead
from app.schemas.complaint import (
    ComplaintCreate,
    ComplaintListItem,
    ComplaintPage,
    ComplaintRead,
    ComplaintUpdate,
    StatusChangeRequest,
    StatusInfo,
)
from app.services.applicant_status_service import ApplicantStatusService
from app.services.complaint_service import ComplaintService
from app.services.sequence_allocator import SequenceAllocator
from app.services.status_machine import ComplaintStateMachine

router = APIRouter()


@router.post("", response_model=ComplaintRead, status_code=status.HTTP_201_CREATED)
def create_complaint(
    payload: ComplaintCreate,
    db: Session = Depends(get_db),
    allocator: SequenceAllocator = Depends(get_sequence_allocator),
):
    """
    Submit a complaint.

    Issues a CMP-YYYYMMDD-NNNN receipt number and starts in RECEIVED.
    """
    return ComplaintService.create_complaint(db=db, payload=payload, allocator=allocator)


@router.get("", response_model=ComplaintPage)
def list_complaints(
    db: Session = Depends(get_db),
    skip: int = Query(0, ge=0),
    limit: int = Query(50, ge=1, le=200),
    status_filter: Optional[ComplaintStatus] = Query(None, alias="status"),
    type_id: Optional[int] = None,
    applicant_id: Optional[int] = None,
) -> ComplaintPage:
    """List complaints with optional filters."""
    items, total = ComplaintService.list_complaints(
        db=db,
        skip=skip,
        limit=limit,
        status=status_filter,
        type_id=type_id,
        applicant_id=applicant_id,
    )
    return ComplaintPage(
        items=[ComplaintListItem.model_validate(c) for c in items],
        total=total,
        skip=skip,
        limit=limit,
    )


@router.get("/statuses", response_model=List[StatusInfo])
def list_statuses() -> List[StatusInfo]:
    """The status workflow: next statuses allowed from each status."""
    return [
        StatusInfo(
            status=s,
            next_statuses=sorted(ComplaintStateMachine.allowed_transitions(s), key=lambda n: n.value),
            terminal=ComplaintStateMachine.is_terminal(s),
        )
        for s in ComplaintStatus
    ]


@router.get("/receipt/{receipt_number}", response_model=ComplaintRead)
def get_complaint_by_receipt(
    receipt_number: str,
    db: Session = Depends(get_db),
) -> ComplaintRead:
    """Look a complaint up by its receipt number."""
    return ComplaintService.get_complaint_by_receipt_number(db, receipt_number)


@router.get("/{complaint_id}", response_model=ComplaintRead)
def get_complaint(
    complaint_id: int, 
    db: Session = Depends(get_db)
) -> ComplaintRead:
    """Get a specific complaint by ID."""
    return ComplaintService.get_complaint_by_id(db, complaint_id)


@router.put("/{complaint_id}", response_model=ComplaintRead)
def update_complaint(
    complaint_id: int,
    payload: ComplaintUpdate,
    db: Session = Depends(get_db),
) -> ComplaintRead:
    """Update a complaint's descriptive fields."""
    return ComplaintService.update_complaint(db, complaint_id, payload)


@router.post("/{complaint_id}/status", response_model=ComplaintRead)
def change_status(
    complaint_id: int,
    payload: StatusChangeRequest,
    db: Session = Depends(get_db),
) -> ComplaintRead:
    """Move a complaint to another status (409 if the workflow forbids it)."""
    return ComplaintService.change_status(
        db, complaint_id, payload.status, expected_version=payload.version
    )


@router.get("/{complaint_id}/applicant-status", response_model=ApplicantStatusRead)
def get_applicant_status(
    complaint_id: int,
    db: Session = Depends(get_db),
) -> ApplicantStatusRead:
    """Mock status data of the complaint's applicant (for officers)."""
    return ApplicantStatusService.get_for_complaint(db, complaint_id)


@router.delete("/{complaint_id}", status_code=status.HTTP_204_NO_CONTENT)
def delete_complaint(
    complaint_id: int, 
    applicant_id: Optional[int] = None,
    db: Session = Depends(get_db)
) -> Response:
    """Delete a complaint still in RECEIVED."""
    ComplaintService.delete_complaint(db, complaint_id, applicant_id=applicant_id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
