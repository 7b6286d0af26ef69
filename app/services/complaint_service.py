import logging
from datetime import date, datetime, timezone
from typing import List, Optional, Tuple
from zoneinfo import ZoneInfo

from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from app.core.config import settings
from app.core.exceptions import (
    AllocationError,
    ComplaintNotDeletableError,
    ComplaintNotFoundError,
    ComplaintTypeNotFoundError,
    ComplaintValidationError,
    ConcurrentStatusUpdateError,
    FormatError,
)
from app.models.complaint import Complaint
from app.models.complaint_type import ComplaintType
from app.models.enums import ComplaintStatus
from app.models.user import User
from app.schemas.complaint import ComplaintCreate, ComplaintUpdate
from app.services.sequence_allocator import SequenceAllocator
from app.services.status_machine import ComplaintStateMachine
from app.services.utils.receipt_number import parse_receipt_number

logger = logging.getLogger(__name__)


def current_issue_date() -> date:
    """Today's date in the zone receipt numbers are issued in"""
    return datetime.now(ZoneInfo(settings.RECEIPT_TIMEZONE)).date()


class ComplaintService:
    @staticmethod
    def create_complaint(
        db: Session,
        payload: ComplaintCreate,
        allocator: SequenceAllocator,
        issue_date: Optional[date] = None,
    ) -> Complaint:
        """
        Create a complaint with a fresh receipt number, in status RECEIVED.

        Everything that can reject the request is checked before a sequence
        is allocated, so a consumed sequence always belongs to a complaint
        we intend to store.
        """
        data = payload.model_dump()
        for field in ("title", "content", "contact_phone"):
            if not str(data[field]).strip():
                raise ComplaintValidationError(
                    f"Field '{field}' must not be blank", {"field": field}
                )
            data[field] = str(data[field]).strip()

        complaint_type = db.query(ComplaintType).filter(ComplaintType.id == payload.type_id).first()
        if not complaint_type or not complaint_type.is_active:
            raise ComplaintTypeNotFoundError(
                "Complaint type does not exist", {"type_id": payload.type_id}
            )

        applicant = db.query(User).filter(User.id == payload.applicant_id).first()
        if not applicant or not applicant.is_active:
            raise ComplaintValidationError(
                "Applicant does not exist", {"applicant_id": payload.applicant_id}
            )

        if issue_date is None:
            issue_date = current_issue_date()

        # 1. Allocate the receipt number (committed by the store)
        receipt_number = ComplaintService._issue_receipt_number(allocator, issue_date)
        _, daily_sequence = parse_receipt_number(receipt_number)

        # 2. Store the complaint
        complaint = Complaint(
            **data,
            receipt_number=receipt_number,
            issue_date=issue_date,
            daily_sequence=daily_sequence,
            status=ComplaintStateMachine.initialize(),
        )
        db.add(complaint)
        db.commit()
        db.refresh(complaint)

        logger.info("📥 Complaint %s received (id=%d)", receipt_number, complaint.id)
        return complaint

    @staticmethod
    def _issue_receipt_number(allocator: SequenceAllocator, issue_date: date) -> str:
        attempts = max(1, settings.RECEIPT_ALLOCATION_ATTEMPTS)
        for attempt in range(1, attempts + 1):
            try:
                return allocator.issue_receipt_number(issue_date)
            except AllocationError:
                if attempt == attempts:
                    raise
                logger.warning(
                    "⚠️ Receipt allocation attempt %d/%d failed for %s, retrying",
                    attempt, attempts, issue_date,
                )

    @staticmethod
    def get_complaint_by_id(db: Session, complaint_id: int) -> Complaint:
        complaint = db.query(Complaint).filter(Complaint.id == complaint_id).first()
        if not complaint:
            raise ComplaintNotFoundError(
                "Complaint not found", {"complaint_id": complaint_id}
            )
        return complaint

    @staticmethod
    def get_complaint_by_receipt_number(db: Session, receipt_number: str) -> Complaint:
        try:
            parse_receipt_number(receipt_number)
        except FormatError as e:
            raise ComplaintValidationError(e.message, e.details) from e
        complaint = db.query(Complaint).filter(
            Complaint.receipt_number == receipt_number
        ).first()
        if not complaint:
            raise ComplaintNotFoundError(
                "Complaint not found", {"receipt_number": receipt_number}
            )
        return complaint

    @staticmethod
    def list_complaints(
        db: Session,
        skip: int = 0,
        limit: int = 50,
        status: Optional[ComplaintStatus] = None,
        type_id: Optional[int] = None,
        applicant_id: Optional[int] = None,
    ) -> Tuple[List[Complaint], int]:
        query = db.query(Complaint)

        if status:
            query = query.filter(Complaint.status == status)
        if type_id is not None:
            query = query.filter(Complaint.type_id == type_id)
        if applicant_id is not None:
            query = query.filter(Complaint.applicant_id == applicant_id)

        total = query.count()
        items = query.order_by(Complaint.created_at.desc(), Complaint.id.desc()).offset(skip).limit(limit).all()
        return items, total

    @staticmethod
    def update_complaint(
        db: Session, complaint_id: int, payload: ComplaintUpdate
    ) -> Complaint:
        """Edit descriptive fields. Status is not editable here."""
        complaint = ComplaintService.get_complaint_by_id(db, complaint_id)

        data = payload.model_dump(exclude_unset=True)
        for key, value in data.items():
            if key in ("title", "content", "contact_phone"):
                if value is None or not str(value).strip():
                    raise ComplaintValidationError(
                        f"Field '{key}' must not be blank", {"field": key}
                    )
                value = str(value).strip()
            setattr(complaint, key, value)

        db.add(complaint)
        db.commit()
        db.refresh(complaint)
        return complaint

    @staticmethod
    def change_status(
        db: Session,
        complaint_id: int,
        requested: ComplaintStatus,
        expected_version: Optional[int] = None,
    ) -> Complaint:
        """
        Move a complaint along the workflow.

        Raises InvalidStatusTransitionError without writing anything when the
        edge is not allowed, and ConcurrentStatusUpdateError when the row
        changed since the caller (or this request) read it.
        """
        complaint = ComplaintService.get_complaint_by_id(db, complaint_id)

        if expected_version is not None and complaint.version != expected_version:
            raise ConcurrentStatusUpdateError(
                "Complaint was modified by another request",
                {"complaint_id": complaint_id, "expected_version": expected_version,
                 "current_version": complaint.version},
            )

        previous = complaint.status
        new_status = ComplaintStateMachine.transition(previous, requested)

        now = datetime.now(timezone.utc)
        complaint.status = new_status
        if new_status == ComplaintStatus.RESOLVED:
            complaint.resolved_at = now
        elif new_status == ComplaintStatus.CLOSED:
            complaint.closed_at = now

        try:
            db.commit()
        except StaleDataError:
            db.rollback()
            raise ConcurrentStatusUpdateError(
                "Complaint was modified by another request",
                {"complaint_id": complaint_id},
            )

        db.refresh(complaint)
        logger.info(
            "🔁 Complaint %s status %s -> %s",
            complaint.receipt_number, previous.value, new_status.value,
        )
        return complaint

    @staticmethod
    def delete_complaint(
        db: Session, complaint_id: int, applicant_id: Optional[int] = None
    ) -> None:
        """Delete a complaint that nobody has started working on yet."""
        complaint = ComplaintService.get_complaint_by_id(db, complaint_id)

        if applicant_id is not None and complaint.applicant_id != applicant_id:
            raise ComplaintNotDeletableError(
                "Only the applicant can delete this complaint",
                {"complaint_id": complaint_id},
            )
        if complaint.status != ComplaintStatus.RECEIVED:
            raise ComplaintNotDeletableError(
                "Only complaints in status RECEIVED can be deleted",
                {"complaint_id": complaint_id, "status": complaint.status.value},
            )

        receipt_number = complaint.receipt_number
        db.delete(complaint)
        db.commit()
        logger.info("🗑️ Complaint %s deleted", receipt_number)
