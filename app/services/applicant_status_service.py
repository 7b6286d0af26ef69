from typing import List, Tuple

from sqlalchemy.orm import Session

from app.core.exceptions import (
    ApplicantStatusNotFoundError,
    ComplaintValidationError,
    UserNotFoundError,
)
from app.models.applicant_status import ApplicantStatus
from app.models.user import User
from app.schemas.applicant_status import ApplicantStatusCreate, ApplicantStatusUpdate
from app.services.complaint_service import ComplaintService


class ApplicantStatusService:
    """Admin CRUD for mock applicant data (one row per applicant)"""

    @staticmethod
    def list_statuses(db: Session, skip: int = 0, limit: int = 50) -> Tuple[List[ApplicantStatus], int]:
        query = db.query(ApplicantStatus)
        total = query.count()
        items = query.order_by(ApplicantStatus.id.desc()).offset(skip).limit(limit).all()
        return items, total

    @staticmethod
    def get_status(db: Session, status_id: int) -> ApplicantStatus:
        status = db.query(ApplicantStatus).filter(ApplicantStatus.id == status_id).first()
        if not status:
            raise ApplicantStatusNotFoundError(
                "Applicant status not found", {"applicant_status_id": status_id}
            )
        return status

    @staticmethod
    def get_for_complaint(db: Session, complaint_id: int) -> ApplicantStatus:
        """Status of the person who filed the complaint"""
        complaint = ComplaintService.get_complaint_by_id(db, complaint_id)
        status = db.query(ApplicantStatus).filter(
            ApplicantStatus.applicant_id == complaint.applicant_id
        ).first()
        if not status:
            raise ApplicantStatusNotFoundError(
                "No status data for this applicant",
                {"applicant_id": complaint.applicant_id},
            )
        return status

    @staticmethod
    def create_status(db: Session, payload: ApplicantStatusCreate) -> ApplicantStatus:
        if not db.query(User).filter(User.id == payload.applicant_id).first():
            raise UserNotFoundError("User not found", {"user_id": payload.applicant_id})

        existing = db.query(ApplicantStatus).filter(
            ApplicantStatus.applicant_id == payload.applicant_id
        ).first()
        if existing:
            raise ComplaintValidationError(
                "Status data already exists for this applicant",
                {"applicant_id": payload.applicant_id},
            )

        status = ApplicantStatus(**payload.model_dump())
        db.add(status)
        db.commit()
        db.refresh(status)
        return status

    @staticmethod
    def update_status(db: Session, status_id: int, payload: ApplicantStatusUpdate) -> ApplicantStatus:
        status = ApplicantStatusService.get_status(db, status_id)

        for key, value in payload.model_dump(exclude_unset=True).items():
            if value is None:
                raise ComplaintValidationError(f"Field '{key}' must not be null", {"field": key})
            setattr(status, key, value)

        db.commit()
        db.refresh(status)
        return status

    @staticmethod
    def delete_status(db: Session, status_id: int) -> None:
        status = ApplicantStatusService.get_status(db, status_id)
        db.delete(status)
        db.commit()
