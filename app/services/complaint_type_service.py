from typing import List

from sqlalchemy.orm import Session

from app.core.exceptions import ComplaintTypeNotFoundError, ComplaintValidationError
from app.models.complaint_type import ComplaintType
from app.schemas.complaint_type import ComplaintTypeCreate, ComplaintTypeUpdate


class ComplaintTypeService:
    @staticmethod
    def list_types(db: Session, active_only: bool = False) -> List[ComplaintType]:
        query = db.query(ComplaintType)
        if active_only:
            query = query.filter(ComplaintType.is_active.is_(True))
        return query.order_by(ComplaintType.name).all()

    @staticmethod
    def get_type(db: Session, type_id: int) -> ComplaintType:
        complaint_type = db.query(ComplaintType).filter(ComplaintType.id == type_id).first()
        if not complaint_type:
            raise ComplaintTypeNotFoundError("Complaint type not found", {"type_id": type_id})
        return complaint_type

    @staticmethod
    def _ensure_unique_name(db: Session, name: str, exclude_id: int = None) -> None:
        query = db.query(ComplaintType).filter(ComplaintType.name == name)
        if exclude_id is not None:
            query = query.filter(ComplaintType.id != exclude_id)
        if query.first():
            raise ComplaintValidationError(
                "A complaint type with this name already exists", {"name": name}
            )

    @staticmethod
    def create_type(db: Session, payload: ComplaintTypeCreate) -> ComplaintType:
        name = payload.name.strip()
        if not name:
            raise ComplaintValidationError("Complaint type name must not be blank", {"field": "name"})
        ComplaintTypeService._ensure_unique_name(db, name)

        complaint_type = ComplaintType(name=name, description=payload.description)
        db.add(complaint_type)
        db.commit()
        db.refresh(complaint_type)
        return complaint_type

    @staticmethod
    def update_type(db: Session, type_id: int, payload: ComplaintTypeUpdate) -> ComplaintType:
        complaint_type = ComplaintTypeService.get_type(db, type_id)

        data = payload.model_dump(exclude_unset=True)
        if "name" in data:
            name = (data["name"] or "").strip()
            if not name:
                raise ComplaintValidationError("Complaint type name must not be blank", {"field": "name"})
            ComplaintTypeService._ensure_unique_name(db, name, exclude_id=type_id)
            data["name"] = name

        for key, value in data.items():
            setattr(complaint_type, key, value)

        db.commit()
        db.refresh(complaint_type)
        return complaint_type

    @staticmethod
    def deactivate_type(db: Session, type_id: int) -> ComplaintType:
        """Existing complaints keep their type; new ones can no longer use it."""
        complaint_type = ComplaintTypeService.get_type(db, type_id)
        complaint_type.is_active = False
        db.commit()
        db.refresh(complaint_type)
        return complaint_type
