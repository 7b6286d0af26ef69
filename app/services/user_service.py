import logging
from typing import List, Optional

from sqlalchemy.orm import Session

from app.core.exceptions import ComplaintValidationError, UserNotFoundError
from app.models.enums import UserRole
from app.models.user import User
from app.schemas.user import UserCreate, UserUpdate

logger = logging.getLogger(__name__)


class UserService:
    @staticmethod
    def list_users(
        db: Session,
        skip: int = 0,
        limit: int = 50,
        role: Optional[UserRole] = None,
        active_only: bool = False,
    ) -> List[User]:
        query = db.query(User)
        if role:
            query = query.filter(User.role == role)
        if active_only:
            query = query.filter(User.is_active.is_(True))
        return query.order_by(User.id.desc()).offset(skip).limit(limit).all()

    @staticmethod
    def get_user(db: Session, user_id: int) -> User:
        user = db.query(User).filter(User.id == user_id).first()
        if not user:
            raise UserNotFoundError("User not found", {"user_id": user_id})
        return user

    @staticmethod
    def create_user(db: Session, payload: UserCreate) -> User:
        login_id = payload.login_id.strip()
        name = payload.name.strip()
        if not login_id or not name:
            raise ComplaintValidationError("login_id and name must not be blank")

        if db.query(User).filter(User.login_id == login_id).first():
            raise ComplaintValidationError(
                "A user with this login_id already exists", {"login_id": login_id}
            )

        user = User(login_id=login_id, name=name, role=payload.role, phone=payload.phone)
        db.add(user)
        db.commit()
        db.refresh(user)
        logger.info("👤 User %s created (role=%s)", login_id, user.role.value)
        return user

    @staticmethod
    def update_user(db: Session, user_id: int, payload: UserUpdate) -> User:
        """login_id is fixed once created."""
        user = UserService.get_user(db, user_id)

        data = payload.model_dump(exclude_unset=True)
        if "name" in data:
            name = (data["name"] or "").strip()
            if not name:
                raise ComplaintValidationError("Name must not be blank", {"field": "name"})
            data["name"] = name
        if "role" in data and data["role"] is None:
            raise ComplaintValidationError("Role must not be null", {"field": "role"})

        for key, value in data.items():
            setattr(user, key, value)

        db.commit()
        db.refresh(user)
        return user

    @staticmethod
    def deactivate_user(db: Session, user_id: int) -> User:
        """Users are never hard-deleted; their complaints keep pointing at them."""
        user = UserService.get_user(db, user_id)
        user.is_active = False
        db.commit()
        db.refresh(user)
        logger.info("👤 User %s deactivated", user.login_id)
        return user
