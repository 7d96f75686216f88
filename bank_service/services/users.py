"""User CRUD service."""
import uuid
from typing import Optional

from sqlalchemy.orm import Session

from bank_service.errors import UserNotFound
from bank_service.logging import get_logger
from bank_service.models import User
from bank_service.schemas import UserResponse

logger = get_logger(__name__)


class UserService:
    """Create, read, update and delete users."""

    def __init__(self, db: Session):
        self.db = db

    def _find(self, user_id: str) -> Optional[User]:
        try:
            user_uuid = uuid.UUID(user_id)
        except ValueError:
            return None
        return self.db.get(User, user_uuid)

    def _require(self, user_id: str) -> User:
        user = self._find(user_id)
        if user is None:
            logger.warning("user_not_found", user_id=user_id, outcome="not_found")
            raise UserNotFound(user_id)
        return user

    def list_users(self) -> list[UserResponse]:
        users = self.db.query(User).order_by(User.created_at.asc()).all()
        return [UserResponse.model_validate(u) for u in users]

    def get_user(self, user_id: str) -> UserResponse:
        return UserResponse.model_validate(self._require(user_id))

    def create_user(self, name: str) -> UserResponse:
        user = User(id=uuid.uuid4(), name=name)
        self.db.add(user)
        self.db.commit()
        self.db.refresh(user)

        logger.info("user_created", user_id=str(user.id))
        return UserResponse.model_validate(user)

    def update_user(self, user_id: str, name: Optional[str]) -> UserResponse:
        """
        Update a user's name.

        A name of None leaves the record untouched and returns it as is.
        """
        user = self._require(user_id)
        if name is not None:
            user.name = name
            self.db.commit()
            self.db.refresh(user)
            logger.info("user_updated", user_id=user_id)
        return UserResponse.model_validate(user)

    def delete_user(self, user_id: str) -> None:
        user = self._require(user_id)
        self.db.delete(user)
        self.db.commit()
        logger.info("user_deleted", user_id=user_id)
