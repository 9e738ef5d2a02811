import logging
from typing import Any, Dict, Optional

from fastapi import status
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.clock import Clock, system_clock
from app.core.errors import (
    CREDENTIALS_INVALID_MESSAGE,
    EmailConflict,
    IncorrectPassword,
    InternalFailure,
    InvalidData,
    PasswordMismatch,
    UserNotFound,
)
from app.core.security import create_access_token, get_password_hash, verify_password
from app.models.user import User
from app.services.serializers import format_timestamp
from app.services.validation_service import validation_service
from app.storage.records import records

logger = logging.getLogger(__name__)

USER_CREATED_MESSAGE = "User created successfully"
USER_UPDATED_MESSAGE = "Updated successfully"
USER_DELETED_MESSAGE = "Deleted successfully"
USER_HARD_DELETED_MESSAGE = "Deleted successfully, this action cannot be undone"
USER_RESTORED_MESSAGE = "User restored successfully"


class UserService:
    """
    Lifecycle of user accounts: signup, sign-in, profile update, soft delete,
    hard delete and restore.

    Every mutating method is a single transaction on the given session: the
    existence check locks the row and the change is committed once.
    """

    def __init__(self, clock: Clock = system_clock):
        self.clock = clock

    def _commit(self, db: Session, action: str) -> None:
        try:
            db.commit()
        except IntegrityError:
            # Concurrent signup/update raced past the explicit email check
            db.rollback()
            raise EmailConflict()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Database error during {action}")
            raise InternalFailure()

    @staticmethod
    def _validated(schema_name: str, payload: Any, message: Optional[str] = None):
        result = validation_service.validate(schema_name, payload)
        if not result.ok:
            logger.debug(f"Rejected {schema_name} payload: {result.errors}")
            raise InvalidData(message)
        return result.data

    def create(self, db: Session, payload: Any) -> Dict[str, str]:
        """Register a new user"""
        data = self._validated("signup", payload)

        # Soft-deleted users keep their email, so look at every row
        existing = records.get_user_by_email(db, data.email, include_soft_deleted=True)
        if existing:
            raise EmailConflict()

        now = self.clock.now()
        user = User(
            name=data.name,
            email=data.email,
            hashed_password=get_password_hash(data.password),
            created_at=now,
            updated_at=now,
        )
        db.add(user)
        self._commit(db, "signup")
        logger.info(f"User {user.id} created")
        return {"message": USER_CREATED_MESSAGE}

    def authenticate(self, db: Session, payload: Any) -> Dict[str, str]:
        """Check credentials of an active user and issue a bearer token"""
        data = self._validated("signin", payload, CREDENTIALS_INVALID_MESSAGE)

        user = records.get_user_by_email(db, data.email)
        if user is None:
            raise UserNotFound(status_code=status.HTTP_400_BAD_REQUEST)

        if not verify_password(data.password, user.hashed_password):
            logger.warning(f"Incorrect password for user {user.id}")
            raise IncorrectPassword()

        token = create_access_token({"sub": str(user.id)}, now=self.clock.now())
        return {"token": token}

    def get_profile(self, db: Session, user_id: int) -> Dict[str, Any]:
        user = records.get_user(db, user_id)
        if user is None:
            raise UserNotFound()
        return {
            "id": user.id,
            "name": user.name,
            "email": user.email,
            "createdAt": format_timestamp(user.created_at),
            "updatedAt": format_timestamp(user.updated_at),
        }

    def update(self, db: Session, user_id: int, payload: Any) -> Dict[str, str]:
        """Change any of name, email and password of an active user"""
        data = self._validated("update", payload)

        user = records.get_user(db, user_id, for_update=True)
        if user is None:
            raise UserNotFound()

        if data.changes_password and not verify_password(data.old_password, user.hashed_password):
            raise PasswordMismatch()

        if data.email is not None and data.email != user.email:
            owner = records.get_user_by_email(db, data.email, include_soft_deleted=True)
            if owner is not None and owner.id != user.id:
                raise EmailConflict()
            user.email = data.email
        if data.name is not None:
            user.name = data.name
        if data.changes_password:
            user.hashed_password = get_password_hash(data.new_password)

        user.updated_at = self.clock.now()
        self._commit(db, "user update")
        logger.info(f"User {user.id} updated")
        return {"message": USER_UPDATED_MESSAGE}

    def soft_delete(self, db: Session, user_id: int) -> Dict[str, str]:
        user = records.get_user(db, user_id, for_update=True)
        if user is None:
            raise UserNotFound()

        user.soft_delete(self.clock.now())
        self._commit(db, "user soft delete")
        logger.info(f"User {user_id} soft-deleted")
        return {"message": USER_DELETED_MESSAGE}

    def hard_delete(self, db: Session, user_id: int) -> Dict[str, str]:
        """Permanently remove the user and every log it owns"""
        user = records.get_user(db, user_id, include_soft_deleted=True, for_update=True)
        if user is None:
            raise UserNotFound()

        log_count = len(user.logs)
        # Relationship cascade removes the logs in the same transaction
        db.delete(user)
        self._commit(db, "user hard delete")
        logger.info(f"User {user_id} hard-deleted with {log_count} logs")
        return {"message": USER_HARD_DELETED_MESSAGE}

    def restore(self, db: Session, payload: Any, user_id: Optional[int] = None) -> Dict[str, str]:
        """
        Bring a soft-deleted user back after re-checking its credentials.

        user_id is the identity from a bearer token, when the caller sent
        one; it must belong to the same account as the credentials.
        """
        data = self._validated("restore", payload, CREDENTIALS_INVALID_MESSAGE)

        user = records.get_user_by_email(db, data.email, include_soft_deleted=True, for_update=True)
        if user is None or (user_id is not None and user.id != user_id):
            raise UserNotFound(status_code=status.HTTP_400_BAD_REQUEST)

        if not verify_password(data.password, user.hashed_password):
            logger.warning(f"Incorrect password on restore for user {user.id}")
            raise IncorrectPassword()

        if user.deleted_at is not None:
            user.restore(self.clock.now())
            self._commit(db, "user restore")
            logger.info(f"User {user.id} restored")
        return {"message": USER_RESTORED_MESSAGE}
