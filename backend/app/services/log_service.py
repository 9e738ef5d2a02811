import logging
from typing import Any, Dict, List, Optional

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.core.clock import Clock, system_clock
from app.core.errors import InternalFailure, InvalidData, UserNotFound
from app.models.log import Log
from app.services.log_query import log_query_resolver
from app.services.serializers import serialize_log
from app.services.validation_service import validation_service
from app.storage.records import records

logger = logging.getLogger(__name__)

LOG_DELETED_MESSAGE = "Deleted successfully"
LOG_HARD_DELETED_MESSAGE = "Deleted successfully, this action cannot be undone"
LOG_RESTORED_MESSAGE = "Log restored successfully"
LOGS_RESTORED_MESSAGE = "All logs restored successfully"


class LogService:
    """
    Lifecycle of logs owned by a user.

    Every operation first checks that the owner is still active. Methods
    return None when nothing matched; the HTTP layer turns that into the
    configured empty-signal response.
    """

    def __init__(self, clock: Clock = system_clock):
        self.clock = clock

    @staticmethod
    def _require_owner(db: Session, user_id: int, for_update: bool = False) -> None:
        # Mutating callers hold the owner row lock until their commit
        if records.get_user(db, user_id, for_update=for_update) is None:
            raise UserNotFound()

    @staticmethod
    def _commit(db: Session, action: str) -> None:
        try:
            db.commit()
        except SQLAlchemyError:
            db.rollback()
            logger.exception(f"Database error during {action}")
            raise InternalFailure()

    def create(self, db: Session, user_id: int, payload: Any) -> Dict[str, Any]:
        """Store a new log for the user"""
        self._require_owner(db, user_id, for_update=True)

        result = validation_service.validate("log-create", payload)
        if not result.ok:
            logger.debug(f"Rejected log payload: {result.errors}")
            raise InvalidData()
        data = result.data

        now = self.clock.now()
        log = Log(
            user_id=user_id,
            level=data.level,
            description=data.description,
            sender_application=data.sender_application,
            send_date=data.send_date,
            environment=data.environment,
            created_at=now,
            updated_at=now,
        )
        db.add(log)
        self._commit(db, "log create")
        db.refresh(log)
        logger.info(f"Log {log.id} created for user {user_id}")
        return {"createdLog": serialize_log(log, include_deleted_at=False)}

    def list_all(self, db: Session, user_id: int) -> Optional[Dict[str, Any]]:
        self._require_owner(db, user_id)
        logs = log_query_resolver.resolve(db, user_id)
        if not logs:
            return None
        return {"total": len(logs), "Logs": [serialize_log(log) for log in logs]}

    def list_by_field(self, db: Session, user_id: int, field: str, value: str) -> Optional[List[Dict[str, Any]]]:
        """Active logs whose `field` equals `value` exactly"""
        self._require_owner(db, user_id)
        logs = log_query_resolver.resolve(db, user_id, field=field, value=value)
        if not logs:
            return None
        return [serialize_log(log) for log in logs]

    def soft_delete(self, db: Session, user_id: int, log_id: int) -> Optional[Dict[str, str]]:
        self._require_owner(db, user_id, for_update=True)
        log = records.get_log(db, user_id, log_id, for_update=True)
        if log is None:
            return None

        log.soft_delete(self.clock.now())
        self._commit(db, "log soft delete")
        logger.info(f"Log {log_id} soft-deleted for user {user_id}")
        return {"message": LOG_DELETED_MESSAGE}

    def soft_delete_all(self, db: Session, user_id: int) -> Optional[Dict[str, str]]:
        self._require_owner(db, user_id, for_update=True)
        logs = records.logs_for_user(db, user_id).with_for_update().all()
        if not logs:
            return None

        now = self.clock.now()
        for log in logs:
            log.soft_delete(now)
        self._commit(db, "log soft delete")
        logger.info(f"{len(logs)} logs soft-deleted for user {user_id}")
        return {"message": LOG_DELETED_MESSAGE}

    def hard_delete(self, db: Session, user_id: int, log_id: int) -> Optional[Dict[str, str]]:
        self._require_owner(db, user_id, for_update=True)
        log = records.get_log(db, user_id, log_id, include_soft_deleted=True, for_update=True)
        if log is None:
            return None

        db.delete(log)
        self._commit(db, "log hard delete")
        logger.info(f"Log {log_id} hard-deleted for user {user_id}")
        return {"message": LOG_HARD_DELETED_MESSAGE}

    def hard_delete_all(self, db: Session, user_id: int) -> Optional[Dict[str, str]]:
        self._require_owner(db, user_id, for_update=True)
        logs = records.logs_for_user(db, user_id, include_soft_deleted=True).with_for_update().all()
        if not logs:
            return None

        for log in logs:
            db.delete(log)
        self._commit(db, "log hard delete")
        logger.info(f"{len(logs)} logs hard-deleted for user {user_id}")
        return {"message": LOG_HARD_DELETED_MESSAGE}

    def restore(self, db: Session, user_id: int, log_id: int) -> Optional[Dict[str, str]]:
        self._require_owner(db, user_id, for_update=True)
        log = records.get_log(db, user_id, log_id, include_soft_deleted=True, for_update=True)
        if log is None:
            return None

        # Restoring an active log is a no-op success
        if log.deleted_at is not None:
            log.restore(self.clock.now())
            self._commit(db, "log restore")
            logger.info(f"Log {log_id} restored for user {user_id}")
        return {"message": LOG_RESTORED_MESSAGE}

    def restore_all(self, db: Session, user_id: int) -> Optional[Dict[str, str]]:
        self._require_owner(db, user_id, for_update=True)
        logs = records.logs_for_user(db, user_id, include_soft_deleted=True).with_for_update().all()
        if not logs:
            return None

        now = self.clock.now()
        restored = [log for log in logs if log.deleted_at is not None]
        for log in restored:
            log.restore(now)
        if restored:
            self._commit(db, "log restore")
            logger.info(f"{len(restored)} logs restored for user {user_id}")
        return {"message": LOGS_RESTORED_MESSAGE}
