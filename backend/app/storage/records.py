from typing import Optional
from sqlalchemy.orm import Query, Session
from app.models.user import User
from app.models.log import Log


class RecordStore:
    """
    Soft-delete aware lookups for users and logs.

    Every lookup states explicitly whether soft-deleted rows are visible.
    Hard-deleted rows do not exist, so no flag can bring them back.
    Pass for_update=True when the caller is going to mutate the result in
    the same transaction; the rows are then locked until commit.
    """

    @staticmethod
    def _visible(query: Query, model, include_soft_deleted: bool) -> Query:
        if include_soft_deleted:
            return query
        return query.filter(model.deleted_at.is_(None))

    @staticmethod
    def _locked(query: Query, for_update: bool) -> Query:
        return query.with_for_update() if for_update else query

    def get_user(self, db: Session, user_id: int, *, include_soft_deleted: bool = False,
                 for_update: bool = False) -> Optional[User]:
        query = db.query(User).filter(User.id == user_id)
        query = self._visible(query, User, include_soft_deleted)
        return self._locked(query, for_update).first()

    def get_user_by_email(self, db: Session, email: str, *, include_soft_deleted: bool = False,
                          for_update: bool = False) -> Optional[User]:
        query = db.query(User).filter(User.email == email)
        query = self._visible(query, User, include_soft_deleted)
        return self._locked(query, for_update).first()

    def logs_for_user(self, db: Session, user_id: int, *, include_soft_deleted: bool = False) -> Query:
        """Base query for a user's logs, ordered by ascending id"""
        query = db.query(Log).filter(Log.user_id == user_id)
        return self._visible(query, Log, include_soft_deleted).order_by(Log.id.asc())

    def get_log(self, db: Session, user_id: int, log_id: int, *, include_soft_deleted: bool = False,
                for_update: bool = False) -> Optional[Log]:
        query = self.logs_for_user(db, user_id, include_soft_deleted=include_soft_deleted)
        return self._locked(query.filter(Log.id == log_id), for_update).first()


records = RecordStore()
