from typing import List, Optional
from sqlalchemy.orm import Session
from app.models.log import Log
from app.storage.records import records

# Public filter names accepted by the log query routes, mapped to columns
LOG_FILTER_FIELDS = {
    "senderApplication": Log.sender_application,
    "environment": Log.environment,
    "level": Log.level,
}


class LogQueryResolver:
    """Translates log filters into owner-scoped store lookups"""

    @staticmethod
    def resolve(
        db: Session,
        user_id: int,
        field: Optional[str] = None,
        value: Optional[str] = None,
        include_soft_deleted: bool = False,
    ) -> List[Log]:
        """
        Return the user's logs matching `field == value`, ascending by id.

        With no field, every log of the user is returned. Matching is plain
        case-sensitive string equality. Soft-deleted logs are hidden unless
        include_soft_deleted is set.
        """
        query = records.logs_for_user(db, user_id, include_soft_deleted=include_soft_deleted)

        if field is not None:
            column = LOG_FILTER_FIELDS.get(field)
            if column is None:
                raise ValueError(f"Unknown log filter: {field}")
            query = query.filter(column == value)

        return query.all()


log_query_resolver = LogQueryResolver()
