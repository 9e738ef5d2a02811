import enum
from datetime import datetime
from sqlalchemy import Column, DateTime


class RecordStatus(str, enum.Enum):
    """
    Lifecycle state of a stored record.

    A hard-deleted record has no status: its row no longer exists.
    """
    ACTIVE = "active"
    SOFT_DELETED = "soft_deleted"


class SoftDeleteMixin:
    """
    Mixin for soft delete functionality.

    deleted_at is null while the record is active and holds the deletion
    time once it has been soft-deleted. Queries never filter on it
    implicitly; see app.storage.records for explicit lookups.
    """
    deleted_at = Column(DateTime(timezone=True), nullable=True, index=True)

    @property
    def status(self) -> RecordStatus:
        if self.deleted_at is None:
            return RecordStatus.ACTIVE
        return RecordStatus.SOFT_DELETED

    def soft_delete(self, now: datetime) -> None:
        """Mark the record as deleted."""
        self.deleted_at = now
        self.updated_at = now

    def restore(self, now: datetime) -> None:
        """Restore a soft-deleted record."""
        self.deleted_at = None
        self.updated_at = now
