from datetime import datetime, timezone
from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field, field_serializer
from app.models.log import Log


def format_timestamp(value: Optional[datetime]) -> Optional[str]:
    """Render a timestamp as UTC with millisecond precision, e.g. 2020-02-15T18:01:01.000Z"""
    if value is None:
        return None
    # SQLite hands back naive datetimes; they were stored as UTC
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    value = value.astimezone(timezone.utc)
    return value.strftime("%Y-%m-%dT%H:%M:%S.") + f"{value.microsecond // 1000:03d}Z"


class LogResponse(BaseModel):
    """Public JSON shape of a log record"""
    id: int
    level: str
    description: str
    senderApplication: str = Field(validation_alias="sender_application")
    sendDate: str = Field(validation_alias="send_date")
    environment: str
    UserId: int = Field(validation_alias="user_id")
    createdAt: datetime = Field(validation_alias="created_at")
    updatedAt: datetime = Field(validation_alias="updated_at")
    deletedAt: Optional[datetime] = Field(default=None, validation_alias="deleted_at")

    model_config = ConfigDict(from_attributes=True)

    @field_serializer('createdAt', 'updatedAt', 'deletedAt')
    def serialize_timestamps(self, value: Optional[datetime], _info):
        return format_timestamp(value)


def serialize_log(log: Log, include_deleted_at: bool = True) -> Dict[str, Any]:
    exclude = None if include_deleted_at else {"deletedAt"}
    return LogResponse.model_validate(log).model_dump(exclude=exclude)
