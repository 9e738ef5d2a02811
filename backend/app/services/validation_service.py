"""
Payload validation for every inbound operation.

Each operation has an explicit pydantic schema. Validation never raises for a
bad payload; callers get a ValidationResult and decide which error to report.
"""

import re
from dataclasses import dataclass, field
from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional, Type

from email_validator import validate_email
from pydantic import AfterValidator, BaseModel, ConfigDict, Field, ValidationError, field_validator, model_validator

# External format of Log.sendDate, e.g. "10/10/2019 15:00"
SEND_DATE_FORMAT = "%m/%d/%Y %H:%M"
_SEND_DATE_SHAPE = re.compile(r"^\d{2}/\d{2}/\d{4} \d{2}:\d{2}$")

MIN_PASSWORD_LENGTH = 6


def _check_email(value: str) -> str:
    # The address is kept exactly as sent; the normalized form is discarded
    validate_email(value, check_deliverability=False)
    return value


EmailAddress = Annotated[str, AfterValidator(_check_email)]


class _StrictSchema(BaseModel):
    # No type coercion (a numeric password is rejected) and no unknown keys
    model_config = ConfigDict(strict=True, extra="forbid")


class SignupSchema(_StrictSchema):
    name: str = Field(min_length=1)
    email: EmailAddress
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class SigninSchema(_StrictSchema):
    email: EmailAddress
    password: str = Field(min_length=MIN_PASSWORD_LENGTH)


class RestoreSchema(SigninSchema):
    pass


class UpdateSchema(_StrictSchema):
    name: Optional[str] = Field(default=None, min_length=1)
    email: Optional[EmailAddress] = None
    old_password: Optional[str] = Field(default=None, alias="oldPassword", min_length=MIN_PASSWORD_LENGTH)
    new_password: Optional[str] = Field(default=None, alias="newPassword", min_length=MIN_PASSWORD_LENGTH)
    confirm_password: Optional[str] = Field(default=None, alias="confirmPassword", min_length=MIN_PASSWORD_LENGTH)

    @property
    def changes_password(self) -> bool:
        return self.new_password is not None

    @model_validator(mode="after")
    def check_fields(self):
        triplet = (self.old_password, self.new_password, self.confirm_password)
        provided = [value is not None for value in triplet]
        if any(provided) and not all(provided):
            raise ValueError("oldPassword, newPassword and confirmPassword must be sent together")
        if self.new_password != self.confirm_password:
            raise ValueError("newPassword and confirmPassword differ")
        if self.name is None and self.email is None and not all(provided):
            raise ValueError("Nothing to update")
        return self


class LogCreateSchema(_StrictSchema):
    level: str = Field(min_length=1)
    description: str = Field(min_length=1)
    sender_application: str = Field(alias="senderApplication", min_length=1)
    send_date: str = Field(alias="sendDate")
    environment: str = Field(min_length=1)

    @field_validator("send_date")
    @classmethod
    def check_send_date(cls, value: str) -> str:
        if not _SEND_DATE_SHAPE.match(value):
            raise ValueError(f"sendDate must look like MM/DD/YYYY HH:mm, got {value!r}")
        # strptime rejects impossible dates such as 25/25/2019 25:00
        datetime.strptime(value, SEND_DATE_FORMAT)
        return value


SCHEMAS: Dict[str, Type[_StrictSchema]] = {
    "signup": SignupSchema,
    "signin": SigninSchema,
    "update": UpdateSchema,
    "restore": RestoreSchema,
    "log-create": LogCreateSchema,
}


@dataclass
class FieldError:
    field: str
    message: str


@dataclass
class ValidationResult:
    data: Optional[BaseModel] = None
    errors: List[FieldError] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return self.data is not None and not self.errors


class ValidationService:
    @staticmethod
    def validate(schema_name: str, payload: Any) -> ValidationResult:
        """Validate `payload` against the named schema"""
        schema = SCHEMAS.get(schema_name)
        if schema is None:
            raise KeyError(f"Unknown schema: {schema_name}")

        if not isinstance(payload, dict):
            return ValidationResult(errors=[FieldError(field="", message="Payload must be an object")])

        try:
            data = schema.model_validate(payload)
        except ValidationError as exc:
            errors = [
                FieldError(field=".".join(str(part) for part in error["loc"]), message=error["msg"])
                for error in exc.errors()
            ]
            return ValidationResult(errors=errors)

        return ValidationResult(data=data)


validation_service = ValidationService()
