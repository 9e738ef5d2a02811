"""
Error taxonomy shared by the lifecycle services and the HTTP layer.

Services raise these; exception handlers registered in app.main turn them
into {"message": ...} responses with the matching status code.
"""

from fastapi import status


class ServiceError(Exception):
    """Base class for business-rule failures surfaced to clients."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    message: str = "Internal Server Error"

    def __init__(self, message: str | None = None, status_code: int | None = None):
        if message is not None:
            self.message = message
        if status_code is not None:
            self.status_code = status_code
        super().__init__(self.message)


class InvalidData(ServiceError):
    status_code = status.HTTP_406_NOT_ACCEPTABLE
    message = "Invalid data"


class UserNotFound(ServiceError):
    # 406 when a valid reference points at an owner that is already gone;
    # sign-in and restore use 400 instead.
    status_code = status.HTTP_406_NOT_ACCEPTABLE
    message = "User not found"


class IncorrectPassword(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Incorrect password"


class PasswordMismatch(ServiceError):
    status_code = status.HTTP_412_PRECONDITION_FAILED
    message = "Password does not match"


class EmailConflict(ServiceError):
    status_code = status.HTTP_409_CONFLICT
    message = "User email already exists"


class TokenMissing(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Token not provided"


class InvalidToken(ServiceError):
    status_code = status.HTTP_401_UNAUTHORIZED
    message = "Invalid token"


class InternalFailure(ServiceError):
    pass


# Message used when sign-in style payloads fail validation
CREDENTIALS_INVALID_MESSAGE = "Data values are not valid"
