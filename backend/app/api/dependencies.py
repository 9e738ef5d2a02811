import logging
from typing import Optional
from fastapi import Depends, Header
from app.core.clock import Clock, system_clock
from app.core.config import settings
from app.core.errors import InvalidToken, TokenMissing
from app.core.security import decode_access_token
from app.services.log_service import LogService
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


def get_clock() -> Clock:
    """Clock used by the request; tests override this dependency"""
    return system_clock


def get_user_service(clock: Clock = Depends(get_clock)) -> UserService:
    return UserService(clock)


def get_log_service(clock: Clock = Depends(get_clock)) -> LogService:
    return LogService(clock)


def _resolve_user_id(authorization: str, clock: Clock) -> int:
    """
    Turn an Authorization header value into a user id.

    Only "Bearer <jwt>" with a valid signature, an unexpired exp claim and
    an integer sub claim is accepted. The user is not looked up here; the
    lifecycle services check that it still exists.
    """
    scheme, _, token = authorization.strip().partition(" ")
    token = token.strip()
    if scheme != "Bearer" or not token:
        raise InvalidToken()

    payload = decode_access_token(token, now=clock.now())
    if payload is None:
        raise InvalidToken()

    # JWT standard uses 'sub' (subject) claim for user identifier
    try:
        return int(payload.get("sub"))
    except (ValueError, TypeError):
        raise InvalidToken()


async def get_current_user_id(
    authorization: Optional[str] = Header(default=None),
    clock: Clock = Depends(get_clock),
) -> int:
    """Authorization gate for protected routes"""
    if authorization is None:
        raise TokenMissing(status_code=settings.MISSING_TOKEN_STATUS)
    try:
        return _resolve_user_id(authorization, clock)
    except InvalidToken:
        logger.warning("Rejected request with invalid bearer token")
        raise


async def get_optional_user_id(
    authorization: Optional[str] = Header(default=None),
    clock: Clock = Depends(get_clock),
) -> Optional[int]:
    """Like get_current_user_id, but a missing header yields None"""
    if authorization is None:
        return None
    return _resolve_user_id(authorization, clock)
