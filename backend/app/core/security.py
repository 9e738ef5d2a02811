from datetime import datetime, timedelta, timezone
from typing import Optional
from jose import JWTError, jwt
from passlib.context import CryptContext
from app.core.config import settings

# CryptContext handles password hashing using bcrypt
# 'deprecated="auto"' allows passlib to handle deprecation warnings automatically
pwd_context = CryptContext(
    schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=settings.BCRYPT_ROUNDS)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against a hash using constant-time comparison"""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        # Stored value is not a recognised hash - treat as mismatch
        return False


def get_password_hash(password: str) -> str:
    """Hash a password using bcrypt"""
    # bcrypt generates a salt per call, so equal passwords hash differently
    return pwd_context.hash(password)


def create_access_token(data: dict, now: Optional[datetime] = None,
                        expires_delta: Optional[timedelta] = None) -> str:
    """Create a JWT access token with expiration relative to `now`"""
    to_encode = data.copy()

    if now is None:
        now = datetime.now(timezone.utc)
    if expires_delta is None:
        expires_delta = timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)

    # JWT standard 'iat' and 'exp' claims, as integer timestamps
    to_encode.update({
        "iat": int(now.timestamp()),
        "exp": int((now + expires_delta).timestamp()),
    })

    return jwt.encode(to_encode, settings.SECRET_KEY, algorithm=settings.ALGORITHM)


def decode_access_token(token: str, now: Optional[datetime] = None) -> Optional[dict]:
    """
    Decode and verify a JWT token.

    Signature is verified by jose; expiry is checked here against `now` so
    that the caller's clock decides what "expired" means. Returns None if the
    token is invalid, expired, or tampered with.
    """
    try:
        payload = jwt.decode(token, settings.SECRET_KEY,
                             algorithms=[settings.ALGORITHM],
                             options={"verify_exp": False})
    except JWTError:
        return None

    if now is None:
        now = datetime.now(timezone.utc)
    exp = payload.get("exp")
    if not isinstance(exp, (int, float)) or exp <= now.timestamp():
        return None
    return payload
