from datetime import timedelta

from jose import jwt

from app.core.config import settings
from app.core.security import (
    create_access_token,
    decode_access_token,
    get_password_hash,
    verify_password,
)

from conftest import FROZEN_NOW


def test_password_hash_round_trip():
    hashed = get_password_hash("123456")
    assert hashed != "123456"
    assert verify_password("123456", hashed)
    assert not verify_password("1234567", hashed)


def test_verify_password_with_garbage_hash_is_false():
    assert verify_password("123456", "not-a-hash") is False


def test_token_carries_subject_and_expiry():
    token = create_access_token({"sub": "7"}, now=FROZEN_NOW)
    payload = decode_access_token(token, now=FROZEN_NOW)
    assert payload["sub"] == "7"
    expected_exp = FROZEN_NOW + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    assert payload["exp"] == int(expected_exp.timestamp())


def test_token_expires_relative_to_given_clock():
    token = create_access_token({"sub": "7"}, now=FROZEN_NOW, expires_delta=timedelta(minutes=5))
    assert decode_access_token(token, now=FROZEN_NOW + timedelta(minutes=4)) is not None
    assert decode_access_token(token, now=FROZEN_NOW + timedelta(minutes=5)) is None


def test_token_signed_with_other_key_is_rejected():
    forged = jwt.encode({"sub": "7", "exp": int(FROZEN_NOW.timestamp()) + 60}, "other-key",
                        algorithm=settings.ALGORITHM)
    assert decode_access_token(forged, now=FROZEN_NOW) is None


def test_malformed_token_is_rejected():
    assert decode_access_token("some.token", now=FROZEN_NOW) is None
