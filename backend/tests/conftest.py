import os

# Settings are read at import time, so configure the environment first
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["BCRYPT_ROUNDS"] = "4"
os.environ["SECRET_KEY"] = "test-secret"

from datetime import datetime, timezone

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from app.api.dependencies import get_clock
from app.core.clock import FixedClock
from app.core.config import settings
from app.core.database import Base, get_db
from app.main import app

# Instant every record is stamped with during tests
FROZEN_NOW = datetime(2020, 2, 15, 18, 1, 1, tzinfo=timezone.utc)

VALID_USER = {"name": "User Example", "email": "user@email.com", "password": "123456"}
VALID_CREDENTIALS = {"email": "user@email.com", "password": "123456"}
VALID_LOG = {
    "level": "FATAL",
    "description": "Application down",
    "senderApplication": "App_1",
    "sendDate": "10/10/2019 15:00",
    "environment": "production",
}


@pytest.fixture()
def engine():
    # One shared in-memory connection so every session sees the same data
    engine = create_engine(
        "sqlite://",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)
    engine.dispose()


@pytest.fixture()
def session_factory(engine):
    return sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture()
def db(session_factory):
    session = session_factory()
    try:
        yield session
    finally:
        session.close()


@pytest.fixture()
def clock():
    return FixedClock(FROZEN_NOW)


@pytest.fixture()
def client(session_factory, clock):
    def override_get_db():
        session = session_factory()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    app.dependency_overrides[get_clock] = lambda: clock
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture()
def message_style(monkeypatch):
    """Report empty results as 200 + message instead of 204"""
    monkeypatch.setattr(settings, "EMPTY_RESULT_STYLE", "message")


def sign_up(client, user=None):
    return client.post("/users/signup", json=user or VALID_USER)


def sign_in(client, credentials=None):
    res = client.post("/users/signin", json=credentials or VALID_CREDENTIALS)
    return res.json().get("token")


def bearer(token):
    return {"Authorization": f"Bearer {token}"}


@pytest.fixture()
def auth(client):
    """Headers of a freshly signed-up and signed-in user"""
    sign_up(client)
    return bearer(sign_in(client))
