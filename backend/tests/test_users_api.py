from datetime import timedelta

import pytest

from app.core.config import settings
from app.models.log import Log

from conftest import VALID_CREDENTIALS, VALID_LOG, VALID_USER, bearer, sign_in, sign_up


# signup

def test_signup_creates_user(client):
    res = sign_up(client)
    assert res.status_code == 201
    assert res.json() == {"message": "User created successfully"}


def test_signup_twice_with_same_email_conflicts(client):
    sign_up(client)
    res = sign_up(client)
    assert res.status_code == 409
    assert res.json() == {"message": "User email already exists"}


@pytest.mark.parametrize("payload", [
    {"name": "", "email": "user@email.com", "password": "123456"},
    {"name": "User Example", "email": "useremail.com", "password": "123456"},
    {"name": "User Example", "email": "user@email.com", "password": 123456},
    {"name": "User Example", "email": "user@email.com", "password": "12345"},
    {"name": "User Example", "mail": "user@email.com", "password": "123456"},
])
def test_signup_with_invalid_data(client, payload):
    res = client.post("/users/signup", json=payload)
    assert res.status_code == 406
    assert res.json() == {"message": "Invalid data"}


def test_signup_with_non_json_body(client):
    res = client.post("/users/signup", content="not json", headers={"Content-Type": "application/json"})
    assert res.status_code == 406
    assert res.json() == {"message": "Invalid data"}


def test_signup_with_email_of_soft_deleted_user_conflicts(client, auth):
    client.delete("/users", headers=auth)
    res = sign_up(client)
    assert res.status_code == 409


def test_signup_with_email_of_hard_deleted_user_succeeds(client, auth):
    client.delete("/users/hard", headers=auth)
    assert sign_up(client).status_code == 201


def test_signup_keeps_email_exactly_as_sent(client):
    mixed = {"name": "Mixed", "email": "Mixed@EXAMPLE.COM", "password": "123456"}
    assert sign_up(client, mixed).status_code == 201
    assert sign_up(client, {**mixed, "email": "Mixed@example.com"}).status_code == 201

    token = sign_in(client, {"email": "Mixed@EXAMPLE.COM", "password": "123456"})
    assert client.get("/users/me", headers=bearer(token)).json()["email"] == "Mixed@EXAMPLE.COM"


# signin

def test_signin_returns_token(client):
    sign_up(client)
    res = client.post("/users/signin", json=VALID_CREDENTIALS)
    assert res.status_code == 200
    assert isinstance(res.json()["token"], str)


@pytest.mark.parametrize("payload", [
    {"email": "useremail.com", "password": "123456"},
    {"email": "user@email.com", "password": 123456},
    {"email": "", "password": "123456"},
    {"email": "user@email.com", "password": ""},
    VALID_USER,
])
def test_signin_with_invalid_data(client, payload):
    sign_up(client)
    res = client.post("/users/signin", json=payload)
    assert res.status_code == 406
    assert res.json() == {"message": "Data values are not valid"}


def test_signin_with_unknown_email(client):
    res = client.post("/users/signin", json={"email": "nobody@email.com", "password": "123456"})
    assert res.status_code == 400
    assert res.json() == {"message": "User not found"}


def test_signin_with_wrong_password(client):
    sign_up(client)
    res = client.post("/users/signin", json={"email": "user@email.com", "password": "654321"})
    assert res.status_code == 401
    assert res.json() == {"message": "Incorrect password"}


def test_signin_of_soft_deleted_user_is_not_found(client, auth):
    client.delete("/users", headers=auth)
    res = client.post("/users/signin", json=VALID_CREDENTIALS)
    assert res.status_code == 400
    assert res.json() == {"message": "User not found"}


# profile

def test_me_returns_profile(client, auth):
    res = client.get("/users/me", headers=auth)
    assert res.status_code == 200
    assert res.json() == {
        "id": 1,
        "name": "User Example",
        "email": "user@email.com",
        "createdAt": "2020-02-15T18:01:01.000Z",
        "updatedAt": "2020-02-15T18:01:01.000Z",
    }


# authorization gate

def test_missing_token(client):
    res = client.get("/users/me")
    assert res.status_code == 401
    assert res.json() == {"message": "Token not provided"}


def test_missing_token_status_is_configurable(client, monkeypatch):
    monkeypatch.setattr(settings, "MISSING_TOKEN_STATUS", 403)
    res = client.delete("/users")
    assert res.status_code == 403
    assert res.json() == {"message": "Token not provided"}


@pytest.mark.parametrize("header", ["Bearer", "Beer token.not.valid", "Bearer some.token"])
def test_invalid_token(client, header):
    res = client.get("/users/logs", headers={"Authorization": header})
    assert res.status_code == 401
    assert res.json() == {"message": "Invalid token"}


def test_expired_token(client, auth, clock):
    clock.advance(timedelta(days=2))
    res = client.get("/users/me", headers=auth)
    assert res.status_code == 401
    assert res.json() == {"message": "Invalid token"}


# update

@pytest.mark.parametrize("payload", [
    {"name": "New Raul Seixas", "email": "raulzito123@gmail.com",
     "oldPassword": "123456", "newPassword": "12345678", "confirmPassword": "12345678"},
    {"name": "New Raul Seixas", "email": "raulzito123@gmail.com"},
    {"name": "New Raul Seixas", "oldPassword": "123456", "newPassword": "12345678", "confirmPassword": "12345678"},
    {"name": "New User Example"},
    {"email": "raulzito123@gmail.com", "oldPassword": "123456",
     "newPassword": "12345678", "confirmPassword": "12345678"},
    {"email": "raulzito123@gmail.com"},
    {"oldPassword": "123456", "newPassword": "12345678", "confirmPassword": "12345678"},
])
def test_update_succeeds(client, auth, payload):
    res = client.patch("/users", json=payload, headers=auth)
    assert res.status_code == 200
    assert res.json() == {"message": "Updated successfully"}


def test_update_changes_credentials(client, auth):
    client.patch("/users", headers=auth, json={
        "email": "raulzito123@gmail.com",
        "oldPassword": "123456", "newPassword": "12345678", "confirmPassword": "12345678",
    })
    old = client.post("/users/signin", json=VALID_CREDENTIALS)
    new = client.post("/users/signin", json={"email": "raulzito123@gmail.com", "password": "12345678"})
    assert old.status_code == 400
    assert new.status_code == 200


def test_update_with_wrong_old_password(client, auth):
    res = client.patch("/users", headers=auth, json={
        "oldPassword": "123456789", "newPassword": "12345678", "confirmPassword": "12345678"})
    assert res.status_code == 412
    assert res.json() == {"message": "Password does not match"}


@pytest.mark.parametrize("payload", [
    {"oldPassword": "12345678", "newPassword": "12345678", "confirmPassword": ""},
    {"oldPassword": "123456", "newPassword": 12345678, "confirmPassword": "12345678"},
    {"ame": "New Raul Seixas", "email": "raulzito123@gmail.com"},
])
def test_update_with_invalid_data(client, auth, payload):
    res = client.patch("/users", json=payload, headers=auth)
    assert res.status_code == 406
    assert res.json() == {"message": "Invalid data"}


def test_update_to_email_of_another_user_conflicts(client, auth):
    sign_up(client, {"name": "Other", "email": "other@email.com", "password": "123456"})
    res = client.patch("/users", json={"email": "other@email.com"}, headers=auth)
    assert res.status_code == 409


def test_update_of_soft_deleted_user(client, auth):
    client.delete("/users", headers=auth)
    res = client.patch("/users", json={"name": "Ghost"}, headers=auth)
    assert res.status_code == 406
    assert res.json() == {"message": "User not found"}


# soft delete / hard delete

def test_soft_delete(client, auth):
    res = client.delete("/users", headers=auth)
    assert res.status_code == 200
    assert res.json() == {"message": "Deleted successfully"}


def test_soft_delete_twice(client, auth):
    client.delete("/users", headers=auth)
    res = client.delete("/users", headers=auth)
    assert res.status_code == 406
    assert res.json() == {"message": "User not found"}


def test_hard_delete(client, auth):
    res = client.delete("/users/hard", headers=auth)
    assert res.status_code == 200
    assert res.json() == {"message": "Deleted successfully, this action cannot be undone"}


def test_hard_delete_twice(client, auth):
    client.delete("/users/hard", headers=auth)
    res = client.delete("/users/hard", headers=auth)
    assert res.status_code == 406
    assert res.json() == {"message": "User not found"}


def test_hard_delete_of_soft_deleted_user(client, auth):
    client.delete("/users", headers=auth)
    res = client.delete("/users/hard", headers=auth)
    assert res.status_code == 200


def test_hard_delete_removes_logs(client, auth, db):
    client.post("/logs", json=VALID_LOG, headers=auth)
    client.post("/logs", json=VALID_LOG, headers=auth)
    client.delete("/logs/id/1", headers=auth)

    client.delete("/users/hard", headers=auth)
    assert db.query(Log).count() == 0


# restore

def test_restore_soft_deleted_user(client, auth):
    client.delete("/users", headers=auth)
    res = client.post("/users/restore", json=VALID_CREDENTIALS, headers=auth)
    assert res.status_code == 200
    assert res.json() == {"message": "User restored successfully"}
    assert client.get("/users/me", headers=auth).status_code == 200


def test_restore_without_token(client, auth):
    client.delete("/users", headers=auth)
    res = client.post("/users/restore", json=VALID_CREDENTIALS)
    assert res.status_code == 200


def test_restore_active_user_is_a_no_op(client, auth):
    res = client.post("/users/restore", json=VALID_CREDENTIALS, headers=auth)
    assert res.status_code == 200


def test_restore_hard_deleted_user(client, auth):
    client.delete("/users/hard", headers=auth)
    res = client.post("/users/restore", json=VALID_CREDENTIALS, headers=auth)
    assert res.status_code == 400
    assert res.json() == {"message": "User not found"}


@pytest.mark.parametrize("payload", [
    {"email": "", "password": "12345"},
    {"email": "user@email.com", "password": "12345"},
])
def test_restore_with_invalid_data(client, auth, payload):
    res = client.post("/users/restore", json=payload, headers=auth)
    assert res.status_code == 406
    assert res.json() == {"message": "Data values are not valid"}


def test_restore_with_wrong_password(client, auth):
    client.delete("/users", headers=auth)
    res = client.post("/users/restore", json={"email": "user@email.com", "password": "654321"})
    assert res.status_code == 401
    assert res.json() == {"message": "Incorrect password"}


def test_restore_with_token_of_another_user(client, auth):
    sign_up(client, {"name": "Other", "email": "other@email.com", "password": "123456"})
    other = bearer(sign_in(client, {"email": "other@email.com", "password": "123456"}))
    client.delete("/users", headers=auth)

    res = client.post("/users/restore", json=VALID_CREDENTIALS, headers=other)
    assert res.status_code == 400
    assert res.json() == {"message": "User not found"}
