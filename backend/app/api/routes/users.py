from typing import Any, Optional
from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.api.dependencies import (
    get_current_user_id,
    get_log_service,
    get_optional_user_id,
    get_user_service,
)
from app.api.responses import NO_LOGS_MESSAGE, or_empty
from app.services.log_service import LogService
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"])


@router.post("/signup", status_code=status.HTTP_201_CREATED)
def signup(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    """Register a new user"""
    return users.create(db, payload)


@router.post("/signin")
def signin(
    payload: Any = Body(default=None),
    db: Session = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    """Exchange email and password for a bearer token"""
    return users.authenticate(db, payload)


@router.get("/me")
def get_me(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    """Profile of the authenticated user"""
    return users.get_profile(db, user_id)


@router.get("/logs")
def list_own_logs(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    """All active logs of the authenticated user"""
    return or_empty(logs.list_all(db, user_id), NO_LOGS_MESSAGE)


@router.patch("")
def update_me(
    payload: Any = Body(default=None),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    """Change name, email and/or password"""
    return users.update(db, user_id, payload)


@router.delete("")
def soft_delete_me(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    """Soft-delete the account; it can be restored later"""
    return users.soft_delete(db, user_id)


@router.delete("/hard")
def hard_delete_me(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    """Permanently delete the account and all of its logs"""
    return users.hard_delete(db, user_id)


@router.post("/restore")
def restore_me(
    payload: Any = Body(default=None),
    user_id: Optional[int] = Depends(get_optional_user_id),
    db: Session = Depends(get_db),
    users: UserService = Depends(get_user_service),
):
    """Restore a soft-deleted account using its credentials"""
    return users.restore(db, payload, user_id=user_id)
