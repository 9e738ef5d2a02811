from typing import Any
from fastapi import APIRouter, Body, Depends, status
from sqlalchemy.orm import Session
from app.core.database import get_db
from app.api.dependencies import get_current_user_id, get_log_service
from app.api.responses import NO_LOG_MESSAGE, NO_LOGS_MESSAGE, or_empty
from app.services.log_service import LogService

router = APIRouter(prefix="/logs", tags=["logs"])


@router.post("", status_code=status.HTTP_201_CREATED)
def create_log(
    payload: Any = Body(default=None),
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    """Submit a new log"""
    return logs.create(db, user_id, payload)


@router.get("")
def list_logs(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    """All active logs of the current user"""
    return or_empty(logs.list_all(db, user_id), NO_LOGS_MESSAGE)


@router.get("/sender/{sender_application}")
def list_logs_by_sender(
    sender_application: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    return or_empty(logs.list_by_field(db, user_id, "senderApplication", sender_application), NO_LOGS_MESSAGE)


@router.get("/environment/{environment}")
def list_logs_by_environment(
    environment: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    return or_empty(logs.list_by_field(db, user_id, "environment", environment), NO_LOGS_MESSAGE)


@router.get("/level/{level}")
def list_logs_by_level(
    level: str,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    return or_empty(logs.list_by_field(db, user_id, "level", level), NO_LOGS_MESSAGE)


@router.delete("/all")
def soft_delete_all_logs(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    return or_empty(logs.soft_delete_all(db, user_id), NO_LOGS_MESSAGE)


@router.delete("/all/hard")
def hard_delete_all_logs(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    """Permanently delete every log of the current user"""
    return or_empty(logs.hard_delete_all(db, user_id), NO_LOGS_MESSAGE)


@router.delete("/id/{log_id}")
def soft_delete_log(
    log_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    return or_empty(logs.soft_delete(db, user_id, log_id), NO_LOG_MESSAGE)


@router.delete("/hard/{log_id}")
def hard_delete_log(
    log_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    """Permanently delete one log"""
    return or_empty(logs.hard_delete(db, user_id, log_id), NO_LOG_MESSAGE)


@router.post("/restore/all")
def restore_all_logs(
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    return or_empty(logs.restore_all(db, user_id), NO_LOGS_MESSAGE)


@router.post("/restore/id/{log_id}")
def restore_log(
    log_id: int,
    user_id: int = Depends(get_current_user_id),
    db: Session = Depends(get_db),
    logs: LogService = Depends(get_log_service),
):
    return or_empty(logs.restore(db, user_id, log_id), NO_LOG_MESSAGE)
