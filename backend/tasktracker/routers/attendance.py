"""Clock-in/clock-out attendance API router."""

from typing import Optional

from fastapi import APIRouter, Depends, Query
from sqlalchemy.orm import Session

from tasktracker.database import get_db
from tasktracker.middleware.auth_middleware import get_current_user
from tasktracker.models.user import User
from tasktracker.schemas.attendance import (
    AttendanceEndRequest,
    AttendanceHistoryOut,
    AttendanceOut,
    AttendanceResult,
    AttendanceStartRequest,
    AttendanceStatusOut,
)
from tasktracker.services import attendance_service, user_service

router = APIRouter(prefix="/attendance", tags=["attendance"])


@router.post("/start", response_model=AttendanceResult)
def start_work(
    data: AttendanceStartRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    record = attendance_service.start_work(db, data.user_id, data.login_time, current_user)
    return AttendanceResult(message="Login time recorded successfully", data=AttendanceOut.model_validate(record))


@router.post("/end", response_model=AttendanceResult)
def end_work(
    data: AttendanceEndRequest,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    record = attendance_service.end_work(db, data.user_id, data.logout_time, data.work_duration, current_user)
    return AttendanceResult(message="Logout time recorded successfully", data=AttendanceOut.model_validate(record))


@router.get("/status", response_model=AttendanceStatusOut)
def get_status(
    user_id: Optional[int] = Query(None),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    target = user_service.get_user(db, user_id or current_user.user_id, current_user)
    return attendance_service.get_status(db, target.user_id)


@router.get("/history", response_model=AttendanceHistoryOut)
def get_history(
    user_id: Optional[int] = Query(None),
    limit: int = Query(30, ge=1, le=365),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    target = user_service.get_user(db, user_id or current_user.user_id, current_user)
    records = attendance_service.list_history(db, target.user_id, limit=limit)
    return AttendanceHistoryOut(user_id=target.user_id, records=records)
