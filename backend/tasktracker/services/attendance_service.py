"""Attendance Service domain layer. Clock-in/clock-out with one open record per user."""

import logging
import time
from datetime import datetime
from typing import Callable, Iterator, List, Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from tasktracker.models.attendance import Attendance
from tasktracker.models.user import User
from tasktracker.utils.errors import ConflictError, ForbiddenError, NotFoundError, ValidationError
from tasktracker.utils.helpers import format_duration, to_utc_naive, utcnow
from tasktracker.utils.permissions import can_act_for_user

logger = logging.getLogger(__name__)

STATE_IDLE = "Idle"
STATE_WORKING = "Working"


def _ensure_actor(db: Session, user_id: int, current_user: User) -> User:
    if not can_act_for_user(current_user.role, current_user.user_id, user_id):
        raise ForbiddenError("You can only record your own attendance")
    user = db.get(User, user_id)
    if not user:
        raise NotFoundError("User not found")
    return user


def get_open_record(db: Session, user_id: int) -> Optional[Attendance]:
    return (
        db.query(Attendance)
        .filter(Attendance.user_id == user_id, Attendance.logout_time.is_(None))
        .order_by(Attendance.login_time.desc())
        .first()
    )


def start_work(db: Session, user_id: Optional[int], login_time: Optional[datetime], current_user: User) -> Attendance:
    if not user_id or not login_time:
        raise ValidationError("Missing userId or loginTime")
    _ensure_actor(db, user_id, current_user)

    # The unique open_user_id makes this insert the only check; a concurrent
    # second start fails here instead of duplicating.
    record = Attendance(user_id=user_id, login_time=to_utc_naive(login_time), open_user_id=user_id)
    db.add(record)
    try:
        db.commit()
    except IntegrityError:
        db.rollback()
        logger.info("[attendance] rejected start for user_id=%s: session already open", user_id)
        raise ConflictError(
            "You are already logged in. Please logout before logging in again.",
            status_code=400,
        )
    db.refresh(record)
    logger.info("[attendance] started attendance_id=%s user_id=%s", record.attendance_id, user_id)
    return record


def end_work(
    db: Session,
    user_id: Optional[int],
    logout_time: Optional[datetime],
    work_duration: Optional[int],
    current_user: User,
) -> Attendance:
    if not user_id or not logout_time or work_duration is None:
        raise ValidationError("Missing userId, logoutTime or workDuration")
    if work_duration < 0:
        raise ValidationError("workDuration must not be negative")
    _ensure_actor(db, user_id, current_user)

    record = get_open_record(db, user_id)
    if not record:
        raise ConflictError("No active attendance record found to end.", status_code=400)

    logout_time = to_utc_naive(logout_time)
    if logout_time < record.login_time:
        raise ValidationError("logoutTime is earlier than loginTime")

    record.logout_time = logout_time
    record.available_time = int(work_duration)
    record.open_user_id = None
    db.commit()
    db.refresh(record)
    logger.info(
        "[attendance] ended attendance_id=%s user_id=%s duration=%ss",
        record.attendance_id, user_id, record.available_time,
    )
    return record


def elapsed_seconds(login_time: datetime, now: Optional[datetime] = None) -> int:
    now = to_utc_naive(now) if now else utcnow()
    return max(0, int((now - to_utc_naive(login_time)).total_seconds()))


def get_status(db: Session, user_id: int, now: Optional[datetime] = None) -> dict:
    record = get_open_record(db, user_id)
    if not record:
        return {
            "user_id": user_id,
            "state": STATE_IDLE,
            "open_record": None,
            "elapsed_seconds": 0,
            "elapsed_display": format_duration(0),
        }
    seconds = elapsed_seconds(record.login_time, now)
    return {
        "user_id": user_id,
        "state": STATE_WORKING,
        "open_record": record,
        "elapsed_seconds": seconds,
        "elapsed_display": format_duration(seconds),
    }


def list_history(db: Session, user_id: int, limit: int = 30) -> List[Attendance]:
    return (
        db.query(Attendance)
        .filter(Attendance.user_id == user_id)
        .order_by(Attendance.login_time.desc())
        .limit(limit)
        .all()
    )


def elapsed_ticks(
    login_time: datetime,
    clock: Optional[Callable[[], datetime]] = None,
    sleep: Callable[[float], None] = time.sleep,
    interval: float = 1.0,
) -> Iterator[int]:
    """Yield elapsed whole seconds since ``login_time`` once per ``interval``.

    Display only: the stored duration is whatever the client sends on end.
    The generator is infinite; call it again to restart from a new login.
    """
    clock = clock or utcnow
    start = to_utc_naive(login_time)
    while True:
        yield max(0, int((to_utc_naive(clock()) - start).total_seconds()))
        sleep(interval)
