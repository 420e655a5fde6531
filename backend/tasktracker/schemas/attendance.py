"""Attendance (work session) request/response schemas."""

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field


class AttendanceStartRequest(BaseModel):
    user_id: Optional[int] = Field(default=None, alias="userId")
    login_time: Optional[datetime] = Field(default=None, alias="loginTime")

    model_config = {"populate_by_name": True}


class AttendanceEndRequest(BaseModel):
    user_id: Optional[int] = Field(default=None, alias="userId")
    logout_time: Optional[datetime] = Field(default=None, alias="logoutTime")
    work_duration: Optional[int] = Field(default=None, alias="workDuration")  # seconds

    model_config = {"populate_by_name": True}


class AttendanceOut(BaseModel):
    attendance_id: int
    user_id: int
    login_time: datetime
    logout_time: Optional[datetime] = None
    available_time: Optional[int] = None
    available_time_display: Optional[str] = None

    model_config = {"from_attributes": True}


class AttendanceResult(BaseModel):
    message: str
    data: AttendanceOut


class AttendanceStatusOut(BaseModel):
    user_id: int
    state: str  # Idle / Working
    open_record: Optional[AttendanceOut] = None
    elapsed_seconds: int = 0
    elapsed_display: str = "0h 0m 0s"


class AttendanceHistoryOut(BaseModel):
    user_id: int
    records: List[AttendanceOut]
