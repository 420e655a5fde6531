"""Service layer package initialization."""

from tasktracker.services import (
    auth_service,
    session_service,
    attendance_service,
    user_service,
    project_service,
    task_service,
    mail_service,
    analytics_service,
)
