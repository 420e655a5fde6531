"""Dashboard shells, role landing redirects and the role filtered navigation menu."""

from typing import Optional

from fastapi import APIRouter, Depends
from fastapi.responses import RedirectResponse
from sqlalchemy.orm import Session

from tasktracker.database import get_db
from tasktracker.middleware.auth_middleware import get_current_user, get_optional_user
from tasktracker.models.user import User
from tasktracker.schemas.navigation import DashboardShellOut, NavigationOut, SeDashboardOut
from tasktracker.services import attendance_service, task_service
from tasktracker.utils.navigation import (
    DEFAULT_DASHBOARD_PATH, SIGN_IN_PATH, landing_path, visible_catalog,
)
from tasktracker.utils.permissions import is_roaming_inspector, is_software_engineer

router = APIRouter(tags=["dashboard"])


def _navigation(role: str) -> dict:
    return {
        "role": role,
        "landing_path": landing_path(role),
        "categories": [c.to_dict() for c in visible_catalog(role)],
    }


def _redirect(path: str) -> RedirectResponse:
    return RedirectResponse(url=path, status_code=307)


@router.get("/navigation", response_model=NavigationOut)
def navigation(current_user: User = Depends(get_current_user)):
    return _navigation(current_user.role)


@router.get("/dashboard", response_model=DashboardShellOut)
def dashboard(current_user: Optional[User] = Depends(get_optional_user)):
    if current_user is None:
        return _redirect(SIGN_IN_PATH)
    target = landing_path(current_user.role)
    if target:
        return _redirect(target)
    return {"user": current_user, "navigation": _navigation(current_user.role)}


@router.get("/se-dashboard", response_model=SeDashboardOut)
def se_dashboard(
    db: Session = Depends(get_db),
    current_user: Optional[User] = Depends(get_optional_user),
):
    if current_user is None:
        return _redirect(SIGN_IN_PATH)
    if not is_software_engineer(current_user.role):
        return _redirect(DEFAULT_DASHBOARD_PATH)
    return {
        "user": current_user,
        "attendance": attendance_service.get_status(db, current_user.user_id),
        "history": attendance_service.list_history(db, current_user.user_id),
        "task_stats": task_service.task_stats_for_user(db, current_user.user_id),
        "navigation": _navigation(current_user.role),
    }


@router.get("/roaming-qc", response_model=DashboardShellOut)
def roaming_qc_dashboard(current_user: Optional[User] = Depends(get_optional_user)):
    """Landing shell for roaming quality inspectors; their menu is empty."""
    if current_user is None:
        return _redirect(SIGN_IN_PATH)
    if not is_roaming_inspector(current_user.role):
        return _redirect(DEFAULT_DASHBOARD_PATH)
    return {"user": current_user, "navigation": _navigation(current_user.role)}
