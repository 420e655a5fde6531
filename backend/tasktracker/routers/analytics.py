"""Analytics API router: project task distribution and AI summary."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from tasktracker.database import get_db
from tasktracker.middleware.auth_middleware import require_roles
from tasktracker.models.user import User
from tasktracker.schemas.analytics import ProjectAnalyticsOut, ProjectSummaryOut
from tasktracker.services.analytics_service import AnalyticsService
from tasktracker.utils.permissions import ANALYTICS_ROLES

router = APIRouter(prefix="/analytics", tags=["analytics"])


@router.get("/projects", response_model=ProjectAnalyticsOut)
def project_analytics(
    db: Session = Depends(get_db),
    _current_user: User = Depends(require_roles(*ANALYTICS_ROLES)),
):
    return AnalyticsService(db).project_analytics()


@router.post("/projects/summary", response_model=ProjectSummaryOut)
def project_summary(
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(*ANALYTICS_ROLES)),
):
    return AnalyticsService(db).generate_summary(current_user.user_id)
