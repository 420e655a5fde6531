"""Navigation menu and dashboard response schemas."""

from typing import List, Optional

from pydantic import BaseModel, Field

from tasktracker.schemas.attendance import AttendanceOut, AttendanceStatusOut
from tasktracker.schemas.user import UserOut


class RouteOut(BaseModel):
    label: str
    href: str
    icon: str


class CategoryOut(BaseModel):
    category_name: str
    icon: str
    href: Optional[str] = None
    routes: List[RouteOut] = Field(default_factory=list)


class NavigationOut(BaseModel):
    role: str
    landing_path: Optional[str] = None
    categories: List[CategoryOut] = Field(default_factory=list)


class DashboardShellOut(BaseModel):
    user: UserOut
    navigation: NavigationOut


class TaskStatsOut(BaseModel):
    pending: int = 0
    ongoing: int = 0
    completed: int = 0


class SeDashboardOut(BaseModel):
    user: UserOut
    attendance: AttendanceStatusOut
    history: List[AttendanceOut] = Field(default_factory=list)
    task_stats: TaskStatsOut
    navigation: NavigationOut
