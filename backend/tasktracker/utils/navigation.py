"""Static sidebar route catalog and role-based menu filtering.

Everything here is a pure function of ``(role, catalog)`` so the same rules
drive the ``/navigation`` endpoint, the dashboard shell and the tests.
"""

from dataclasses import dataclass, field, replace
from typing import Optional, Sequence, Tuple

from tasktracker.utils.permissions import Role

SE_PREFIX = "/se-dashboard/"
ANALYTICS_PREFIX = "/analytics/"

SIGN_IN_PATH = "/sign-in"
DEFAULT_DASHBOARD_PATH = "/dashboard"
SE_DASHBOARD_PATH = "/se-dashboard"
ROAMING_QC_PATH = "/roaming-qc"


@dataclass(frozen=True)
class RouteEntry:
    label: str
    href: str
    icon: str


@dataclass(frozen=True)
class RouteCategory:
    category_name: str
    icon: str
    routes: Tuple[RouteEntry, ...] = field(default_factory=tuple)
    href: Optional[str] = None

    def to_dict(self) -> dict:
        return {
            "category_name": self.category_name,
            "icon": self.icon,
            "href": self.href,
            "routes": [{"label": r.label, "href": r.href, "icon": r.icon} for r in self.routes],
        }


SIDEBAR_ROUTES: Tuple[RouteCategory, ...] = (
    RouteCategory("Dashboard", "LayoutDashboard", href="/dashboard", routes=(
        RouteEntry("Dashboard", "/dashboard", "UserRoundPlus"),
    )),
    RouteCategory("Timeline", "CalendarClock", routes=(
        RouteEntry("Task Timeline Manager", "/analytics/timeline", "CalendarSearch"),
    )),
    RouteCategory("Portal Users", "UserRound", routes=(
        RouteEntry("Add Portal User", "/portal-users/create-new/", "UserRoundPlus"),
        RouteEntry("Manage Users", "/portal-users", "FileCog"),
    )),
    RouteCategory("Projects", "Boxes", routes=(
        RouteEntry("Add Project", "/projects/create-new", "Box"),
        RouteEntry("Manage Projects", "/projects/", "FileBox"),
    )),
    RouteCategory("Tasks", "TerminalIcon", routes=(
        RouteEntry("Add Task", "/analytics/tasks/create-new", "Terminal"),
        RouteEntry("Manage Tasks", "/analytics/tasks/", "TerminalSquare"),
    )),
    RouteCategory("Analytics", "ChartScatter", routes=(
        RouteEntry("Projects", "/analytics/graphs/projects", "ChartColumnDecreasing"),
    )),
    RouteCategory("Dashboard", "LayoutDashboard", href="/se-dashboard/", routes=(
        RouteEntry("Dashboard", "/se-dashboard/", "Gauge"),
    )),
    RouteCategory("User", "User", routes=(
        RouteEntry("Update Profile", "/se-dashboard/profile/", "UserPen"),
    )),
    RouteCategory("Timeline", "CalendarClock", routes=(
        RouteEntry("Task Timeline Manager", "/se-dashboard/timeline", "CalendarSearch"),
    )),
    RouteCategory("Analytics", "ChartScatter", routes=(
        RouteEntry("Projects", "/se-dashboard/graphs/projects", "ChartColumnDecreasing"),
    )),
    RouteCategory("Tasks", "TerminalIcon", routes=(
        RouteEntry("Self Assign Tasks", "/se-dashboard/tasks/create-new", "TerminalSquare"),
        RouteEntry("Manage Tasks", "/se-dashboard/tasks/", "TerminalSquare"),
    )),
)


def _is_se_route(route: RouteEntry) -> bool:
    return route.href.startswith(SE_PREFIX)


def _is_analytics_route(route: RouteEntry) -> bool:
    return route.href.startswith(ANALYTICS_PREFIX)


def is_category_visible(role, category: RouteCategory) -> bool:
    parsed = Role.parse(role)
    if parsed is Role.SOFTWARE_ENGINEER:
        return any(_is_se_route(r) for r in category.routes)
    if parsed is Role.ADMIN:
        return any(not _is_se_route(r) for r in category.routes)
    if parsed is Role.VIEWER:
        return any(_is_analytics_route(r) for r in category.routes)
    return False


def is_route_visible(role, route: RouteEntry) -> bool:
    # inside a visible category only viewers have routes hidden
    return Role.parse(role) is not Role.VIEWER or _is_analytics_route(route)


def visible_catalog(role, catalog: Sequence[RouteCategory] = SIDEBAR_ROUTES) -> list[RouteCategory]:
    visible = []
    for category in catalog:
        if not is_category_visible(role, category):
            continue
        routes = tuple(r for r in category.routes if is_route_visible(role, r))
        visible.append(replace(category, routes=routes))
    return visible


def landing_path(role) -> Optional[str]:
    """Dashboard a role is redirected to, or ``None`` for the default shell."""
    parsed = Role.parse(role)
    if parsed is Role.SOFTWARE_ENGINEER:
        return SE_DASHBOARD_PATH
    if parsed is Role.ROAMING_INSPECTOR:
        return ROAMING_QC_PATH
    return None
