"""Role filtered sidebar catalog and dashboard landing redirects."""

import pytest

from tasktracker.utils.navigation import (
    SIDEBAR_ROUTES, RouteCategory, RouteEntry, landing_path, visible_catalog,
)
from tasktracker.utils.permissions import Role
from tests.conftest import auth_headers


def _hrefs(categories):
    return [r.href for c in categories for r in c.routes]


def test_admin_sees_non_se_categories():
    names = [c.category_name for c in visible_catalog("admin")]
    assert names == ["Dashboard", "Timeline", "Portal Users", "Projects", "Tasks", "Analytics"]
    assert not any(h.startswith("/se-dashboard/") for h in _hrefs(visible_catalog("admin")))


def test_software_engineer_sees_only_se_categories():
    categories = visible_catalog(Role.SOFTWARE_ENGINEER)
    assert len(categories) == 5
    assert all(h.startswith("/se-dashboard/") for h in _hrefs(categories))


def test_viewer_sees_only_analytics_routes():
    categories = visible_catalog("viewer")
    assert [c.category_name for c in categories] == ["Timeline", "Tasks", "Analytics"]
    assert all(h.startswith("/analytics/") for h in _hrefs(categories))


def test_viewer_routes_filtered_inside_mixed_category():
    mixed = RouteCategory("Mixed", "Icon", routes=(
        RouteEntry("Public", "/analytics/x", "a"),
        RouteEntry("Private", "/portal-users", "b"),
    ))
    viewer = visible_catalog("viewer", [mixed])
    assert _hrefs(viewer) == ["/analytics/x"]
    admin = visible_catalog("admin", [mixed])
    assert _hrefs(admin) == ["/analytics/x", "/portal-users"]


@pytest.mark.parametrize("role", ["roaming-quality-inspector", "unknown", "", None])
def test_other_roles_fail_closed(role):
    assert visible_catalog(role) == []


def test_catalog_is_not_mutated():
    before = [len(c.routes) for c in SIDEBAR_ROUTES]
    visible_catalog("viewer")
    assert [len(c.routes) for c in SIDEBAR_ROUTES] == before


@pytest.mark.parametrize("role,expected", [
    ("software-engineer", "/se-dashboard"),
    ("roaming-quality-inspector", "/roaming-qc"),
    ("admin", None),
    ("viewer", None),
    ("bogus", None),
])
def test_landing_path(role, expected):
    assert landing_path(role) == expected


def test_navigation_endpoint(client, seed_users):
    headers = auth_headers(client, "viewer@example.com")
    resp = client.get("/navigation", headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["role"] == "viewer"
    assert data["landing_path"] is None
    assert len(data["categories"]) == 3


def test_dashboard_without_session_redirects_to_sign_in(client):
    resp = client.get("/dashboard", follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/sign-in"


def test_dashboard_with_expired_or_bad_token_redirects_to_sign_in(client):
    resp = client.get("/dashboard", headers={"Authorization": "Bearer not-a-token"}, follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/sign-in"


def test_dashboard_redirects_software_engineer(client, seed_users):
    headers = auth_headers(client, "se@example.com")
    resp = client.get("/dashboard", headers=headers, follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/se-dashboard"


def test_dashboard_redirects_inspector(client, seed_users):
    headers = auth_headers(client, "qc@example.com")
    resp = client.get("/dashboard", headers=headers, follow_redirects=False)
    assert resp.headers["location"] == "/roaming-qc"


def test_roaming_qc_shell_for_inspector(client, seed_users):
    headers = auth_headers(client, "qc@example.com")
    resp = client.get("/roaming-qc", headers=headers, follow_redirects=False)
    assert resp.status_code == 200
    data = resp.json()
    assert data["user"]["email"] == "qc@example.com"
    assert data["navigation"]["landing_path"] == "/roaming-qc"
    assert data["navigation"]["categories"] == []


def test_roaming_qc_redirects_other_roles(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    resp = client.get("/roaming-qc", headers=headers, follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/dashboard"

    anonymous = client.get("/roaming-qc", follow_redirects=False)
    assert anonymous.headers["location"] == "/sign-in"


def test_dashboard_shell_for_admin(client, seed_users):
    headers = auth_headers(client, "admin@example.com")
    resp = client.get("/dashboard", headers=headers, follow_redirects=False)
    assert resp.status_code == 200
    data = resp.json()
    assert data["user"]["email"] == "admin@example.com"
    assert len(data["navigation"]["categories"]) == 6


def test_se_dashboard(client, seed_users):
    headers = auth_headers(client, "se@example.com")
    resp = client.get("/se-dashboard", headers=headers, follow_redirects=False)
    assert resp.status_code == 200
    data = resp.json()
    assert data["attendance"]["state"] == "Idle"
    assert data["task_stats"] == {"pending": 0, "ongoing": 0, "completed": 0}
    assert data["history"] == []


def test_se_dashboard_redirects_other_roles(client, seed_users):
    headers = auth_headers(client, "viewer@example.com")
    resp = client.get("/se-dashboard", headers=headers, follow_redirects=False)
    assert resp.status_code == 307
    assert resp.headers["location"] == "/dashboard"
