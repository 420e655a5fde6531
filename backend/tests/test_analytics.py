"""Project analytics statistics and the AI summary (model calls are faked)."""

from tasktracker.config import settings
from tasktracker.services.ai_client import AIClient
from tasktracker.services.analytics_service import AnalyticsService, parse_summary
from tests.conftest import auth_headers

SAMPLE_SUMMARY = """## Executive Summary
Work is progressing steadily.
Most tasks are still pending.

## Project Priorities
* **Line Monitor** needs attention
- Quality Portal is on track

### Performance Insights
- Completion rate is 33.3%

## Recommendations
1. Not a bullet, ignored
* Rebalance assignments
"""


class _FakeMessage:
    def __init__(self, content):
        self.content = content


class _FakeChoice:
    def __init__(self, content):
        self.message = _FakeMessage(content)


class _FakeResponse:
    def __init__(self, content):
        self.choices = [_FakeChoice(content)]


def _create_tasks(client, seed_users, seed_projects):
    headers = auth_headers(client, "admin@example.com")
    p0, p1 = seed_projects
    task = client.post("/tasks", headers=headers, json={
        "title": "A", "deadline": "2026-12-31", "projectIds": [p0.project_id],
        "userIds": [seed_users["se"].user_id, seed_users["se2"].user_id],
    }).json()
    client.post("/tasks", headers=headers, json={
        "title": "B", "deadline": "2026-12-31", "projectIds": [p1.project_id],
        "userIds": [seed_users["viewer"].user_id],
    })
    done = task["assignments"][0]
    client.put(
        f"/tasks/{task['task_id']}/assignments/{done['assignment_id']}/status",
        headers=headers, json={"status": "Complete"},
    )
    return headers


def test_parse_summary_sections():
    sections = parse_summary(SAMPLE_SUMMARY)
    assert sections["executive_summary"] == "Work is progressing steadily. Most tasks are still pending."
    assert sections["priorities"] == ["**Line Monitor** needs attention", "Quality Portal is on track"]
    assert sections["insights"] == ["Completion rate is 33.3%"]
    assert sections["recommendations"] == ["Rebalance assignments"]


def test_parse_summary_empty_text():
    assert parse_summary("") == {
        "executive_summary": "", "priorities": [], "insights": [], "recommendations": [],
    }


def test_project_analytics(client, seed_users, seed_projects):
    headers = _create_tasks(client, seed_users, seed_projects)
    resp = client.get("/analytics/projects", headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    by_name = {p["name"]: p for p in data["projects"]}
    assert by_name["Line Monitor"]["task_count"] == 2
    assert by_name["Line Monitor"]["completed"] == 1
    assert by_name["Quality Portal"]["pending"] == 1
    assert data["statistics"] == {
        "total_projects": 2,
        "total_tasks": 3,
        "total_completed": 1,
        "total_pending": 2,
        "total_ongoing": 0,
        "overall_completion_rate": 33.3,
    }


def test_analytics_roles(client, seed_users):
    assert client.get("/analytics/projects", headers=auth_headers(client, "viewer@example.com")).status_code == 200
    assert client.get("/analytics/projects", headers=auth_headers(client, "se@example.com")).status_code == 200
    assert client.get("/analytics/projects", headers=auth_headers(client, "qc@example.com")).status_code == 403


def test_empty_statistics_have_zero_rate():
    assert AnalyticsService.statistics([])["overall_completion_rate"] == 0.0


def test_summary_with_model(client, monkeypatch, seed_users, seed_projects):
    headers = _create_tasks(client, seed_users, seed_projects)
    monkeypatch.setattr(settings, "AI_FEATURES_ENABLED", True)
    prompts = []

    def fake_invoke(self, prompt, system_prompt=None):
        prompts.append(prompt)
        return SAMPLE_SUMMARY

    monkeypatch.setattr(AIClient, "invoke", fake_invoke)
    resp = client.post("/analytics/projects/summary", headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["summary"] == SAMPLE_SUMMARY
    assert data["sections"]["recommendations"] == ["Rebalance assignments"]
    assert data["model_used"] == settings.AI_SUMMARY_MODEL
    assert data["error"] is None
    assert "Line Monitor: 2 tasks" in prompts[0]


def test_summary_failure_returns_statistics(client, monkeypatch, seed_users, seed_projects):
    headers = _create_tasks(client, seed_users, seed_projects)
    monkeypatch.setattr(settings, "AI_FEATURES_ENABLED", True)

    def failing_invoke(self, prompt, system_prompt=None):
        raise RuntimeError("upstream timeout")

    monkeypatch.setattr(AIClient, "invoke", failing_invoke)
    resp = client.post("/analytics/projects/summary", headers=headers)
    assert resp.status_code == 200
    data = resp.json()
    assert data["summary"] is None
    assert data["error"]
    assert data["statistics"]["total_tasks"] == 3


def test_summary_when_ai_disabled(client, monkeypatch, seed_users):
    monkeypatch.setattr(settings, "AI_FEATURES_ENABLED", False)
    resp = client.post("/analytics/projects/summary", headers=auth_headers(client, "admin@example.com"))
    assert resp.status_code == 200
    assert resp.json()["summary"] is None
    assert resp.json()["error"] == "AI features are disabled."


def test_ai_client_wraps_sdk_errors(monkeypatch):
    class _Completions:
        def create(self, **kwargs):
            raise Exception("connection reset")

    class _Chat:
        completions = _Completions()

    class _Client:
        chat = _Chat()

    client = AIClient(model_name="test-model", user_id="1")
    monkeypatch.setattr(client, "_get_client", lambda: _Client())
    try:
        client.invoke("hello")
    except RuntimeError as exc:
        assert "test-model" in str(exc)
    else:
        raise AssertionError("expected RuntimeError")


def test_ai_client_returns_message_text(monkeypatch):
    class _Completions:
        def __init__(self):
            self.calls = []

        def create(self, **kwargs):
            self.calls.append(kwargs)
            return _FakeResponse([{"type": "text", "text": "hi "}, {"type": "text", "text": "there"}])

    completions = _Completions()

    class _Client:
        class chat:
            pass

    _Client.chat.completions = completions
    client = AIClient(model_name="test-model")
    monkeypatch.setattr(client, "_get_client", lambda: _Client())
    assert client.invoke("hello", system_prompt="be brief") == "hi there"
    assert completions.calls[0]["messages"][0] == {"role": "system", "content": "be brief"}
    assert completions.calls[0]["model"] == "test-model"
