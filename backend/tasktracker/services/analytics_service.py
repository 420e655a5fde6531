"""Analytics Service domain layer. Per project task distribution and AI summary."""

import logging
import re
from typing import Dict, List, Optional

from sqlalchemy.orm import Session

from tasktracker.config import settings
from tasktracker.models.project import Project
from tasktracker.models.task import STATUS_COMPLETE, STATUS_ONGOING, STATUS_PENDING, TaskAssignment
from tasktracker.services.ai_client import AIClient

logger = logging.getLogger(__name__)

SUMMARY_SYSTEM_PROMPT = (
    "You are a project management analyst. Answer in plain text with the headings "
    "'Executive Summary', 'Project Priorities', 'Performance Insights' and "
    "'Recommendations'. Use '-' bullets under every heading except the executive summary."
)

_SECTION_HEADINGS = (
    ("Executive Summary", "executive"),
    ("Project Priorities", "priorities"),
    ("Performance Insights", "insights"),
    ("Recommendations", "recommendations"),
)


def parse_summary(text: str) -> Dict:
    """Split the model output into the four report sections.

    A line naming a heading switches section; under the executive summary
    plain lines are joined, elsewhere only ``*`` or ``-`` bullets are kept.
    Markdown ``#`` lines that are not headings are skipped.
    """
    sections = {
        "executive_summary": "",
        "priorities": [],
        "insights": [],
        "recommendations": [],
    }
    executive: List[str] = []
    current = ""
    for line in (text or "").splitlines():
        trimmed = line.strip()
        heading = next((key for title, key in _SECTION_HEADINGS if title in trimmed), None)
        if heading:
            current = heading
            continue
        if not trimmed or trimmed.startswith("#"):
            continue
        if current == "executive" and not trimmed.startswith("*"):
            executive.append(trimmed)
        elif trimmed.startswith("*") or trimmed.startswith("-"):
            content = re.sub(r"^-\s*", "", re.sub(r"^\*+\s*", "", trimmed))
            if content and current in ("priorities", "insights", "recommendations"):
                sections[current].append(content)
    sections["executive_summary"] = " ".join(executive)
    return sections


class AnalyticsService:
    def __init__(self, db: Session, ai_client: Optional[AIClient] = None):
        self.db = db
        self.ai_client = ai_client

    def project_stats(self) -> List[Dict]:
        projects = self.db.query(Project).order_by(Project.project_id).all()
        rows = self.db.query(TaskAssignment.project_id, TaskAssignment.status).all()
        counts: Dict[int, Dict[str, int]] = {}
        for project_id, status in rows:
            bucket = counts.setdefault(project_id, {})
            bucket[status] = bucket.get(status, 0) + 1

        result = []
        for p in projects:
            bucket = counts.get(p.project_id, {})
            result.append({
                "project_id": p.project_id,
                "name": p.name,
                "task_count": sum(bucket.values()),
                "completed": bucket.get(STATUS_COMPLETE, 0),
                "pending": bucket.get(STATUS_PENDING, 0),
                "ongoing": bucket.get(STATUS_ONGOING, 0),
            })
        return result

    @staticmethod
    def statistics(projects: List[Dict]) -> Dict:
        total_tasks = sum(p["task_count"] for p in projects)
        total_completed = sum(p["completed"] for p in projects)
        rate = round(total_completed / total_tasks * 100, 1) if total_tasks else 0.0
        return {
            "total_projects": len(projects),
            "total_tasks": total_tasks,
            "total_completed": total_completed,
            "total_pending": sum(p["pending"] for p in projects),
            "total_ongoing": sum(p["ongoing"] for p in projects),
            "overall_completion_rate": rate,
        }

    def project_analytics(self) -> Dict:
        projects = self.project_stats()
        return {"projects": projects, "statistics": self.statistics(projects)}

    def _build_prompt(self, projects: List[Dict], stats: Dict) -> str:
        lines = [
            f"- {p['name']}: {p['task_count']} tasks "
            f"({p['completed']} complete, {p['ongoing']} ongoing, {p['pending']} pending)"
            for p in projects
        ]
        return (
            "Analyze the task distribution across these projects.\n\n"
            f"Projects:\n{chr(10).join(lines) or '- (none)'}\n\n"
            f"Totals: {stats['total_projects']} projects, {stats['total_tasks']} tasks, "
            f"{stats['total_completed']} complete, {stats['total_ongoing']} ongoing, "
            f"{stats['total_pending']} pending, completion rate {stats['overall_completion_rate']}%.\n\n"
            "Write an executive summary, list project priorities, performance insights "
            "and actionable recommendations."
        )

    def generate_summary(self, user_id: Optional[int] = None) -> Dict:
        data = self.project_analytics()
        data.update({"summary": None, "sections": None, "model_used": None, "error": None})

        if not settings.AI_FEATURES_ENABLED:
            data["error"] = "AI features are disabled."
            return data

        client = self.ai_client or AIClient.get_client("summary", str(user_id) if user_id else None)
        prompt = self._build_prompt(data["projects"], data["statistics"])
        try:
            text = client.invoke(prompt, SUMMARY_SYSTEM_PROMPT)
        except RuntimeError as exc:
            logger.warning("[ai] summary generation failed: %s", exc)
            data["error"] = "Failed to generate AI insights. Please try again."
            return data

        data["summary"] = text
        data["sections"] = parse_summary(text)
        data["model_used"] = client.model_name
        return data
