"""SQLAlchemy model package initialization."""

from tasktracker.models.user import User
from tasktracker.models.attendance import Attendance
from tasktracker.models.project import Project, ProjectAssignment
from tasktracker.models.task import Task, TaskAssignment, task_projects

__all__ = [
    "User",
    "Attendance",
    "Project", "ProjectAssignment",
    "Task", "TaskAssignment", "task_projects",
]
