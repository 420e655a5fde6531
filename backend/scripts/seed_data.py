"""Seed the database with demo data."""
import sys
import os
sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from datetime import date, timedelta
from tasktracker.database import SessionLocal, engine, Base
import tasktracker.models  # noqa: F401

from tasktracker.models.user import User
from tasktracker.models.project import Project, ProjectAssignment
from tasktracker.models.task import Task, TaskAssignment, STATUS_COMPLETE, STATUS_ONGOING
from tasktracker.services.auth_service import hash_secret

DEMO_PASSWORD = "password123"


def seed():
    Base.metadata.create_all(bind=engine)
    db = SessionLocal()
    try:
        if db.query(User).count() > 0:
            print("Database already seeded. Skipping.")
            return

        # Users
        password = hash_secret(DEMO_PASSWORD)
        users = [
            User(name="Admin Kim", email="admin@company.com", phone="010-0000-0001",
                 role="admin", password=password, pin=hash_secret("1234")),
            User(name="Engineer Lee", email="se1@company.com", phone="010-0000-0002",
                 role="software-engineer", password=password),
            User(name="Engineer Park", email="se2@company.com", phone="010-0000-0003",
                 role="software-engineer", password=password),
            User(name="Viewer Choi", email="viewer@company.com", phone="010-0000-0004",
                 role="viewer", password=password),
            User(name="Inspector Han", email="qc@company.com", phone="010-0000-0005",
                 role="roaming-quality-inspector", password=password),
        ]
        db.add_all(users)
        db.flush()

        # Projects
        projects = [
            Project(name="Line Monitor", client="Plant A", url="https://line-monitor.example.com",
                    db_url="postgresql://db.example.com/line", factory="Factory 1", unit="Assembly"),
            Project(name="Quality Portal", client="Plant B", url="https://quality.example.com",
                    db_url="postgresql://db.example.com/quality", factory="Factory 2", unit="QC"),
        ]
        db.add_all(projects)
        db.flush()

        for p in projects:
            for u in users:
                db.add(ProjectAssignment(project_id=p.project_id, user_id=u.user_id))
        db.flush()

        # Tasks
        today = date.today()
        unordered = Task(title="Dashboard refresh", priority="high", deadline=today + timedelta(days=7),
                         created_by=users[0].user_id)
        unordered.projects = [projects[0]]
        unordered.assignments = [
            TaskAssignment(project_id=projects[0].project_id, user_id=users[1].user_id, status=STATUS_ONGOING),
            TaskAssignment(project_id=projects[0].project_id, user_id=users[2].user_id),
        ]

        sequential = Task(title="Release checklist", priority="medium", deadline=today + timedelta(days=14),
                          is_sequential=True, created_by=users[0].user_id)
        sequential.projects = [projects[1]]
        sequential.assignments = [
            TaskAssignment(project_id=projects[1].project_id, user_id=users[2].user_id,
                           sequence=1, status=STATUS_COMPLETE),
            TaskAssignment(project_id=projects[1].project_id, user_id=users[1].user_id, sequence=2),
        ]
        db.add_all([unordered, sequential])

        db.commit()
        print("Seed data created successfully.")
        print(f"Demo accounts use password '{DEMO_PASSWORD}'; admin PIN is 1234.")
    finally:
        db.close()


if __name__ == "__main__":
    seed()
