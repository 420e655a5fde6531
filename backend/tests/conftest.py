import os

os.environ.setdefault("DATABASE_URL", "sqlite:///./test_task_tracker.db")
os.environ.setdefault("BCRYPT_ROUNDS", "4")
os.environ.setdefault("MAIL_ENABLED", "false")

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from tasktracker.database import Base, get_db
from tasktracker.main import app
from tasktracker.models.user import User
from tasktracker.models.project import Project, ProjectAssignment
from tasktracker.services.auth_service import hash_secret

TEST_DB_URL = "sqlite:///./test_task_tracker.db"
PASSWORD = "password123"

engine = create_engine(TEST_DB_URL, connect_args={"check_same_thread": False})
TestingSession = sessionmaker(autocommit=False, autoflush=False, bind=engine)


def override_get_db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


app.dependency_overrides[get_db] = override_get_db


@pytest.fixture(autouse=True)
def setup_db():
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture
def db():
    db = TestingSession()
    try:
        yield db
    finally:
        db.close()


@pytest.fixture
def client():
    # https so the Secure session cookie round-trips
    return TestClient(app, base_url="https://testserver")


@pytest.fixture
def seed_users(db):
    password = hash_secret(PASSWORD)
    users = {
        "admin": User(name="Admin", email="admin@example.com", phone="010-1111-0001",
                      role="admin", password=password, pin=hash_secret("1234")),
        "se": User(name="Engineer", email="se@example.com", phone="010-1111-0002",
                   role="software-engineer", password=password),
        "se2": User(name="Engineer Two", email="se2@example.com", phone="010-1111-0003",
                    role="software-engineer", password=password),
        "viewer": User(name="Viewer", email="viewer@example.com", phone="010-1111-0004",
                       role="viewer", password=password),
        "inspector": User(name="Inspector", email="qc@example.com", phone="010-1111-0005",
                          role="roaming-quality-inspector", password=password),
    }
    for u in users.values():
        db.add(u)
    db.commit()
    for u in users.values():
        db.refresh(u)
    return users


@pytest.fixture
def seed_projects(db, seed_users):
    projects = [
        Project(name="Line Monitor", client="Plant A", url="https://line.example.com",
                db_url="postgresql://db/line", factory="F1", unit="Assembly"),
        Project(name="Quality Portal", client="Plant B", url="https://quality.example.com",
                db_url="postgresql://db/quality", factory="F2", unit="QC"),
    ]
    for p in projects:
        db.add(p)
    db.flush()
    # project 0: admin, se, se2; project 1: se2, viewer
    memberships = [
        (projects[0], seed_users["admin"]),
        (projects[0], seed_users["se"]),
        (projects[0], seed_users["se2"]),
        (projects[1], seed_users["se2"]),
        (projects[1], seed_users["viewer"]),
    ]
    for project, user in memberships:
        db.add(ProjectAssignment(project_id=project.project_id, user_id=user.user_id))
    db.commit()
    for p in projects:
        db.refresh(p)
    return projects


def get_token(client, email: str, password: str = PASSWORD) -> str:
    resp = client.post("/auth/sign-in", json={"email": email, "password": password})
    assert resp.status_code == 200, resp.text
    token = resp.cookies["AUTH_TOKEN"]
    client.cookies.clear()
    return token


def auth_headers(client, email: str, password: str = PASSWORD) -> dict:
    return {"Authorization": f"Bearer {get_token(client, email, password)}"}
