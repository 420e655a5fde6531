"""Project Service domain layer. Project CRUD and project membership."""

import logging
from typing import Dict, Iterable, List

from sqlalchemy.orm import Session

from tasktracker.models.project import Project, ProjectAssignment
from tasktracker.models.task import TaskAssignment
from tasktracker.models.user import User
from tasktracker.schemas.project import ProjectCreate, ProjectMemberCreate, ProjectUpdate
from tasktracker.utils.errors import ConflictError, NotFoundError

logger = logging.getLogger(__name__)


def list_projects(db: Session) -> List[Project]:
    return db.query(Project).order_by(Project.project_id).all()


def get_project(db: Session, project_id: int) -> Project:
    project = db.get(Project, project_id)
    if not project:
        raise NotFoundError("Project not found")
    return project


def create_project(db: Session, data: ProjectCreate) -> Project:
    payload = data.model_dump(exclude={"assign_all_users"})
    project = Project(**payload)
    db.add(project)
    db.flush()
    if data.assign_all_users:
        for (user_id,) in db.query(User.user_id).all():
            db.add(ProjectAssignment(project_id=project.project_id, user_id=user_id))
    db.commit()
    db.refresh(project)
    logger.info("[project] created project_id=%s members=%d", project.project_id, len(project.assignments))
    return project


def update_project(db: Session, project_id: int, data: ProjectUpdate) -> Project:
    project = get_project(db, project_id)
    for k, v in data.model_dump(exclude_none=True).items():
        setattr(project, k, v)
    db.commit()
    db.refresh(project)
    return project


def delete_project(db: Session, project_id: int):
    from tasktracker.services import task_service  # local import, task_service imports this module

    project = get_project(db, project_id)
    affected = task_service.sequential_task_ids(db, TaskAssignment.project_id == project_id)
    db.delete(project)
    db.flush()
    task_service.resequence_tasks(db, affected)
    db.commit()
    logger.info("[project] deleted project_id=%s", project_id)


def get_members(db: Session, project_id: int) -> List[ProjectAssignment]:
    get_project(db, project_id)
    return (
        db.query(ProjectAssignment)
        .filter(ProjectAssignment.project_id == project_id)
        .order_by(ProjectAssignment.assignment_id)
        .all()
    )


def add_member(db: Session, project_id: int, data: ProjectMemberCreate) -> ProjectAssignment:
    get_project(db, project_id)
    if not db.get(User, data.user_id):
        raise NotFoundError("User not found")
    existing = db.query(ProjectAssignment).filter(
        ProjectAssignment.project_id == project_id,
        ProjectAssignment.user_id == data.user_id,
    ).first()
    if existing:
        raise ConflictError("User is already assigned to this project")
    member = ProjectAssignment(project_id=project_id, user_id=data.user_id)
    db.add(member)
    db.commit()
    db.refresh(member)
    return member


def remove_member(db: Session, project_id: int, user_id: int):
    member = db.query(ProjectAssignment).filter(
        ProjectAssignment.project_id == project_id,
        ProjectAssignment.user_id == user_id,
    ).first()
    if not member:
        raise NotFoundError("Project member not found")
    db.delete(member)
    db.commit()


def members_by_project(db: Session, project_ids: Iterable[int]) -> Dict[int, List[int]]:
    ids = list(project_ids)
    members: Dict[int, List[int]] = {pid: [] for pid in ids}
    if not ids:
        return members
    rows = (
        db.query(ProjectAssignment.project_id, ProjectAssignment.user_id)
        .filter(ProjectAssignment.project_id.in_(ids))
        .order_by(ProjectAssignment.assignment_id)
        .all()
    )
    for project_id, user_id in rows:
        members[project_id].append(user_id)
    return members
