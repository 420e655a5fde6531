from typing import List

from fastapi import APIRouter, Depends, status
from sqlalchemy.orm import Session

from tasktracker.database import get_db
from tasktracker.middleware.auth_middleware import get_current_user, require_roles
from tasktracker.models.user import User
from tasktracker.schemas.project import ProjectCreate, ProjectMemberCreate, ProjectMemberOut, ProjectOut, ProjectUpdate
from tasktracker.services import project_service
from tasktracker.utils.permissions import ADMIN

router = APIRouter(prefix="/projects", tags=["projects"])


@router.get("", response_model=List[ProjectOut])
def list_projects(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return project_service.list_projects(db)


@router.post("", response_model=ProjectOut, status_code=status.HTTP_201_CREATED)
def create_project(
    data: ProjectCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
):
    return project_service.create_project(db, data)


@router.get("/{project_id}", response_model=ProjectOut)
def get_project(project_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return project_service.get_project(db, project_id)


@router.put("/{project_id}", response_model=ProjectOut)
def update_project(
    project_id: int,
    data: ProjectUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
):
    return project_service.update_project(db, project_id, data)


@router.delete("/{project_id}")
def delete_project(
    project_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
):
    project_service.delete_project(db, project_id)
    return {"message": "Project deleted"}


@router.get("/{project_id}/members", response_model=List[ProjectMemberOut])
def get_members(project_id: int, db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return project_service.get_members(db, project_id)


@router.post("/{project_id}/members", response_model=ProjectMemberOut, status_code=status.HTTP_201_CREATED)
def add_member(
    project_id: int,
    data: ProjectMemberCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
):
    return project_service.add_member(db, project_id, data)


@router.delete("/{project_id}/members/{user_id}")
def remove_member(
    project_id: int,
    user_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(require_roles(ADMIN)),
):
    project_service.remove_member(db, project_id, user_id)
    return {"message": "Member removed"}
