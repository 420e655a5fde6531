"""Pydantic schemas for task and task assignment contracts."""

from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import date, datetime


class UserSequence(BaseModel):
    user_id: int = Field(alias="userId")
    sequence: int

    model_config = {"populate_by_name": True}


class TaskBase(BaseModel):
    title: str = Field(min_length=1)
    description: Optional[str] = None
    priority: str = "medium"
    deadline: date
    remark: Optional[str] = None


class TaskCreate(TaskBase):
    project_ids: List[int] = Field(default_factory=list, alias="projectIds")
    user_ids: List[int] = Field(default_factory=list, alias="userIds")
    is_sequential: bool = Field(default=False, alias="isSequential")
    users_with_sequence: Optional[List[UserSequence]] = Field(default=None, alias="usersWithSequence")

    model_config = {"populate_by_name": True}


class TaskUpdate(BaseModel):
    title: Optional[str] = None
    description: Optional[str] = None
    priority: Optional[str] = None
    deadline: Optional[date] = None
    remark: Optional[str] = None
    project_ids: Optional[List[int]] = Field(default=None, alias="projectIds")
    user_ids: Optional[List[int]] = Field(default=None, alias="userIds")
    is_sequential: Optional[bool] = Field(default=None, alias="isSequential")
    users_with_sequence: Optional[List[UserSequence]] = Field(default=None, alias="usersWithSequence")

    model_config = {"populate_by_name": True}


class TaskAssignmentOut(BaseModel):
    assignment_id: int
    task_id: int
    project_id: int
    project_name: Optional[str] = None
    user_id: int
    user_name: Optional[str] = None
    status: str
    sequence: Optional[int] = None

    model_config = {"from_attributes": True}


class TaskOut(TaskBase):
    task_id: int
    is_sequential: bool
    created_by: Optional[int] = None
    project_ids: List[int] = Field(default_factory=list)
    assignments: List[TaskAssignmentOut] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class AssignmentStatusUpdate(BaseModel):
    status: str
