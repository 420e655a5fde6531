"""Pydantic schemas for project request/response contracts."""

from pydantic import BaseModel, Field, field_validator
from typing import Optional, List
from datetime import datetime


def _check_url(value: Optional[str]) -> Optional[str]:
    if value is None:
        return value
    text = value.strip()
    if not (text.startswith("http://") or text.startswith("https://")):
        raise ValueError("Please enter a valid URL")
    return text


class ProjectBase(BaseModel):
    name: str = Field(min_length=1)
    client: str = Field(min_length=1)
    url: str
    db_url: str = Field(min_length=1)
    factory: str = Field(min_length=1)
    unit: str = Field(min_length=1)

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        return _check_url(v)


class ProjectCreate(ProjectBase):
    assign_all_users: bool = False


class ProjectUpdate(BaseModel):
    name: Optional[str] = None
    client: Optional[str] = None
    url: Optional[str] = None
    db_url: Optional[str] = None
    factory: Optional[str] = None
    unit: Optional[str] = None

    @field_validator("url")
    @classmethod
    def validate_url(cls, v):
        return _check_url(v)


class ProjectOut(ProjectBase):
    project_id: int
    member_ids: List[int] = Field(default_factory=list)
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}


class ProjectMemberCreate(BaseModel):
    user_id: int


class ProjectMemberOut(BaseModel):
    assignment_id: int
    project_id: int
    user_id: int
    user_name: Optional[str] = None
    user_email: Optional[str] = None
    user_role: Optional[str] = None
    assigned_at: Optional[datetime] = None

    model_config = {"from_attributes": True}
