"""Project domain SQLAlchemy models."""

from sqlalchemy import Column, Integer, String, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from tasktracker.database import Base


class Project(Base):
    __tablename__ = "projects"

    project_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(200), nullable=False)
    client = Column(String(200), nullable=False)
    url = Column(String(500), nullable=False)
    db_url = Column(String(500), nullable=False)
    factory = Column(String(200), nullable=False)
    unit = Column(String(100), nullable=False)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    assignments = relationship("ProjectAssignment", back_populates="project", cascade="all, delete-orphan")
    task_assignments = relationship("TaskAssignment", back_populates="project", cascade="all, delete-orphan")
    tasks = relationship("Task", secondary="task_projects", back_populates="projects")

    @property
    def member_ids(self):
        return [a.user_id for a in self.assignments]


class ProjectAssignment(Base):
    __tablename__ = "project_assignments"

    assignment_id = Column(Integer, primary_key=True, autoincrement=True)
    project_id = Column(Integer, ForeignKey("projects.project_id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    assigned_at = Column(DateTime, server_default=func.now())

    project = relationship("Project", back_populates="assignments")
    user = relationship("User", back_populates="project_assignments")

    @property
    def user_name(self):
        return self.user.name if self.user else None

    @property
    def user_email(self):
        return self.user.email if self.user else None

    @property
    def user_role(self):
        return self.user.role if self.user else None

    __table_args__ = (
        UniqueConstraint("project_id", "user_id", name="uq_project_assignment"),
        Index("idx_project_assignment_user", "user_id"),
    )
