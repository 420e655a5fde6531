"""Task domain SQLAlchemy models."""

from sqlalchemy import (
    Boolean, Column, Date, DateTime, ForeignKey, Index, Integer, String, Table, Text, UniqueConstraint,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from tasktracker.database import Base

PRIORITIES = ("low", "medium", "high", "critical")

STATUS_PENDING = "Pending"
STATUS_ONGOING = "Ongoing"
STATUS_COMPLETE = "Complete"
ASSIGNMENT_STATUSES = (STATUS_PENDING, STATUS_ONGOING, STATUS_COMPLETE)


task_projects = Table(
    "task_projects",
    Base.metadata,
    Column("task_id", Integer, ForeignKey("tasks.task_id", ondelete="CASCADE"), primary_key=True),
    Column("project_id", Integer, ForeignKey("projects.project_id", ondelete="CASCADE"), primary_key=True),
)


class Task(Base):
    __tablename__ = "tasks"

    task_id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(200), nullable=False)
    description = Column(Text)
    priority = Column(String(10), nullable=False, default="medium")
    deadline = Column(Date, nullable=False)
    remark = Column(Text)
    is_sequential = Column(Boolean, nullable=False, default=False)
    created_by = Column(Integer, ForeignKey("users.user_id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    projects = relationship("Project", secondary=task_projects, back_populates="tasks")
    assignments = relationship(
        "TaskAssignment",
        back_populates="task",
        cascade="all, delete-orphan",
        order_by="TaskAssignment.assignment_id",
    )

    @property
    def project_ids(self):
        return [p.project_id for p in self.projects]


class TaskAssignment(Base):
    __tablename__ = "task_assignments"

    assignment_id = Column(Integer, primary_key=True, autoincrement=True)
    task_id = Column(Integer, ForeignKey("tasks.task_id", ondelete="CASCADE"), nullable=False)
    project_id = Column(Integer, ForeignKey("projects.project_id", ondelete="CASCADE"), nullable=False)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    status = Column(String(20), nullable=False, default=STATUS_PENDING)
    sequence = Column(Integer, nullable=True)  # 1-based, sequential tasks only
    updated_at = Column(DateTime, server_default=func.now(), onupdate=func.now())

    task = relationship("Task", back_populates="assignments")
    project = relationship("Project", back_populates="task_assignments")
    user = relationship("User", back_populates="task_assignments")

    @property
    def user_name(self):
        return self.user.name if self.user else None

    @property
    def project_name(self):
        return self.project.name if self.project else None

    __table_args__ = (
        UniqueConstraint("task_id", "user_id", name="uq_task_assignment_user"),
        UniqueConstraint("task_id", "sequence", name="uq_task_assignment_sequence"),
        Index("idx_task_assignment_user", "user_id"),
        Index("idx_task_assignment_project", "project_id"),
    )
