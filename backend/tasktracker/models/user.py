"""User domain SQLAlchemy model."""

from sqlalchemy import Column, Integer, String, DateTime
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func
from tasktracker.database import Base


class User(Base):
    __tablename__ = "users"

    user_id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(100), nullable=False)
    phone = Column(String(30))
    email = Column(String(255), unique=True, nullable=False)
    password = Column(String(255), nullable=False)  # bcrypt hash
    pin = Column(String(255), nullable=True)  # bcrypt hash
    role = Column(String(40), nullable=False)  # see utils.permissions.Role
    last_login = Column(DateTime, nullable=True)
    recent_login = Column(DateTime, nullable=True)
    created_at = Column(DateTime, server_default=func.now())
    updated_at = Column(DateTime, onupdate=func.now())

    attendances = relationship(
        "Attendance",
        back_populates="user",
        cascade="all, delete-orphan",
        order_by="Attendance.login_time.desc()",
    )
    project_assignments = relationship("ProjectAssignment", back_populates="user", cascade="all, delete-orphan")
    task_assignments = relationship("TaskAssignment", back_populates="user", cascade="all, delete-orphan")

    @property
    def has_pin(self) -> bool:
        return bool(self.pin)
