"""Work session (clock-in/clock-out) attendance model."""

from sqlalchemy import Column, Integer, DateTime, ForeignKey, Index, UniqueConstraint
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from tasktracker.database import Base
from tasktracker.utils.helpers import format_duration


class Attendance(Base):
    __tablename__ = "attendance"

    attendance_id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(Integer, ForeignKey("users.user_id", ondelete="CASCADE"), nullable=False)
    login_time = Column(DateTime, nullable=False)
    logout_time = Column(DateTime, nullable=True)
    available_time = Column(Integer, nullable=True)  # seconds, set on end
    # user_id while the record is open, NULL once ended
    open_user_id = Column(Integer, nullable=True)
    created_at = Column(DateTime, server_default=func.now())

    user = relationship("User", back_populates="attendances")

    @property
    def is_open(self) -> bool:
        return self.logout_time is None

    @property
    def available_time_display(self):
        if self.available_time is None:
            return None
        return format_duration(self.available_time)

    __table_args__ = (
        Index("idx_attendance_user_login", "user_id", "login_time"),
        UniqueConstraint("open_user_id", name="uq_attendance_open_user"),
    )
