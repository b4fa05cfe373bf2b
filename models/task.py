"""Task model and its lifecycle hooks."""

import enum
from datetime import datetime

from sqlalchemy import Column, Date, Enum, ForeignKey, Integer, String, Text
from sqlalchemy.orm import relationship

from models.base import Base, TimestampedModel


class TaskStatus(str, enum.Enum):
    """Closed set of task states. PENDING is the only initial state."""

    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"


class Task(TimestampedModel, Base):
    """Task model mapping to the tasks table.

    The repository calls before_insert() exactly once before the first write
    and before_update() exactly once before every later write.
    """

    __tablename__ = "tasks"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String(255), nullable=False)
    description = Column(Text)
    status = Column(
        Enum(TaskStatus, name="task_status", native_enum=False, length=20),
        nullable=False,
    )
    due_date = Column(Date)
    priority = Column(Integer)
    assigned_to_id = Column(
        "assigned_to",
        Integer,
        ForeignKey("employees.id", ondelete="CASCADE"),
        index=True,
        nullable=True,
    )
    created_by_id = Column(
        "created_by",
        Integer,
        ForeignKey("users.id", ondelete="SET NULL"),
        nullable=True,
    )

    assigned_to = relationship("Employee", back_populates="tasks")
    created_by = relationship("User", foreign_keys=[created_by_id], lazy="select")

    def before_insert(self, now: datetime) -> None:
        """Stamp both timestamps and default the status on first persistence.

        Caller-supplied timestamps are overwritten; an explicit status is kept.
        """
        self.created_at = now
        self.updated_at = now
        if self.status is None:
            self.status = TaskStatus.PENDING

    def before_update(self, now: datetime) -> None:
        """Refresh updated_at; created_at and status are left alone."""
        self.updated_at = now

    def __repr__(self) -> str:
        return f"<Task id={self.id} title={self.title!r} status={self.status}>"
