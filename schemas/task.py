"""Pydantic schemas for task API requests and responses."""

from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from models.task import TaskStatus


class TaskCreate(BaseModel):
    """Request body for creating a task.

    status defaults to PENDING when omitted; created_at and updated_at are
    always set by the server.
    """

    title: str = Field(max_length=255)
    description: str | None = None
    status: TaskStatus | None = None
    due_date: date | None = None
    priority: int | None = None
    assigned_to_id: int | None = Field(
        default=None,
        description="ID of the employee the task is assigned to",
    )


class TaskUpdate(BaseModel):
    """Request body for a partial task update. Only sent fields change."""

    title: str | None = Field(default=None, max_length=255)
    description: str | None = None
    status: TaskStatus | None = None
    due_date: date | None = None
    priority: int | None = None
    assigned_to_id: int | None = None

    @field_validator("status")
    @classmethod
    def validate_status_not_null(cls, v: TaskStatus | None) -> TaskStatus:
        """A task always has a status; it can change but not be cleared."""
        if v is None:
            raise ValueError("status cannot be null")
        return v


class TaskResponse(BaseModel):
    """Task as returned by the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    status: TaskStatus
    due_date: date | None = None
    priority: int | None = None
    assigned_to_id: int | None = None
    created_by_id: int | None = None
    created_at: datetime
    updated_at: datetime
