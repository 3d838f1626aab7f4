"""
Task domain models and schemas.

Entity, editable field set, and request/response schemas for task operations.
`course_name` is derived from the owning course at read time and never written.

Dependencies: pydantic
System role: Task shape and API contracts
"""

from datetime import datetime
from typing import Literal, get_args

from pydantic import BaseModel, ConfigDict, Field, field_validator

TaskStatus = Literal["pending", "in-progress", "done"]

TASK_STATUSES: tuple[str, ...] = get_args(TaskStatus)

DEFAULT_TASK_STATUS: TaskStatus = "pending"

# Columns the caller may never set on create or update.
TASK_PROTECTED_FIELDS = frozenset({"id", "user_id", "course_id", "created_at", "updated_at"})


class Task(BaseModel):
    """Task row from the `tasks` table, joined with its course name."""

    model_config = ConfigDict(extra="ignore", frozen=True)

    id: str
    user_id: str
    course_id: str
    title: str = Field(..., min_length=1)
    description: str | None = None
    deadline: datetime
    status: TaskStatus = DEFAULT_TASK_STATUS
    created_at: datetime
    updated_at: datetime | None = None
    course_name: str | None = None

    @field_validator("status", mode="before")
    @classmethod
    def _default_status(cls, value):
        return DEFAULT_TASK_STATUS if value is None else value


class TaskFields(BaseModel):
    """Editable subset of a task, as accepted by the validator."""

    model_config = ConfigDict(frozen=True)

    title: str
    description: str | None = None
    deadline: datetime
    status: TaskStatus | None = None


class CreateTaskRequest(BaseModel):
    """Request schema for creating a new task."""

    course_id: str | None = Field(None, description="Owning course id")
    title: str = Field("", description="Task title")
    description: str | None = Field(None, description="Task description")
    deadline: str | None = Field(None, description="Deadline as ISO-8601 timestamp")
    status: str | None = Field(None, description="pending, in-progress or done")


class UpdateTaskRequest(BaseModel):
    """Request schema for updating a task (complete editable field set)."""

    title: str = Field("", description="Task title")
    description: str | None = Field(None, description="Task description")
    deadline: str | None = Field(None, description="Deadline as ISO-8601 timestamp")
    status: str | None = Field(None, description="pending, in-progress or done")


class TaskResponse(BaseModel):
    """Response schema for task operations."""

    id: str
    user_id: str
    course_id: str
    title: str
    description: str | None
    deadline: datetime
    status: str
    created_at: datetime
    updated_at: datetime | None
    course_name: str | None
