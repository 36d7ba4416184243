# =============================================================================
# core/models/task.py - Task Schemas
# =============================================================================
# These models define the API contract for task operations:
# - TaskCreate: Input for POST /tasks
# - TaskUpdate: Input for PATCH /tasks/{id} (every field optional)
# - TaskResponse: Output when returning a task to clients
# - TaskList / Pagination: Output of GET /tasks
#
# Strings are trimmed before length checks, so "   ab  " is too short.
# =============================================================================

from datetime import datetime
from math import ceil

from pydantic import BaseModel, ConfigDict, Field, field_validator

from core.orm import TaskStatus


TITLE_MIN_LENGTH = 3
TITLE_MAX_LENGTH = 200
DESCRIPTION_MAX_LENGTH = 1000


class TaskCreate(BaseModel):
    """
    Schema for creating a new task.

    Example:
        {
            "title": "Buy groceries",
            "description": "Milk, eggs, bread",
            "status": "PENDING"
        }
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(
        ...,
        min_length=TITLE_MIN_LENGTH,
        max_length=TITLE_MAX_LENGTH,
        description="Task title"
    )

    description: str | None = Field(
        default=None,
        max_length=DESCRIPTION_MAX_LENGTH,
        description="Optional longer description"
    )

    status: TaskStatus = Field(
        default=TaskStatus.PENDING,
        description="Initial status (defaults to PENDING)"
    )

    @field_validator("description")
    @classmethod
    def empty_description_is_none(cls, v: str | None) -> str | None:
        return v or None


class TaskUpdate(BaseModel):
    """
    Schema for partially updating a task.

    Only fields present in the request body are changed. `title` and
    `status` may be omitted but not set to null; `description` may be
    set to null to clear it.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str | None = Field(
        default=None,
        min_length=TITLE_MIN_LENGTH,
        max_length=TITLE_MAX_LENGTH,
    )
    description: str | None = Field(
        default=None,
        max_length=DESCRIPTION_MAX_LENGTH,
    )
    status: TaskStatus | None = None

    @field_validator("title")
    @classmethod
    def title_not_null(cls, v: str | None) -> str:
        if v is None:
            raise ValueError("Title cannot be empty")
        return v

    @field_validator("status")
    @classmethod
    def status_not_null(cls, v: TaskStatus | None) -> TaskStatus:
        if v is None:
            raise ValueError("Status must be either PENDING or COMPLETED")
        return v

    def changes(self) -> dict:
        """Fields the client actually sent."""
        return self.model_dump(exclude_unset=True)


class TaskResponse(BaseModel):
    """
    Schema for returning task data to clients.

    Example:
        {
            "id": 12,
            "title": "Buy groceries",
            "description": null,
            "status": "PENDING",
            "user_id": 3,
            "created_at": "2024-01-15T10:30:00Z",
            "updated_at": "2024-01-15T10:30:00Z"
        }
    """

    model_config = ConfigDict(from_attributes=True)

    id: int
    title: str
    description: str | None = None
    status: TaskStatus
    user_id: int
    created_at: datetime
    updated_at: datetime


class Pagination(BaseModel):
    page: int = Field(..., ge=1)
    limit: int = Field(..., ge=1)
    total: int = Field(..., ge=0)
    total_pages: int = Field(..., ge=0)

    @classmethod
    def build(cls, page: int, limit: int, total: int) -> "Pagination":
        return cls(page=page, limit=limit, total=total, total_pages=ceil(total / limit))


class TaskList(BaseModel):
    """Response of GET /tasks."""

    tasks: list[TaskResponse] = Field(default_factory=list)
    pagination: Pagination


class TaskMessageResponse(BaseModel):
    """Mutation responses carry a message next to the affected task."""

    message: str
    task: TaskResponse
