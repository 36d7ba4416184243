# =============================================================================
# core/models/ - Pydantic Data Models
# =============================================================================
# This package contains Pydantic schemas for data validation:
# - task.py: Task CRUD schemas and list/pagination envelopes
# - user.py: Public user representation
#
# These models define the "contract" between API and clients.
# =============================================================================

from .task import (
    Pagination,
    TaskCreate,
    TaskList,
    TaskMessageResponse,
    TaskResponse,
    TaskUpdate,
)
from .user import UserResponse

# Re-exported so callers don't need to reach into the ORM module
from core.orm import TaskStatus

__all__ = [
    # Task
    "Pagination",
    "TaskCreate",
    "TaskList",
    "TaskMessageResponse",
    "TaskResponse",
    "TaskStatus",
    "TaskUpdate",
    # User
    "UserResponse",
]
