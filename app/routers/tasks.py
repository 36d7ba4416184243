# =============================================================================
# app/routers/tasks.py - Task CRUD Endpoints
# =============================================================================
# Handles task creation and management.
# All endpoints require authentication and only ever touch the caller's
# own tasks.
# =============================================================================

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query, status

from app.auth import AuthUser, get_current_user
from app.auth.models import MessageResponse
from app.dependencies import DbSession
from app.exceptions import InvalidTaskIdError
from core.models.task import (
    Pagination,
    TaskCreate,
    TaskList,
    TaskMessageResponse,
    TaskResponse,
    TaskUpdate,
)
from core.services.task_service import TaskService

router = APIRouter()

# Accepted as a string so a non-numeric id gets our own 400 message
TaskIdPath = Annotated[str, Path(description="Task ID")]

# Largest id a signed 64-bit column can hold
MAX_TASK_ID = 2**63 - 1
MAX_PAGE = 1_000_000


def _parse_task_id(raw_id: str) -> int:
    # Plain ASCII digits only: int() would also take "+3", " 7 " and "1_000"
    if not (raw_id.isascii() and raw_id.isdigit()):
        raise InvalidTaskIdError(raw_id)
    task_id = int(raw_id)
    if task_id > MAX_TASK_ID:
        raise InvalidTaskIdError(raw_id)
    return task_id


# =============================================================================
# Endpoints
# =============================================================================

@router.get("", response_model=TaskList)
def list_tasks(
    db: DbSession,
    user: AuthUser = Depends(get_current_user),
    page: Annotated[int, Query(ge=1, le=MAX_PAGE, description="Page number")] = 1,
    limit: Annotated[int, Query(ge=1, le=100, description="Items per page")] = 10,
    status: Annotated[str | None, Query(description="PENDING or COMPLETED; other values are ignored")] = None,
    search: Annotated[str | None, Query(description="Case-insensitive title search")] = None,
):
    """
    List the caller's tasks with pagination, newest first.
    """
    tasks, total = TaskService.list_tasks(
        db,
        user_id=user.id,
        page=page,
        limit=limit,
        status=status,
        search=search,
    )

    return TaskList(
        tasks=[TaskResponse.model_validate(t) for t in tasks],
        pagination=Pagination.build(page=page, limit=limit, total=total),
    )


@router.post("", response_model=TaskMessageResponse, status_code=status.HTTP_201_CREATED)
def create_task(
    request: TaskCreate,
    db: DbSession,
    user: AuthUser = Depends(get_current_user),
):
    """
    Create a new task owned by the caller.
    """
    task = TaskService.create_task(
        db,
        user_id=user.id,
        title=request.title,
        description=request.description,
        status=request.status,
    )

    return TaskMessageResponse(
        message="Task created successfully",
        task=TaskResponse.model_validate(task),
    )


@router.get("/{task_id}", response_model=TaskResponse)
def get_task(
    task_id: TaskIdPath,
    db: DbSession,
    user: AuthUser = Depends(get_current_user),
):
    """Get a single task. User must own the task."""
    task = TaskService.get_task(db, _parse_task_id(task_id), user_id=user.id)
    return TaskResponse.model_validate(task)


@router.patch("/{task_id}", response_model=TaskMessageResponse)
def update_task(
    task_id: TaskIdPath,
    request: TaskUpdate,
    db: DbSession,
    user: AuthUser = Depends(get_current_user),
):
    """
    Update task details.

    Only the fields present in the body change.
    """
    task = TaskService.update_task(
        db,
        _parse_task_id(task_id),
        user_id=user.id,
        changes=request.changes(),
    )

    return TaskMessageResponse(
        message="Task updated successfully",
        task=TaskResponse.model_validate(task),
    )


@router.delete("/{task_id}", response_model=MessageResponse)
def delete_task(
    task_id: TaskIdPath,
    db: DbSession,
    user: AuthUser = Depends(get_current_user),
):
    """Permanently delete a task. User must own the task."""
    TaskService.delete_task(db, _parse_task_id(task_id), user_id=user.id)
    return MessageResponse(message="Task deleted successfully")


@router.patch("/{task_id}/toggle", response_model=TaskMessageResponse)
def toggle_task(
    task_id: TaskIdPath,
    db: DbSession,
    user: AuthUser = Depends(get_current_user),
):
    """Flip the task between PENDING and COMPLETED."""
    task = TaskService.toggle_task(db, _parse_task_id(task_id), user_id=user.id)

    return TaskMessageResponse(
        message="Task status toggled successfully",
        task=TaskResponse.model_validate(task),
    )
