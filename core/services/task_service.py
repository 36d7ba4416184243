# =============================================================================
# core/services/task_service.py - Task Business Logic
# =============================================================================
# Handles task CRUD operations and business logic.
# Separates HTTP concerns from database logic.
#
# Every lookup is scoped by owner: a task belonging to another user is
# reported exactly like a missing one.
# =============================================================================

import logging
from typing import Any

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.exceptions import TaskNotFoundError
from core.orm import Task, TaskStatus

logger = logging.getLogger(__name__)


class TaskService:
    """
    Service for task management operations.

    Provides a clean interface between API routes and database.
    """

    @staticmethod
    def create_task(
        db: Session,
        user_id: int,
        title: str,
        description: str | None = None,
        status: TaskStatus = TaskStatus.PENDING,
    ) -> Task:
        """
        Create a new task.

        Args:
            db: Database session
            user_id: The user who owns this task
            title: Task title
            description: Optional description
            status: Initial status

        Returns:
            The created Task
        """
        task = Task(
            title=title,
            description=description or None,
            status=status,
            user_id=user_id,
        )
        db.add(task)
        db.commit()
        db.refresh(task)

        logger.info(f"Created task: {task.id} for user: {user_id}")
        return task

    @staticmethod
    def get_task(db: Session, task_id: int, user_id: int) -> Task:
        """
        Get a task by ID.

        Raises:
            TaskNotFoundError: If the task doesn't exist or user doesn't own it
        """
        task = db.scalars(
            select(Task).where(Task.id == task_id, Task.user_id == user_id)
        ).one_or_none()

        if task is None:
            # Don't reveal that the task exists - return not found
            raise TaskNotFoundError(task_id)

        return task

    @staticmethod
    def list_tasks(
        db: Session,
        user_id: int,
        page: int = 1,
        limit: int = 10,
        status: str | None = None,
        search: str | None = None,
    ) -> tuple[list[Task], int]:
        """
        List tasks with pagination for a specific user.

        Args:
            db: Database session
            user_id: Filter tasks by this user
            page: Page number (1-indexed)
            limit: Items per page
            status: Only applied if it is a valid TaskStatus value
            search: Case-insensitive substring of the title

        Returns:
            Tuple of (tasks list, total count), newest first
        """
        conditions = [Task.user_id == user_id]

        if status in (TaskStatus.PENDING.value, TaskStatus.COMPLETED.value):
            conditions.append(Task.status == TaskStatus(status))

        if search:
            # autoescape so "%" and "_" in the search text match literally
            conditions.append(Task.title.icontains(search, autoescape=True))

        total = db.scalar(select(func.count()).select_from(Task).where(*conditions)) or 0

        offset = (page - 1) * limit
        tasks = db.scalars(
            select(Task)
            .where(*conditions)
            .order_by(Task.created_at.desc(), Task.id.desc())
            .offset(offset)
            .limit(limit)
        ).all()

        return list(tasks), total

    @staticmethod
    def update_task(db: Session, task_id: int, user_id: int, changes: dict[str, Any]) -> Task:
        """
        Apply a partial update.

        Args:
            changes: Only the fields the client sent (title/description/status)

        Raises:
            TaskNotFoundError: If the task doesn't exist or user doesn't own it
        """
        task = TaskService.get_task(db, task_id, user_id)

        if not changes:
            return task  # Nothing to update

        for field in ("title", "description", "status"):
            if field in changes:
                setattr(task, field, changes[field])

        db.commit()
        db.refresh(task)

        logger.info(f"Updated task: {task_id} fields={sorted(changes)}")
        return task

    @staticmethod
    def delete_task(db: Session, task_id: int, user_id: int) -> None:
        """
        Delete a task.

        Raises:
            TaskNotFoundError: If the task doesn't exist or user doesn't own it
        """
        task = TaskService.get_task(db, task_id, user_id)
        db.delete(task)
        db.commit()

        logger.info(f"Deleted task: {task_id}")

    @staticmethod
    def toggle_task(db: Session, task_id: int, user_id: int) -> Task:
        """Flip a task between PENDING and COMPLETED."""
        task = TaskService.get_task(db, task_id, user_id)
        task.status = TaskStatus(task.status).toggled()
        db.commit()
        db.refresh(task)

        logger.info(f"Toggled task: {task_id} -> {task.status.value}")
        return task
