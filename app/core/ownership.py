# app/core/ownership.py
from __future__ import annotations

from sqlalchemy.orm import Session

from app.models.task import Task


class TaskNotFound(LookupError):
    """Raised when the referenced task does not exist."""
    pass


class Forbidden(Exception):
    """Raised when the actor is not allowed to manage a task."""
    pass


def ensure_task_owner(db: Session, *, task_id: int, owner: int) -> Task:
    """
    Load the task and check that `owner` is the user who created it.

    Called at the start of every operation that manages assignees; the result
    is never cached between operations.
    """
    task = db.get(Task, task_id)
    if task is None:
        raise TaskNotFound(f"Task not found: {task_id}")
    if task.owner != owner:
        raise Forbidden(f"User {owner} is not the owner of task {task_id}")
    return task
