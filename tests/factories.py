# tests/factories.py
from __future__ import annotations

import itertools
from typing import Any

from app.models.assignment import Assignment
from app.models.task import Task
from app.models.user import User

_seq = itertools.count(1)


def make_user(
    db,
    *,
    id: int | None = None,
    name: str | None = None,
    email: str | None = None,
    flush: bool = True,
    **overrides: Any,
) -> User:
    """
    User with a unique email. `hash` stays NULL unless given: the
    assignment service never reads it.
    """
    n = next(_seq)
    user = User(
        id=id,
        name=name or f"user {n}",
        email=email or f"user{n}@example.com",
        **overrides,
    )
    db.add(user)
    if flush:
        db.flush()
    return user


def make_task(
    db,
    *,
    owner: int,
    id: int | None = None,
    description: str | None = None,
    flush: bool = True,
    **overrides: Any,
) -> Task:
    task = Task(
        id=id,
        owner=owner,
        description=description or f"task {next(_seq)}",
        **overrides,
    )
    db.add(task)
    if flush:
        db.flush()
    return task


def make_assignment(
    db,
    *,
    task_id: int,
    user_id: int,
    active: bool = False,
    flush: bool = True,
) -> Assignment:
    a = Assignment(task_id=task_id, user_id=user_id, active=active)
    db.add(a)
    if flush:
        db.flush()
    return a
