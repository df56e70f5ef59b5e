# app/models/assignment.py
from __future__ import annotations

from sqlalchemy import Boolean, ForeignKey, Integer, false
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class Assignment(Base):
    """
    Link between a task and one of its assignees.

    (task_id, user_id) is the primary key, so a user is assigned to a task at
    most once. At most one row per user has active=True; that is maintained
    by the selection service, not by a DB constraint.
    """

    __tablename__ = "assignments"

    task_id: Mapped[int] = mapped_column(
        "task",
        Integer,
        ForeignKey("tasks.id", ondelete="CASCADE"),
        primary_key=True,
    )

    user_id: Mapped[int] = mapped_column(
        "user",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
        index=True,
    )

    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
