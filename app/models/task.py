# app/models/task.py
from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import Boolean, DateTime, ForeignKey, Integer, Text, false
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class Task(Base):
    __tablename__ = "tasks"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    description: Mapped[str] = mapped_column(Text, nullable=False)

    # user who created the task; only the owner manages its assignees
    owner: Mapped[int] = mapped_column(
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )

    important: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    private: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())
    completed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False, server_default=false())

    deadline: Mapped[Optional[datetime]] = mapped_column(DateTime(timezone=True), nullable=True)
