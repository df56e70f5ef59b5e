# app/models/client_message.py
from __future__ import annotations

from datetime import datetime

from sqlalchemy import DateTime, Integer, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column

from app.models.base import Base


class ClientMessage(Base):
    """Message log replayed to clients when they connect."""

    __tablename__ = "client_messages"

    id: Mapped[int] = mapped_column(Integer, primary_key=True)

    # "login" / "update"
    kind: Mapped[str] = mapped_column(String(20), nullable=False)

    # no FK: the log outlives deleted users and tasks
    user_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    user_name: Mapped[str] = mapped_column(String(200), nullable=False)

    task_id: Mapped[int] = mapped_column(Integer, nullable=False)
    task_description: Mapped[str] = mapped_column(Text, nullable=False)

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        server_default=func.now(),
        nullable=False,
    )
