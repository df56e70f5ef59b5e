# app/api/deps.py
from __future__ import annotations

from fastapi import Depends, Header, HTTPException
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.services.notifications import ClientMessageLog, ClientNotifier, hub
from app.services.task_assignment_service import TaskAssignmentService


# -----------------------------------------------------------------------------
# MVP auth header
# -----------------------------------------------------------------------------


def get_current_user_id(
    x_actor_user_id: str | None = Header(
        default=None,
        alias="X-Actor-User-Id",
        description="Id of the user performing the request. Temporary MVP auth.",
        examples=["1"],
    ),
) -> int:
    """MVP auth: X-Actor-User-Id header."""
    if not x_actor_user_id:
        raise HTTPException(status_code=401, detail="Missing X-Actor-User-Id header")
    try:
        return int(x_actor_user_id)
    except ValueError as e:
        raise HTTPException(status_code=400, detail="Invalid X-Actor-User-Id format (must be an integer)") from e


def get_notifier(db: Session = Depends(get_db)) -> ClientNotifier:
    return ClientNotifier(hub=hub, log=ClientMessageLog(db))


def get_assignment_service(
    db: Session = Depends(get_db),
    notifier: ClientNotifier = Depends(get_notifier),
) -> TaskAssignmentService:
    return TaskAssignmentService(db, notifier)
