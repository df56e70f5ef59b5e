# app/api/notifications.py

from __future__ import annotations

from fastapi import APIRouter, Depends, WebSocket, WebSocketDisconnect
from sqlalchemy.orm import Session

from app.core.db import get_db
from app.schemas.client_message import ClientMessageOut
from app.services.notifications import ClientMessageLog, hub


router = APIRouter()


@router.websocket("/ws")
async def notifications_ws(websocket: WebSocket, db: Session = Depends(get_db)):
    """
    Push channel for "who is working on what".

    On connect the latest logged message of every user is replayed, then
    every committed task selection is pushed as an "update" message.
    """
    def replay() -> list[dict]:
        rows = ClientMessageLog(db).latest_per_user()
        return [ClientMessageOut.model_validate(row).wire() for row in rows]

    try:
        # live pushes wait until the replay has been sent
        await hub.connect(websocket, replay=replay)
        db.close()

        # clients only listen; incoming frames are ignored
        while True:
            await websocket.receive_text()
    except WebSocketDisconnect:
        pass
    finally:
        hub.disconnect(websocket)
