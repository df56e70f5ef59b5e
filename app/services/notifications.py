# app/services/notifications.py
from __future__ import annotations

import asyncio
import logging
import threading
from collections.abc import Callable, Iterable
from concurrent.futures import Future
from typing import Protocol

from fastapi import WebSocket
from sqlalchemy import func, select
from sqlalchemy.orm import Session

from app.models.client_message import ClientMessage
from app.schemas.client_message import ClientMessageOut

logger = logging.getLogger(__name__)


class NotificationChannel(Protocol):
    """What the assignment workflow needs from the real-time side channel."""

    def broadcast(self, message: ClientMessageOut) -> None: ...

    def append_log(self, user_id: int, message: ClientMessageOut) -> None: ...


class ConnectionHub:
    """
    Open WebSocket connections of this process.

    Every connection is stored together with the event loop serving it, so
    broadcast() may be called from FastAPI's worker threads (sync endpoints)
    as well as from the loop itself. Sends are scheduled, not awaited, and go
    through a per-connection lock so they never overtake the connect replay.
    """

    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._clients: dict[int, tuple[WebSocket, asyncio.AbstractEventLoop, asyncio.Lock]] = {}

    def __len__(self) -> int:
        with self._lock:
            return len(self._clients)

    async def connect(
        self,
        websocket: WebSocket,
        replay: Callable[[], Iterable[dict]] | None = None,
    ) -> None:
        """
        Accept and register `websocket`, then send the `replay` payloads.

        `replay` is called after registration, under the connection's send
        lock: anything broadcast meanwhile is sent after the replay.
        """
        await websocket.accept()
        send_lock = asyncio.Lock()
        async with send_lock:
            with self._lock:
                self._clients[id(websocket)] = (websocket, asyncio.get_running_loop(), send_lock)
            logger.debug("WebSocket client connected (%d open)", len(self))
            if replay is not None:
                for payload in replay():
                    await websocket.send_json(payload)

    def disconnect(self, websocket: WebSocket) -> None:
        with self._lock:
            self._clients.pop(id(websocket), None)
        logger.debug("WebSocket client disconnected (%d open)", len(self))

    def broadcast(self, message: ClientMessageOut) -> None:
        payload = message.wire()
        with self._lock:
            clients = list(self._clients.values())

        for websocket, loop, send_lock in clients:
            if loop.is_closed():
                logger.warning("Dropping WebSocket client: event loop is closed")
                self.disconnect(websocket)
                continue
            future = asyncio.run_coroutine_threadsafe(self._send(websocket, send_lock, payload), loop)
            future.add_done_callback(lambda f, ws=websocket: self._on_sent(ws, f))

    async def _send(self, websocket: WebSocket, send_lock: asyncio.Lock, payload: dict) -> None:
        async with send_lock:
            await websocket.send_json(payload)

    def _on_sent(self, websocket: WebSocket, future: Future) -> None:
        if future.cancelled():
            self.disconnect(websocket)
            return
        exc = future.exception()
        if exc is not None:
            logger.warning("Dropping WebSocket client after failed send: %s", exc)
            self.disconnect(websocket)


class ClientMessageLog:
    """Persisted log of client messages, replayed to newly connected clients."""

    def __init__(self, db: Session):
        self.db = db

    def append(self, user_id: int, message: ClientMessageOut) -> ClientMessage:
        row = ClientMessage(
            kind=message.kind,
            user_id=user_id,
            user_name=message.user_name,
            task_id=message.task_id,
            task_description=message.task_description,
        )
        self.db.add(row)
        self.db.commit()
        return row

    def latest_per_user(self) -> list[ClientMessage]:
        latest_ids = (
            select(func.max(ClientMessage.id))
            .group_by(ClientMessage.user_id)
        )
        return list(
            self.db.execute(
                select(ClientMessage)
                .where(ClientMessage.id.in_(latest_ids))
                .order_by(ClientMessage.user_id)
            ).scalars()
        )


class ClientNotifier:
    """NotificationChannel backed by the connection hub and the DB message log."""

    def __init__(self, hub: ConnectionHub, log: ClientMessageLog):
        self.hub = hub
        self.log = log

    def broadcast(self, message: ClientMessageOut) -> None:
        self.hub.broadcast(message)

    def append_log(self, user_id: int, message: ClientMessageOut) -> None:
        self.log.append(user_id, message)


# one hub per process
hub = ConnectionHub()
