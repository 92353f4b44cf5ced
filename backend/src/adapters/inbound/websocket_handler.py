"""
WebSocket fan-out of session state changes.
"""
from __future__ import annotations

import asyncio
import json
import logging
from typing import Optional

from fastapi import WebSocket, WebSocketDisconnect

from backend.src.core.events.session_events import SessionStateChanged
from backend.src.core.value_objects.subscription import Subscription

logger = logging.getLogger(__name__)


class SessionConnectionManager:
    """Pushes a session snapshot to every connected client on each change.

    Store observers are synchronous, so events are queued per connection and
    sent by that connection's own loop.
    """

    def __init__(self) -> None:
        self._queues: dict[WebSocket, asyncio.Queue] = {}
        self._subscription: Optional[Subscription] = None

    def attach(self, manager) -> None:
        if self._subscription is None:
            self._subscription = manager.subscribe(self._on_state_changed)

    def detach(self) -> None:
        if self._subscription is not None:
            self._subscription.unsubscribe()
            self._subscription = None

    @property
    def connection_count(self) -> int:
        return len(self._queues)

    async def connect(self, websocket: WebSocket) -> asyncio.Queue:
        await websocket.accept()
        queue: asyncio.Queue = asyncio.Queue()
        self._queues[websocket] = queue
        logger.info("Session WebSocket connected (total=%d)", len(self._queues))
        return queue

    def disconnect(self, websocket: WebSocket) -> None:
        if self._queues.pop(websocket, None) is None:
            return
        logger.info("Session WebSocket disconnected (total=%d)", len(self._queues))

    def _on_state_changed(self, event: SessionStateChanged) -> None:
        message = {"type": "session", "source": event.source.value, **event.current.to_dict()}
        for queue in self._queues.values():
            queue.put_nowait(message)

    async def serve(self, websocket: WebSocket, manager) -> None:
        """Send the current snapshot, then every change until the client leaves."""
        queue = await self.connect(websocket)
        await websocket.send_text(json.dumps({"type": "session", **manager.state.to_dict()}))
        sender = asyncio.create_task(self._pump(websocket, queue))
        try:
            while True:
                data = await websocket.receive_text()
                if data == "ping":
                    await websocket.send_text(json.dumps({"type": "pong"}))
        except WebSocketDisconnect:
            pass
        finally:
            sender.cancel()
            self.disconnect(websocket)

    async def _pump(self, websocket: WebSocket, queue: asyncio.Queue) -> None:
        while True:
            message = await queue.get()
            try:
                await websocket.send_text(json.dumps(message))
            except Exception:
                logger.warning("Failed to push session update; dropping connection")
                self.disconnect(websocket)
                return


# Singleton manager
connections = SessionConnectionManager()
