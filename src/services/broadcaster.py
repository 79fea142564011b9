"""
Live gallery event broadcaster
==============================

Fans transient events out to admin viewers currently connected to a
gallery over WebSocket.

- One registry per process: gallery id -> set of open WebSockets
- Delivery is at-most-once and best-effort; nothing is queued for viewers
  who are not connected
- A socket that fails a send is dropped from the registry
- ``publish`` lets synchronous request handlers (threadpool) hand events
  to the event loop without waiting on delivery

The registry is mutated only on the event loop thread.
"""

import asyncio
import logging
from collections import defaultdict
from datetime import datetime
from typing import Any, Dict, Optional, Set
from uuid import UUID

from fastapi import WebSocket
from fastapi.websockets import WebSocketState


logger = logging.getLogger(__name__)


class GalleryBroadcaster:
    """
    Registry of live admin connections keyed by gallery.

    Created at application startup and handed to whatever needs to
    broadcast; there is no module-level instance.
    """

    def __init__(self):
        # gallery_id -> open connections for that gallery
        self.active_connections: Dict[str, Set[WebSocket]] = defaultdict(set)

        # websocket -> connection metadata
        self.connection_info: Dict[WebSocket, Dict[str, Any]] = {}

        self._loop: Optional[asyncio.AbstractEventLoop] = None

        self._stats = {
            "total_connections": 0,
            "messages_sent": 0,
            "disconnections": 0,
            "errors": 0,
        }

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    def bind_loop(self, loop: asyncio.AbstractEventLoop) -> None:
        """Remember the event loop that owns the registry (called at startup)."""
        self._loop = loop
        logger.info("🔌 Gallery broadcaster bound to event loop")

    def unbind_loop(self) -> None:
        self._loop = None

    async def connect(self, websocket: WebSocket, gallery_id: Any) -> None:
        """
        Accept and register a connection under ``gallery_id``.

        The gallery is fixed for the life of the connection; watching a
        different gallery needs a new connection.
        """
        await websocket.accept()

        key = str(gallery_id)
        self.active_connections[key].add(websocket)
        self.connection_info[websocket] = {
            "gallery_id": key,
            "connected_at": datetime.utcnow(),
            "messages_sent": 0,
        }
        self._stats["total_connections"] += 1

        logger.info(
            f"✅ Viewer connected to gallery {key} "
            f"(gallery viewers: {self.get_gallery_connections(key)}, total: {self.get_total_connections()})"
        )

    def disconnect(self, websocket: WebSocket) -> None:
        """
        Remove a connection from every registry set it is in.

        Safe to call more than once for the same socket.
        """
        info = self.connection_info.pop(websocket, None)

        for key in list(self.active_connections.keys()):
            connections = self.active_connections.get(key)
            if connections is None or websocket not in connections:
                continue
            connections.discard(websocket)
            if not connections:
                del self.active_connections[key]

        if info is not None:
            self._stats["disconnections"] += 1
            logger.info(
                f"❌ Viewer disconnected from gallery {info['gallery_id']} "
                f"(total: {self.get_total_connections()})"
            )

    # ------------------------------------------------------------------
    # Delivery
    # ------------------------------------------------------------------

    async def broadcast(self, gallery_id: Any, payload: Dict[str, Any]) -> int:
        """
        Send ``payload`` to every open connection of a gallery.

        Returns:
            Number of connections the message was written to. A gallery
            with no viewers is a silent no-op returning 0.
        """
        key = str(gallery_id)
        connections = self.active_connections.get(key)
        if not connections:
            logger.debug(f"No live viewers for gallery {key}; dropping {payload.get('type')} event")
            return 0

        delivered = 0
        for websocket in list(connections):
            # Closing sockets can still be in the set while we iterate
            if websocket.client_state != WebSocketState.CONNECTED:
                continue
            try:
                await websocket.send_json(payload)
            except Exception as e:
                logger.warning(f"Send to viewer of gallery {key} failed, dropping connection: {e}")
                self._stats["errors"] += 1
                self.disconnect(websocket)
                continue

            delivered += 1
            self._stats["messages_sent"] += 1
            info = self.connection_info.get(websocket)
            if info is not None:
                info["messages_sent"] += 1

        logger.debug(f"📢 {payload.get('type')} event for gallery {key} sent to {delivered} viewers")
        return delivered

    def publish(self, gallery_id: Any, payload: Dict[str, Any]) -> bool:
        """
        Fire-and-forget broadcast from any thread.

        Schedules ``broadcast`` on the bound event loop and returns at once.
        Returns False when the event was dropped because no loop is running.
        """
        loop = self._loop
        if loop is None or loop.is_closed():
            logger.debug(f"Broadcaster not running; dropping {payload.get('type')} event for gallery {gallery_id}")
            return False

        future = asyncio.run_coroutine_threadsafe(self.broadcast(gallery_id, payload), loop)
        future.add_done_callback(self._log_failed_delivery)
        return True

    @staticmethod
    def _log_failed_delivery(future) -> None:
        if future.cancelled():
            return
        exc = future.exception()
        if exc is not None:
            logger.error(f"Broadcast task failed: {exc}", exc_info=exc)

    # ------------------------------------------------------------------
    # Introspection
    # ------------------------------------------------------------------

    def get_gallery_connections(self, gallery_id: Any) -> int:
        return len(self.active_connections.get(str(gallery_id), set()))

    def get_total_connections(self) -> int:
        return sum(len(conns) for conns in self.active_connections.values())

    def get_statistics(self) -> Dict[str, Any]:
        return {
            **self._stats,
            "active_connections": self.get_total_connections(),
            "watched_galleries": len(self.active_connections),
        }


def build_event(event_type: str, gallery_id: Any, **fields: Any) -> Dict[str, Any]:
    """Shape of every message pushed to viewers."""
    return {
        "type": event_type,
        "gallery_id": str(gallery_id),
        **{key: str(value) if isinstance(value, UUID) else value for key, value in fields.items()},
        "timestamp": datetime.utcnow().isoformat(),
    }
