"""
Live gallery WebSocket
======================

Admin dashboards connect with ``/ws?gallery=<gallery_id>`` and receive
selection, favorite and review events for that gallery as they happen.

Server -> client messages are the events built by
``src.services.broadcaster.build_event``::

    {"type": "selection", "gallery_id": "...", "photo_id": "...",
     "client_identifier": "...", "action": "add", "timestamp": "..."}

Client -> server messages are optional. ``{"type": "ping"}`` is answered
with ``{"type": "pong"}``; anything else, binary frames included, is
ignored.
"""

import asyncio
import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request, WebSocket, WebSocketDisconnect, status

from src.api.deps import get_current_admin
from src.app.config import settings
from src.models.user import User


logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/ws/stats")
async def get_websocket_stats(
    request: Request,
    current_user: User = Depends(get_current_admin)
):
    """Connection counts for the live gallery channel (admin only)."""
    return request.app.state.broadcaster.get_statistics()


@router.websocket("/ws")
async def gallery_websocket(
    websocket: WebSocket,
    gallery: Optional[str] = Query(None, description="Gallery to watch")
):
    """
    Subscribe to live events for one gallery.

    The gallery is fixed for the life of the connection. Connections
    without a gallery are closed with a policy violation.
    """
    if not gallery:
        await websocket.close(code=status.WS_1008_POLICY_VIOLATION, reason="Missing gallery")
        logger.warning("WebSocket connection rejected: Missing gallery")
        return

    broadcaster = websocket.app.state.broadcaster
    await broadcaster.connect(websocket, gallery)

    try:
        while True:
            try:
                received = await asyncio.wait_for(
                    websocket.receive(),
                    timeout=settings.WS_PING_INTERVAL_SECONDS
                )
            except asyncio.TimeoutError:
                # Keep idle proxies from dropping the connection
                await websocket.send_json({"type": "ping"})
                continue

            if received["type"] == "websocket.disconnect":
                raise WebSocketDisconnect(received.get("code", status.WS_1000_NORMAL_CLOSURE))

            data = received.get("text")
            if data is None:
                logger.debug(f"Ignoring binary message on gallery {gallery}")
                continue

            try:
                message = json.loads(data)
            except json.JSONDecodeError:
                logger.debug(f"Ignoring non-JSON message on gallery {gallery}")
                continue

            if isinstance(message, dict) and message.get("type") == "ping":
                await websocket.send_json({"type": "pong"})
            else:
                logger.debug(f"Ignoring client message on gallery {gallery}: {data[:200]}")

    except WebSocketDisconnect:
        logger.info(f"WebSocket client disconnected from gallery {gallery}")

    except Exception as e:
        logger.error(f"WebSocket error on gallery {gallery}: {str(e)}", exc_info=True)

    finally:
        broadcaster.disconnect(websocket)
