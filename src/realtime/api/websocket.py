"""
Push Socket Route
"""
from __future__ import annotations

import json

from fastapi import APIRouter, WebSocket, WebSocketDisconnect

from realtime.broadcaster import EventBroadcaster
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)

router = APIRouter()


@router.websocket("/ws")
async def push_socket(websocket: WebSocket) -> None:
    """
    Push channel for every role.

    The client identifies once with ``{"type": "identify", "userId": <id>}``
    and receives ``{"type": "identified", "userId": <id>}``; from then on the
    server pushes ``{"event": name, "data": payload}`` frames. Identifying
    again under another id moves the session. Anything else is ignored.
    """
    broadcaster: EventBroadcaster = websocket.app.state.container.broadcaster
    registry = broadcaster.registry
    await websocket.accept()
    user_id: int | None = None
    try:
        while True:
            raw = await websocket.receive_text()
            try:
                message = json.loads(raw)
            except json.JSONDecodeError:
                logger.debug("push_socket_bad_frame")
                continue
            if not isinstance(message, dict) or message.get("type") != "identify":
                continue
            try:
                identified = int(message["userId"])
            except (KeyError, TypeError, ValueError):
                await websocket.send_json({"type": "error", "message": "userId must be an integer."})
                continue
            if user_id is not None and user_id != identified:
                await registry.unregister(user_id, websocket)
            user_id = identified
            await registry.register(user_id, websocket)
            await websocket.send_json({"type": "identified", "userId": user_id})
    except WebSocketDisconnect:
        logger.debug("push_socket_disconnected", user_id=user_id)
    finally:
        if user_id is not None:
            await registry.unregister(user_id, websocket)
