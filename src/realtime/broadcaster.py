"""
Event Broadcaster
Best-effort push of lifecycle events to connected sessions
"""
from __future__ import annotations

from typing import Any, Optional, Protocol

from realtime.registry import Connection, ConnectionRegistry
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class EventRelay(Protocol):
    """Carries envelopes to every instance, including the sending one."""

    @property
    def healthy(self) -> bool:
        ...

    async def publish(self, envelope: dict[str, Any]) -> None:
        ...


class EventBroadcaster:
    """
    Fan-out of ``{"event": name, "data": payload}`` frames.

    Delivery is at-most-once per session with no queueing or replay. A
    send that fails drops the connection from the registry; clients treat
    a frame as "probably changed, re-fetch".

    Without a relay, frames go straight to the local registry. With a relay
    every envelope is published once and each instance delivers it to its
    own sessions through :meth:`deliver`. While the relay is unhealthy frames
    are delivered locally only.
    """

    def __init__(self, registry: ConnectionRegistry, relay: Optional[EventRelay] = None) -> None:
        self.registry = registry
        self._relay = relay

    def attach_relay(self, relay: Optional[EventRelay]) -> None:
        self._relay = relay

    async def send_to_user(self, user_id: int, event: str, data: dict[str, Any]) -> None:
        await self._dispatch({"target": user_id, "event": event, "data": data})

    async def broadcast(self, event: str, data: dict[str, Any]) -> None:
        await self._dispatch({"target": None, "event": event, "data": data})

    async def _dispatch(self, envelope: dict[str, Any]) -> None:
        if self._relay is None or not self._relay.healthy:
            await self.deliver(envelope)
            return
        try:
            await self._relay.publish(envelope)
        except Exception as e:
            # relay down: local sessions still get the frame
            logger.warning("push_relay_publish_failed", push_event=envelope["event"], error=str(e))
            await self.deliver(envelope)

    async def deliver(self, envelope: dict[str, Any]) -> int:
        """Push one envelope to the local sessions it targets; returns frames sent."""
        frame = {"event": envelope["event"], "data": envelope["data"]}
        target = envelope.get("target")
        if target is not None:
            connection = await self.registry.get(target)
            if connection is None:
                logger.debug("push_target_offline", user_id=target, push_event=frame["event"])
                return 0
            return int(await self._send(target, connection, frame))

        sent = 0
        for user_id, connection in await self.registry.snapshot():
            sent += await self._send(user_id, connection, frame)
        logger.debug("push_broadcast", push_event=frame["event"], sessions=sent)
        return sent

    async def _send(self, user_id: int, connection: Connection, frame: dict[str, Any]) -> bool:
        try:
            await connection.send_json(frame)
        except Exception as e:
            logger.info("push_send_failed", user_id=user_id, push_event=frame["event"], error=str(e))
            await self.registry.unregister(user_id, connection)
            return False
        return True
