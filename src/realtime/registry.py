"""
Connection Registry
Maps a user id to the one live push connection of that user
"""
from __future__ import annotations

from typing import Any, Protocol

from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class Connection(Protocol):
    """Anything that can push a JSON frame; Starlette's WebSocket fits."""

    async def send_json(self, data: Any) -> None:
        ...


class ConnectionRegistry(Protocol):

    async def register(self, user_id: int, connection: Connection) -> None:
        ...

    async def unregister(self, user_id: int, connection: Connection) -> bool:
        ...

    async def get(self, user_id: int) -> Connection | None:
        ...

    async def snapshot(self) -> list[tuple[int, Connection]]:
        ...


class InMemoryConnectionRegistry:
    """
    Process-local registry.

    At most one connection per user: the last one to identify wins and
    silently replaces the previous mapping. Unregistering only removes the
    entry if it still points at the given connection, so a stale socket
    closing late cannot evict its replacement.
    """

    def __init__(self) -> None:
        self._connections: dict[int, Connection] = {}

    async def register(self, user_id: int, connection: Connection) -> None:
        replaced = self._connections.get(user_id)
        self._connections[user_id] = connection
        logger.info(
            "push_connection_registered",
            user_id=user_id,
            replaced=replaced is not None and replaced is not connection,
            connections=len(self._connections),
        )

    async def unregister(self, user_id: int, connection: Connection) -> bool:
        if self._connections.get(user_id) is not connection:
            return False
        del self._connections[user_id]
        logger.info("push_connection_removed", user_id=user_id, connections=len(self._connections))
        return True

    async def get(self, user_id: int) -> Connection | None:
        return self._connections.get(user_id)

    async def snapshot(self) -> list[tuple[int, Connection]]:
        return list(self._connections.items())

    def __len__(self) -> int:
        return len(self._connections)
