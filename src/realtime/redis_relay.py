"""
Redis Event Relay
Pub/sub fan-out so several API instances reach all connected sessions
"""
from __future__ import annotations

import asyncio
import json
from typing import Any, Awaitable, Callable, Optional, Sequence

from redis.asyncio import Redis
from redis.asyncio.client import PubSub
from redis.exceptions import RedisError

from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)

Deliver = Callable[[dict[str, Any]], Awaitable[Any]]

# Waits between resubscribe attempts; the last one repeats
RESUBSCRIBE_BACKOFF_SECONDS = (0.5, 1.0, 2.0, 5.0, 10.0)


class RedisEventRelay:
    """
    Publishes push envelopes on one Redis channel and feeds every envelope
    received on it to the local broadcaster.

    Redis is only a transport here; nothing is stored and a message missed
    while disconnected is gone. When the subscription drops the relay
    reports itself unhealthy and resubscribes with backoff; the broadcaster
    delivers locally in the meantime.
    """

    def __init__(
        self,
        redis: Redis,
        channel: str,
        deliver: Deliver,
        backoff: Sequence[float] = RESUBSCRIBE_BACKOFF_SECONDS,
    ) -> None:
        self._redis = redis
        self._channel = channel
        self._deliver = deliver
        self._backoff = tuple(backoff) or (0.0,)
        self._pubsub: Optional[PubSub] = None
        self._task: Optional[asyncio.Task] = None
        self._healthy = False

    @property
    def healthy(self) -> bool:
        """True while the channel subscription is live."""
        return self._healthy

    async def publish(self, envelope: dict[str, Any]) -> None:
        await self._redis.publish(self._channel, json.dumps(envelope, default=str))

    async def start(self) -> None:
        await self._subscribe()
        self._task = asyncio.create_task(self._listen(), name="redis-event-relay")
        logger.info("push_relay_started", channel=self._channel)

    async def stop(self) -> None:
        if self._task is not None:
            self._task.cancel()
            try:
                await self._task
            except asyncio.CancelledError:
                pass
            self._task = None
        if self._pubsub is not None:
            try:
                await self._pubsub.unsubscribe(self._channel)
            except RedisError as e:
                logger.warning("push_relay_unsubscribe_failed", channel=self._channel, error=str(e))
            await self._close_quietly(self._pubsub)
            self._pubsub = None
        self._healthy = False
        logger.info("push_relay_stopped", channel=self._channel)

    async def _subscribe(self) -> None:
        pubsub = self._redis.pubsub(ignore_subscribe_messages=True)
        try:
            await pubsub.subscribe(self._channel)
        except RedisError:
            await self._close_quietly(pubsub)
            raise
        self._pubsub = pubsub
        self._healthy = True

    async def _listen(self) -> None:
        attempt = 0
        while True:
            try:
                if self._pubsub is None:
                    await self._subscribe()
                    logger.info("push_relay_resubscribed", channel=self._channel, attempt=attempt)
                attempt = 0
                async for message in self._pubsub.listen():
                    if message.get("type") != "message":
                        continue
                    await self._handle(message["data"])
                logger.warning("push_relay_subscription_ended", channel=self._channel)
            except RedisError as e:
                logger.error("push_relay_listener_failed", channel=self._channel, error=str(e), attempt=attempt)
            self._healthy = False
            if self._pubsub is not None:
                await self._close_quietly(self._pubsub)
                self._pubsub = None
            await asyncio.sleep(self._backoff[min(attempt, len(self._backoff) - 1)])
            attempt += 1

    async def _close_quietly(self, pubsub: PubSub) -> None:
        try:
            await pubsub.aclose()
        except RedisError as e:
            logger.debug("push_relay_close_failed", channel=self._channel, error=str(e))

    async def _handle(self, raw: Any) -> None:
        try:
            envelope = json.loads(raw)
        except (TypeError, json.JSONDecodeError):
            logger.warning("push_relay_bad_message", channel=self._channel)
            return
        try:
            await self._deliver(envelope)
        except Exception:
            logger.exception("push_relay_delivery_failed", push_event=envelope.get("event"))
