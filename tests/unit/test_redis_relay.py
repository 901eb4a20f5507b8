import asyncio
import json

import pytest
from redis.exceptions import ConnectionError as RedisConnectionError

from realtime.broadcaster import EventBroadcaster
from realtime.redis_relay import RedisEventRelay
from realtime.registry import InMemoryConnectionRegistry
from tests.helpers import RecordingConnection

ENVELOPE = {"target": None, "event": "course_status_changed", "data": {"courseId": 1}}


class _PubSub:
    """Scripted subscription: yields ``messages``, then drops or idles."""

    def __init__(self, messages=(), drop=False, refuse=False):
        self.messages = list(messages)
        self.drop = drop
        self.refuse = refuse
        self.channels = []
        self.closed = False

    async def subscribe(self, channel):
        if self.refuse:
            raise RedisConnectionError("connection refused")
        self.channels.append(channel)

    async def listen(self):
        for data in self.messages:
            yield {"type": "message", "data": data}
        if self.drop:
            raise RedisConnectionError("connection reset by peer")
        await asyncio.Event().wait()

    async def unsubscribe(self, channel):
        self.channels.remove(channel)

    async def aclose(self):
        self.closed = True


class _Redis:
    """Hands out the scripted subscriptions in order, then refuses."""

    def __init__(self, *pubsubs):
        self._pending = list(pubsubs)
        self.created = []

    def pubsub(self, ignore_subscribe_messages=False):
        pubsub = self._pending.pop(0) if self._pending else _PubSub(refuse=True)
        self.created.append(pubsub)
        return pubsub


async def _until(predicate):
    while not predicate():
        await asyncio.sleep(0)


@pytest.mark.anyio
async def test_listener_resubscribes_after_the_connection_drops():
    received = asyncio.Queue()
    redis = _Redis(_PubSub(drop=True), _PubSub(messages=[json.dumps(ENVELOPE)]))
    relay = RedisEventRelay(redis, "push", received.put, backoff=(0,))
    await relay.start()
    try:
        assert await asyncio.wait_for(received.get(), timeout=1) == ENVELOPE
        assert relay.healthy
        assert len(redis.created) == 2
        assert redis.created[0].closed
        assert redis.created[1].channels == ["push"]
    finally:
        await relay.stop()
    assert not relay.healthy


@pytest.mark.anyio
async def test_relay_reports_unhealthy_while_redis_is_down():
    registry = InMemoryConnectionRegistry()
    broadcaster = EventBroadcaster(registry)
    relay = RedisEventRelay(_Redis(_PubSub(drop=True)), "push", broadcaster.deliver, backoff=(0,))
    await relay.start()
    broadcaster.attach_relay(relay)
    try:
        await asyncio.wait_for(_until(lambda: not relay.healthy), timeout=1)

        connection = RecordingConnection()
        await registry.register(10, connection)
        await broadcaster.send_to_user(10, "course_assigned", {"courseId": 1})

        assert connection.frames == [{"event": "course_assigned", "data": {"courseId": 1}}]
    finally:
        await relay.stop()


@pytest.mark.anyio
async def test_undecodable_message_is_skipped():
    received = asyncio.Queue()
    redis = _Redis(_PubSub(messages=["{not json", json.dumps(ENVELOPE)]))
    relay = RedisEventRelay(redis, "push", received.put, backoff=(0,))
    await relay.start()
    try:
        assert await asyncio.wait_for(received.get(), timeout=1) == ENVELOPE
        assert received.empty()
    finally:
        await relay.stop()
