"""
Domain Event Bus
In-memory event bus for publishing and subscribing to domain events
"""
from __future__ import annotations

from collections import defaultdict
from typing import Awaitable, Callable

from shared.domain.domain_event import DomainEvent
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)

EventHandler = Callable[[DomainEvent], Awaitable[None]]


class EventBus:
    """
    In-memory event bus for domain event publication and subscription.

    Allows decoupled communication between modules via domain events.
    Events are published only after the producing transaction committed,
    so a failing handler can never undo a state change; it is logged and
    the remaining handlers still run.

    Attributes:
        _handlers: Dictionary mapping event types to handler lists
    """

    def __init__(self) -> None:
        """Initialize event bus with empty handler registry."""
        self._handlers: dict[str, list[EventHandler]] = defaultdict(list)

    def subscribe(self, event_type: str, handler: EventHandler) -> None:
        """
        Subscribe a handler to an event type.

        Args:
            event_type: Event class name
            handler: Async callable that accepts the event

        Example:
            async def on_scheduled(event: CourseScheduled) -> None:
                ...

            event_bus.subscribe("CourseScheduled", on_scheduled)
        """
        self._handlers[event_type].append(handler)
        logger.debug("event_handler_subscribed", event_type=event_type, handler=_name(handler))

    async def publish(self, event: DomainEvent) -> None:
        """
        Publish a domain event to all subscribed handlers.

        Args:
            event: Domain event to publish
        """
        event_type = event.__class__.__name__
        handlers = list(self._handlers.get(event_type, []))

        if not handlers:
            logger.debug("event_without_handlers", event_type=event_type, event_id=str(event.event_id))
            return

        logger.info(
            "event_published",
            event_type=event_type,
            event_id=str(event.event_id),
            aggregate_id=event.aggregate_id,
            handler_count=len(handlers),
        )

        for handler in handlers:
            try:
                await handler(event)
            except Exception as e:
                logger.error(
                    "event_handler_failed",
                    handler=_name(handler),
                    event_type=event_type,
                    event_id=str(event.event_id),
                    error=str(e),
                )
                # Continue processing other handlers even if one fails

    async def publish_many(self, events: list[DomainEvent]) -> None:
        """
        Publish multiple domain events in order.

        Args:
            events: List of domain events to publish
        """
        for event in events:
            await self.publish(event)


def _name(handler: EventHandler) -> str:
    return getattr(handler, "__qualname__", None) or handler.__class__.__name__
