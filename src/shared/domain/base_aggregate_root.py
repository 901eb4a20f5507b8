"""
Aggregate Root Base Class
Manages domain events and acts as consistency boundary
"""
from __future__ import annotations

from typing import Any

from shared.domain.base_entity import BaseEntity
from shared.domain.domain_event import DomainEvent


class BaseAggregateRoot(BaseEntity):
    """
    Base class for aggregate roots.

    Aggregate roots are entities that serve as the entry point to an aggregate.
    They maintain a list of domain events that occurred during operations.
    These events are collected by the application service and published
    after the unit of work has committed.

    Attributes:
        _domain_events: List of unpublished domain events
    """

    def __init__(self, id: int | None = None, **kwargs: Any) -> None:
        super().__init__(id=id, **kwargs)
        self._domain_events: list[DomainEvent] = []

    def collect_domain_events(self) -> list[DomainEvent]:
        """
        Collect and clear domain events.

        Returns:
            List of domain events that occurred
        """
        events = self._domain_events.copy()
        self._domain_events.clear()
        return events

    def raise_event(self, event: DomainEvent) -> None:
        """Record a domain event, enriching it with aggregate context."""
        if event.aggregate_id is None:
            object.__setattr__(event, "aggregate_id", self.id)
        if not event.aggregate_type:
            object.__setattr__(event, "aggregate_type", self.__class__.__name__)
        self._domain_events.append(event)
