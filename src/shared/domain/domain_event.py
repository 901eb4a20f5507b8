"""
Domain Event Base Class
All domain events inherit from this
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any
from uuid import UUID, uuid4


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class DomainEvent:
    """
    Base class for all domain events.

    Domain events represent something that happened in the domain.
    They are immutable and carry all necessary data. They are published
    only after the transaction that produced them has committed.

    Attributes:
        event_id: Unique identifier for this event occurrence
        occurred_at: Timestamp when event occurred
        aggregate_id: ID of the aggregate that produced this event
        aggregate_type: Type name of the aggregate
        event_version: Schema version of this event type (for evolution)
    """

    event_id: UUID = field(default_factory=uuid4, kw_only=True)
    occurred_at: datetime = field(default_factory=_utcnow, kw_only=True)
    aggregate_id: int | None = field(default=None, kw_only=True)
    aggregate_type: str = field(default="", kw_only=True)
    event_version: int = field(default=1, kw_only=True)

    def to_dict(self) -> dict[str, Any]:
        """
        Convert event envelope to dictionary for serialization.

        Returns:
            Dictionary representation of event
        """
        return {
            "event_id": str(self.event_id),
            "event_type": self.__class__.__name__,
            "occurred_at": self.occurred_at.isoformat(),
            "aggregate_id": self.aggregate_id,
            "aggregate_type": self.aggregate_type,
            "event_version": self.event_version,
        }
