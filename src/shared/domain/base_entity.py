"""
Base Entity Contract for Domain Layer
Provides store-assigned identity, equality, and audit fields
"""
from __future__ import annotations

from abc import ABC
from datetime import datetime, timezone


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class BaseEntity(ABC):
    """
    Abstract base class for all domain entities.

    Entities are defined by their identity (id), not their attributes.
    Identities are integers assigned by the store on insert, so a freshly
    built entity has ``id is None`` until it has been persisted.

    Attributes:
        id: Store-assigned identifier
        created_at: Timestamp of creation
        updated_at: Timestamp of last update
    """

    def __init__(
        self,
        id: int | None = None,
        created_at: datetime | None = None,
        updated_at: datetime | None = None,
    ) -> None:
        self.id: int | None = id
        self.created_at: datetime = created_at or utcnow()
        self.updated_at: datetime = updated_at or utcnow()

    def __eq__(self, other: object) -> bool:
        """Entities are equal if they have the same id and type."""
        if not isinstance(other, self.__class__):
            return False
        if self.id is None or other.id is None:
            return self is other
        return self.id == other.id

    def __hash__(self) -> int:
        return hash((self.__class__.__name__, self.id if self.id is not None else id(self)))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(id={self.id})"

    def mark_updated(self) -> None:
        """Update the updated_at timestamp to current time."""
        self.updated_at = utcnow()
