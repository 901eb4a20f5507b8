"""
SQLAlchemy Implementation of Unit of Work
Manages database transactions with async SQLAlchemy sessions
"""
from __future__ import annotations

from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from shared.domain.base_aggregate_root import BaseAggregateRoot
from shared.domain.domain_event import DomainEvent
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class SQLAlchemyUnitOfWork:
    """
    SQLAlchemy-based Unit of Work implementation.

    Opens one session per ``async with`` block and ensures all operations
    within it are atomic (all succeed or all fail). Aggregates registered
    with :meth:`track` have their domain events harvested on commit; the
    caller publishes ``committed_events`` once the context has exited.

    Attributes:
        session: Async SQLAlchemy session (only valid inside the context)
        committed_events: Events raised by tracked aggregates, filled on commit
    """

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        """
        Initialize UoW with a session factory.

        Args:
            session_factory: Factory producing async sessions
        """
        self._session_factory = session_factory
        self.session: AsyncSession | None = None
        self._committed = False
        self._tracked: list[BaseAggregateRoot] = []
        self._pending_events: list[DomainEvent] = []
        self.committed_events: list[DomainEvent] = []

    async def __aenter__(self) -> SQLAlchemyUnitOfWork:
        """
        Enter async context manager.

        Opens a session and begins a new transaction.

        Returns:
            Self (the UoW instance)
        """
        self.session = self._session_factory()
        self._committed = False
        self._tracked = []
        self._pending_events = []
        self.committed_events = []
        await self.session.begin()
        self._bind_repositories(self.session)
        logger.debug("uow_transaction_started")
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        """
        Exit async context manager.

        Automatically rolls back if exception occurred or not committed.
        """
        try:
            if exc_type is not None:
                await self.rollback()
                logger.debug("uow_rolled_back_on_exception", error_type=exc_type.__name__)
            elif not self._committed:
                await self.rollback()
                logger.debug("uow_rolled_back_not_committed")
        finally:
            if self.session is not None:
                await self.session.close()
            self.session = None

    def _bind_repositories(self, session: AsyncSession) -> None:
        """Hook for subclasses to build their repositories on the new session."""

    def track(self, aggregate: BaseAggregateRoot) -> None:
        """Register an aggregate whose events should be published after commit."""
        if aggregate not in self._tracked:
            self._tracked.append(aggregate)

    def add_events(self, events: list[DomainEvent]) -> None:
        """Queue events that do not belong to a tracked aggregate."""
        self._pending_events.extend(events)

    async def commit(self) -> None:
        """
        Commit the current transaction.

        Persists all changes made within this UoW context, then moves the
        domain events of tracked aggregates into ``committed_events``.

        Raises:
            Exception: If commit fails (transaction is rolled back)
        """
        assert self.session is not None, "UnitOfWork used outside its context"
        try:
            await self.session.commit()
        except Exception as e:
            await self.rollback()
            logger.warning("uow_commit_failed", error=str(e))
            raise
        self._committed = True
        events = list(self._pending_events)
        for aggregate in self._tracked:
            events.extend(aggregate.collect_domain_events())
        self.committed_events = events
        self._pending_events = []
        logger.debug("uow_transaction_committed", event_count=len(events))

    async def rollback(self) -> None:
        """
        Rollback the current transaction.

        Discards all changes and events made within this UoW context.
        """
        for aggregate in self._tracked:
            aggregate.collect_domain_events()
        self._pending_events = []
        self._committed = False
        if self.session is None:
            return
        await self.session.rollback()
        logger.debug("uow_transaction_rolled_back")
