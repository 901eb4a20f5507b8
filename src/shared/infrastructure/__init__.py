"""
Shared Infrastructure Layer
Database, messaging and observability
"""
from shared.infrastructure.database import (
    Base,
    DatabaseSessionFactory,
    SQLAlchemyUnitOfWork,
)
from shared.infrastructure.messaging import EventBus
from shared.infrastructure.observability import (
    bind_context,
    clear_context,
    configure_logging,
    get_logger,
)

__all__ = [
    # Database
    "Base",
    "DatabaseSessionFactory",
    "SQLAlchemyUnitOfWork",
    # Messaging
    "EventBus",
    # Observability
    "configure_logging",
    "get_logger",
    "bind_context",
    "clear_context",
]
