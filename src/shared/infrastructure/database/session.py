"""
Database Session Factory
Creates async SQLAlchemy sessions with proper configuration
"""
from __future__ import annotations

from typing import Any

from sqlalchemy import event, text
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from shared.infrastructure.database.base_model import Base
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)

SQLITE_BUSY_TIMEOUT_SECONDS = 30


def _install_sqlite_locking(engine: AsyncEngine) -> None:
    """
    Make every SQLite transaction take the write lock up front.

    pysqlite/aiosqlite defer BEGIN until the first write, which lets two
    transactions read the same course row before either writes. Starting
    with BEGIN IMMEDIATE serializes writers the way SELECT ... FOR UPDATE
    does on PostgreSQL.
    """

    @event.listens_for(engine.sync_engine, "connect")
    def _on_connect(dbapi_connection: Any, connection_record: Any) -> None:
        dbapi_connection.isolation_level = None
        cursor = dbapi_connection.cursor()
        cursor.execute("PRAGMA foreign_keys=ON")
        cursor.close()

    @event.listens_for(engine.sync_engine, "begin")
    def _on_begin(conn: Any) -> None:
        conn.exec_driver_sql("BEGIN IMMEDIATE")


class DatabaseSessionFactory:
    """
    Factory for creating async database sessions.

    Manages the async engine and session maker.
    Supports connection pooling (PostgreSQL) and write serialization (SQLite).
    """

    def __init__(
        self,
        database_url: str,
        echo: bool = False,
        pool_size: int = 5,
        max_overflow: int = 10,
    ) -> None:
        """
        Initialize session factory with database connection.

        Args:
            database_url: postgresql+asyncpg or sqlite+aiosqlite connection string
            echo: Whether to log SQL statements (debug mode)
            pool_size: Connection pool size (ignored for SQLite)
            max_overflow: Max overflow connections beyond pool_size (ignored for SQLite)
        """
        self.database_url = database_url
        self.echo = echo
        self.is_sqlite = database_url.startswith("sqlite")

        if self.is_sqlite:
            self.engine: AsyncEngine = create_async_engine(
                database_url,
                echo=echo,
                connect_args={"timeout": SQLITE_BUSY_TIMEOUT_SECONDS},
            )
            _install_sqlite_locking(self.engine)
        else:
            self.engine = create_async_engine(
                database_url,
                echo=echo,
                pool_size=pool_size,
                max_overflow=max_overflow,
                pool_pre_ping=True,  # Verify connections before using
                pool_recycle=3600,  # Recycle connections after 1 hour
            )

        self.session_factory: async_sessionmaker[AsyncSession] = async_sessionmaker(
            self.engine,
            class_=AsyncSession,
            expire_on_commit=False,  # Don't expire objects after commit
            autoflush=False,  # Manual flushing for better control
        )

        logger.info(
            "database_session_factory_initialized",
            dialect=self.engine.dialect.name,
            pool_size=None if self.is_sqlite else pool_size,
        )

    async def create_schema(self) -> None:
        """Create all tables known to the ORM metadata (local/test bootstrap)."""
        async with self.engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("database_schema_created")

    async def ping(self) -> bool:
        """Round-trip a trivial statement; used by the health endpoint."""
        async with self.engine.connect() as conn:
            await conn.execute(text("SELECT 1"))
        return True

    async def dispose(self) -> None:
        """Close all connections and dispose of the engine."""
        await self.engine.dispose()
        logger.info("database_engine_disposed")
