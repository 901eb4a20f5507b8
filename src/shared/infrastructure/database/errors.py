"""
Integrity Error Classification
Tells unique-constraint violations apart across PostgreSQL and SQLite
"""
from __future__ import annotations

from sqlalchemy.exc import IntegrityError


def violates_unique(error: IntegrityError, table: str, *columns: str) -> bool:
    """
    True if ``error`` is a unique violation on ``table(columns...)``.

    PostgreSQL reports the constraint name (``uq_<table>_<cols>`` per the
    metadata naming convention, or an explicit index name); SQLite reports
    ``UNIQUE constraint failed: <table>.<col>, ...``.
    """
    message = str(error.orig) if error.orig is not None else str(error)
    constraint = f"uq_{table}_{'_'.join(columns)}"
    sqlite_cols = ", ".join(f"{table}.{c}" for c in columns)
    return constraint in message or sqlite_cols in message
