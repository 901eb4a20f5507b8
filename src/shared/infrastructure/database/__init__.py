"""
Shared Database Infrastructure
Session management, declarative base and unit of work
"""
from shared.infrastructure.database.base_model import Base
from shared.infrastructure.database.session import DatabaseSessionFactory
from shared.infrastructure.database.sqlalchemy_unit_of_work import SQLAlchemyUnitOfWork

__all__ = [
    "Base",
    "DatabaseSessionFactory",
    "SQLAlchemyUnitOfWork",
]
