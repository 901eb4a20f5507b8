"""
Shared Domain Layer
Pure domain contracts with no framework dependencies
"""
from shared.domain.base_aggregate_root import BaseAggregateRoot
from shared.domain.base_entity import BaseEntity
from shared.domain.domain_event import DomainEvent
from shared.domain.result import Failure, Result, Success

__all__ = [
    "BaseEntity",
    "BaseAggregateRoot",
    "DomainEvent",
    "Result",
    "Success",
    "Failure",
]
