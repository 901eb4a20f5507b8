"""
Shared Application Layer
Command contracts and the service operation wrapper
"""
from shared.application.base_command import BaseCommand
from shared.application.operation import operation

__all__ = [
    "BaseCommand",
    "operation",
]
