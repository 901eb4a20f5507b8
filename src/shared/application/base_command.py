"""
Base Command Contract
All commands (write operations) inherit from this
"""
from __future__ import annotations

from dataclasses import dataclass, field
from uuid import UUID, uuid4

from shared.roles import Actor


@dataclass(frozen=True)
class BaseCommand:
    """
    Base class for all commands in the system.

    Commands represent write operations (request, schedule, invoice, ...).
    They are immutable data structures that carry all necessary information,
    including the actor the auth collaborator vouched for.

    Example:
        @dataclass(frozen=True)
        class CancelCourseCommand(BaseCommand):
            course_id: int
    """

    issued_by: Actor = field(kw_only=True)  # caller, trusted as supplied
    command_id: UUID = field(default_factory=uuid4, kw_only=True)
