# src/shared/roles.py

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from shared.exceptions import ForbiddenError


class Role(str, Enum):
    """
    Roles recognised by the course lifecycle & billing service.

    - ORGANIZATION: customer organization requesting courses
    - INSTRUCTOR: delivers courses and records attendance
    - ADMIN: schedules and cancels courses
    - ACCOUNTING: prepares invoices and records payments
    - SUPER_ADMIN: every admin/accounting capability plus the pricing catalog
    """
    ORGANIZATION = "Organization"
    INSTRUCTOR = "Instructor"
    ADMIN = "Admin"
    ACCOUNTING = "Accounting"
    SUPER_ADMIN = "SuperAdmin"

    def __str__(self) -> str:
        return self.value


ADMINS = frozenset({Role.ADMIN, Role.SUPER_ADMIN})
ACCOUNTING = frozenset({Role.ACCOUNTING, Role.SUPER_ADMIN})
PRICING_MANAGERS = frozenset({Role.SUPER_ADMIN})
BILLING_READERS = frozenset({Role.ADMIN, Role.ACCOUNTING, Role.SUPER_ADMIN})


@dataclass(frozen=True)
class Actor:
    """The authenticated caller of an operation, supplied by the transport."""
    user_id: int
    role: Role
    organization_id: Optional[int] = None


def ensure_role(actor: Actor, allowed: Iterable[Role], action: str) -> None:
    """
    Reject the operation unless the actor holds one of the allowed roles.

    Raises:
        ForbiddenError: if the actor's role is not permitted
    """
    allowed = frozenset(allowed)
    if actor.role not in allowed:
        raise ForbiddenError(
            f"Role {actor.role.value} may not {action}",
            details={"role": actor.role.value, "allowed": sorted(r.value for r in allowed)},
        )
