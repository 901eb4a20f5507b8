# src/courses/domain/value_objects/course_status.py
"""Course status value object and the lifecycle transition table."""

from enum import Enum

from shared.exceptions import InvalidTransitionError


class CourseStatus(str, Enum):
    """Course lifecycle status."""

    PENDING = "pending"
    SCHEDULED = "scheduled"
    COMPLETED = "completed"
    BILLING_READY = "billing_ready"
    INVOICED = "invoiced"
    CANCELLED = "cancelled"

    def __str__(self) -> str:
        return self.value

    @property
    def label(self) -> str:
        return _LABELS[self]

    @property
    def is_terminal(self) -> bool:
        return not _ALLOWED_TRANSITIONS[self]

    @property
    def allows_attendance(self) -> bool:
        return self in ATTENDANCE_STATUSES

    def can_transition_to(self, target: "CourseStatus") -> bool:
        return target in _ALLOWED_TRANSITIONS[self]


_ALLOWED_TRANSITIONS: dict[CourseStatus, frozenset[CourseStatus]] = {
    CourseStatus.PENDING: frozenset({CourseStatus.SCHEDULED, CourseStatus.CANCELLED}),
    CourseStatus.SCHEDULED: frozenset({CourseStatus.COMPLETED, CourseStatus.CANCELLED}),
    CourseStatus.COMPLETED: frozenset({CourseStatus.BILLING_READY}),
    CourseStatus.BILLING_READY: frozenset({CourseStatus.INVOICED}),
    CourseStatus.INVOICED: frozenset(),
    CourseStatus.CANCELLED: frozenset(),
}

ATTENDANCE_STATUSES = frozenset(
    {CourseStatus.SCHEDULED, CourseStatus.COMPLETED, CourseStatus.BILLING_READY}
)

# statuses in which an instructor is considered booked for the day
BOOKED_STATUSES = frozenset({CourseStatus.SCHEDULED, CourseStatus.COMPLETED})

_LABELS = {
    CourseStatus.PENDING: "Pending",
    CourseStatus.SCHEDULED: "Scheduled",
    CourseStatus.COMPLETED: "Completed",
    CourseStatus.BILLING_READY: "Billing Ready",
    CourseStatus.INVOICED: "Invoiced",
    CourseStatus.CANCELLED: "Cancelled",
}


def allowed_transitions() -> dict[CourseStatus, frozenset[CourseStatus]]:
    """Copy of the transition table, keyed by source status."""
    return dict(_ALLOWED_TRANSITIONS)


def ensure_transition(current: CourseStatus, target: CourseStatus) -> None:
    """
    Raise InvalidTransitionError unless ``current -> target`` is in the table.
    """
    if not current.can_transition_to(target):
        raise InvalidTransitionError(
            f"A {current.label} course cannot move to {target.label}.",
            details={"current_status": current.value, "requested_status": target.value},
        )
