# src/courses/domain/entities/course.py
"""Course aggregate root - one training course from request to invoice."""

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from courses.domain.events import (
    CourseBillingReady,
    CourseCancelled,
    CourseCompleted,
    CourseInvoiced,
    CourseRequested,
    CourseScheduled,
)
from courses.domain.value_objects.course_status import CourseStatus, ensure_transition
from shared.domain.base_aggregate_root import BaseAggregateRoot
from shared.exceptions import ForbiddenError, InvalidTransitionError, ValidationError
from shared.roles import Actor, Role


class Course(BaseAggregateRoot):
    """
    Course aggregate root.

    Owns the lifecycle status and the fields each transition sets. The
    course number is assigned once at request time and never changes.
    Every transition goes through the status table; ownership rules
    (only the assigned instructor completes) live here as well.
    """

    NOTES_MAX_LENGTH = 500
    LOCATION_MAX_LENGTH = 255

    def __init__(
        self,
        id: Optional[int],
        organization_id: int,
        course_type_id: int,
        date_requested: date,
        location: str,
        students_registered: int,
        course_number: str,
        status: CourseStatus = CourseStatus.PENDING,
        instructor_id: Optional[int] = None,
        date_scheduled: Optional[date] = None,
        notes: Optional[str] = None,
        created_at: Optional[datetime] = None,
        updated_at: Optional[datetime] = None,
    ):
        super().__init__(id, created_at=created_at, updated_at=updated_at)
        self.organization_id = organization_id
        self.course_type_id = course_type_id
        self.date_requested = date_requested
        self.location = location
        self.students_registered = students_registered
        self.course_number = course_number
        self.status = status
        self.instructor_id = instructor_id
        self.date_scheduled = date_scheduled
        self.notes = notes

    @classmethod
    def request(
        cls,
        organization_id: int,
        course_type_id: int,
        date_requested: date,
        location: str,
        students_registered: int,
        course_number: str,
        notes: Optional[str] = None,
    ) -> "Course":
        """Create a new pending course after validating the request fields."""
        location = (location or "").strip()
        if not location:
            raise ValidationError("Location is required.", details={"field": "location"})
        if len(location) > cls.LOCATION_MAX_LENGTH:
            raise ValidationError(
                f"Location must be at most {cls.LOCATION_MAX_LENGTH} characters.",
                details={"field": "location"},
            )
        if students_registered is None or students_registered < 0:
            raise ValidationError(
                "Registered student count must be zero or more.",
                details={"field": "students_registered"},
            )
        if notes is not None and len(notes) > cls.NOTES_MAX_LENGTH:
            raise ValidationError(
                f"Notes must be at most {cls.NOTES_MAX_LENGTH} characters.",
                details={"field": "notes"},
            )
        return cls(
            id=None,
            organization_id=organization_id,
            course_type_id=course_type_id,
            date_requested=date_requested,
            location=location,
            students_registered=students_registered,
            course_number=course_number,
            notes=notes or None,
        )

    # ------------------------------------------------------------------ events

    def record_requested(self) -> None:
        """Raise CourseRequested once the store has assigned an id."""
        self.raise_event(
            CourseRequested(
                course_id=self.require_id(),
                course_number=self.course_number,
                organization_id=self.organization_id,
                status=self.status.value,
                previous_status=None,
                course_type_id=self.course_type_id,
                date_requested=self.date_requested,
            )
        )

    # ------------------------------------------------------------- transitions

    def schedule(self, instructor_id: int, date_scheduled: date) -> CourseStatus:
        """Assign an instructor and a date; pending -> scheduled."""
        if instructor_id is None or date_scheduled is None:
            raise ValidationError("Instructor and scheduled date are both required.")
        previous = self._move_to(CourseStatus.SCHEDULED)
        self.instructor_id = instructor_id
        self.date_scheduled = date_scheduled
        self.raise_event(
            CourseScheduled(
                course_id=self.require_id(),
                course_number=self.course_number,
                organization_id=self.organization_id,
                status=self.status.value,
                previous_status=previous.value,
                instructor_id=instructor_id,
                date_scheduled=date_scheduled,
                location=self.location,
            )
        )
        return previous

    def cancel(self) -> CourseStatus:
        """pending/scheduled -> cancelled."""
        previous = self._move_to(CourseStatus.CANCELLED)
        self.raise_event(
            CourseCancelled(
                course_id=self.require_id(),
                course_number=self.course_number,
                organization_id=self.organization_id,
                status=self.status.value,
                previous_status=previous.value,
            )
        )
        return previous

    def complete(self, actor: Actor) -> CourseStatus:
        """Mark delivered; only the assigned instructor may do this."""
        self.ensure_owned_by(actor)
        previous = self._move_to(CourseStatus.COMPLETED)
        self.raise_event(
            CourseCompleted(
                course_id=self.require_id(),
                course_number=self.course_number,
                organization_id=self.organization_id,
                status=self.status.value,
                previous_status=previous.value,
                instructor_id=actor.user_id,
            )
        )
        return previous

    def mark_billing_ready(self) -> CourseStatus:
        previous = self._move_to(CourseStatus.BILLING_READY)
        self.raise_event(
            CourseBillingReady(
                course_id=self.require_id(),
                course_number=self.course_number,
                organization_id=self.organization_id,
                status=self.status.value,
                previous_status=previous.value,
            )
        )
        return previous

    def mark_invoiced(self, invoice_id: int, invoice_number: str, amount: Decimal) -> CourseStatus:
        previous = self._move_to(CourseStatus.INVOICED)
        self.raise_event(
            CourseInvoiced(
                course_id=self.require_id(),
                course_number=self.course_number,
                organization_id=self.organization_id,
                status=self.status.value,
                previous_status=previous.value,
                invoice_id=invoice_id,
                invoice_number=invoice_number,
                amount=amount,
            )
        )
        return previous

    # ------------------------------------------------------------------ checks

    def ensure_owned_by(self, actor: Actor) -> None:
        """Raise ForbiddenError unless the actor is this course's instructor."""
        if actor.role != Role.INSTRUCTOR or self.instructor_id != actor.user_id:
            raise ForbiddenError(
                "Only the instructor assigned to this course can do this.",
                details={"course_id": self.id},
            )

    def ensure_attendance_open(self) -> None:
        if not self.status.allows_attendance:
            raise InvalidTransitionError(
                f"Attendance cannot be changed on a {self.status.label} course.",
                details={"current_status": self.status.value},
            )

    def ensure_roster_open(self) -> None:
        if self.status not in (CourseStatus.PENDING, CourseStatus.SCHEDULED):
            raise InvalidTransitionError(
                f"Students cannot be added to a {self.status.label} course.",
                details={"current_status": self.status.value},
            )

    def is_visible_to(self, actor: Actor) -> bool:
        if actor.role == Role.ORGANIZATION:
            return actor.organization_id == self.organization_id
        if actor.role == Role.INSTRUCTOR:
            return actor.user_id == self.instructor_id
        return True

    # ----------------------------------------------------------------- helpers

    def _move_to(self, target: CourseStatus) -> CourseStatus:
        ensure_transition(self.status, target)
        previous = self.status
        self.status = target
        self.mark_updated()
        return previous

    def require_id(self) -> int:
        if self.id is None:
            raise RuntimeError("Course has not been persisted yet")
        return self.id
