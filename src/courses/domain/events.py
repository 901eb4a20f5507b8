# src/courses/domain/events.py
"""Domain events raised by the Course aggregate."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Any, Optional

from shared.domain.domain_event import DomainEvent


@dataclass(frozen=True)
class CourseStatusChanged(DomainEvent):
    """Base for every event that moves a course to a new status."""

    course_id: int
    course_number: str
    organization_id: int
    status: str
    previous_status: Optional[str]

    def payload(self) -> dict[str, Any]:
        return {
            "courseId": self.course_id,
            "courseNumber": self.course_number,
            "organizationId": self.organization_id,
            "status": self.status,
            "previousStatus": self.previous_status,
        }


@dataclass(frozen=True)
class CourseRequested(CourseStatusChanged):
    course_type_id: int
    date_requested: date


@dataclass(frozen=True)
class CourseScheduled(CourseStatusChanged):
    instructor_id: int
    date_scheduled: date
    location: str

    def payload(self) -> dict[str, Any]:
        data = super().payload()
        data.update(
            instructorId=self.instructor_id,
            dateScheduled=self.date_scheduled.isoformat(),
            location=self.location,
        )
        return data


@dataclass(frozen=True)
class CourseCancelled(CourseStatusChanged):
    pass


@dataclass(frozen=True)
class CourseCompleted(CourseStatusChanged):
    instructor_id: int


@dataclass(frozen=True)
class CourseBillingReady(CourseStatusChanged):
    pass


@dataclass(frozen=True)
class CourseInvoiced(CourseStatusChanged):
    invoice_id: int
    invoice_number: str
    amount: Decimal


@dataclass(frozen=True)
class AttendanceUpdated(DomainEvent):
    course_id: int
    attended_count: int

    def payload(self) -> dict[str, Any]:
        return {"courseId": self.course_id, "newAttendanceCount": self.attended_count}


STATUS_EVENTS: tuple[type[CourseStatusChanged], ...] = (
    CourseRequested,
    CourseScheduled,
    CourseCancelled,
    CourseCompleted,
    CourseBillingReady,
    CourseInvoiced,
)
