"""
Course DTOs
Data Transfer Objects returned by the course services
"""
from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import date, datetime
from typing import Optional

from courses.domain.entities.course import Course
from courses.domain.entities.reference import CourseType, Organization
from courses.domain.entities.student import Student


@dataclass(frozen=True)
class CourseDTO:
    """Course as seen by every role; name and attendance fields are filled by queries."""
    id: int
    course_number: str
    organization_id: int
    course_type_id: int
    instructor_id: Optional[int]
    date_requested: date
    date_scheduled: Optional[date]
    location: str
    students_registered: int
    notes: Optional[str]
    status: str
    created_at: datetime
    organization_name: Optional[str] = None
    course_type_name: Optional[str] = None
    attended_count: Optional[int] = None

    @classmethod
    def from_entity(cls, course: Course) -> "CourseDTO":
        return cls(
            id=course.require_id(),
            course_number=course.course_number,
            organization_id=course.organization_id,
            course_type_id=course.course_type_id,
            instructor_id=course.instructor_id,
            date_requested=course.date_requested,
            date_scheduled=course.date_scheduled,
            location=course.location,
            students_registered=course.students_registered,
            notes=course.notes,
            status=course.status.value,
            created_at=course.created_at,
        )

    def with_names(
        self,
        organization: Optional[Organization],
        course_type: Optional[CourseType],
    ) -> "CourseDTO":
        return replace(
            self,
            organization_name=organization.name if organization else None,
            course_type_name=course_type.name if course_type else None,
        )

    def with_attendance(self, attended_count: int) -> "CourseDTO":
        return replace(self, attended_count=attended_count)


@dataclass(frozen=True)
class StudentDTO:
    id: int
    course_id: int
    first_name: str
    last_name: str
    email: Optional[str]
    attended: bool

    @classmethod
    def from_entity(cls, student: Student) -> "StudentDTO":
        assert student.id is not None
        return cls(
            id=student.id,
            course_id=student.course_id,
            first_name=student.first_name,
            last_name=student.last_name,
            email=student.email,
            attended=student.attended,
        )


@dataclass(frozen=True)
class CourseDetailDTO:
    course: CourseDTO
    students: tuple[StudentDTO, ...]


@dataclass(frozen=True)
class AttendanceDTO:
    course_id: int
    student_id: int
    attended: bool
    attended_count: int


@dataclass(frozen=True)
class AvailabilityDTO:
    instructor_id: int
    dates: tuple[date, ...]
