"""
Course Lifecycle Commands
"""
from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date
from typing import Optional

from shared.application.base_command import BaseCommand


@dataclass(frozen=True)
class RequestCourseCommand(BaseCommand):
    organization_id: int
    course_type_id: int
    location: str
    students_registered: int
    date_requested: Optional[date] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class ScheduleCourseCommand(BaseCommand):
    course_id: int
    instructor_id: int
    date_scheduled: date


@dataclass(frozen=True)
class CancelCourseCommand(BaseCommand):
    course_id: int


@dataclass(frozen=True)
class CompleteCourseCommand(BaseCommand):
    course_id: int


@dataclass(frozen=True)
class MarkBillingReadyCommand(BaseCommand):
    course_id: int


@dataclass(frozen=True)
class StudentInput:
    """A validated roster record handed over by the roster collaborator."""
    first_name: str
    last_name: str
    email: Optional[str] = None


@dataclass(frozen=True)
class AddStudentsCommand(BaseCommand):
    course_id: int
    students: tuple[StudentInput, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class SetAttendanceCommand(BaseCommand):
    course_id: int
    student_id: int
    attended: bool


@dataclass(frozen=True)
class ChangeAvailabilityCommand(BaseCommand):
    available_date: date
