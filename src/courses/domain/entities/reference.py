# src/courses/domain/entities/reference.py
"""Reference rows owned by the management collaborator and read here."""

from dataclasses import dataclass
from datetime import date


@dataclass(frozen=True)
class Organization:
    id: int
    name: str
    code: str


@dataclass(frozen=True)
class CourseType:
    id: int
    name: str
    code: str


@dataclass(frozen=True)
class InstructorAvailability:
    """A date an instructor declared themselves available."""
    instructor_id: int
    available_date: date
