from courses.domain.repositories.course_repository import CourseRepository
from courses.domain.repositories.reference_repository import (
    AvailabilityRepository,
    ReferenceRepository,
)
from courses.domain.repositories.student_repository import StudentRepository

__all__ = [
    "CourseRepository",
    "StudentRepository",
    "ReferenceRepository",
    "AvailabilityRepository",
]
