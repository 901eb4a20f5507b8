from courses.infrastructure.repositories.course_repository import SQLAlchemyCourseRepository
from courses.infrastructure.repositories.reference_repository import (
    SQLAlchemyAvailabilityRepository,
    SQLAlchemyReferenceRepository,
)
from courses.infrastructure.repositories.student_repository import SQLAlchemyStudentRepository

__all__ = [
    "SQLAlchemyCourseRepository",
    "SQLAlchemyStudentRepository",
    "SQLAlchemyReferenceRepository",
    "SQLAlchemyAvailabilityRepository",
]
