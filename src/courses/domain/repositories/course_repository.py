# src/courses/domain/repositories/course_repository.py
"""Course repository protocol."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List, Optional

from courses.domain.entities.course import Course
from courses.domain.value_objects.course_status import CourseStatus


class CourseRepository(ABC):
    """Protocol for course persistence (the CourseStore)."""

    @abstractmethod
    async def add(self, course: Course) -> Course:
        """Insert a new course; the store assigns ``course.id``."""
        pass

    @abstractmethod
    async def get(self, course_id: int) -> Optional[Course]:
        pass

    @abstractmethod
    async def get_for_update(self, course_id: int) -> Optional[Course]:
        """Load a course and hold an exclusive row lock until commit."""
        pass

    @abstractmethod
    async def get_for_share(self, course_id: int) -> Optional[Course]:
        """Load a course and hold a shared row lock until commit."""
        pass

    @abstractmethod
    async def compare_and_set(self, course: Course, expected: CourseStatus) -> bool:
        """
        Write ``course.status`` (and scheduling fields) only if the stored
        status still equals ``expected``. Returns False when no row matched.
        """
        pass

    @abstractmethod
    async def course_numbers_like(self, base: str) -> set[str]:
        """Existing course numbers equal to ``base`` or starting with ``base-``."""
        pass

    @abstractmethod
    async def instructor_booked_on(
        self, instructor_id: int, day: date, exclude_course_id: Optional[int] = None
    ) -> bool:
        pass

    @abstractmethod
    async def booked_dates(self, instructor_id: int) -> set[date]:
        """Dates on which the instructor has a scheduled or completed course."""
        pass

    @abstractmethod
    async def list_by_status(
        self,
        statuses: Iterable[CourseStatus],
        *,
        organization_id: Optional[int] = None,
        instructor_id: Optional[int] = None,
        oldest_first: bool = True,
    ) -> List[Course]:
        pass

    @abstractmethod
    async def by_ids(self, course_ids: Iterable[int]) -> dict[int, Course]:
        pass
