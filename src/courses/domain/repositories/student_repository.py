# src/courses/domain/repositories/student_repository.py
"""Student repository protocol (the AttendanceTracker's store)."""

from abc import ABC, abstractmethod
from typing import Iterable, List, Optional

from courses.domain.entities.student import Student


class StudentRepository(ABC):

    @abstractmethod
    async def add_many(self, students: List[Student]) -> List[Student]:
        pass

    @abstractmethod
    async def get(self, student_id: int) -> Optional[Student]:
        pass

    @abstractmethod
    async def list_for_course(self, course_id: int) -> List[Student]:
        pass

    @abstractmethod
    async def set_attended(self, student_id: int, attended: bool) -> None:
        pass

    @abstractmethod
    async def count_attended(self, course_id: int) -> int:
        """Billable headcount: students of the course with attended = true."""
        pass

    @abstractmethod
    async def attendance_counts(self, course_ids: Iterable[int]) -> dict[int, int]:
        pass
