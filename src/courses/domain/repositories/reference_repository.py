# src/courses/domain/repositories/reference_repository.py
"""Read access to organizations, course types and instructor availability."""

from abc import ABC, abstractmethod
from datetime import date
from typing import Iterable, List, Optional

from courses.domain.entities.reference import CourseType, Organization


class ReferenceRepository(ABC):

    @abstractmethod
    async def get_organization(self, organization_id: int) -> Optional[Organization]:
        pass

    @abstractmethod
    async def get_course_type(self, course_type_id: int) -> Optional[CourseType]:
        pass

    @abstractmethod
    async def organizations(self, ids: Iterable[int]) -> dict[int, Organization]:
        pass

    @abstractmethod
    async def course_types(self, ids: Iterable[int]) -> dict[int, CourseType]:
        pass


class AvailabilityRepository(ABC):

    @abstractmethod
    async def add(self, instructor_id: int, day: date) -> bool:
        """Declare a date; returns False if it was already declared."""
        pass

    @abstractmethod
    async def remove(self, instructor_id: int, day: date) -> bool:
        """Withdraw a date; returns False if it was not declared."""
        pass

    @abstractmethod
    async def list_for_instructor(self, instructor_id: int) -> List[date]:
        pass
