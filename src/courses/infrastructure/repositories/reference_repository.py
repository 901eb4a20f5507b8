# src/courses/infrastructure/repositories/reference_repository.py
"""SQLAlchemy-backed reference data and instructor availability."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from courses.domain.entities.reference import CourseType, Organization
from courses.domain.repositories.reference_repository import (
    AvailabilityRepository,
    ReferenceRepository,
)
from courses.infrastructure.models.course_model import (
    CourseTypeModel,
    InstructorAvailabilityModel,
    OrganizationModel,
)


class SQLAlchemyReferenceRepository(ReferenceRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def get_organization(self, organization_id: int) -> Optional[Organization]:
        row = await self._session.get(OrganizationModel, organization_id)
        return Organization(id=row.id, name=row.name, code=row.code) if row else None

    async def get_course_type(self, course_type_id: int) -> Optional[CourseType]:
        row = await self._session.get(CourseTypeModel, course_type_id)
        return CourseType(id=row.id, name=row.name, code=row.code) if row else None

    async def organizations(self, ids: Iterable[int]) -> dict[int, Organization]:
        ids = set(ids)
        if not ids:
            return {}
        rows = (
            await self._session.execute(select(OrganizationModel).where(OrganizationModel.id.in_(ids)))
        ).scalars()
        return {r.id: Organization(id=r.id, name=r.name, code=r.code) for r in rows}

    async def course_types(self, ids: Iterable[int]) -> dict[int, CourseType]:
        ids = set(ids)
        if not ids:
            return {}
        rows = (
            await self._session.execute(select(CourseTypeModel).where(CourseTypeModel.id.in_(ids)))
        ).scalars()
        return {r.id: CourseType(id=r.id, name=r.name, code=r.code) for r in rows}


class SQLAlchemyAvailabilityRepository(AvailabilityRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    async def _exists(self, instructor_id: int, day: date) -> bool:
        stmt = select(InstructorAvailabilityModel.id).where(
            InstructorAvailabilityModel.instructor_id == instructor_id,
            InstructorAvailabilityModel.available_date == day,
        )
        return (await self._session.execute(stmt)).first() is not None

    async def add(self, instructor_id: int, day: date) -> bool:
        if await self._exists(instructor_id, day):
            return False
        self._session.add(InstructorAvailabilityModel(instructor_id=instructor_id, available_date=day))
        await self._session.flush()
        return True

    async def remove(self, instructor_id: int, day: date) -> bool:
        result = await self._session.execute(
            delete(InstructorAvailabilityModel).where(
                InstructorAvailabilityModel.instructor_id == instructor_id,
                InstructorAvailabilityModel.available_date == day,
            )
        )
        return result.rowcount > 0

    async def list_for_instructor(self, instructor_id: int) -> List[date]:
        stmt = (
            select(InstructorAvailabilityModel.available_date)
            .where(InstructorAvailabilityModel.instructor_id == instructor_id)
            .order_by(InstructorAvailabilityModel.available_date)
        )
        return list((await self._session.execute(stmt)).scalars().all())
