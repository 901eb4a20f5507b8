# src/courses/infrastructure/repositories/course_repository.py
"""SQLAlchemy-backed CourseStore."""

from __future__ import annotations

from datetime import date
from typing import Iterable, List, Optional

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from courses.domain.entities.course import Course
from courses.domain.repositories.course_repository import CourseRepository
from courses.domain.value_objects.course_status import BOOKED_STATUSES, CourseStatus
from courses.infrastructure.models.course_model import CourseModel
from shared.infrastructure.observability.logger import get_logger

logger = get_logger(__name__)


class SQLAlchemyCourseRepository(CourseRepository):
    """
    Course persistence on the unit of work's session.

    Status changes never go through the ORM identity map: they are a
    single ``UPDATE ... WHERE id = :id AND status = :expected`` so a lost
    race is visible as zero affected rows.
    """

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    # -------------------- mapping --------------------
    @staticmethod
    def _to_domain(row: CourseModel) -> Course:
        return Course(
            id=row.id,
            organization_id=row.organization_id,
            course_type_id=row.course_type_id,
            date_requested=row.date_requested,
            location=row.location,
            students_registered=row.students_registered,
            course_number=row.course_number,
            status=CourseStatus(row.status),
            instructor_id=row.instructor_id,
            date_scheduled=row.date_scheduled,
            notes=row.notes,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    # -------------------- operations --------------------
    async def add(self, course: Course) -> Course:
        row = CourseModel(
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
        )
        self._session.add(row)
        await self._session.flush()
        course.id = row.id
        logger.debug("course_inserted", course_id=row.id, course_number=row.course_number)
        return course

    async def _load(self, course_id: int, lock: Optional[str]) -> Optional[Course]:
        stmt = select(CourseModel).where(CourseModel.id == course_id)
        if lock == "update":
            stmt = stmt.with_for_update()
        elif lock == "share":
            stmt = stmt.with_for_update(read=True)
        # always read the stored row, not a cached instance
        stmt = stmt.execution_options(populate_existing=True)
        row = (await self._session.execute(stmt)).scalars().first()
        return self._to_domain(row) if row else None

    async def get(self, course_id: int) -> Optional[Course]:
        return await self._load(course_id, None)

    async def get_for_update(self, course_id: int) -> Optional[Course]:
        return await self._load(course_id, "update")

    async def get_for_share(self, course_id: int) -> Optional[Course]:
        return await self._load(course_id, "share")

    async def compare_and_set(self, course: Course, expected: CourseStatus) -> bool:
        result = await self._session.execute(
            update(CourseModel)
            .where(CourseModel.id == course.id, CourseModel.status == expected.value)
            .values(
                status=course.status.value,
                instructor_id=course.instructor_id,
                date_scheduled=course.date_scheduled,
            )
            .execution_options(synchronize_session=False)
        )
        swapped = result.rowcount == 1
        if not swapped:
            logger.warning(
                "course_status_cas_lost",
                course_id=course.id,
                expected=expected.value,
                target=course.status.value,
            )
        return swapped

    async def course_numbers_like(self, base: str) -> set[str]:
        stmt = select(CourseModel.course_number).where(
            or_(
                CourseModel.course_number == base,
                CourseModel.course_number.startswith(f"{base}-", autoescape=True),
            )
        )
        return set((await self._session.execute(stmt)).scalars().all())

    async def instructor_booked_on(
        self, instructor_id: int, day: date, exclude_course_id: Optional[int] = None
    ) -> bool:
        stmt = select(CourseModel.id).where(
            CourseModel.instructor_id == instructor_id,
            CourseModel.date_scheduled == day,
            CourseModel.status.in_([s.value for s in BOOKED_STATUSES]),
        )
        if exclude_course_id is not None:
            stmt = stmt.where(CourseModel.id != exclude_course_id)
        return (await self._session.execute(stmt.limit(1))).first() is not None

    async def booked_dates(self, instructor_id: int) -> set[date]:
        stmt = select(CourseModel.date_scheduled).where(
            CourseModel.instructor_id == instructor_id,
            CourseModel.date_scheduled.is_not(None),
            CourseModel.status.in_([s.value for s in BOOKED_STATUSES]),
        )
        return set((await self._session.execute(stmt)).scalars().all())

    async def list_by_status(
        self,
        statuses: Iterable[CourseStatus],
        *,
        organization_id: Optional[int] = None,
        instructor_id: Optional[int] = None,
        oldest_first: bool = True,
    ) -> List[Course]:
        stmt = select(CourseModel).where(CourseModel.status.in_([s.value for s in statuses]))
        if organization_id is not None:
            stmt = stmt.where(CourseModel.organization_id == organization_id)
        if instructor_id is not None:
            stmt = stmt.where(CourseModel.instructor_id == instructor_id)
        if oldest_first:
            stmt = stmt.order_by(CourseModel.created_at.asc(), CourseModel.id.asc())
        else:
            stmt = stmt.order_by(CourseModel.created_at.desc(), CourseModel.id.desc())
        rows = (await self._session.execute(stmt)).scalars().all()
        return [self._to_domain(r) for r in rows]

    async def by_ids(self, course_ids: Iterable[int]) -> dict[int, Course]:
        ids = set(course_ids)
        if not ids:
            return {}
        rows = (await self._session.execute(select(CourseModel).where(CourseModel.id.in_(ids)))).scalars().all()
        return {r.id: self._to_domain(r) for r in rows}
