# src/courses/infrastructure/repositories/student_repository.py
"""SQLAlchemy-backed roster and attendance store."""

from __future__ import annotations

from typing import Iterable, List, Optional

from sqlalchemy import func, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from courses.domain.entities.student import Student
from courses.domain.repositories.student_repository import StudentRepository
from courses.infrastructure.models.course_model import StudentModel


class SQLAlchemyStudentRepository(StudentRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _to_domain(row: StudentModel) -> Student:
        return Student(
            id=row.id,
            course_id=row.course_id,
            first_name=row.first_name,
            last_name=row.last_name,
            email=row.email,
            attended=row.attended,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def add_many(self, students: List[Student]) -> List[Student]:
        rows = [
            StudentModel(
                course_id=s.course_id,
                first_name=s.first_name,
                last_name=s.last_name,
                email=s.email,
                attended=s.attended,
            )
            for s in students
        ]
        self._session.add_all(rows)
        await self._session.flush()
        for student, row in zip(students, rows):
            student.id = row.id
        return students

    async def get(self, student_id: int) -> Optional[Student]:
        row = await self._session.get(StudentModel, student_id, populate_existing=True)
        return self._to_domain(row) if row else None

    async def list_for_course(self, course_id: int) -> List[Student]:
        stmt = (
            select(StudentModel)
            .where(StudentModel.course_id == course_id)
            .order_by(StudentModel.last_name, StudentModel.first_name, StudentModel.id)
        )
        return [self._to_domain(r) for r in (await self._session.execute(stmt)).scalars().all()]

    async def set_attended(self, student_id: int, attended: bool) -> None:
        await self._session.execute(
            update(StudentModel)
            .where(StudentModel.id == student_id)
            .values(attended=attended)
            .execution_options(synchronize_session=False)
        )

    async def count_attended(self, course_id: int) -> int:
        stmt = select(func.count(StudentModel.id)).where(
            StudentModel.course_id == course_id,
            StudentModel.attended.is_(True),
        )
        return int((await self._session.execute(stmt)).scalar_one())

    async def attendance_counts(self, course_ids: Iterable[int]) -> dict[int, int]:
        ids = list(course_ids)
        if not ids:
            return {}
        stmt = (
            select(StudentModel.course_id, func.count(StudentModel.id))
            .where(StudentModel.course_id.in_(ids), StudentModel.attended.is_(True))
            .group_by(StudentModel.course_id)
        )
        counts = {cid: 0 for cid in ids}
        for course_id, count in (await self._session.execute(stmt)).all():
            counts[course_id] = int(count)
        return counts
