"""
Course Query Service
Read side for the role portals; push events tell clients when to re-fetch
"""
from __future__ import annotations

from typing import Iterable

from courses.application.dto import CourseDetailDTO, CourseDTO, StudentDTO
from courses.application.services.course_access import load_course
from courses.domain.entities.course import Course
from courses.domain.value_objects.course_status import CourseStatus
from courses.infrastructure.adapters.course_unit_of_work import UnitOfWorkFactory
from shared.application.operation import operation
from shared.exceptions import ForbiddenError
from shared.roles import ADMINS, BILLING_READERS, Actor, Role, ensure_role

ADMIN_LISTS = frozenset({CourseStatus.PENDING, CourseStatus.SCHEDULED, CourseStatus.COMPLETED})
ARCHIVE_STATUSES = (CourseStatus.COMPLETED, CourseStatus.BILLING_READY, CourseStatus.INVOICED)


class CourseQueryService:

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    @operation
    async def list_by_status(self, actor: Actor, status: CourseStatus) -> list[CourseDTO]:
        """Admin work queues: pending, scheduled and completed courses, oldest first."""
        ensure_role(actor, ADMINS, "list courses by status")
        if status not in ADMIN_LISTS:
            status_list = ", ".join(s.value for s in sorted(ADMIN_LISTS))
            raise ForbiddenError(f"Admins can list {status_list} courses only.")
        async with self._uow_factory() as uow:
            courses = await uow.courses.list_by_status([status])
            return await self._enrich(uow, courses, with_attendance=status == CourseStatus.COMPLETED)

    @operation
    async def organization_courses(self, actor: Actor) -> list[CourseDTO]:
        ensure_role(actor, {Role.ORGANIZATION}, "list organization courses")
        if actor.organization_id is None:
            raise ForbiddenError("The caller is not linked to an organization.")
        async with self._uow_factory() as uow:
            courses = await uow.courses.list_by_status(
                list(CourseStatus), organization_id=actor.organization_id, oldest_first=False
            )
            return await self._enrich(uow, courses)

    @operation
    async def instructor_classes(self, actor: Actor) -> list[CourseDTO]:
        """Scheduled courses assigned to the calling instructor."""
        ensure_role(actor, {Role.INSTRUCTOR}, "list assigned classes")
        async with self._uow_factory() as uow:
            courses = await uow.courses.list_by_status(
                [CourseStatus.SCHEDULED], instructor_id=actor.user_id
            )
            return await self._enrich(uow, courses, with_attendance=True)

    @operation
    async def instructor_archive(self, actor: Actor) -> list[CourseDTO]:
        ensure_role(actor, {Role.INSTRUCTOR}, "list archived classes")
        async with self._uow_factory() as uow:
            courses = await uow.courses.list_by_status(
                ARCHIVE_STATUSES, instructor_id=actor.user_id, oldest_first=False
            )
            return await self._enrich(uow, courses, with_attendance=True)

    @operation
    async def billing_queue(self, actor: Actor) -> list[CourseDTO]:
        """Billing-ready courses with their attended headcount, oldest first."""
        ensure_role(actor, BILLING_READERS, "view the billing queue")
        async with self._uow_factory() as uow:
            courses = await uow.courses.list_by_status([CourseStatus.BILLING_READY])
            return await self._enrich(uow, courses, with_attendance=True)

    @operation
    async def course_detail(self, actor: Actor, course_id: int) -> CourseDetailDTO:
        async with self._uow_factory() as uow:
            course = await load_course(uow, course_id, lock="none")
            if not course.is_visible_to(actor):
                raise ForbiddenError(
                    "This course belongs to another organization or instructor.",
                    details={"course_id": course_id},
                )
            students = await uow.students.list_for_course(course_id)
            (dto,) = await self._enrich(uow, [course])
            dto = dto.with_attendance(sum(1 for s in students if s.attended))
            return CourseDetailDTO(
                course=dto,
                students=tuple(StudentDTO.from_entity(s) for s in students),
            )

    @staticmethod
    async def _enrich(uow, courses: Iterable[Course], with_attendance: bool = False) -> list[CourseDTO]:
        courses = list(courses)
        organizations = await uow.references.organizations(c.organization_id for c in courses)
        course_types = await uow.references.course_types(c.course_type_id for c in courses)
        counts = (
            await uow.students.attendance_counts(c.id for c in courses) if with_attendance else {}
        )
        result = []
        for course in courses:
            dto = CourseDTO.from_entity(course).with_names(
                organizations.get(course.organization_id),
                course_types.get(course.course_type_id),
            )
            if with_attendance:
                dto = dto.with_attendance(counts.get(course.id, 0))
            result.append(dto)
        return result
