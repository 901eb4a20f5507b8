"""
Course Lifecycle Service
Request, schedule, cancel, complete and mark courses billing-ready
"""
from __future__ import annotations

from datetime import date
from typing import Callable

from sqlalchemy.exc import IntegrityError

from courses.application.commands import (
    CancelCourseCommand,
    CompleteCourseCommand,
    MarkBillingReadyCommand,
    RequestCourseCommand,
    ScheduleCourseCommand,
)
from courses.application.dto import CourseDTO
from courses.application.services.course_access import load_course, save_transition
from courses.domain.entities.course import Course
from courses.domain.value_objects.course_number import (
    MAX_SUFFIX,
    course_number_base,
    first_free_course_number,
)
from courses.domain.value_objects.course_status import CourseStatus, ensure_transition
from courses.infrastructure.adapters.course_unit_of_work import UnitOfWorkFactory
from shared.application.operation import operation
from shared.exceptions import (
    ConflictError,
    ForbiddenError,
    GenerationExhaustedError,
    MissingPricingRuleError,
    NotFoundError,
)
from shared.infrastructure.database.errors import violates_unique
from shared.infrastructure.messaging.event_bus import EventBus
from shared.infrastructure.observability.logger import get_logger
from shared.roles import ADMINS, Actor, Role, ensure_role

logger = get_logger(__name__)

REQUESTERS = frozenset({Role.ORGANIZATION, Role.ADMIN, Role.SUPER_ADMIN})
COURSE_NUMBER_ATTEMPTS = 3


class LifecycleService:
    """
    Drives a course through pending -> scheduled -> completed -> billing_ready.

    Each operation runs in its own unit of work: the course row is locked,
    the status is checked against the transition table, and the new status
    is written with compare-and-swap. Domain events are published on the
    event bus only after the commit succeeded.
    """

    def __init__(
        self,
        uow_factory: UnitOfWorkFactory,
        event_bus: EventBus,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self._uow_factory = uow_factory
        self._event_bus = event_bus
        self._clock = clock

    # ------------------------------------------------------------- request

    @operation
    async def request_course(self, command: RequestCourseCommand) -> CourseDTO:
        actor = command.issued_by
        ensure_role(actor, REQUESTERS, "request courses")
        self._ensure_own_organization(actor, command.organization_id)
        date_requested = command.date_requested or self._clock()

        for attempt in range(1, COURSE_NUMBER_ATTEMPTS + 1):
            uow = self._uow_factory()
            try:
                async with uow:
                    course = await self._create_pending(uow, command, date_requested)
                    await uow.commit()
            except IntegrityError as e:
                if not violates_unique(e, "courses", "course_number"):
                    raise
                logger.warning("course_number_race_retry", attempt=attempt)
                continue
            await self._event_bus.publish_many(uow.committed_events)
            logger.info(
                "course_requested",
                course_id=course.id,
                course_number=course.course_number,
                organization_id=course.organization_id,
            )
            return CourseDTO.from_entity(course)

        raise ConflictError(
            "Another course was requested at the same moment. Please retry.",
            details={"organization_id": command.organization_id},
        )

    async def _create_pending(self, uow, command: RequestCourseCommand, date_requested: date) -> Course:
        organization = await uow.references.get_organization(command.organization_id)
        if organization is None:
            raise NotFoundError(
                f"Organization {command.organization_id} does not exist.",
                details={"organization_id": command.organization_id},
            )
        course_type = await uow.references.get_course_type(command.course_type_id)
        if course_type is None:
            raise NotFoundError(
                f"Course type {command.course_type_id} does not exist.",
                details={"course_type_id": command.course_type_id},
            )

        base = course_number_base(date_requested, organization.code, course_type.code)
        # validate the request before probing for a free number
        course = Course.request(
            organization_id=organization.id,
            course_type_id=course_type.id,
            date_requested=date_requested,
            location=command.location,
            students_registered=command.students_registered,
            course_number=base,
            notes=command.notes,
        )
        taken = await uow.courses.course_numbers_like(base)
        number = first_free_course_number(base, taken)
        if number is None:
            raise GenerationExhaustedError(
                f"All {MAX_SUFFIX + 1} course numbers for {base} are used.",
                details={"base": base},
            )
        course.course_number = number
        await uow.courses.add(course)
        course.record_requested()
        uow.track(course)
        return course

    # ------------------------------------------------------------ schedule

    @operation
    async def schedule_course(self, command: ScheduleCourseCommand) -> CourseDTO:
        ensure_role(command.issued_by, ADMINS, "schedule courses")
        uow = self._uow_factory()
        async with uow:
            course = await load_course(uow, command.course_id)
            expected = course.schedule(command.instructor_id, command.date_scheduled)
            if await uow.courses.instructor_booked_on(
                command.instructor_id, command.date_scheduled, exclude_course_id=course.id
            ):
                raise ConflictError(
                    "The instructor is already booked on that date.",
                    details={
                        "instructor_id": command.instructor_id,
                        "date": command.date_scheduled.isoformat(),
                    },
                )
            await save_transition(uow, course, expected)
            await uow.commit()
        await self._event_bus.publish_many(uow.committed_events)
        logger.info(
            "course_scheduled",
            course_id=course.id,
            instructor_id=command.instructor_id,
            date_scheduled=command.date_scheduled.isoformat(),
        )
        return CourseDTO.from_entity(course)

    # -------------------------------------------------------------- cancel

    @operation
    async def cancel_course(self, command: CancelCourseCommand) -> CourseDTO:
        ensure_role(command.issued_by, ADMINS, "cancel courses")
        uow = self._uow_factory()
        async with uow:
            course = await load_course(uow, command.course_id)
            expected = course.cancel()
            await save_transition(uow, course, expected)
            await uow.commit()
        await self._event_bus.publish_many(uow.committed_events)
        logger.info("course_cancelled", course_id=course.id, previous_status=expected.value)
        return CourseDTO.from_entity(course)

    # ------------------------------------------------------------ complete

    @operation
    async def complete_course(self, command: CompleteCourseCommand) -> CourseDTO:
        actor = command.issued_by
        ensure_role(actor, {Role.INSTRUCTOR}, "complete courses")
        uow = self._uow_factory()
        async with uow:
            course = await load_course(uow, command.course_id)
            expected = course.complete(actor)
            await save_transition(uow, course, expected)
            await uow.commit()
        await self._event_bus.publish_many(uow.committed_events)
        logger.info("course_completed", course_id=course.id, instructor_id=actor.user_id)
        return CourseDTO.from_entity(course)

    # ------------------------------------------------------- billing ready

    @operation
    async def mark_billing_ready(self, command: MarkBillingReadyCommand) -> CourseDTO:
        ensure_role(command.issued_by, ADMINS, "mark courses ready for billing")
        uow = self._uow_factory()
        async with uow:
            course = await load_course(uow, command.course_id)
            ensure_transition(course.status, CourseStatus.BILLING_READY)
            rule = await uow.pricing_rules.find(course.organization_id, course.course_type_id)
            if rule is None:
                raise MissingPricingRuleError(
                    "No pricing rule exists for this organization and course type. "
                    "Add one before marking the course billing-ready.",
                    details={
                        "organization_id": course.organization_id,
                        "course_type_id": course.course_type_id,
                    },
                )
            expected = course.mark_billing_ready()
            await save_transition(uow, course, expected)
            await uow.commit()
        await self._event_bus.publish_many(uow.committed_events)
        logger.info("course_billing_ready", course_id=course.id)
        return CourseDTO.from_entity(course)

    # ------------------------------------------------------------- helpers

    @staticmethod
    def _ensure_own_organization(actor: Actor, organization_id: int) -> None:
        if actor.role == Role.ORGANIZATION and actor.organization_id != organization_id:
            raise ForbiddenError(
                "Organizations can only request courses for themselves.",
                details={"organization_id": organization_id},
            )
