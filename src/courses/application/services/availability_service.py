"""
Instructor Availability Service
"""
from __future__ import annotations

from datetime import date
from typing import Callable

from courses.application.commands import ChangeAvailabilityCommand
from courses.application.dto import AvailabilityDTO
from courses.infrastructure.adapters.course_unit_of_work import UnitOfWorkFactory
from shared.application.operation import operation
from shared.exceptions import NotFoundError, ValidationError
from shared.infrastructure.observability.logger import get_logger
from shared.roles import Actor, Role, ensure_role

logger = get_logger(__name__)

INSTRUCTORS = frozenset({Role.INSTRUCTOR})


class AvailabilityService:
    """Dates instructors declare; admins schedule against the truly available ones."""

    def __init__(self, uow_factory: UnitOfWorkFactory, clock: Callable[[], date] = date.today) -> None:
        self._uow_factory = uow_factory
        self._clock = clock

    @operation
    async def add_availability(self, command: ChangeAvailabilityCommand) -> AvailabilityDTO:
        actor = command.issued_by
        ensure_role(actor, INSTRUCTORS, "declare availability")
        if command.available_date < self._clock():
            raise ValidationError(
                "Availability cannot be declared for a past date.",
                details={"available_date": command.available_date.isoformat()},
            )
        uow = self._uow_factory()
        async with uow:
            added = await uow.availability.add(actor.user_id, command.available_date)
            dates = await self._truly_available(uow, actor.user_id)
            await uow.commit()
        logger.info(
            "availability_added",
            instructor_id=actor.user_id,
            available_date=command.available_date.isoformat(),
            already_declared=not added,
        )
        return AvailabilityDTO(instructor_id=actor.user_id, dates=dates)

    @operation
    async def remove_availability(self, command: ChangeAvailabilityCommand) -> AvailabilityDTO:
        actor = command.issued_by
        ensure_role(actor, INSTRUCTORS, "withdraw availability")
        uow = self._uow_factory()
        async with uow:
            removed = await uow.availability.remove(actor.user_id, command.available_date)
            if not removed:
                raise NotFoundError(
                    f"{command.available_date.isoformat()} was not declared as available.",
                    details={"available_date": command.available_date.isoformat()},
                )
            dates = await self._truly_available(uow, actor.user_id)
            await uow.commit()
        logger.info(
            "availability_removed",
            instructor_id=actor.user_id,
            available_date=command.available_date.isoformat(),
        )
        return AvailabilityDTO(instructor_id=actor.user_id, dates=dates)

    @operation
    async def list_availability(self, actor: Actor, instructor_id: int | None = None) -> AvailabilityDTO:
        """Declared dates minus days already booked with a scheduled or completed course."""
        if actor.role == Role.INSTRUCTOR:
            instructor_id = actor.user_id
        else:
            ensure_role(actor, {Role.ADMIN, Role.SUPER_ADMIN}, "view instructor availability")
            if instructor_id is None:
                raise ValidationError("instructor_id is required.", details={"field": "instructor_id"})
        uow = self._uow_factory()
        async with uow:
            dates = await self._truly_available(uow, instructor_id)
        return AvailabilityDTO(instructor_id=instructor_id, dates=dates)

    @staticmethod
    async def _truly_available(uow, instructor_id: int) -> tuple[date, ...]:
        declared = await uow.availability.list_for_instructor(instructor_id)
        booked = await uow.courses.booked_dates(instructor_id)
        return tuple(d for d in declared if d not in booked)
