"""
Instructor Availability Routes
"""
from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Depends, Query

from courses.api.dependencies import Availability
from courses.api.schemas import AvailabilityRequest, AvailabilityResponse
from courses.application.commands import ChangeAvailabilityCommand
from shared.api.dependencies import CurrentActor, require_roles
from shared.api.response_models import ERROR_RESPONSES, SuccessResponse
from shared.roles import Actor, Role

router = APIRouter(responses=ERROR_RESPONSES)

InstructorActor = Annotated[Actor, Depends(require_roles(Role.INSTRUCTOR))]


@router.get("", response_model=SuccessResponse[AvailabilityResponse], summary="Truly Available Dates")
async def list_availability(
    actor: CurrentActor,
    availability: Availability,
    instructor_id: Annotated[Optional[int], Query()] = None,
):
    dto = (await availability.list_availability(actor, instructor_id)).unwrap()
    return SuccessResponse(data=AvailabilityResponse.model_validate(dto))


@router.post("", response_model=SuccessResponse[AvailabilityResponse], summary="Declare Available Date")
async def add_availability(body: AvailabilityRequest, actor: InstructorActor, availability: Availability):
    command = ChangeAvailabilityCommand(available_date=body.available_date, issued_by=actor)
    dto = (await availability.add_availability(command)).unwrap()
    return SuccessResponse(data=AvailabilityResponse.model_validate(dto))


@router.delete(
    "/{available_date}",
    response_model=SuccessResponse[AvailabilityResponse],
    summary="Withdraw Available Date",
)
async def remove_availability(available_date: date, actor: InstructorActor, availability: Availability):
    command = ChangeAvailabilityCommand(available_date=available_date, issued_by=actor)
    dto = (await availability.remove_availability(command)).unwrap()
    return SuccessResponse(data=AvailabilityResponse.model_validate(dto))
