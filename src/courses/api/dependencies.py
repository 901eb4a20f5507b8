"""
Course Service Dependencies
"""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from courses.application.services import (
    AttendanceService,
    AvailabilityService,
    CourseQueryService,
    LifecycleService,
)
from shared.api.dependencies import get_container


def get_lifecycle_service(container=Depends(get_container)) -> LifecycleService:
    return container.lifecycle


def get_attendance_service(container=Depends(get_container)) -> AttendanceService:
    return container.attendance


def get_availability_service(container=Depends(get_container)) -> AvailabilityService:
    return container.availability


def get_course_queries(container=Depends(get_container)) -> CourseQueryService:
    return container.course_queries


Lifecycle = Annotated[LifecycleService, Depends(get_lifecycle_service)]
Attendance = Annotated[AttendanceService, Depends(get_attendance_service)]
Availability = Annotated[AvailabilityService, Depends(get_availability_service)]
CourseQueries = Annotated[CourseQueryService, Depends(get_course_queries)]
