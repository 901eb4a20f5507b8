"""
Course loading and status persistence shared by the lifecycle services.
"""
from __future__ import annotations

from typing import Literal

from sqlalchemy.exc import IntegrityError

from courses.domain.entities.course import Course
from courses.domain.value_objects.course_status import CourseStatus
from courses.infrastructure.adapters.course_unit_of_work import CourseUnitOfWork
from shared.exceptions import ConflictError, NotFoundError
from shared.infrastructure.database.errors import violates_unique


async def load_course(
    uow: CourseUnitOfWork,
    course_id: int,
    lock: Literal["update", "share", "none"] = "update",
) -> Course:
    """Load a course inside the current transaction or raise NotFoundError."""
    if lock == "update":
        course = await uow.courses.get_for_update(course_id)
    elif lock == "share":
        course = await uow.courses.get_for_share(course_id)
    else:
        course = await uow.courses.get(course_id)
    if course is None:
        raise NotFoundError(f"Course {course_id} does not exist.", details={"course_id": course_id})
    return course


async def save_transition(uow: CourseUnitOfWork, course: Course, expected: CourseStatus) -> None:
    """
    Compare-and-swap the course status from ``expected`` to ``course.status``.

    Raises:
        ConflictError: when another transaction moved the course first, or
            the instructor is already booked for that day
    """
    try:
        swapped = await uow.courses.compare_and_set(course, expected)
    except IntegrityError as e:
        if violates_unique(e, "courses", "instructor_id", "date_scheduled"):
            raise ConflictError(
                "The instructor is already booked on that date.",
                details={"instructor_id": course.instructor_id, "date": str(course.date_scheduled)},
            )
        raise
    if not swapped:
        raise ConflictError(
            "The course was changed by someone else. Refresh and try again.",
            details={"course_id": course.id, "expected_status": expected.value},
        )
    uow.track(course)
