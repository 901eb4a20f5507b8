from datetime import timedelta

import pytest

from courses.application.commands import ChangeAvailabilityCommand, ScheduleCourseCommand
from shared.error_codes import ErrorKind
from tests.helpers import ADMIN, INSTRUCTOR, TODAY, request_course

pytestmark = pytest.mark.anyio

TOMORROW = TODAY + timedelta(days=1)
NEXT_WEEK = TODAY + timedelta(days=7)


def _change(day, actor=INSTRUCTOR) -> ChangeAvailabilityCommand:
    return ChangeAvailabilityCommand(available_date=day, issued_by=actor)


async def test_declaring_a_date_twice_is_idempotent(container):
    (await container.availability.add_availability(_change(TOMORROW))).unwrap()
    result = (await container.availability.add_availability(_change(TOMORROW))).unwrap()
    assert result.dates == (TOMORROW,)


async def test_past_dates_are_rejected(container):
    result = await container.availability.add_availability(_change(TODAY - timedelta(days=1)))
    assert result.error.kind == ErrorKind.VALIDATION


async def test_removing_an_undeclared_date_is_not_found(container):
    result = await container.availability.remove_availability(_change(NEXT_WEEK))
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_booked_days_are_not_truly_available(container):
    for day in (TOMORROW, NEXT_WEEK):
        (await container.availability.add_availability(_change(day))).unwrap()
    course = await request_course(container)
    schedule = ScheduleCourseCommand(course_id=course.id, instructor_id=INSTRUCTOR.user_id, date_scheduled=TOMORROW, issued_by=ADMIN)
    (await container.lifecycle.schedule_course(schedule)).unwrap()

    own = (await container.availability.list_availability(INSTRUCTOR)).unwrap()
    seen_by_admin = (await container.availability.list_availability(ADMIN, INSTRUCTOR.user_id)).unwrap()

    assert own.dates == seen_by_admin.dates == (NEXT_WEEK,)

    removed = (await container.availability.remove_availability(_change(NEXT_WEEK))).unwrap()
    assert removed.dates == ()


async def test_admin_must_name_the_instructor(container):
    result = await container.availability.list_availability(ADMIN)
    assert result.error.kind == ErrorKind.VALIDATION


async def test_only_instructors_declare_availability(container):
    result = await container.availability.add_availability(_change(TOMORROW, actor=ADMIN))
    assert result.error.kind == ErrorKind.FORBIDDEN
