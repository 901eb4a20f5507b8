import pytest

from courses.application.commands import (
    CancelCourseCommand,
    CompleteCourseCommand,
    MarkBillingReadyCommand,
    RequestCourseCommand,
    ScheduleCourseCommand,
)
from courses.domain.value_objects.course_number import MAX_SUFFIX
from courses.infrastructure.models import CourseModel
from shared.error_codes import ErrorKind
from tests.helpers import (
    ACCOUNTANT,
    ACME,
    ACME_USER,
    ADMIN,
    CPR_A,
    GLOBEX,
    INSTRUCTOR,
    OTHER_INSTRUCTOR,
    SUPER_ADMIN,
    TODAY,
    add_pricing_rule,
    completed_course,
    request_course,
    scheduled_course,
)

pytestmark = pytest.mark.anyio


async def _status(container, course_id):
    async with container.uow_factory() as uow:
        return (await uow.courses.get(course_id)).status.value


async def test_request_assigns_base_then_suffixed_numbers(container):
    first = await request_course(container)
    second = await request_course(container)
    assert first.course_number == "20260302-ACME-CPRA"
    assert second.course_number == "20260302-ACME-CPRA-1"
    assert first.status == "pending"
    assert first.date_requested == TODAY


async def test_numbers_are_exhausted_after_one_hundred_per_day(container):
    async with container.database.session_factory() as session:
        async with session.begin():
            base = "20260302-ACME-CPRA"
            session.add_all(
                CourseModel(
                    course_number=number,
                    organization_id=ACME,
                    course_type_id=CPR_A,
                    date_requested=TODAY,
                    location="Main Hall",
                    students_registered=1,
                    status="pending",
                )
                for number in [base] + [f"{base}-{i}" for i in range(1, MAX_SUFFIX + 1)]
            )

    command = RequestCourseCommand(
        organization_id=ACME, course_type_id=CPR_A, location="Annex", students_registered=3, issued_by=ACME_USER
    )
    result = await container.lifecycle.request_course(command)
    assert result.is_failure()
    assert result.error.kind == ErrorKind.GENERATION_EXHAUSTED


async def test_organization_cannot_request_for_another_organization(container):
    command = RequestCourseCommand(
        organization_id=GLOBEX, course_type_id=CPR_A, location="Hall", students_registered=3, issued_by=ACME_USER
    )
    result = await container.lifecycle.request_course(command)
    assert result.error.kind == ErrorKind.FORBIDDEN


async def test_unknown_course_type_is_not_found(container):
    command = RequestCourseCommand(
        organization_id=ACME, course_type_id=99, location="Hall", students_registered=3, issued_by=ACME_USER
    )
    result = await container.lifecycle.request_course(command)
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_blank_location_is_a_validation_error(container):
    command = RequestCourseCommand(
        organization_id=ACME, course_type_id=CPR_A, location="   ", students_registered=3, issued_by=ACME_USER
    )
    result = await container.lifecycle.request_course(command)
    assert result.error.kind == ErrorKind.VALIDATION


async def test_full_happy_path_to_billing_ready(container):
    course = await completed_course(container, roster=3, attended=2)
    assert course.status == "completed"
    await add_pricing_rule(container)
    result = await container.lifecycle.mark_billing_ready(MarkBillingReadyCommand(course_id=course.id, issued_by=ADMIN))
    assert result.unwrap().status == "billing_ready"


async def test_missing_pricing_rule_keeps_course_completed(container):
    course = await completed_course(container, roster=2, attended=2)
    result = await container.lifecycle.mark_billing_ready(
        MarkBillingReadyCommand(course_id=course.id, issued_by=SUPER_ADMIN)
    )
    assert result.error.kind == ErrorKind.MISSING_PRICING_RULE
    assert "No pricing rule exists" in result.error.message
    assert await _status(container, course.id) == "completed"


async def test_cancel_from_completed_is_an_invalid_transition(container):
    course = await completed_course(container, roster=1, attended=1)
    result = await container.lifecycle.cancel_course(CancelCourseCommand(course_id=course.id, issued_by=ADMIN))
    assert result.error.kind == ErrorKind.INVALID_TRANSITION
    assert await _status(container, course.id) == "completed"


async def test_cancel_pending_and_scheduled(container):
    pending = await request_course(container)
    scheduled = await scheduled_course(container)
    for course in (pending, scheduled):
        result = await container.lifecycle.cancel_course(CancelCourseCommand(course_id=course.id, issued_by=ADMIN))
        assert result.unwrap().status == "cancelled"


async def test_skipping_a_state_is_rejected(container):
    course = await request_course(container)
    result = await container.lifecycle.complete_course(
        CompleteCourseCommand(course_id=course.id, issued_by=INSTRUCTOR)
    )
    # not assigned yet, so the instructor does not own it
    assert result.error.kind == ErrorKind.FORBIDDEN
    result = await container.lifecycle.mark_billing_ready(MarkBillingReadyCommand(course_id=course.id, issued_by=ADMIN))
    assert result.error.kind == ErrorKind.INVALID_TRANSITION


async def test_foreign_instructor_cannot_complete(container):
    course = await scheduled_course(container)
    result = await container.lifecycle.complete_course(
        CompleteCourseCommand(course_id=course.id, issued_by=OTHER_INSTRUCTOR)
    )
    assert result.error.kind == ErrorKind.FORBIDDEN
    assert await _status(container, course.id) == "scheduled"


async def test_accounting_cannot_schedule(container):
    course = await request_course(container)
    result = await container.lifecycle.schedule_course(
        ScheduleCourseCommand(course_id=course.id, instructor_id=10, date_scheduled=TODAY, issued_by=ACCOUNTANT)
    )
    assert result.error.kind == ErrorKind.FORBIDDEN


async def test_instructor_cannot_be_double_booked(container):
    first = await request_course(container)
    second = await request_course(container)
    schedule = ScheduleCourseCommand(course_id=first.id, instructor_id=10, date_scheduled=TODAY, issued_by=ADMIN)
    (await container.lifecycle.schedule_course(schedule)).unwrap()

    clash = ScheduleCourseCommand(course_id=second.id, instructor_id=10, date_scheduled=TODAY, issued_by=ADMIN)
    result = await container.lifecycle.schedule_course(clash)
    assert result.error.kind == ErrorKind.CONFLICT
    assert await _status(container, second.id) == "pending"


async def test_cancelled_course_frees_the_instructor(container):
    first = await request_course(container)
    second = await request_course(container)
    schedule = ScheduleCourseCommand(course_id=first.id, instructor_id=10, date_scheduled=TODAY, issued_by=ADMIN)
    (await container.lifecycle.schedule_course(schedule)).unwrap()
    (await container.lifecycle.cancel_course(CancelCourseCommand(course_id=first.id, issued_by=ADMIN))).unwrap()

    rebook = ScheduleCourseCommand(course_id=second.id, instructor_id=10, date_scheduled=TODAY, issued_by=ADMIN)
    assert (await container.lifecycle.schedule_course(rebook)).unwrap().status == "scheduled"


async def test_unknown_course_is_not_found(container):
    result = await container.lifecycle.cancel_course(CancelCourseCommand(course_id=404, issued_by=ADMIN))
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_events_are_published_after_commit(container):
    seen = []

    async def record(event):
        seen.append(type(event).__name__)

    for name in ("CourseRequested", "CourseScheduled", "CourseCancelled"):
        container.event_bus.subscribe(name, record)

    course = await scheduled_course(container)
    await container.lifecycle.cancel_course(CancelCourseCommand(course_id=course.id, issued_by=ADMIN))
    # a rejected transition publishes nothing
    await container.lifecycle.cancel_course(CancelCourseCommand(course_id=course.id, issued_by=ADMIN))

    assert seen == ["CourseRequested", "CourseScheduled", "CourseCancelled"]
