import pytest

from courses.domain.value_objects.course_status import CourseStatus
from shared.error_codes import ErrorKind
from tests.helpers import (
    ACCOUNTANT,
    ACME_USER,
    ADMIN,
    GLOBEX,
    GLOBEX_USER,
    INSTRUCTOR,
    OTHER_INSTRUCTOR,
    billing_ready_course,
    completed_course,
    request_course,
    scheduled_course,
)

pytestmark = pytest.mark.anyio


async def test_admin_lists_by_status_with_names(container):
    pending = await request_course(container)
    await scheduled_course(container)

    courses = (await container.course_queries.list_by_status(ADMIN, CourseStatus.PENDING)).unwrap()

    assert [c.id for c in courses] == [pending.id]
    assert courses[0].organization_name == "Acme Corp"
    assert courses[0].course_type_name == "CPR Level A"


async def test_completed_list_carries_attendance(container):
    course = await completed_course(container, roster=4, attended=3)
    (listed,) = (await container.course_queries.list_by_status(ADMIN, CourseStatus.COMPLETED)).unwrap()
    assert listed.id == course.id
    assert listed.attended_count == 3


async def test_admin_status_lists_are_limited(container):
    result = await container.course_queries.list_by_status(ADMIN, CourseStatus.INVOICED)
    assert result.error.kind == ErrorKind.FORBIDDEN


async def test_organization_sees_only_its_courses(container):
    mine = await request_course(container)
    await request_course(container, actor=GLOBEX_USER, organization_id=GLOBEX)

    courses = (await container.course_queries.organization_courses(ACME_USER)).unwrap()

    assert [c.id for c in courses] == [mine.id]


async def test_instructor_views(container):
    assigned = await scheduled_course(container)
    await scheduled_course(container, instructor=OTHER_INSTRUCTOR)
    done = await completed_course(container, roster=2, attended=1)

    classes = (await container.course_queries.instructor_classes(INSTRUCTOR)).unwrap()
    archive = (await container.course_queries.instructor_archive(INSTRUCTOR)).unwrap()

    assert [c.id for c in classes] == [assigned.id]
    assert [(c.id, c.attended_count) for c in archive] == [(done.id, 1)]


async def test_billing_queue_shows_attended_counts(container):
    course = await billing_ready_course(container, roster=5, attended=4)
    for actor in (ADMIN, ACCOUNTANT):
        (queued,) = (await container.course_queries.billing_queue(actor)).unwrap()
        assert queued.id == course.id
        assert queued.attended_count == 4
    result = await container.course_queries.billing_queue(INSTRUCTOR)
    assert result.error.kind == ErrorKind.FORBIDDEN


async def test_course_detail_visibility(container):
    course = await completed_course(container, roster=3, attended=2)

    detail = (await container.course_queries.course_detail(ACME_USER, course.id)).unwrap()
    assert detail.course.attended_count == 2
    assert len(detail.students) == 3

    for outsider in (GLOBEX_USER, OTHER_INSTRUCTOR):
        result = await container.course_queries.course_detail(outsider, course.id)
        assert result.error.kind == ErrorKind.FORBIDDEN

    missing = await container.course_queries.course_detail(ADMIN, 404)
    assert missing.error.kind == ErrorKind.NOT_FOUND
