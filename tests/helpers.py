"""Reference data, actors and course builders shared by the tests."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

from billing.application.commands import CreatePricingRuleCommand
from billing.domain.entities.invoice import Invoice
from courses.application.commands import (
    AddStudentsCommand,
    CompleteCourseCommand,
    MarkBillingReadyCommand,
    RequestCourseCommand,
    ScheduleCourseCommand,
    SetAttendanceCommand,
    StudentInput,
)
from courses.application.dto import CourseDTO
from courses.infrastructure.models import CourseTypeModel, OrganizationModel
from shared.infrastructure.database import DatabaseSessionFactory
from shared.roles import Actor, Role

TODAY = date(2026, 3, 2)

ACME = 1
GLOBEX = 2
CPR_A = 1
FIRST_AID = 2

SUPER_ADMIN = Actor(user_id=1, role=Role.SUPER_ADMIN)
ADMIN = Actor(user_id=2, role=Role.ADMIN)
ACCOUNTANT = Actor(user_id=3, role=Role.ACCOUNTING)
INSTRUCTOR = Actor(user_id=10, role=Role.INSTRUCTOR)
OTHER_INSTRUCTOR = Actor(user_id=11, role=Role.INSTRUCTOR)
ACME_USER = Actor(user_id=20, role=Role.ORGANIZATION, organization_id=ACME)
GLOBEX_USER = Actor(user_id=21, role=Role.ORGANIZATION, organization_id=GLOBEX)


def headers(actor: Actor) -> dict[str, str]:
    h = {"X-User-Id": str(actor.user_id), "X-User-Role": actor.role.value}
    if actor.organization_id is not None:
        h["X-Organization-Id"] = str(actor.organization_id)
    return h


async def seed_reference_data(database: DatabaseSessionFactory) -> None:
    async with database.session_factory() as session:
        async with session.begin():
            session.add_all(
                [
                    OrganizationModel(id=ACME, name="Acme Corp", code="ACME"),
                    OrganizationModel(id=GLOBEX, name="Globex", code="GLOBEX"),
                    CourseTypeModel(id=CPR_A, name="CPR Level A", code="CPR-A"),
                    CourseTypeModel(id=FIRST_AID, name="First Aid", code="FA"),
                ]
            )


class RecordingNotifier:
    def __init__(self) -> None:
        self.invoices: list[Invoice] = []

    async def invoice_created(self, invoice: Invoice) -> None:
        self.invoices.append(invoice)


class FailingNotifier:
    async def invoice_created(self, invoice: Invoice) -> None:
        raise ConnectionError("mail relay unreachable")


class RecordingConnection:
    """Stands in for a WebSocket."""

    def __init__(self, fail: bool = False) -> None:
        self.frames: list[dict] = []
        self.fail = fail

    async def send_json(self, data) -> None:
        if self.fail:
            raise RuntimeError("socket closed")
        self.frames.append(data)


# ------------------------------------------------------------ course builders

async def request_course(
    container,
    actor: Actor = ACME_USER,
    organization_id: int = ACME,
    course_type_id: int = CPR_A,
    date_requested: date | None = None,
) -> CourseDTO:
    command = RequestCourseCommand(
        organization_id=organization_id,
        course_type_id=course_type_id,
        location="Main Hall",
        students_registered=12,
        date_requested=date_requested,
        issued_by=actor,
    )
    return (await container.lifecycle.request_course(command)).unwrap()


async def scheduled_course(container, instructor: Actor = INSTRUCTOR, **kwargs) -> CourseDTO:
    course = await request_course(container, **kwargs)
    # one course per instructor per day: derive a distinct day from the id
    day = TODAY + timedelta(days=course.id)
    command = ScheduleCourseCommand(
        course_id=course.id, instructor_id=instructor.user_id, date_scheduled=day, issued_by=ADMIN
    )
    return (await container.lifecycle.schedule_course(command)).unwrap()


async def enroll(container, course_id: int, count: int) -> list[int]:
    students = tuple(StudentInput(f"Student{i}", "Test", f"s{i}@example.com") for i in range(count))
    command = AddStudentsCommand(course_id=course_id, students=students, issued_by=ADMIN)
    return [s.id for s in (await container.attendance.add_students(command)).unwrap()]


async def mark_present(container, course_id: int, student_ids: list[int], instructor: Actor = INSTRUCTOR) -> None:
    for student_id in student_ids:
        command = SetAttendanceCommand(
            course_id=course_id, student_id=student_id, attended=True, issued_by=instructor
        )
        (await container.attendance.set_attendance(command)).unwrap()


async def completed_course(container, roster: int = 15, attended: int = 12, **kwargs) -> CourseDTO:
    course = await scheduled_course(container, **kwargs)
    student_ids = await enroll(container, course.id, roster) if roster else []
    await mark_present(container, course.id, student_ids[:attended])
    command = CompleteCourseCommand(course_id=course.id, issued_by=INSTRUCTOR)
    return (await container.lifecycle.complete_course(command)).unwrap()


async def add_pricing_rule(
    container,
    price: str = "50.00",
    organization_id: int = ACME,
    course_type_id: int = CPR_A,
):
    command = CreatePricingRuleCommand(
        organization_id=organization_id,
        course_type_id=course_type_id,
        price=Decimal(price),
        issued_by=SUPER_ADMIN,
    )
    return (await container.pricing_catalog.create_rule(command)).unwrap()


async def billing_ready_course(
    container, roster: int = 15, attended: int = 12, price: str | None = "50.00"
) -> CourseDTO:
    """Pass ``price=None`` when the pair already has a rule."""
    course = await completed_course(container, roster=roster, attended=attended)
    if price is not None:
        await add_pricing_rule(container, price=price)
    command = MarkBillingReadyCommand(course_id=course.id, issued_by=ADMIN)
    return (await container.lifecycle.mark_billing_ready(command)).unwrap()
