import asyncio
from datetime import date
from decimal import Decimal

import pytest

from app.container import build_container
from billing.application.commands import CreateInvoiceCommand, DeletePricingRuleCommand
from courses.application.commands import CompleteCourseCommand, MarkBillingReadyCommand, SetAttendanceCommand
from shared.error_codes import ErrorKind
from tests.helpers import (
    ACCOUNTANT,
    ADMIN,
    INSTRUCTOR,
    SUPER_ADMIN,
    TODAY,
    FailingNotifier,
    add_pricing_rule,
    billing_ready_course,
    completed_course,
    enroll,
    mark_present,
    scheduled_course,
    seed_reference_data,
)

pytestmark = pytest.mark.anyio


def _invoice(course_id: int) -> CreateInvoiceCommand:
    return CreateInvoiceCommand(course_id=course_id, issued_by=ACCOUNTANT)


async def _course_status(container, course_id: int) -> str:
    async with container.uow_factory() as uow:
        return (await uow.courses.get(course_id)).status.value


async def test_amount_is_attended_times_rate(container, notifier):
    course = await billing_ready_course(container, roster=15, attended=12, price="50.00")

    invoice = (await container.invoicing.create_invoice(_invoice(course.id))).unwrap()

    assert invoice.amount == Decimal("600.00")
    assert invoice.attended_count == 12
    assert invoice.invoice_date == TODAY
    assert invoice.due_date == date(2026, 4, 1)
    assert invoice.status == "pending"
    assert invoice.course_number == course.course_number
    assert await _course_status(container, course.id) == "invoiced"
    assert [i.id for i in notifier.invoices] == [invoice.id]


async def test_roster_size_does_not_change_the_amount(container):
    small = await billing_ready_course(container, roster=4, attended=4, price="25.50")
    large = await billing_ready_course(container, roster=30, attended=4, price=None)

    first = (await container.invoicing.create_invoice(_invoice(small.id))).unwrap()
    second = (await container.invoicing.create_invoice(_invoice(large.id))).unwrap()

    assert first.amount == second.amount == Decimal("102.00")


async def test_zero_attendance_yields_a_zero_invoice(container):
    course = await billing_ready_course(container, roster=5, attended=0)
    invoice = (await container.invoicing.create_invoice(_invoice(course.id))).unwrap()
    assert invoice.amount == Decimal("0.00")
    assert invoice.attended_count == 0


async def test_second_invoice_for_a_course_is_a_conflict(container):
    course = await billing_ready_course(container, roster=3, attended=3)
    (await container.invoicing.create_invoice(_invoice(course.id))).unwrap()

    result = await container.invoicing.create_invoice(_invoice(course.id))

    assert result.error.kind == ErrorKind.CONFLICT
    assert "already been invoiced" in result.error.message
    invoices = (await container.invoice_queries.list_invoices(ACCOUNTANT)).unwrap()
    assert len(invoices) == 1


async def test_concurrent_invoicing_creates_one_invoice(container):
    course = await billing_ready_course(container, roster=3, attended=2)

    results = await asyncio.gather(
        container.invoicing.create_invoice(_invoice(course.id)),
        container.invoicing.create_invoice(_invoice(course.id)),
    )

    successes = [r for r in results if r.is_success()]
    failures = [r for r in results if r.is_failure()]
    assert len(successes) == 1
    assert len(failures) == 1
    assert failures[0].error.kind == ErrorKind.CONFLICT
    invoices = (await container.invoice_queries.list_invoices(ACCOUNTANT)).unwrap()
    assert [i.course_id for i in invoices] == [course.id]


async def test_completed_course_cannot_be_invoiced(container):
    course = await completed_course(container, roster=2, attended=2)
    result = await container.invoicing.create_invoice(_invoice(course.id))
    assert result.error.kind == ErrorKind.INVALID_TRANSITION
    assert await _course_status(container, course.id) == "completed"


async def test_rule_removed_after_billing_ready_blocks_invoicing(container):
    course = await billing_ready_course(container, roster=2, attended=1)
    (rule,) = (await container.pricing_catalog.list_rules(SUPER_ADMIN)).unwrap()
    (await container.pricing_catalog.delete_rule(DeletePricingRuleCommand(rule_id=rule.id, issued_by=SUPER_ADMIN))).unwrap()

    result = await container.invoicing.create_invoice(_invoice(course.id))

    assert result.error.kind == ErrorKind.MISSING_PRICING_RULE
    assert await _course_status(container, course.id) == "billing_ready"


async def test_only_accounting_creates_invoices(container):
    course = await billing_ready_course(container, roster=1, attended=1)
    result = await container.invoicing.create_invoice(CreateInvoiceCommand(course_id=course.id, issued_by=ADMIN))
    assert result.error.kind == ErrorKind.FORBIDDEN


async def test_notifier_failure_does_not_undo_the_invoice(settings):
    container = build_container(settings, clock=lambda: TODAY, notifier=FailingNotifier())
    await container.start()
    try:
        await seed_reference_data(container.database)
        course = await billing_ready_course(container, roster=2, attended=2)

        invoice = (await container.invoicing.create_invoice(_invoice(course.id))).unwrap()

        assert invoice.amount == Decimal("100.00")
        assert await _course_status(container, course.id) == "invoiced"
    finally:
        await container.stop()


async def test_attendance_is_frozen_once_invoiced(container):
    course = await scheduled_course(container)
    student_ids = await enroll(container, course.id, 2)
    await mark_present(container, course.id, student_ids[:1])
    (await container.lifecycle.complete_course(CompleteCourseCommand(course_id=course.id, issued_by=INSTRUCTOR))).unwrap()

    # corrections are still accepted before invoicing
    correction = SetAttendanceCommand(course_id=course.id, student_id=student_ids[1], attended=True, issued_by=INSTRUCTOR)
    assert (await container.attendance.set_attendance(correction)).unwrap().attended_count == 2

    await add_pricing_rule(container)
    (await container.lifecycle.mark_billing_ready(MarkBillingReadyCommand(course_id=course.id, issued_by=ADMIN))).unwrap()
    invoice = (await container.invoicing.create_invoice(_invoice(course.id))).unwrap()
    assert invoice.attended_count == 2

    late = SetAttendanceCommand(course_id=course.id, student_id=student_ids[1], attended=False, issued_by=INSTRUCTOR)
    result = await container.attendance.set_attendance(late)
    assert result.error.kind == ErrorKind.INVALID_TRANSITION


@pytest.mark.parametrize("attendance_first", [True, False])
async def test_attendance_racing_invoicing_is_billed_or_rejected(container, attendance_first):
    course = await scheduled_course(container)
    student_ids = await enroll(container, course.id, 2)
    await mark_present(container, course.id, student_ids[:1])
    (await container.lifecycle.complete_course(CompleteCourseCommand(course_id=course.id, issued_by=INSTRUCTOR))).unwrap()
    await add_pricing_rule(container, price="50.00")
    (await container.lifecycle.mark_billing_ready(MarkBillingReadyCommand(course_id=course.id, issued_by=ADMIN))).unwrap()

    correction = SetAttendanceCommand(course_id=course.id, student_id=student_ids[1], attended=True, issued_by=INSTRUCTOR)
    calls = [container.attendance.set_attendance(correction), container.invoicing.create_invoice(_invoice(course.id))]
    if not attendance_first:
        calls.reverse()
    results = await asyncio.gather(*calls)
    if not attendance_first:
        results.reverse()
    attendance, invoicing = results

    invoice = invoicing.unwrap()
    async with container.uow_factory() as uow:
        committed = await uow.students.count_attended(course.id)
    # the invoice counts exactly the flags that were committed
    assert invoice.attended_count == committed
    assert invoice.amount == Decimal(committed) * Decimal("50.00")
    if attendance.is_success():
        assert committed == 2
        assert attendance.unwrap().attended_count == 2
    else:
        assert attendance.error.kind == ErrorKind.INVALID_TRANSITION
        assert committed == 1
    assert await _course_status(container, course.id) == "invoiced"
