from datetime import timedelta
from decimal import Decimal

import pytest

from billing.application.commands import CreateInvoiceCommand, MarkInvoicePaidCommand, RecordPaymentCommand
from billing.application.services import InvoiceQueryService
from shared.error_codes import ErrorKind
from tests.helpers import ACCOUNTANT, ADMIN, TODAY, billing_ready_course

pytestmark = pytest.mark.anyio


async def _invoiced(container, attended: int = 12, price: str | None = "50.00"):
    course = await billing_ready_course(container, roster=attended, attended=attended, price=price)
    command = CreateInvoiceCommand(course_id=course.id, issued_by=ACCOUNTANT)
    return (await container.invoicing.create_invoice(command)).unwrap()


def _payment(invoice_id: int, amount: str, **kwargs) -> RecordPaymentCommand:
    return RecordPaymentCommand(invoice_id=invoice_id, amount=Decimal(amount), issued_by=ACCOUNTANT, **kwargs)


async def test_partial_payments_leave_the_invoice_pending(container):
    invoice = await _invoiced(container)

    first = (await container.payments.record_payment(_payment(invoice.id, "200", method="cheque"))).unwrap()
    (await container.payments.record_payment(_payment(invoice.id, "150.25", reference="EFT-77"))).unwrap()

    assert first.payment_date == TODAY
    detail = (await container.invoice_queries.invoice_detail(ACCOUNTANT, invoice.id)).unwrap()
    assert detail.paid_total == Decimal("350.25")
    assert detail.balance == Decimal("249.75")
    assert [p.amount for p in detail.payments] == [Decimal("200.00"), Decimal("150.25")]
    assert detail.invoice.status == "pending"


async def test_full_payment_does_not_mark_paid_by_itself(container):
    invoice = await _invoiced(container)
    (await container.payments.record_payment(_payment(invoice.id, "600"))).unwrap()

    detail = (await container.invoice_queries.invoice_detail(ACCOUNTANT, invoice.id)).unwrap()
    assert detail.balance == Decimal("0.00")
    assert detail.invoice.status == "pending"


async def test_mark_paid_once(container):
    invoice = await _invoiced(container)
    command = MarkInvoicePaidCommand(invoice_id=invoice.id, issued_by=ACCOUNTANT)

    paid = (await container.payments.mark_invoice_paid(command)).unwrap()
    assert paid.status == "paid"
    assert paid.paid_at is not None

    again = await container.payments.mark_invoice_paid(command)
    assert again.error.kind == ErrorKind.CONFLICT

    late = await container.payments.record_payment(_payment(invoice.id, "10"))
    assert late.error.kind == ErrorKind.CONFLICT


@pytest.mark.parametrize("amount", ["0", "-5"])
async def test_payment_amount_must_be_positive(container, amount):
    invoice = await _invoiced(container)
    result = await container.payments.record_payment(_payment(invoice.id, amount))
    assert result.error.kind == ErrorKind.VALIDATION


@pytest.mark.parametrize(
    "amount, extra",
    [
        ("10.00001", {}),
        ("100000000", {}),
        ("10", {"method": "m" * 51}),
        ("10", {"reference": "R" * 101}),
        ("10", {"notes": "n" * 501}),
    ],
)
async def test_payment_fields_must_fit_their_columns(container, amount, extra):
    invoice = await _invoiced(container)
    result = await container.payments.record_payment(_payment(invoice.id, amount, **extra))
    assert result.error.kind == ErrorKind.VALIDATION


async def test_payment_at_the_column_limits_is_stored_intact(container):
    invoice = await _invoiced(container)
    reference, notes = "R" * 100, "n" * 500
    (await container.payments.record_payment(_payment(invoice.id, "12.3456", reference=reference, notes=notes))).unwrap()

    async with container.uow_factory() as uow:
        (payment,) = await uow.payments.list_for_invoice(invoice.id)
    assert payment.amount == Decimal("12.3456")
    assert payment.reference == reference
    assert payment.notes == notes


async def test_unknown_invoice(container):
    result = await container.payments.record_payment(_payment(404, "10"))
    assert result.error.kind == ErrorKind.NOT_FOUND
    result = await container.invoice_queries.invoice_detail(ACCOUNTANT, 404)
    assert result.error.kind == ErrorKind.NOT_FOUND


async def test_unpaid_invoice_is_overdue_after_the_due_date(container):
    invoice = await _invoiced(container)
    later = InvoiceQueryService(container.uow_factory, clock=lambda: TODAY + timedelta(days=40))

    (listed,) = (await later.list_invoices(ACCOUNTANT)).unwrap()
    assert listed.status == "overdue"
    assert listed.due_date == invoice.due_date

    (await container.payments.mark_invoice_paid(MarkInvoicePaidCommand(invoice_id=invoice.id, issued_by=ACCOUNTANT))).unwrap()
    (listed,) = (await later.list_invoices(ACCOUNTANT)).unwrap()
    assert listed.status == "paid"


async def test_invoice_list_is_newest_first_with_organization(container):
    first = await _invoiced(container, attended=2)
    # same organization and course type; the pricing rule already exists
    second = await _invoiced(container, attended=3, price=None)

    invoices = (await container.invoice_queries.list_invoices(ACCOUNTANT)).unwrap()

    assert [i.id for i in invoices] == [second.id, first.id]
    assert {i.organization_name for i in invoices} == {"Acme Corp"}
    assert invoices[0].course_number == second.course_number


async def test_invoices_are_accounting_only(container):
    result = await container.invoice_queries.list_invoices(ADMIN)
    assert result.error.kind == ErrorKind.FORBIDDEN
