from datetime import date
from decimal import Decimal

import pytest

from billing.domain.entities import Invoice, Payment
from billing.domain.services.billing_calculator import (
    BillingCalculator,
    fits_storage,
    format_money,
    invoice_number,
    to_money,
)
from billing.domain.value_objects.payment_status import (
    PaymentStatus,
    PresentedStatus,
    presented_status,
)
from shared.exceptions import ValidationError


def test_amount_is_attended_times_rate():
    draft = BillingCalculator().calculate(7, 12, Decimal("50"), date(2026, 3, 2))
    assert draft.amount == Decimal("600")
    assert format_money(draft.amount) == "600.00"
    assert draft.invoice_number == "20260302-7"
    assert draft.due_date == date(2026, 4, 1)


def test_zero_attendance_is_a_zero_invoice():
    draft = BillingCalculator().calculate(3, 0, Decimal("75.50"), date(2026, 1, 31))
    assert draft.amount == 0
    assert format_money(draft.amount) == "0.00"
    assert draft.due_date == date(2026, 3, 2)


def test_no_rounding_until_presentation():
    draft = BillingCalculator().calculate(1, 3, Decimal("33.3333"), date(2026, 3, 2))
    assert draft.amount == Decimal("99.9999")
    assert to_money(draft.amount) == Decimal("100.00")


def test_payment_terms_are_configurable():
    draft = BillingCalculator(payment_terms_days=14).calculate(1, 1, Decimal("1"), date(2026, 3, 2))
    assert draft.due_date == date(2026, 3, 16)


@pytest.mark.parametrize("attended, rate", [(-1, Decimal("1")), (1, Decimal("-0.01"))])
def test_negative_inputs_are_rejected(attended, rate):
    with pytest.raises(ValueError):
        BillingCalculator().calculate(1, attended, rate, date(2026, 3, 2))


def test_invoice_number_format():
    assert invoice_number(date(2025, 12, 9), 42) == "20251209-42"


def test_presented_status():
    due = date(2026, 4, 1)
    assert presented_status(PaymentStatus.PENDING, due, date(2026, 4, 1)) == PresentedStatus.PENDING
    assert presented_status(PaymentStatus.PENDING, due, date(2026, 4, 2)) == PresentedStatus.OVERDUE
    assert presented_status(PaymentStatus.PAID, due, date(2027, 1, 1)) == PresentedStatus.PAID


@pytest.mark.parametrize(
    "amount, fits",
    [
        ("33.3333", True),
        ("33.33330000", True),
        ("99999999.9999", True),
        ("33.333333", False),
        ("100000000", False),
        ("-100000000", False),
    ],
)
def test_fits_storage(amount, fits):
    assert fits_storage(Decimal(amount)) is fits


def _draft_invoice():
    return Invoice.from_draft(BillingCalculator().calculate(7, 2, Decimal("50"), date(2026, 3, 2)))


def test_payment_needs_a_persisted_invoice():
    with pytest.raises(RuntimeError, match="not been persisted"):
        Payment.record(_draft_invoice(), Decimal("10"), date(2026, 3, 3))


def test_payment_reference_length_is_checked_before_persisting():
    invoice = _draft_invoice()
    invoice.id = 1
    with pytest.raises(ValidationError) as exc:
        Payment.record(invoice, Decimal("10"), date(2026, 3, 3), reference="R" * 101)
    assert exc.value.details == {"field": "reference"}
    assert Payment.record(invoice, Decimal("10"), date(2026, 3, 3), reference="R" * 100).invoice_id == 1


def test_invoice_amount_beyond_storage_is_rejected():
    draft = BillingCalculator().calculate(7, 2, Decimal("99999999"), date(2026, 3, 2))
    with pytest.raises(ValidationError):
        Invoice.from_draft(draft)
