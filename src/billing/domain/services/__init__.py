from billing.domain.services.billing_calculator import (
    PAYMENT_TERMS_DAYS,
    BillingCalculator,
    InvoiceDraft,
    fits_storage,
    format_money,
    invoice_number,
    to_money,
)

__all__ = [
    "BillingCalculator",
    "InvoiceDraft",
    "PAYMENT_TERMS_DAYS",
    "invoice_number",
    "to_money",
    "format_money",
    "fits_storage",
]
