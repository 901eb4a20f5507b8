from billing.domain.value_objects.payment_status import (
    PaymentStatus,
    PresentedStatus,
    presented_status,
)

__all__ = ["PaymentStatus", "PresentedStatus", "presented_status"]
