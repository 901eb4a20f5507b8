from billing.application.dto.billing_dto import (
    InvoiceDetailDTO,
    InvoiceDTO,
    PaymentDTO,
    PricingRuleDTO,
)

__all__ = ["PricingRuleDTO", "InvoiceDTO", "PaymentDTO", "InvoiceDetailDTO"]
