from billing.api.schemas.billing_schemas import (
    CreateInvoiceRequest,
    CreatePricingRuleRequest,
    InvoiceDetailResponse,
    InvoiceResponse,
    PaymentResponse,
    PricingRuleResponse,
    RecordPaymentRequest,
    UpdatePricingRuleRequest,
)

__all__ = [
    "CreatePricingRuleRequest",
    "UpdatePricingRuleRequest",
    "CreateInvoiceRequest",
    "RecordPaymentRequest",
    "PricingRuleResponse",
    "InvoiceResponse",
    "PaymentResponse",
    "InvoiceDetailResponse",
]
