from billing.application.commands.billing_commands import (
    CreateInvoiceCommand,
    CreatePricingRuleCommand,
    DeletePricingRuleCommand,
    MarkInvoicePaidCommand,
    RecordPaymentCommand,
    UpdatePricingRuleCommand,
)

__all__ = [
    "CreatePricingRuleCommand",
    "UpdatePricingRuleCommand",
    "DeletePricingRuleCommand",
    "CreateInvoiceCommand",
    "RecordPaymentCommand",
    "MarkInvoicePaidCommand",
]
