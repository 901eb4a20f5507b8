from billing.infrastructure.repositories.invoice_repository import (
    SQLAlchemyInvoiceRepository,
    SQLAlchemyPaymentRepository,
)
from billing.infrastructure.repositories.pricing_rule_repository import (
    SQLAlchemyPricingRuleRepository,
)

__all__ = [
    "SQLAlchemyPricingRuleRepository",
    "SQLAlchemyInvoiceRepository",
    "SQLAlchemyPaymentRepository",
]
