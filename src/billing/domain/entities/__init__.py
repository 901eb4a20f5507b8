from billing.domain.entities.invoice import Invoice, Payment
from billing.domain.entities.pricing_rule import PricingRule

__all__ = ["PricingRule", "Invoice", "Payment"]
