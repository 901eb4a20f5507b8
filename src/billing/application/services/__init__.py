from billing.application.services.invoice_query_service import InvoiceQueryService
from billing.application.services.invoicing_service import InvoicingService
from billing.application.services.payment_service import PaymentService
from billing.application.services.pricing_catalog_service import PricingCatalogService

__all__ = [
    "PricingCatalogService",
    "InvoicingService",
    "PaymentService",
    "InvoiceQueryService",
]
