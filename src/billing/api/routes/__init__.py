from billing.api.routes.invoices import router as invoices_router
from billing.api.routes.pricing import router as pricing_router

__all__ = ["pricing_router", "invoices_router"]
