"""
Billing Service Dependencies
"""
from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from billing.application.services import (
    InvoiceQueryService,
    InvoicingService,
    PaymentService,
    PricingCatalogService,
)
from shared.api.dependencies import get_container, require_roles
from shared.roles import ACCOUNTING, PRICING_MANAGERS, Actor


def get_pricing_catalog(container=Depends(get_container)) -> PricingCatalogService:
    return container.pricing_catalog


def get_invoicing_service(container=Depends(get_container)) -> InvoicingService:
    return container.invoicing


def get_payment_service(container=Depends(get_container)) -> PaymentService:
    return container.payments


def get_invoice_queries(container=Depends(get_container)) -> InvoiceQueryService:
    return container.invoice_queries


PricingCatalog = Annotated[PricingCatalogService, Depends(get_pricing_catalog)]
Invoicing = Annotated[InvoicingService, Depends(get_invoicing_service)]
Payments = Annotated[PaymentService, Depends(get_payment_service)]
InvoiceQueries = Annotated[InvoiceQueryService, Depends(get_invoice_queries)]

AccountingActor = Annotated[Actor, Depends(require_roles(*ACCOUNTING))]
PricingManager = Annotated[Actor, Depends(require_roles(*PRICING_MANAGERS))]
