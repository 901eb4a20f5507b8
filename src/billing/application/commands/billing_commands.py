"""
Billing Commands
Pricing catalog maintenance, invoicing and payments
"""
from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from typing import Optional

from shared.application.base_command import BaseCommand


@dataclass(frozen=True)
class CreatePricingRuleCommand(BaseCommand):
    organization_id: int
    course_type_id: int
    price: Decimal


@dataclass(frozen=True)
class UpdatePricingRuleCommand(BaseCommand):
    rule_id: int
    price: Decimal


@dataclass(frozen=True)
class DeletePricingRuleCommand(BaseCommand):
    rule_id: int


@dataclass(frozen=True)
class CreateInvoiceCommand(BaseCommand):
    course_id: int
    invoice_date: Optional[date] = None


@dataclass(frozen=True)
class RecordPaymentCommand(BaseCommand):
    invoice_id: int
    amount: Decimal
    payment_date: Optional[date] = None
    method: Optional[str] = None
    reference: Optional[str] = None
    notes: Optional[str] = None


@dataclass(frozen=True)
class MarkInvoicePaidCommand(BaseCommand):
    invoice_id: int
