"""
Billing API Schemas
Money travels as decimal strings ("600.00")
"""
from __future__ import annotations

from datetime import date, datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class CreatePricingRuleRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    organization_id: int
    course_type_id: int
    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=4, description="Rate per attended student")


class UpdatePricingRuleRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    price: Decimal = Field(..., ge=0, max_digits=12, decimal_places=4)


class CreateInvoiceRequest(BaseModel):
    model_config = ConfigDict(extra="forbid")

    course_id: int
    invoice_date: Optional[date] = Field(None, description="Defaults to today")


class RecordPaymentRequest(BaseModel):
    model_config = ConfigDict(extra="forbid", str_strip_whitespace=True)

    amount: Decimal = Field(..., gt=0, max_digits=12, decimal_places=4)
    payment_date: Optional[date] = None
    method: Optional[str] = Field(None, max_length=50)
    reference: Optional[str] = Field(None, max_length=100)
    notes: Optional[str] = Field(None, max_length=500)


class PricingRuleResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    organization_id: int
    course_type_id: int
    price: Decimal
    organization_name: Optional[str] = None
    course_type_name: Optional[str] = None
    updated_at: Optional[datetime] = None


class InvoiceResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_number: str
    course_id: int
    invoice_date: date
    due_date: date
    amount: Decimal
    attended_count: int
    status: str = Field(..., description="pending, overdue or paid")
    paid_at: Optional[datetime]
    created_at: datetime
    course_number: Optional[str] = None
    organization_id: Optional[int] = None
    organization_name: Optional[str] = None


class PaymentResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    invoice_id: int
    amount: Decimal
    payment_date: date
    method: Optional[str]
    reference: Optional[str]
    notes: Optional[str]


class InvoiceDetailResponse(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    invoice: InvoiceResponse
    payments: list[PaymentResponse]
    paid_total: Decimal
    balance: Decimal
