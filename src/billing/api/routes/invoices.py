"""
Invoice and Payment Routes
"""
from __future__ import annotations

from fastapi import APIRouter, status

from billing.api.dependencies import AccountingActor, Invoicing, InvoiceQueries, Payments
from billing.api.schemas import (
    CreateInvoiceRequest,
    InvoiceDetailResponse,
    InvoiceResponse,
    PaymentResponse,
    RecordPaymentRequest,
)
from billing.application.commands import (
    CreateInvoiceCommand,
    MarkInvoicePaidCommand,
    RecordPaymentCommand,
)
from shared.api.response_models import ERROR_RESPONSES, SuccessResponse

router = APIRouter(responses=ERROR_RESPONSES)


@router.post(
    "",
    response_model=SuccessResponse[InvoiceResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create Invoice",
    description="Invoice a billing-ready course; a second call for the same course is a conflict.",
)
async def create_invoice(body: CreateInvoiceRequest, actor: AccountingActor, invoicing: Invoicing):
    command = CreateInvoiceCommand(course_id=body.course_id, invoice_date=body.invoice_date, issued_by=actor)
    dto = (await invoicing.create_invoice(command)).unwrap()
    return SuccessResponse(data=InvoiceResponse.model_validate(dto), message="Invoice created")


@router.get("", response_model=SuccessResponse[list[InvoiceResponse]], summary="List Invoices")
async def list_invoices(actor: AccountingActor, queries: InvoiceQueries):
    dtos = (await queries.list_invoices(actor)).unwrap()
    return SuccessResponse(data=[InvoiceResponse.model_validate(d) for d in dtos])


@router.get("/{invoice_id}", response_model=SuccessResponse[InvoiceDetailResponse], summary="Invoice Detail")
async def invoice_detail(invoice_id: int, actor: AccountingActor, queries: InvoiceQueries):
    dto = (await queries.invoice_detail(actor, invoice_id)).unwrap()
    return SuccessResponse(data=InvoiceDetailResponse.model_validate(dto))


@router.post(
    "/{invoice_id}/payments",
    response_model=SuccessResponse[PaymentResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Record Payment",
)
async def record_payment(invoice_id: int, body: RecordPaymentRequest, actor: AccountingActor, payments: Payments):
    command = RecordPaymentCommand(
        invoice_id=invoice_id,
        amount=body.amount,
        payment_date=body.payment_date,
        method=body.method,
        reference=body.reference,
        notes=body.notes,
        issued_by=actor,
    )
    dto = (await payments.record_payment(command)).unwrap()
    return SuccessResponse(data=PaymentResponse.model_validate(dto), message="Payment recorded")


@router.post("/{invoice_id}/mark-paid", response_model=SuccessResponse[InvoiceResponse], summary="Confirm Paid")
async def mark_paid(invoice_id: int, actor: AccountingActor, payments: Payments):
    dto = (await payments.mark_invoice_paid(MarkInvoicePaidCommand(invoice_id=invoice_id, issued_by=actor))).unwrap()
    return SuccessResponse(data=InvoiceResponse.model_validate(dto), message="Invoice marked paid")
