"""
Pricing Catalog Routes (SuperAdmin only)
"""
from __future__ import annotations

from fastapi import APIRouter, status

from billing.api.dependencies import PricingCatalog, PricingManager
from billing.api.schemas import CreatePricingRuleRequest, PricingRuleResponse, UpdatePricingRuleRequest
from billing.application.commands import (
    CreatePricingRuleCommand,
    DeletePricingRuleCommand,
    UpdatePricingRuleCommand,
)
from shared.api.response_models import ERROR_RESPONSES, SuccessResponse

router = APIRouter(responses=ERROR_RESPONSES)


@router.get("", response_model=SuccessResponse[list[PricingRuleResponse]], summary="List Pricing Rules")
async def list_rules(actor: PricingManager, catalog: PricingCatalog):
    dtos = (await catalog.list_rules(actor)).unwrap()
    return SuccessResponse(data=[PricingRuleResponse.model_validate(d) for d in dtos])


@router.post(
    "",
    response_model=SuccessResponse[PricingRuleResponse],
    status_code=status.HTTP_201_CREATED,
    summary="Create Pricing Rule",
)
async def create_rule(body: CreatePricingRuleRequest, actor: PricingManager, catalog: PricingCatalog):
    command = CreatePricingRuleCommand(
        organization_id=body.organization_id,
        course_type_id=body.course_type_id,
        price=body.price,
        issued_by=actor,
    )
    dto = (await catalog.create_rule(command)).unwrap()
    return SuccessResponse(data=PricingRuleResponse.model_validate(dto), message="Pricing rule created")


@router.patch("/{rule_id}", response_model=SuccessResponse[PricingRuleResponse], summary="Change Price")
async def update_rule(rule_id: int, body: UpdatePricingRuleRequest, actor: PricingManager, catalog: PricingCatalog):
    command = UpdatePricingRuleCommand(rule_id=rule_id, price=body.price, issued_by=actor)
    dto = (await catalog.update_price(command)).unwrap()
    return SuccessResponse(data=PricingRuleResponse.model_validate(dto), message="Price updated")


@router.delete("/{rule_id}", status_code=status.HTTP_204_NO_CONTENT, summary="Delete Pricing Rule")
async def delete_rule(rule_id: int, actor: PricingManager, catalog: PricingCatalog) -> None:
    (await catalog.delete_rule(DeletePricingRuleCommand(rule_id=rule_id, issued_by=actor))).unwrap()
