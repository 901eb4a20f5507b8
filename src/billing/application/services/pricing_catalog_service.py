"""
Pricing Catalog Service
Rate per attended student for each (organization, course type) pair
"""
from __future__ import annotations

from sqlalchemy.exc import IntegrityError

from billing.application.commands import (
    CreatePricingRuleCommand,
    DeletePricingRuleCommand,
    UpdatePricingRuleCommand,
)
from billing.application.dto import PricingRuleDTO
from billing.domain.entities.pricing_rule import PricingRule
from courses.infrastructure.adapters.course_unit_of_work import UnitOfWorkFactory
from shared.application.operation import operation
from shared.exceptions import ConflictError, NotFoundError, ValidationError
from shared.infrastructure.database.errors import violates_unique
from shared.infrastructure.observability.logger import get_logger
from shared.roles import PRICING_MANAGERS, Actor, ensure_role

logger = get_logger(__name__)


class PricingCatalogService:
    """
    Owner of the pricing rules.

    There is no fallback rate: a course whose pair has no rule cannot be
    marked billing-ready or invoiced. Only super admins manage the catalog.
    """

    def __init__(self, uow_factory: UnitOfWorkFactory) -> None:
        self._uow_factory = uow_factory

    @operation
    async def create_rule(self, command: CreatePricingRuleCommand) -> PricingRuleDTO:
        ensure_role(command.issued_by, PRICING_MANAGERS, "manage pricing rules")
        rule = PricingRule.create(command.organization_id, command.course_type_id, command.price)
        uow = self._uow_factory()
        try:
            async with uow:
                organization = await uow.references.get_organization(command.organization_id)
                course_type = await uow.references.get_course_type(command.course_type_id)
                if organization is None or course_type is None:
                    raise ValidationError(
                        "Unknown organization or course type.",
                        details={
                            "organization_id": command.organization_id,
                            "course_type_id": command.course_type_id,
                        },
                    )
                if await uow.pricing_rules.find(command.organization_id, command.course_type_id):
                    raise self._duplicate(command)
                await uow.pricing_rules.add(rule)
                await uow.commit()
        except IntegrityError as e:
            if violates_unique(e, "pricing_rules", "organization_id", "course_type_id"):
                raise self._duplicate(command)
            raise
        logger.info(
            "pricing_rule_created",
            rule_id=rule.id,
            organization_id=rule.organization_id,
            course_type_id=rule.course_type_id,
            price=str(rule.price),
        )
        return PricingRuleDTO.from_entity(rule, organization, course_type)

    @operation
    async def update_price(self, command: UpdatePricingRuleCommand) -> PricingRuleDTO:
        ensure_role(command.issued_by, PRICING_MANAGERS, "manage pricing rules")
        uow = self._uow_factory()
        async with uow:
            rule = await self._get_rule(uow, command.rule_id)
            previous = rule.price
            rule.change_price(command.price)
            await uow.pricing_rules.update_price(rule)
            organization = await uow.references.get_organization(rule.organization_id)
            course_type = await uow.references.get_course_type(rule.course_type_id)
            await uow.commit()
        logger.info("pricing_rule_updated", rule_id=rule.id, old_price=str(previous), new_price=str(rule.price))
        return PricingRuleDTO.from_entity(rule, organization, course_type)

    @operation
    async def delete_rule(self, command: DeletePricingRuleCommand) -> None:
        ensure_role(command.issued_by, PRICING_MANAGERS, "manage pricing rules")
        uow = self._uow_factory()
        async with uow:
            if not await uow.pricing_rules.delete(command.rule_id):
                raise NotFoundError(
                    f"Pricing rule {command.rule_id} does not exist.",
                    details={"rule_id": command.rule_id},
                )
            await uow.commit()
        logger.info("pricing_rule_deleted", rule_id=command.rule_id)

    @operation
    async def list_rules(self, actor: Actor) -> list[PricingRuleDTO]:
        ensure_role(actor, PRICING_MANAGERS, "view pricing rules")
        async with self._uow_factory() as uow:
            rules = await uow.pricing_rules.list_all()
            organizations = await uow.references.organizations(r.organization_id for r in rules)
            course_types = await uow.references.course_types(r.course_type_id for r in rules)
        return [
            PricingRuleDTO.from_entity(
                r, organizations.get(r.organization_id), course_types.get(r.course_type_id)
            )
            for r in rules
        ]

    @staticmethod
    async def _get_rule(uow, rule_id: int) -> PricingRule:
        rule = await uow.pricing_rules.get(rule_id)
        if rule is None:
            raise NotFoundError(f"Pricing rule {rule_id} does not exist.", details={"rule_id": rule_id})
        return rule

    @staticmethod
    def _duplicate(command: CreatePricingRuleCommand) -> ConflictError:
        return ConflictError(
            "A pricing rule already exists for this organization and course type.",
            details={
                "organization_id": command.organization_id,
                "course_type_id": command.course_type_id,
            },
        )
