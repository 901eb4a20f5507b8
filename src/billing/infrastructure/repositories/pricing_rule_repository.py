# src/billing/infrastructure/repositories/pricing_rule_repository.py
"""SQLAlchemy-backed PricingCatalog store."""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import delete, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from billing.domain.entities.pricing_rule import PricingRule
from billing.domain.repositories import PricingRuleRepository
from billing.infrastructure.models import PricingRuleModel


class SQLAlchemyPricingRuleRepository(PricingRuleRepository):

    def __init__(self, session: AsyncSession) -> None:
        self._session = session

    @staticmethod
    def _to_domain(row: PricingRuleModel) -> PricingRule:
        return PricingRule(
            id=row.id,
            organization_id=row.organization_id,
            course_type_id=row.course_type_id,
            price=row.price,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    async def add(self, rule: PricingRule) -> PricingRule:
        row = PricingRuleModel(
            organization_id=rule.organization_id,
            course_type_id=rule.course_type_id,
            price=rule.price,
        )
        self._session.add(row)
        await self._session.flush()
        rule.id = row.id
        return rule

    async def get(self, rule_id: int) -> Optional[PricingRule]:
        row = await self._session.get(PricingRuleModel, rule_id, populate_existing=True)
        return self._to_domain(row) if row else None

    async def find(self, organization_id: int, course_type_id: int) -> Optional[PricingRule]:
        stmt = select(PricingRuleModel).where(
            PricingRuleModel.organization_id == organization_id,
            PricingRuleModel.course_type_id == course_type_id,
        )
        row = (await self._session.execute(stmt)).scalars().first()
        return self._to_domain(row) if row else None

    async def update_price(self, rule: PricingRule) -> None:
        await self._session.execute(
            update(PricingRuleModel)
            .where(PricingRuleModel.id == rule.id)
            .values(price=rule.price)
            .execution_options(synchronize_session=False)
        )

    async def delete(self, rule_id: int) -> bool:
        result = await self._session.execute(delete(PricingRuleModel).where(PricingRuleModel.id == rule_id))
        return result.rowcount > 0

    async def list_all(self) -> List[PricingRule]:
        stmt = select(PricingRuleModel).order_by(
            PricingRuleModel.organization_id, PricingRuleModel.course_type_id
        )
        return [self._to_domain(r) for r in (await self._session.execute(stmt)).scalars().all()]
