from decimal import Decimal

import pytest

from billing.application.commands import (
    CreatePricingRuleCommand,
    DeletePricingRuleCommand,
    UpdatePricingRuleCommand,
)
from shared.error_codes import ErrorKind
from tests.helpers import ACME, ADMIN, CPR_A, FIRST_AID, GLOBEX, SUPER_ADMIN, add_pricing_rule

pytestmark = pytest.mark.anyio


async def test_create_update_list_and_delete(container):
    catalog = container.pricing_catalog
    rule = await add_pricing_rule(container, price="42.5")
    assert rule.price == Decimal("42.50")
    assert rule.organization_name == "Acme Corp"
    assert rule.course_type_name == "CPR Level A"

    await add_pricing_rule(container, price="30", organization_id=GLOBEX, course_type_id=FIRST_AID)

    updated = (
        await catalog.update_price(UpdatePricingRuleCommand(rule_id=rule.id, price=Decimal("45"), issued_by=SUPER_ADMIN))
    ).unwrap()
    assert updated.price == Decimal("45.00")

    rules = (await catalog.list_rules(SUPER_ADMIN)).unwrap()
    assert {(r.organization_id, r.course_type_id, r.price) for r in rules} == {
        (ACME, CPR_A, Decimal("45.00")),
        (GLOBEX, FIRST_AID, Decimal("30.00")),
    }

    assert (await catalog.delete_rule(DeletePricingRuleCommand(rule_id=rule.id, issued_by=SUPER_ADMIN))).unwrap() is None
    assert len((await catalog.list_rules(SUPER_ADMIN)).unwrap()) == 1


async def test_duplicate_pair_is_a_conflict(container):
    await add_pricing_rule(container)
    command = CreatePricingRuleCommand(
        organization_id=ACME, course_type_id=CPR_A, price=Decimal("60"), issued_by=SUPER_ADMIN
    )
    result = await container.pricing_catalog.create_rule(command)
    assert result.error.kind == ErrorKind.CONFLICT


async def test_zero_price_is_allowed(container):
    rule = await add_pricing_rule(container, price="0")
    assert rule.price == Decimal("0.00")


@pytest.mark.parametrize(
    "organization_id, course_type_id, price",
    [
        (99, CPR_A, "10"),
        (ACME, 99, "10"),
        (ACME, CPR_A, "-0.01"),
        (ACME, CPR_A, "33.333333"),
        (ACME, CPR_A, "100000000"),
    ],
)
async def test_invalid_rules_are_rejected(container, organization_id, course_type_id, price):
    command = CreatePricingRuleCommand(
        organization_id=organization_id, course_type_id=course_type_id, price=Decimal(price), issued_by=SUPER_ADMIN
    )
    result = await container.pricing_catalog.create_rule(command)
    assert result.error.kind == ErrorKind.VALIDATION


async def test_only_super_admins_manage_the_catalog(container):
    command = CreatePricingRuleCommand(
        organization_id=ACME, course_type_id=CPR_A, price=Decimal("10"), issued_by=ADMIN
    )
    assert (await container.pricing_catalog.create_rule(command)).error.kind == ErrorKind.FORBIDDEN
    assert (await container.pricing_catalog.list_rules(ADMIN)).error.kind == ErrorKind.FORBIDDEN


async def test_missing_rules_are_not_found(container):
    catalog = container.pricing_catalog
    update = UpdatePricingRuleCommand(rule_id=404, price=Decimal("1"), issued_by=SUPER_ADMIN)
    delete = DeletePricingRuleCommand(rule_id=404, issued_by=SUPER_ADMIN)
    assert (await catalog.update_price(update)).error.kind == ErrorKind.NOT_FOUND
    assert (await catalog.delete_rule(delete)).error.kind == ErrorKind.NOT_FOUND


async def test_price_is_stored_exactly(container):
    rule = await add_pricing_rule(container, price="33.3333")
    async with container.uow_factory() as uow:
        stored = await uow.pricing_rules.get(rule.id)
    assert stored.price == Decimal("33.3333")


@pytest.mark.parametrize("price", ["0.00005", "99999999.99995", "1E+8"])
async def test_price_change_must_fit_storage(container, price):
    rule = await add_pricing_rule(container)
    command = UpdatePricingRuleCommand(rule_id=rule.id, price=Decimal(price), issued_by=SUPER_ADMIN)
    result = await container.pricing_catalog.update_price(command)
    assert result.error.kind == ErrorKind.VALIDATION
