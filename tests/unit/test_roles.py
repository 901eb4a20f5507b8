import pytest

from shared.exceptions import ForbiddenError
from shared.roles import ACCOUNTING, ADMINS, PRICING_MANAGERS, Actor, Role, ensure_role


def test_super_admin_holds_every_back_office_capability():
    for allowed in (ADMINS, ACCOUNTING, PRICING_MANAGERS):
        assert Role.SUPER_ADMIN in allowed


def test_accounting_cannot_schedule():
    with pytest.raises(ForbiddenError) as exc:
        ensure_role(Actor(user_id=3, role=Role.ACCOUNTING), ADMINS, "schedule courses")
    assert exc.value.details["allowed"] == ["Admin", "SuperAdmin"]


def test_admin_may_schedule():
    ensure_role(Actor(user_id=2, role=Role.ADMIN), ADMINS, "schedule courses")


def test_unknown_role_value():
    with pytest.raises(ValueError):
        Role("Janitor")
