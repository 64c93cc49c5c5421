"""Unit tests for plan pricing keys and limits."""

import pytest

from costumetrack.modules.billing.services import apply_plan, is_free_plan, price_key
from costumetrack.modules.organizations.models import (
    BillingCycle,
    Organization,
    PlanTier,
    StorageSize,
)


pytestmark = pytest.mark.unit


def test_only_core_small_is_free():
    assert is_free_plan(PlanTier.CORE, StorageSize.SMALL) is True
    assert is_free_plan(PlanTier.CORE, StorageSize.MEDIUM) is False
    assert is_free_plan(PlanTier.PRO, StorageSize.SMALL) is False


def test_price_key():
    assert price_key(PlanTier.PRO, StorageSize.MEDIUM, BillingCycle.ANNUAL) == (
        "PRO_MEDIUM_ANNUAL"
    )


@pytest.mark.parametrize(
    ("tier", "size", "max_items", "max_users"),
    [
        (PlanTier.CORE, StorageSize.SMALL, 500, 1),
        (PlanTier.PRO, StorageSize.MEDIUM, 2000, 3),
        (PlanTier.TEAM, StorageSize.LARGE, 5000, None),
    ],
)
def test_apply_plan_sets_limits(tier, size, max_items, max_users):
    organization = Organization(name="Globe", slug="globe")

    apply_plan(organization, tier, size, BillingCycle.MONTHLY)

    assert organization.plan_tier == tier
    assert organization.storage_size == size
    assert organization.max_items == max_items
    assert organization.max_users == max_users
