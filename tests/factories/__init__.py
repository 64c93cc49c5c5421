"""Test factories for generating test data."""

from tests.factories.customer import CustomerCreateFactory
from tests.factories.inventory import CategoryCreateFactory, CostumeItemCreateFactory
from tests.factories.organization import OrganizationFactory
from tests.factories.user import UserFactory


__all__ = [
    "CategoryCreateFactory",
    "CostumeItemCreateFactory",
    "CustomerCreateFactory",
    "OrganizationFactory",
    "UserFactory",
]
