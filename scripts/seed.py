#!/usr/bin/env python
"""
Seed reference data, and optionally a demo organization, for development.
"""

import argparse
import asyncio
import sys
from decimal import Decimal

from sqlalchemy import select


# Add src to path for imports
sys.path.insert(0, "src")

from costumetrack.core.auth import OrgContext, Role, hash_password
from costumetrack.core.database import async_session_factory
from costumetrack.modules.customers.models import Customer
from costumetrack.modules.inventory.models import CostumeItem, ItemCondition
from costumetrack.modules.inventory.repos import CategoryRepository
from costumetrack.modules.inventory.services import CategoryService
from costumetrack.modules.invites.models import SystemInviteCode
from costumetrack.modules.organizations.models import Organization
from costumetrack.modules.organizations.repos import (
    LabelFormatRepository,
    OrganizationRepository,
)
from costumetrack.modules.organizations.services import LabelFormatService
from costumetrack.modules.users.models import User


LAUNCH_INVITE_CODE = "COSTUME2025"
DEMO_EMAIL = "demo@costumetrack.com"
DEMO_PASSWORD = "demo-password"
DEMO_SLUG = "demo-theatre"

DEMO_ITEMS = (
    ("Victorian Ball Gown", "VB-001", "M", "Burgundy", "1880s", "45.00"),
    ("Tailcoat", "TC-014", "L", "Black", "1900s", "30.00"),
    ("Flapper Dress", "FD-007", "S", "Silver", "1920s", "35.00"),
    ("Tricorn Hat", "TH-003", None, "Brown", "1700s", "10.00"),
)


async def seed_default() -> None:
    """Create the label format presets and the launch invite code."""
    async with async_session_factory() as session:
        service = LabelFormatService(
            LabelFormatRepository(session), OrganizationRepository(session)
        )
        created = await service.seed_presets()
        print(f"Label format presets created: {created}")

        result = await session.execute(
            select(SystemInviteCode).where(SystemInviteCode.code == LAUNCH_INVITE_CODE)
        )
        if result.scalar_one_or_none():
            print(f"Invite code already exists: {LAUNCH_INVITE_CODE}")
        else:
            session.add(
                SystemInviteCode(
                    code=LAUNCH_INVITE_CODE,
                    description="Launch invite code",
                    max_uses=None,
                    is_active=True,
                    created_by="seed",
                )
            )
            print(f"Created invite code: {LAUNCH_INVITE_CODE} (unlimited)")

        await session.commit()


async def seed_demo() -> None:
    """Create a demo organization with an owner, categories and stock."""
    await seed_default()

    async with async_session_factory() as session:
        result = await session.execute(
            select(Organization).where(Organization.slug == DEMO_SLUG)
        )
        existing = result.scalar_one_or_none()
        if existing:
            print(f"Demo organization already exists: {existing.name}")
            return

        organization = Organization(
            name="Demo Theatre",
            slug=DEMO_SLUG,
            public_page_enabled=True,
        )
        session.add(organization)
        await session.flush()

        owner = User(
            email=DEMO_EMAIL,
            password_hash=hash_password(DEMO_PASSWORD),
            name="Demo Owner",
            role=Role.OWNER,
            organization_id=organization.id,
        )
        session.add(owner)
        await session.flush()

        org = OrgContext(
            organization_id=organization.id,
            user_id=owner.id,
            role=Role.OWNER,
        )
        await CategoryService(CategoryRepository(session)).create_defaults(org)

        for name, sku, size, color, era, price in DEMO_ITEMS:
            session.add(
                CostumeItem(
                    organization_id=organization.id,
                    name=name,
                    sku=sku,
                    size=size,
                    color=color,
                    era=era,
                    condition=ItemCondition.GOOD,
                    rental_price=Decimal(price),
                )
            )

        session.add(
            Customer(
                organization_id=organization.id,
                name="Riverside Players",
                email="wardrobe@riverside.example",
                company="Riverside Community Theatre",
            )
        )

        await session.commit()
        print(f"Created demo organization: {organization.name} ({organization.id})")
        print(f"Login: {DEMO_EMAIL} / {DEMO_PASSWORD}")


async def main(scenario: str) -> None:
    """Run the seeding based on scenario."""
    if scenario == "default":
        await seed_default()
    elif scenario == "demo":
        await seed_demo()
    else:
        print(f"Unknown scenario: {scenario}")
        print("Available scenarios: default, demo")
        sys.exit(1)


if __name__ == "__main__":
    parser = argparse.ArgumentParser(description="Seed database with reference data")
    parser.add_argument(
        "--scenario",
        "-s",
        default="default",
        help="Seed scenario to run (default, demo)",
    )
    args = parser.parse_args()

    asyncio.run(main(args.scenario))
