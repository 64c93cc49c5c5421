"""Unit tests for upload object keys."""

from uuid import uuid4

import pytest

from costumetrack.core.auth import OrgContext, Role
from costumetrack.modules.uploads.services import organization_prefix, safe_filename


pytestmark = pytest.mark.unit


@pytest.mark.parametrize(
    ("filename", "expected"),
    [
        ("gown.jpg", "gown.jpg"),
        ("../My Dress (front).JPG", "My-Dress-front-.JPG"),
        ("C:\\photos\\hat.png", "hat.png"),
        ("...", "upload"),
        (None, "upload"),
    ],
)
def test_safe_filename(filename, expected):
    assert safe_filename(filename) == expected


def test_prefix_is_per_organization():
    org = OrgContext(organization_id=uuid4(), user_id=uuid4(), role=Role.MEMBER)

    assert organization_prefix(org) == f"costumes/{org.organization_id}/"
