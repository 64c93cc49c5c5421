"""Unit tests for slug generation."""

import pytest

from costumetrack.core.utils.text import blank_to_none, generate_slug, with_suffix


pytestmark = pytest.mark.unit


class TestGenerateSlug:
    @pytest.mark.parametrize(
        ("name", "expected"),
        [
            ("Acme", "acme"),
            ("My Theatre Company", "my-theatre-company"),
            ("  Hello!! World@2024 ", "hello-world-2024"),
            ("--Café Opéra--", "caf-op-ra"),
            ("!!!", ""),
        ],
    )
    def test_generate_slug(self, name: str, expected: str):
        assert generate_slug(name) == expected

    def test_slug_is_capped(self):
        assert len(generate_slug("a" * 80)) == 50


class TestWithSuffix:
    def test_first_attempt_is_bare(self):
        assert with_suffix("acme", 0) == "acme"

    def test_later_attempts_are_numbered(self):
        assert [with_suffix("acme", n) for n in (1, 2)] == ["acme-1", "acme-2"]


def test_blank_to_none():
    assert blank_to_none("   ") is None
    assert blank_to_none(None) is None
    assert blank_to_none(" x ") == "x"
