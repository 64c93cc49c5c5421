"""Unit tests for pagination parameters and the page envelope."""

import pytest

from costumetrack.core.constants import MAX_PAGE_SIZE
from costumetrack.core.pagination import Page, PageParams


pytestmark = pytest.mark.unit


class TestPageParams:
    def test_clamp_raises_page_to_one(self):
        assert PageParams.clamp(0, 10).page == 1
        assert PageParams.clamp(-3, 10).page == 1

    def test_clamp_limits_page_size(self):
        """Oversized and non-positive page sizes are clamped."""
        assert PageParams.clamp(1, 10_000).page_size == MAX_PAGE_SIZE
        assert PageParams.clamp(1, 0).page_size == 1

    def test_offset(self):
        assert PageParams.clamp(3, 10).offset == 20


class TestPage:
    def test_middle_page(self):
        """Page 2 of size 10 over 25 rows has neighbours on both sides."""
        params = PageParams.clamp(2, 10)
        page = Page.create(list(range(10)), total=25, params=params)

        assert len(page.items) == 10
        assert page.total_pages == 3
        assert page.has_next is True
        assert page.has_prev is True

    def test_last_page(self):
        page = Page.create([1, 2, 3, 4, 5], total=25, params=PageParams.clamp(3, 10))

        assert page.has_next is False
        assert page.has_prev is True

    def test_empty(self):
        page = Page.create([], total=0, params=PageParams.clamp(1, 10))

        assert page.total_pages == 0
        assert page.has_next is False
        assert page.has_prev is False
