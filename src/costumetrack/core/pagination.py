"""Pagination parameters and the paged response envelope."""

import math
from typing import Annotated, Generic, Self, TypeVar

from fastapi import Depends, Query
from pydantic import BaseModel

from costumetrack.core.constants import DEFAULT_PAGE_SIZE, MAX_PAGE_SIZE


T = TypeVar("T")


class PageParams(BaseModel):
    """A validated page request.

    Attributes:
        page: 1-indexed page number
        page_size: Rows per page, between 1 and MAX_PAGE_SIZE
    """

    page: int = 1
    page_size: int = DEFAULT_PAGE_SIZE

    @classmethod
    def clamp(cls, page: int, page_size: int) -> "PageParams":
        """Build params, raising the page to 1 and clamping the size.

        Examples:
            >>> PageParams.clamp(0, 500)
            PageParams(page=1, page_size=100)
        """
        return cls(
            page=max(1, page),
            page_size=min(MAX_PAGE_SIZE, max(1, page_size)),
        )

    @property
    def offset(self) -> int:
        return (self.page - 1) * self.page_size


def get_page_params(
    page: Annotated[int, Query(description="Page number, starting at 1")] = 1,
    page_size: Annotated[
        int, Query(description=f"Rows per page, at most {MAX_PAGE_SIZE}")
    ] = DEFAULT_PAGE_SIZE,
) -> PageParams:
    """Read pagination from the query string."""
    return PageParams.clamp(page, page_size)


Pagination = Annotated[PageParams, Depends(get_page_params)]


class Page(BaseModel, Generic[T]):
    """Paged list response."""

    items: list[T]
    total: int
    page: int
    page_size: int
    total_pages: int
    has_next: bool
    has_prev: bool

    @classmethod
    def create(cls, items: list[T], total: int, params: PageParams) -> Self:
        total_pages = math.ceil(total / params.page_size)
        return cls(
            items=items,
            total=total,
            page=params.page,
            page_size=params.page_size,
            total_pages=total_pages,
            has_next=params.page < total_pages,
            has_prev=params.page > 1,
        )
