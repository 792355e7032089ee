from math import ceil
from typing import TypeVar, Generic, List

from fastapi import Query
from pydantic import BaseModel, Field

T = TypeVar("T")


class PaginationParams(BaseModel):
    """Query parameters for pagination"""

    page: int = Field(1, ge=1, description="Page number (starts at 1)")
    page_size: int = Field(10, ge=1, le=100, description="Items per page")

    @property
    def skip(self) -> int:
        """Offset for the database query"""
        return (self.page - 1) * self.page_size

    @property
    def take(self) -> int:
        """Alias for page_size"""
        return self.page_size


class PageResult(BaseModel, Generic[T]):
    """One page of items plus its paging metadata"""

    items: List[T] = Field(default_factory=list, description="Items of the current page")
    page: int = Field(1, description="Current page number")
    page_size: int = Field(10, description="Items per page")
    total_items: int = Field(0, description="Total number of items")
    total_pages: int = Field(0, description="Total number of pages")
    has_next: bool = Field(False, description="Whether there is a next page")
    has_prev: bool = Field(False, description="Whether there is a previous page")


# -------------------------
# Pagination Dependency
# -------------------------


def get_pagination_params(
        page: int = Query(1, ge=1, description="Page number (starts at 1)"),
        page_size: int = Query(10, ge=1, le=100, description="Items per page"),
) -> PaginationParams:
    """FastAPI dependency for pagination parameters"""
    return PaginationParams(page=page, page_size=page_size)


# -------------------------
# Helper Function
# -------------------------


def paginate(
        items: List[T],
        total: int,
        page: int,
        page_size: int,
) -> PageResult[T]:
    """
    Build a page result from one page of items and the total count.

    Args:
        items: Items of the current page
        total: Total number of items across all pages
        page: Current page number
        page_size: Number of items per page

    Returns:
        PageResult with items and paging metadata
    """
    total_pages = ceil(total / page_size) if page_size > 0 else 0

    return PageResult(
        items=list(items),
        page=page,
        page_size=page_size,
        total_items=total,
        total_pages=total_pages,
        has_next=page < total_pages,
        has_prev=page > 1,
    )
