"""
Shared response schemas.
"""

from math import ceil

from pydantic import BaseModel


class Pagination(BaseModel):
    total: int
    page: int
    limit: int
    total_pages: int


def build_pagination(total: int, page: int, limit: int) -> dict:
    """Pagination metadata for list responses."""
    return {
        "total": total,
        "page": page,
        "limit": limit,
        "total_pages": ceil(total / limit) if limit else 0,
    }


def normalize_page(page: int, limit: int, max_limit: int = 100) -> tuple[int, int, int]:
    """
    Clamp page/limit and compute the row offset.

    Returns:
        Tuple of (page, limit, skip)
    """
    page = max(1, page)
    limit = min(max(1, limit), max_limit)
    return page, limit, (page - 1) * limit
