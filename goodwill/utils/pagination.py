"""
Pagination utilities
"""
from sqlalchemy.orm import Query
from typing import Tuple, List, Any, Optional

from goodwill.core.config import settings


def get_pagination_params(page: int = 1, per_page: Optional[int] = None) -> Tuple[int, int]:
    """
    Clamp page to >= 1 and per_page to [1, MAX_PAGE_SIZE]

    Returns:
        Tuple of (page, per_page)
    """
    if per_page is None:
        per_page = settings.DEFAULT_PAGE_SIZE

    return max(1, page), min(max(1, per_page), settings.MAX_PAGE_SIZE)


def paginate(query: Query, page: int = 1, per_page: Optional[int] = None) -> Tuple[List[Any], int]:
    """
    Slice an ordered query into one page

    Args:
        query: SQLAlchemy query, already ordered
        page: Page number (1-indexed)
        per_page: Items per page

    Returns:
        Tuple of (items, total_count)
    """
    page, per_page = get_pagination_params(page, per_page)

    total = query.count()
    items = query.limit(per_page).offset((page - 1) * per_page).all()

    return items, total
