"""Pagination — page arithmetic for the invoice table.

Invariants:
    - Pages are 1-based; anything below 1 is treated as page 1 and anything
      above MAX_PAGE as MAX_PAGE (an empty page), so offsets stay in INTEGER range
    - total_pages(0) == 0
"""

import math

from app.core.domain_types import ITEMS_PER_PAGE, MAX_PAGE


def normalize_page(page: int) -> int:
    return min(max(page, 1), MAX_PAGE)


def page_offset(page: int, page_size: int = ITEMS_PER_PAGE) -> int:
    """Row offset for a 1-based page number."""
    return (normalize_page(page) - 1) * page_size


def total_pages(count: int, page_size: int = ITEMS_PER_PAGE) -> int:
    """Number of pages needed to show `count` rows."""
    return math.ceil(count / page_size)
