"""Pagination — 1-based offsets and page counts."""

import pytest

from app.core.domain_types import MAX_PAGE
from app.core.pagination import normalize_page, page_offset, total_pages


def test_page_offsets():
    assert page_offset(1) == 0
    assert page_offset(2) == 6
    assert page_offset(3, page_size=10) == 20


@pytest.mark.parametrize("page", [0, -3])
def test_pages_below_one_clamp_to_first(page):
    assert normalize_page(page) == 1
    assert page_offset(page) == 0


@pytest.mark.parametrize("count, pages", [(0, 0), (1, 1), (6, 1), (7, 2), (12, 2), (13, 3)])
def test_total_pages_is_ceiling(count, pages):
    assert total_pages(count) == pages


def test_huge_pages_clamp_to_max_page():
    assert normalize_page(10**20) == MAX_PAGE
    assert page_offset(10**20) == (MAX_PAGE - 1) * 6
