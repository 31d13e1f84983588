"""
Pagination helpers: page slicing, page clamping, the page-button window
and swipe-to-page navigation.
"""
import math
from typing import List, Optional, Sequence, Tuple, TypeVar

from datagrid.grid.models.specs import Pagination


T = TypeVar("T")


def paginate(rows: Sequence[T], page: int, page_size: int) -> List[T]:
    """
    Return the rows of a 1-based page.

    Out-of-range pages yield an empty list rather than an error.
    """
    if page < 1 or page_size <= 0:
        return []
    start = (page - 1) * page_size
    return list(rows[start:start + page_size])


def total_pages(total: int, page_size: int) -> int:
    if page_size <= 0:
        return 0
    return math.ceil(total / page_size)


def clamp_page(page: int, total: int, page_size: int) -> int:
    """Clamp ``page`` into ``[1, total_pages]`` (page 1 when there are no rows)."""
    last = max(1, total_pages(total, page_size))
    return min(max(1, page), last)


def page_range_label(pagination: Pagination) -> Tuple[int, int]:
    """
    First and last item numbers shown on the current page (1-based).

    Returns (0, 0) when there is nothing to show.
    """
    if pagination.total <= 0:
        return 0, 0
    start = (pagination.page - 1) * pagination.page_size + 1
    end = min(pagination.page * pagination.page_size, pagination.total)
    return start, end


def page_buttons(pagination: Pagination, max_buttons: int = 5) -> List[int]:
    """
    Window of page numbers to offer as buttons, centred on the current page
    where possible.
    """
    pages = pagination.total_pages
    count = min(max_buttons, pages)
    if count <= 0:
        return []

    half = max_buttons // 2
    if pages <= max_buttons or pagination.page <= half + 1:
        first = 1
    elif pagination.page >= pages - half:
        first = pages - max_buttons + 1
    else:
        first = pagination.page - half
    return list(range(first, first + count))


def page_for_swipe(direction: Optional[str], pagination: Pagination) -> Optional[int]:
    """
    Page a swipe navigates to, or None when it should not navigate.

    A left swipe advances unless already on the last page; a right swipe
    goes back unless already on page 1.
    """
    if direction == "left" and pagination.page < pagination.total_pages:
        return pagination.page + 1
    if direction == "right" and pagination.page > 1:
        return pagination.page - 1
    return None
