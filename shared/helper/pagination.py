"""Page arithmetic shared by the view models and the proxy routes."""

import math

MAX_PAGES_TO_SHOW = 5


def total_pages_for(total_items: int, page_size: int) -> int:
    """Number of pages for a collection; an empty collection still has one page."""
    if page_size < 1:
        raise ValueError(f"page_size must be positive, got {page_size}")
    return max(1, math.ceil(max(total_items, 0) / page_size))


def clamp_page(page: int, total_pages: int) -> int:
    """Clamp a page number into [1, max(total_pages, 1)]."""
    return min(max(page, 1), max(total_pages, 1))


def page_window(current_page: int, total_pages: int, max_pages: int = MAX_PAGES_TO_SHOW) -> list[int | None]:
    """Build the page buttons of a pagination control.

    Small collections list every page. Larger ones always show the first and
    last page plus a window around the current page, widened near either end;
    gaps are marked with None (rendered as an ellipsis).

    Args:
        current_page (int): The selected page.
        total_pages (int): Total number of pages.
        max_pages (int): Collections with at most this many pages list every page.

    Returns:
        list[int | None]: Page numbers in display order, None for an ellipsis.
    """
    total_pages = max(total_pages, 1)
    if total_pages <= max_pages:
        return list(range(1, total_pages + 1))

    current_page = clamp_page(current_page, total_pages)
    start = max(2, current_page - 1)
    end = min(total_pages - 1, current_page + 1)
    if current_page <= 3:
        end = 4
    if current_page >= total_pages - 2:
        start = total_pages - 3

    pages: list[int | None] = [1]
    if start > 2:
        pages.append(None)
    pages.extend(range(start, end + 1))
    if end < total_pages - 1:
        pages.append(None)
    pages.append(total_pages)
    return pages
