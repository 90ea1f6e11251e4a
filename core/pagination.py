from typing import List, Optional, Sequence

from django.core.paginator import Paginator


def paginate(items: Sequence, page, per_page: int):
    """
    Slice ``items`` into a page and build the page-number window.

    ``page`` may be anything a query string hands us; non-numeric or
    out-of-range values clamp to the nearest valid page.

    Returns:
        (page_obj, page_numbers) where page_numbers is a list of ints with
        ``None`` marking an elided gap.
    """
    paginator = Paginator(items, per_page, allow_empty_first_page=True)
    page_obj = paginator.get_page(page)
    return page_obj, page_window(page_obj.number, paginator.num_pages)


def page_window(current: int, total: int, on_each_side: int = 1, on_ends: int = 1) -> List[Optional[int]]:
    """
    Page numbers to show for ``current`` out of ``total``.

    >>> page_window(5, 10)
    [1, None, 4, 5, 6, None, 10]
    """
    paginator = Paginator(range(max(total, 1)), 1)
    return [
        number if isinstance(number, int) else None
        for number in paginator.get_elided_page_range(
            current, on_each_side=on_each_side, on_ends=on_ends
        )
    ]
