"""
application.pagination - Skip/first pagination loop.

One generic routine walks any `skip`-paged API until a short page signals
exhaustion. Callers choose the page shape (full records or ids only) and
how pages are folded together; the loop itself is shared.
"""

from __future__ import annotations

import logging
from typing import Awaitable, Callable, Optional, TypeVar

from domain.models import PAGE_SIZE, Page

logger = logging.getLogger(__name__)

T = TypeVar("T")
A = TypeVar("A")


async def paginate(
    fetch_page: Callable[[int], Awaitable[Page[T]]],
    accumulate: Callable[[A, Page[T]], A],
    initial: A,
    *,
    page_size: int = PAGE_SIZE,
    is_last_page: Optional[Callable[[Page[T]], bool]] = None,
) -> tuple[A, int]:
    """Request pages at skip = 0, page_size, 2*page_size, ... until the last one.

    Pages are requested strictly one after another and folded into the
    accumulator in arrival order. A page with fewer than `page_size` raw
    entries is the last one; no trailing empty request is issued.

    Args:
        fetch_page:   Coroutine taking `skip` and returning one Page.
        accumulate:   Fold function `(acc, page) -> acc`.
        initial:      Starting accumulator.
        page_size:    Expected full-page size; also the skip increment.
        is_last_page: Override for the default short-page check.

    Returns:
        (final accumulator, number of pages requested)

    Raises:
        Whatever `fetch_page` raises. The session is aborted on first failure.
    """
    if page_size <= 0:
        raise ValueError(f"page_size must be positive, got {page_size}")

    done = is_last_page or (lambda page: page.received < page_size)

    skip = 0
    pages = 0
    acc = initial
    while True:
        page = await fetch_page(skip)
        pages += 1
        acc = accumulate(acc, page)
        logger.info("Fetched %d items at skip %d", page.received, skip)

        if done(page):
            return acc, pages
        skip += page_size
