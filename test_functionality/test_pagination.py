"""
Test the generic skip/first pagination loop.
"""
import pytest

from application.pagination import paginate
from domain.models import Page


def _pages(sizes):
    calls = []

    async def fetch_page(skip):
        calls.append(skip)
        return Page.of(list(range(sizes[len(calls) - 1])))

    return fetch_page, calls


def _extend(acc, page):
    acc.extend(page.items)
    return acc


@pytest.mark.asyncio
async def test_stops_on_first_short_page():
    fetch_page, calls = _pages([100, 100, 37])

    items, pages = await paginate(fetch_page, _extend, [])

    assert calls == [0, 100, 200]
    assert pages == 3
    assert len(items) == 237


@pytest.mark.asyncio
async def test_empty_first_page_issues_one_request():
    fetch_page, calls = _pages([0])

    items, pages = await paginate(fetch_page, _extend, [])

    assert calls == [0]
    assert pages == 1
    assert items == []


@pytest.mark.asyncio
async def test_exactly_full_last_page_needs_trailing_short_page():
    fetch_page, calls = _pages([100, 0])

    items, _ = await paginate(fetch_page, _extend, [])

    assert calls == [0, 100]
    assert len(items) == 100


@pytest.mark.asyncio
async def test_short_page_check_uses_received_count_not_valid_items():
    # 100 entries came back but 3 were dropped during validation:
    # still a full page, so the loop must continue.
    responses = [Page(items=tuple(range(97)), received=100), Page.of([1, 2])]
    calls = []

    async def fetch_page(skip):
        calls.append(skip)
        return responses[len(calls) - 1]

    items, _ = await paginate(fetch_page, _extend, [])

    assert calls == [0, 100]
    assert len(items) == 99


@pytest.mark.asyncio
async def test_custom_page_size_and_done_predicate():
    fetch_page, calls = _pages([10, 10, 10, 10])

    _, pages = await paginate(
        fetch_page, _extend, [],
        page_size=10,
        is_last_page=lambda page: len(calls) == 2,
    )

    assert calls == [0, 10]
    assert pages == 2


@pytest.mark.asyncio
async def test_error_aborts_session():
    calls = []

    async def fetch_page(skip):
        calls.append(skip)
        if skip == 100:
            raise RuntimeError("boom")
        return Page.of(list(range(100)))

    with pytest.raises(RuntimeError, match="boom"):
        await paginate(fetch_page, _extend, [])
    assert calls == [0, 100]


@pytest.mark.asyncio
async def test_rejects_non_positive_page_size():
    fetch_page, _ = _pages([0])
    with pytest.raises(ValueError):
        await paginate(fetch_page, _extend, [], page_size=0)
