"""
application.services.registrations - Recent ENS registrations.

Two read modes over the same pagination loop:
    - collect: full RegistrationRecord objects (fetch_registrations)
    - count:   ids only, to keep payloads small (count_registrations)

Both modes share one failure policy: any transport or decoding error is
logged and re-raised as RegistrationFetchError. A failed count is never
reported as zero.

Records are merged by id, so a registration that shows up on two pages
(the subgraph re-indexing mid-session) is only returned once.
"""

from __future__ import annotations

import logging
import math
import time
from datetime import datetime
from typing import Callable

from domain.exceptions import InvalidHoursError, RegistrationFetchError
from domain.models import (
    PAGE_SIZE,
    FetchResult,
    FetchWindow,
    Page,
    RegistrationId,
    RegistrationRecord,
)
from domain.ports import RegistrationSourcePort
from application.pagination import paginate

logger = logging.getLogger(__name__)


def compute_target_timestamp(hours: float, now: float) -> int:
    """Lower bound (inclusive, Unix seconds) of a window `hours` long ending at `now`."""
    now_ms = now * 1000
    return math.floor((now_ms - hours * 3600 * 1000) / 1000)


def validate_hours(hours: float) -> float:
    """Reject non-numeric, non-finite and non-positive windows."""
    if isinstance(hours, bool) or not isinstance(hours, (int, float)):
        raise InvalidHoursError(f"Invalid input: hours must be a number, got {hours!r}.")
    if not math.isfinite(hours) or hours <= 0:
        raise InvalidHoursError(f"Invalid input: hours must be a positive number, got {hours!r}.")
    return float(hours)


class RegistrationService:
    """Reads recent NameRegistered events from a RegistrationSourcePort.

    Stateless per call. No caching, no retries.
    """

    def __init__(
        self,
        source: RegistrationSourcePort,
        clock: Callable[[], float] = time.time,
        page_size: int = PAGE_SIZE,
    ):
        self._source = source
        self._clock = clock
        self._page_size = page_size

    async def fetch_registrations(self, hours: float) -> FetchResult:
        """Return every registration with blockTimestamp >= now - hours.

        Raises:
            InvalidHoursError:      hours is not a positive number.
            RegistrationFetchError: any page request failed.
        """
        hours = validate_hours(hours)
        target = compute_target_timestamp(hours, self._clock())
        logger.info("Started fetching registrations at %s", _clock_label())

        def fetch_page(skip: int):
            return self._source.fetch_records(FetchWindow(target, skip))

        def accumulate(
            acc: dict[str, RegistrationRecord],
            page: Page[RegistrationRecord],
        ) -> dict[str, RegistrationRecord]:
            for record in page.items:
                if record.id in acc:
                    logger.warning("Duplicate registration id across pages: %s", record.id)
                    continue
                acc[record.id] = record
            return acc

        try:
            merged, pages = await paginate(
                fetch_page, accumulate, {}, page_size=self._page_size,
            )
        except RegistrationFetchError:
            logger.exception("Error fetching subgraph data (hours=%s)", hours)
            raise
        except Exception as e:
            logger.exception("Error fetching subgraph data (hours=%s)", hours)
            raise RegistrationFetchError(f"Failed to fetch registrations: {e}") from e

        result = FetchResult(
            records=tuple(merged.values()),
            target_timestamp=target,
            pages=pages,
        )
        logger.info("Fetched data length: %d", result.count)
        return result

    async def count_registrations(self, hours: float) -> int:
        """Return the number of registrations with blockTimestamp >= now - hours.

        Uses the id-only query; otherwise identical to fetch_registrations,
        including its failure policy.
        """
        hours = validate_hours(hours)
        target = compute_target_timestamp(hours, self._clock())
        logger.info("Started counting registrations at %s", _clock_label())

        def fetch_page(skip: int):
            return self._source.fetch_ids(FetchWindow(target, skip))

        def accumulate(acc: set[str], page: Page[RegistrationId]) -> set[str]:
            for item in page.items:
                if item.id in acc:
                    logger.warning("Duplicate registration id across pages: %s", item.id)
                acc.add(item.id)
            return acc

        try:
            seen, _ = await paginate(
                fetch_page, accumulate, set(), page_size=self._page_size,
            )
        except RegistrationFetchError:
            logger.exception("Error fetching registration count (hours=%s)", hours)
            raise
        except Exception as e:
            logger.exception("Error fetching registration count (hours=%s)", hours)
            raise RegistrationFetchError(f"Failed to count registrations: {e}") from e

        logger.info("Total registrations: %d", len(seen))
        return len(seen)


def _clock_label() -> str:
    return datetime.now().strftime("%I:%M %p")
