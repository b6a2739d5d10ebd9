"""
application.services.text_records - ENS text-record lookup.

Thin service over TextRecordSourcePort so tools and the CLI share the
same input normalisation and logging.
"""

from __future__ import annotations

import logging
from typing import Any

from domain.exceptions import TextRecordLookupError
from domain.ports import TextRecordSourcePort

logger = logging.getLogger(__name__)


class TextRecordService:
    """Look up text records (avatar, url, socials...) for an ENS name or address."""

    def __init__(self, source: TextRecordSourcePort):
        self._source = source

    async def lookup(self, query: str) -> dict[str, Any]:
        """Return the text-record blob for `query`.

        Raises:
            TextRecordLookupError: empty query or upstream failure.
        """
        query = query.strip().strip("'\"")
        if not query:
            raise TextRecordLookupError("Query must be an ENS name or wallet address.")

        logger.info("Looking up text records for %s", query)
        return await self._source.lookup(query)
