"""
infrastructure.subgraph.source - RegistrationSourcePort backed by the ENS subgraph.

Implements RegistrationSourcePort (structural typing, no explicit inheritance).
"""

from __future__ import annotations

import logging
from typing import Any

from domain.exceptions import SubgraphError
from domain.models import FetchWindow, Page, RegistrationId, RegistrationRecord
from infrastructure.subgraph.client import SubgraphClient
from infrastructure.subgraph.queries import REGISTRATION_IDS_QUERY, REGISTRATIONS_QUERY
from infrastructure.subgraph.schemas import parse_ids, parse_records

logger = logging.getLogger(__name__)


class SubgraphRegistrationSource:
    """Fetch `nameRegistereds` pages, newest block first."""

    def __init__(self, client: SubgraphClient):
        self._client = client

    async def fetch_records(self, window: FetchWindow) -> Page[RegistrationRecord]:
        entries = await self._fetch(REGISTRATIONS_QUERY, window)
        return Page(items=tuple(parse_records(entries)), received=len(entries))

    async def fetch_ids(self, window: FetchWindow) -> Page[RegistrationId]:
        entries = await self._fetch(REGISTRATION_IDS_QUERY, window)
        return Page(items=tuple(parse_ids(entries)), received=len(entries))

    async def _fetch(self, document: str, window: FetchWindow) -> list[Any]:
        data = await self._client.query(document, window.to_variables())
        entries = data.get("nameRegistereds")
        if not isinstance(entries, list):
            raise SubgraphError("Subgraph response is missing 'nameRegistereds'")
        logger.debug(
            "Subgraph page: %d entries (target=%d, skip=%d)",
            len(entries), window.target_timestamp, window.skip,
        )
        return entries
