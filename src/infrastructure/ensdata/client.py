"""
infrastructure.ensdata.client - HTTP client for the ensdata.net lookup API.

Implements TextRecordSourcePort. Uses requests via run_in_executor for
async compat.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional
from urllib.parse import quote

import requests

from domain.exceptions import TextRecordLookupError

logger = logging.getLogger(__name__)


class EnsDataClient:
    """GET {base_url}/{query} and return the decoded JSON blob."""

    def __init__(
        self,
        base_url: str = "https://ensdata.net",
        timeout: float = 15.0,
        session: Optional[requests.Session] = None,
    ):
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._session = session or requests.Session()

    async def lookup(self, query: str) -> dict[str, Any]:
        """Fetch text records for an ENS name or wallet address.

        Raises:
            TextRecordLookupError: unreachable service, non-2xx status or
                                   a body that is not a JSON object.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._get, query)

    def _get(self, query: str) -> dict[str, Any]:
        url = f"{self._base_url}/{quote(query, safe='.')}"
        logger.info("Calling ensdata at %s", url)
        try:
            response = self._session.get(url, timeout=self._timeout)
        except requests.exceptions.Timeout as e:
            raise TextRecordLookupError(
                f"ensdata timed out after {self._timeout}s"
            ) from e
        except requests.exceptions.RequestException as e:
            logger.error("Error fetching text records: %s", e)
            raise TextRecordLookupError(f"ensdata unreachable: {e}") from e

        if not response.ok:
            logger.error("Error fetching text records: HTTP %d", response.status_code)
            raise TextRecordLookupError(f"HTTP error! status: {response.status_code}")

        try:
            data = response.json()
        except ValueError as e:
            raise TextRecordLookupError("ensdata returned a non-JSON body") from e

        if not isinstance(data, dict):
            raise TextRecordLookupError("ensdata returned an unexpected payload")
        return data
