"""
infrastructure.subgraph.client - Minimal GraphQL-over-HTTP client.

Uses requests via run_in_executor for async compat. Every failure mode
(unreachable, timeout, non-2xx, non-JSON body, GraphQL `errors`) surfaces
as SubgraphError so callers handle a single exception type.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import requests

from domain.exceptions import SubgraphError

logger = logging.getLogger(__name__)


class SubgraphClient:
    """POST GraphQL documents to a single subgraph endpoint."""

    def __init__(
        self,
        url: str,
        timeout: float = 30.0,
        session: Optional[requests.Session] = None,
    ):
        if not url:
            raise ValueError("Subgraph URL must not be empty")
        self._url = url
        self._timeout = timeout
        self._session = session or requests.Session()

    @property
    def url(self) -> str:
        return self._url

    async def query(self, document: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Execute a query and return its `data` object.

        Raises:
            SubgraphError: on any transport or protocol failure.
        """
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, self._post, document, variables)

    def _post(self, document: str, variables: dict[str, Any]) -> dict[str, Any]:
        """Synchronous HTTP call (runs in thread pool)."""
        try:
            response = self._session.post(
                self._url,
                json={"query": document, "variables": variables},
                timeout=self._timeout,
            )
        except requests.exceptions.Timeout as e:
            raise SubgraphError(f"Subgraph timed out after {self._timeout}s") from e
        except requests.exceptions.RequestException as e:
            raise SubgraphError(f"Subgraph unreachable at {self._url}: {e}") from e

        if not response.ok:
            raise SubgraphError(
                f"Subgraph returned HTTP {response.status_code}: {response.text[:200]}"
            )

        try:
            payload = response.json()
        except ValueError as e:
            raise SubgraphError(f"Subgraph returned a non-JSON body: {response.text[:200]}") from e

        if not isinstance(payload, dict):
            raise SubgraphError("Subgraph returned an unexpected payload")

        errors = payload.get("errors")
        if errors:
            messages = "; ".join(
                str(err.get("message", err)) if isinstance(err, dict) else str(err)
                for err in errors
            )
            raise SubgraphError(f"GraphQL error: {messages}")

        data = payload.get("data")
        if not isinstance(data, dict):
            raise SubgraphError("Subgraph response has no 'data' object")
        return data
