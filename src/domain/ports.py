"""
domain.ports - Abstract interfaces (Protocols) for all system boundaries.

These define WHAT the system needs without specifying HOW. Infrastructure
modules provide concrete implementations. Application services depend only
on these protocols, never on concrete classes.

Using typing.Protocol (structural typing) instead of ABC — any class that
implements the methods satisfies the port without explicit inheritance.
"""

from __future__ import annotations

from typing import Any, Protocol, runtime_checkable

from domain.models import FetchWindow, Page, RegistrationId, RegistrationRecord


# ---------------------------------------------------------------------------
# Data Source Ports
# ---------------------------------------------------------------------------

@runtime_checkable
class RegistrationSourcePort(Protocol):
    """Fetch one page of NameRegistered events, newest block first."""

    async def fetch_records(self, window: FetchWindow) -> Page[RegistrationRecord]: ...

    async def fetch_ids(self, window: FetchWindow) -> Page[RegistrationId]: ...


@runtime_checkable
class TextRecordSourcePort(Protocol):
    """Look up ENS text records for a name or address."""

    async def lookup(self, query: str) -> dict[str, Any]: ...


# ---------------------------------------------------------------------------
# Wallet Ports
# ---------------------------------------------------------------------------

@runtime_checkable
class WalletStatePort(Protocol):
    """Opaque persisted wallet state (read once, written after init)."""

    def read(self) -> str | None: ...

    def write(self, data: str) -> None: ...
