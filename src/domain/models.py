"""
domain.models - Value objects for ENS registration data.

These are immutable data containers with no business logic and no
dependencies on infrastructure (no LangChain, no requests, no subgraph
schema). Validation of raw API payloads happens in
infrastructure.subgraph.schemas before anything reaches these types.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Generic, TypeVar

T = TypeVar("T")

# Page size enforced by the subgraph query (`first: 100`).
PAGE_SIZE = 100


# ---------------------------------------------------------------------------
# Registration Record
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class RegistrationRecord:
    """One NameRegistered event indexed by the ENS subgraph.

    `name` may be empty: the subgraph leaves it null for some legacy
    registrations.
    """
    id: str
    name: str
    owner: str
    transaction_hash: str
    block_number: int
    block_timestamp: int

    def to_dict(self) -> dict[str, Any]:
        """Serialize using the subgraph's own camelCase field names."""
        return {
            "id": self.id,
            "name": self.name,
            "owner": self.owner,
            "transactionHash": self.transaction_hash,
            "blockNumber": self.block_number,
            "blockTimestamp": self.block_timestamp,
        }


@dataclass(frozen=True)
class RegistrationId:
    """Slim projection used when only counting registrations."""
    id: str


# ---------------------------------------------------------------------------
# Paging
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class FetchWindow:
    """Query parameters for a single page request."""
    target_timestamp: int
    skip: int = 0

    def __post_init__(self) -> None:
        if self.skip < 0:
            raise ValueError(f"skip must be non-negative, got {self.skip}")

    def to_variables(self) -> dict[str, int]:
        return {"targetTimestamp": self.target_timestamp, "skip": self.skip}


@dataclass(frozen=True)
class Page(Generic[T]):
    """Items returned by one page request.

    received:  number of raw entries the API sent back, *before* validation.
               The last-page check uses this so a dropped malformed entry
               never ends pagination early.
    """
    items: tuple[T, ...] = ()
    received: int = 0

    @classmethod
    def of(cls, items: list[T] | tuple[T, ...]) -> Page[T]:
        items = tuple(items)
        return cls(items=items, received=len(items))


@dataclass(frozen=True)
class FetchResult:
    """All registrations collected in one fetch session, in arrival order."""
    records: tuple[RegistrationRecord, ...] = field(default_factory=tuple)
    target_timestamp: int = 0
    pages: int = 0

    @property
    def count(self) -> int:
        return len(self.records)

    def to_list(self) -> list[dict[str, Any]]:
        return [record.to_dict() for record in self.records]
