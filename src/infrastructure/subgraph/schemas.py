"""
infrastructure.subgraph.schemas - Pydantic validation of subgraph payloads.

The subgraph serialises BigInt fields as decimal strings ("21797586");
Pydantic's lax int coercion turns them into ints. Entries that fail
validation are logged and dropped before reaching the domain layer.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from domain.models import RegistrationId, RegistrationRecord

logger = logging.getLogger(__name__)


class RegistrationPayload(BaseModel):
    """One `nameRegistereds` entry from the full query."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    id: str = Field(min_length=1)
    name: Optional[str] = None
    owner: str
    transaction_hash: str = Field(alias="transactionHash")
    block_number: int = Field(alias="blockNumber", ge=0)
    block_timestamp: int = Field(alias="blockTimestamp", ge=0)

    @field_validator("name", mode="before")
    @classmethod
    def _null_name(cls, v: Any) -> str:
        return "" if v is None else v

    def to_domain(self) -> RegistrationRecord:
        return RegistrationRecord(
            id=self.id,
            name=self.name or "",
            owner=self.owner,
            transaction_hash=self.transaction_hash,
            block_number=self.block_number,
            block_timestamp=self.block_timestamp,
        )


class RegistrationIdPayload(BaseModel):
    """One `nameRegistereds` entry from the id-only query."""

    model_config = ConfigDict(extra="ignore")

    id: str = Field(min_length=1)

    def to_domain(self) -> RegistrationId:
        return RegistrationId(id=self.id)


def parse_records(entries: list[Any]) -> list[RegistrationRecord]:
    """Validate raw entries into RegistrationRecords, skipping malformed ones."""
    return _parse(entries, RegistrationPayload)


def parse_ids(entries: list[Any]) -> list[RegistrationId]:
    """Validate raw entries into RegistrationIds, skipping malformed ones."""
    return _parse(entries, RegistrationIdPayload)


def _parse(entries: list[Any], model: type[BaseModel]) -> list:
    parsed = []
    for index, entry in enumerate(entries):
        try:
            parsed.append(model.model_validate(entry).to_domain())
        except ValidationError as e:
            logger.warning(
                "Skipping malformed registration at index %d: %s",
                index, e.errors(include_url=False),
            )
    return parsed
