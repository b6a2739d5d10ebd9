"""
agent.tools.fetch_registrations - Recent ENS registrations tool.

Parses the single "hours" string argument and delegates to
RegistrationService. Output is the JSON list of records, newest first.
"""

from __future__ import annotations

import json
import re
from typing import Any

from pydantic import BaseModel, Field, field_validator

from application.services.registrations import RegistrationService, validate_hours
from domain.exceptions import InvalidHoursError
from agent.tools.base import BaseTool, ToolResult

# Leading number ending at whitespace, a quote or the end, so "24" and
# "24 hours" parse but "1e3" and "2,5" do not.
_HOURS_RE = re.compile(r"^\s*[\"']?\s*\+?(\d+(?:\.\d*)?|\.\d+)(?=$|\s|[\"'])")


def parse_hours(text: str) -> float:
    """Parse the tool's "hours" argument into a positive number.

    Raises:
        InvalidHoursError: the text does not start with a positive number.
    """
    match = _HOURS_RE.match(text or "")
    if not match:
        raise InvalidHoursError(f"Invalid input: hours must be a number, got {text!r}.")
    return validate_hours(float(match.group(1)))


class HoursInput(BaseModel):
    """Input schema for the hours-window tools."""
    hours: str = Field(
        description="Size of the look-back window in hours, e.g. '24' for the last day."
    )

    @field_validator("hours", mode="before")
    @classmethod
    def _number_as_text(cls, v: Any) -> Any:
        if isinstance(v, (int, float)) and not isinstance(v, bool):
            return str(v)
        return v


class FetchRegistrationsTool(BaseTool):
    """List ENS name registrations from the last N hours."""

    name = "fetch_registrations"
    description = (
        "Fetches the latest ENS domain registrations from the subgraph API for the "
        "past specified hours. Pass the number of hours as 'hours' (e.g. '3'). "
        "Returns a JSON array of objects with id, name (ENS domain), owner, "
        "transactionHash, blockNumber and blockTimestamp."
    )

    def __init__(self, registration_service: RegistrationService):
        self._service = registration_service

    def get_schema(self) -> type[BaseModel]:
        return HoursInput

    async def execute(self, hours: str = "", **kwargs) -> ToolResult:
        result = await self._service.fetch_registrations(parse_hours(hours))
        return ToolResult(output=json.dumps(result.to_list()), data=result)
