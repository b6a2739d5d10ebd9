"""
agent.tools.registration_count - ENS registration count tool.

Same window as fetch_registrations but only the total comes back, which
keeps large windows cheap for both the subgraph and the LLM context.
"""

from __future__ import annotations

import json

from pydantic import BaseModel

from application.services.registrations import RegistrationService
from agent.tools.base import BaseTool, ToolResult
from agent.tools.fetch_registrations import HoursInput, parse_hours


class RegistrationCountTool(BaseTool):
    """Count ENS name registrations from the last N hours."""

    name = "fetch_registration_count"
    description = (
        "Fetches the number of ENS domain registrations from the subgraph API for "
        "the past specified hours. Pass the number of hours as 'hours' (e.g. '24'). "
        "Returns a number."
    )

    def __init__(self, registration_service: RegistrationService):
        self._service = registration_service

    def get_schema(self) -> type[BaseModel]:
        return HoursInput

    async def execute(self, hours: str = "", **kwargs) -> ToolResult:
        count = await self._service.count_registrations(parse_hours(hours))
        return ToolResult(output=json.dumps(count), data=count)
