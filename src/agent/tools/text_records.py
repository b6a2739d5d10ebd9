"""
agent.tools.text_records - ENS text-record lookup tool.
"""

from __future__ import annotations

import json

from pydantic import BaseModel, Field

from application.services.text_records import TextRecordService
from agent.tools.base import BaseTool, ToolResult


class TextRecordsInput(BaseModel):
    """Input schema for the fetch_text_records tool."""
    query: str = Field(
        description="An ENS name (e.g. 'vitalik.eth') or a 0x wallet address."
    )


class FetchTextRecordsTool(BaseTool):
    """Fetch ENS text records for a name or address."""

    name = "fetch_text_records"
    description = (
        "Fetches ENS text records for a given domain name or wallet address. "
        "Pass the ENS name or address exactly as the user wrote it as 'query'."
    )

    def __init__(self, text_record_service: TextRecordService):
        self._service = text_record_service

    def get_schema(self) -> type[BaseModel]:
        return TextRecordsInput

    async def execute(self, query: str = "", **kwargs) -> ToolResult:
        data = await self._service.lookup(query)
        return ToolResult(output=json.dumps(data), data=data)
