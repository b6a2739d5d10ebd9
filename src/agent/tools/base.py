"""
agent.tools.base - Base tool interface and result container.

All agent tools inherit from BaseTool and return ToolResult. Every tool
takes exactly one string argument, described by its Pydantic schema.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any

from pydantic import BaseModel


@dataclass
class ToolResult:
    """Result returned by a tool execution.

    output:    JSON string shown to the agent/user.
    data:      Structured data for direct callers (not passed through LLM).
    """
    output: str
    data: Any = None


class BaseTool(ABC):
    """Abstract base for all agent tools."""

    name: str
    description: str

    @abstractmethod
    async def execute(self, **kwargs) -> ToolResult:
        """Execute the tool with the given arguments."""
        ...

    @abstractmethod
    def get_schema(self) -> type[BaseModel]:
        """Return the Pydantic schema for this tool's input arguments."""
        ...
