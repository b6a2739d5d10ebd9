"""
agent.tools.registry - Tool registration, discovery, and invocation.

Central registry that manages the ENS data tools and provides
LangChain-compatible tool wrappers.
"""

from __future__ import annotations

import logging
from typing import Any

from langchain_core.tools import StructuredTool, ToolException

from agent.tools.base import BaseTool
from domain.exceptions import DomainError

logger = logging.getLogger(__name__)


class ToolRegistry:
    """Manages tool registration and invocation."""

    def __init__(self):
        self._tools: dict[str, BaseTool] = {}

    def register(self, tool: BaseTool) -> None:
        """Register a tool by its name."""
        self._tools[tool.name] = tool
        logger.debug("Registered tool: %s", tool.name)

    def get(self, name: str) -> BaseTool:
        """Get a tool by name."""
        if name not in self._tools:
            raise KeyError(f"Tool '{name}' not registered")
        return self._tools[name]

    def names(self) -> list[str]:
        """Return all registered tool names."""
        return list(self._tools.keys())

    async def invoke(self, name: str, **kwargs) -> str:
        """Invoke a tool by name. Returns the string output (what the LLM sees)."""
        result = await self.get(name).execute(**kwargs)
        return result.output

    def to_langchain_tools(self) -> list[StructuredTool]:
        """Convert all registered tools to async LangChain StructuredTools."""
        lc_tools = []
        for tool in self._tools.values():

            # Closure per tool so each wrapper keeps its own target
            def _make_coroutine(t: BaseTool):
                async def coroutine(**kwargs: Any) -> str:
                    logger.info("Tool call: %s(%s)", t.name, kwargs)
                    try:
                        result = await t.execute(**kwargs)
                    except DomainError as e:
                        logger.warning("Tool %s failed: %s", t.name, e)
                        raise ToolException(f"Error: {e}") from e
                    return result.output
                return coroutine

            lc_tools.append(StructuredTool.from_function(
                coroutine=_make_coroutine(tool),
                name=tool.name,
                description=tool.description,
                args_schema=tool.get_schema(),
                handle_tool_error=True,
                handle_validation_error=True,
            ))
        return lc_tools
