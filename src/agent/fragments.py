"""
agent.fragments - Tagged pieces of agent output.

LangGraph's ReAct agent streams per-node update chunks shaped like
{"agent": {"messages": [...]}} or {"tools": {"messages": [...]}}. They are
decoded exactly once, here, into AgentFragment / ToolFragment. Adapters
(CLI, SSE) only ever see Fragment objects.
"""

from __future__ import annotations

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, AsyncIterator, Iterator, Mapping

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Fragment(ABC):
    """One non-empty piece of text produced while answering a prompt."""
    content: str

    @property
    @abstractmethod
    def source(self) -> str:
        """Graph node that produced the text ("agent" or "tools")."""


@dataclass(frozen=True)
class AgentFragment(Fragment):
    """Text written by the language model."""

    @property
    def source(self) -> str:
        return "agent"


@dataclass(frozen=True)
class ToolFragment(Fragment):
    """Observation returned by a tool call."""

    @property
    def source(self) -> str:
        return "tools"


_NODE_TYPES: dict[str, type[Fragment]] = {
    "agent": AgentFragment,
    "tools": ToolFragment,
}


def decode_chunk(chunk: Mapping[str, Any]) -> Iterator[Fragment]:
    """Turn one LangGraph update chunk into zero or more fragments.

    Only the first message of each node update is used, matching how the
    ReAct graph emits one message per step. Empty content (e.g. an AI
    message that only carries tool calls) yields nothing.
    """
    for node, update in chunk.items():
        fragment_type = _NODE_TYPES.get(node)
        if fragment_type is None:
            logger.debug("Ignoring update from node %r", node)
            continue
        messages = (update or {}).get("messages") or []
        if not messages:
            continue
        text = message_text(messages[0])
        if text:
            yield fragment_type(text)


def message_text(message: Any) -> str:
    """Extract plain text from a LangChain message's content."""
    content = getattr(message, "content", message)
    if isinstance(content, str):
        return content
    if isinstance(content, list):
        parts = []
        for block in content:
            if isinstance(block, str):
                parts.append(block)
            elif isinstance(block, dict) and block.get("type") == "text":
                parts.append(block.get("text", ""))
        return "".join(parts)
    return "" if content is None else str(content)


async def buffer_fragments(fragments: AsyncIterator[Fragment]) -> str:
    """Request/response mode: concatenate every fragment into one string."""
    result = ""
    async for fragment in fragments:
        result += fragment.content
    return result
