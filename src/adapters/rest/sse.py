"""
adapters.rest.sse - Server-sent-event encoding of agent fragments.

Each fragment becomes one `data: {"content": ...}` event. A failure while
the agent is producing output becomes a single `data: {"error": ...}`
event and the stream ends; the endpoint itself never crashes mid-stream.
"""

from __future__ import annotations

import json
import logging
from typing import Any, AsyncIterator

from agent.fragments import Fragment

logger = logging.getLogger(__name__)

STREAM_ERROR_MESSAGE = "Processing error"


def encode_event(payload: dict[str, Any]) -> bytes:
    """Encode one SSE `data:` event with compact JSON."""
    return f"data: {json.dumps(payload, separators=(',', ':'))}\n\n".encode("utf-8")


async def sse_events(fragments: AsyncIterator[Fragment]) -> AsyncIterator[bytes]:
    """Relay fragments as SSE bytes, closing with an error event on failure."""
    try:
        async for fragment in fragments:
            if fragment.content:
                yield encode_event({"content": fragment.content})
    except Exception:
        logger.exception("Stream error")
        yield encode_event({"error": STREAM_ERROR_MESSAGE})
