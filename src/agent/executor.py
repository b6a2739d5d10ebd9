"""
agent.executor - Agent execution engine.

Wraps the LangGraph ReAct agent (LLM + tool selection loop) behind two
calls: stream() yields decoded fragments, run() buffers them into one
string. No component construction beyond the graph itself, no global
state; factory.py injects the model, tools and prompt.
"""

from __future__ import annotations

import logging
from typing import Any, AsyncIterator, Optional, Sequence

from langchain_core.language_models import BaseChatModel
from langchain_core.messages import HumanMessage
from langgraph.checkpoint.memory import MemorySaver
from langgraph.prebuilt import create_react_agent

from agent.fragments import Fragment, buffer_fragments, decode_chunk

logger = logging.getLogger(__name__)


def build_react_graph(
    llm: BaseChatModel,
    tools: Sequence[Any],
    system_prompt: str,
) -> Any:
    """Compile a ReAct graph with in-memory conversation checkpoints."""
    return create_react_agent(
        model=llm,
        tools=list(tools),
        prompt=system_prompt,
        checkpointer=MemorySaver(),
    )


class AgentExecutor:
    """Streams prompts through a compiled agent graph.

    Conversation memory lives in the graph's checkpointer, keyed by
    thread_id; callers sharing a thread share history.
    """

    def __init__(self, graph: Any, thread_id: str = "ENS Savant"):
        self._graph = graph
        self._thread_id = thread_id

    @property
    def thread_id(self) -> str:
        return self._thread_id

    def _config(self, thread_id: Optional[str]) -> dict[str, Any]:
        return {"configurable": {"thread_id": thread_id or self._thread_id}}

    async def stream(
        self,
        prompt: str,
        thread_id: Optional[str] = None,
    ) -> AsyncIterator[Fragment]:
        """Yield AgentFragment / ToolFragment objects as the graph runs.

        Errors from the model, tools or graph propagate to the consumer.
        """
        logger.info("Agent processing (thread=%s): %s", thread_id or self._thread_id, prompt[:80])
        steps = 0
        async for chunk in self._graph.astream(
            {"messages": [HumanMessage(content=prompt)]},
            self._config(thread_id),
            stream_mode="updates",
        ):
            steps += 1
            for fragment in decode_chunk(chunk):
                logger.debug("%s fragment: %d chars", fragment.source, len(fragment.content))
                yield fragment
        logger.info("Agent finished: %d graph step(s)", steps)

    async def run(self, prompt: str, thread_id: Optional[str] = None) -> str:
        """Process a prompt and return all output as one string."""
        return await buffer_fragments(self.stream(prompt, thread_id))
