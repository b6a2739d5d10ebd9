"""Streaming chat endpoint for the ENS Savant agent."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, status
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse, StreamingResponse

from adapters.rest.dependencies import get_factory
from adapters.rest.schemas import ChatBody, ErrorOut
from adapters.rest.sse import sse_events
from factory import ServiceFactory

router = APIRouter(prefix="/api", tags=["chat"])
logger = logging.getLogger(__name__)

_SSE_HEADERS = {
    "Cache-Control": "no-cache",
    "Connection": "keep-alive",
}


@router.post(
    "/chat",
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorOut}},
)
async def chat(
    body: ChatBody,
    factory: ServiceFactory = Depends(get_factory),
):
    """
    Send a prompt to the agent and stream its reasoning and tool output.

    Protocol:
      - Request:  POST {"prompt": "..."}
      - Response: text/event-stream of `data: {"content": "..."}` events,
                  or a single `data: {"error": "..."}` if the agent fails
                  mid-stream. The stream closes when the agent is done.
      - Agent unavailable (construction failed): 500 {"error": ...}
    """
    try:
        agent = await factory.get_agent()
        fragments = agent.stream(body.prompt)
    except Exception:
        logger.exception("Chat request failed before streaming")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )

    return StreamingResponse(
        sse_events(fragments),
        media_type="text/event-stream",
        headers=_SSE_HEADERS,
    )


async def chat_validation_handler(request: Request, exc: RequestValidationError):
    """Keep the {"error": ...} body shape for malformed chat requests.

    An unparseable body is answered like any other pre-stream failure (500);
    a well-formed body without a usable prompt gets 422.
    """
    if not request.url.path.startswith(router.prefix):
        return await request_validation_exception_handler(request, exc)

    if any(err.get("type") == "json_invalid" for err in exc.errors()):
        logger.warning("Chat request with a malformed JSON body")
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"error": "Internal server error"},
        )
    return JSONResponse(
        status_code=422,
        content={"error": "Request body must be {\"prompt\": \"...\"} with a non-empty prompt"},
    )
