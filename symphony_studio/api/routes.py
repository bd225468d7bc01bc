"""FastAPI route definitions for the Symphony Studio assistant API."""

from __future__ import annotations

import logging
from typing import Any

from fastapi import APIRouter, Request
from fastapi.responses import StreamingResponse
from pydantic import ValidationError

from symphony_studio.agent import stream_reply, to_langchain_messages
from symphony_studio.api.errors import (
    AGENT_STARTING,
    CHAT_FAILED,
    INTERNAL_ERROR,
    MESSAGES_REQUIRED,
    QUERY_OR_TOOL_REQUIRED,
    ApiError,
)
from symphony_studio.api.schemas import (
    ChatRequest,
    DiscoveryRequest,
    HealthResponse,
    ManifestResponse,
    QueryResponse,
    ToolInfo,
    ToolResultResponse,
)
from symphony_studio.intents import answer_query
from symphony_studio.streaming import encode_stream
from symphony_studio.tools.registry import REGISTRY, execute, get_contact

logger = logging.getLogger(__name__)

router = APIRouter()


def _get_agent(request: Request):
    """Retrieve the compiled agent from app state (set by the lifespan)."""
    agent = getattr(request.app.state, "agent", None)
    if agent is None:
        raise ApiError(503, AGENT_STARTING)
    return agent


async def _read_json(request: Request) -> Any:
    """Parsed request body, or ``None`` if it is not valid JSON."""
    try:
        return await request.json()
    except ValueError:
        return None


# ── Endpoints ────────────────────────────────────────────────────────


@router.get("/health", response_model=HealthResponse)
async def health_check():
    """Health check endpoint."""
    return HealthResponse()


@router.post("/chat")
async def chat(http_request: Request):
    """Stream the assistant's answer to the conversation in the body.

    The body is ``text/plain``: inline ``[TOOL:<name>]`` markers for each
    catalog lookup, ``[TOOL:done]`` once lookups are over, then the answer.
    Failures after the stream has started become an apology line in the
    stream, never an HTTP error.
    """
    request_id = getattr(http_request.state, "request_id", "?")
    payload = await _read_json(http_request)
    try:
        chat_request = ChatRequest.model_validate(payload)
    except ValidationError:
        logger.info("[%s] Rejected malformed chat body", request_id)
        raise ApiError(400, MESSAGES_REQUIRED) from None

    agent = _get_agent(http_request)

    try:
        messages = to_langchain_messages(chat_request.messages)
        events = stream_reply(agent, messages)
        return StreamingResponse(
            encode_stream(events),
            media_type="text/plain; charset=utf-8",
            headers={"Cache-Control": "no-cache"},
        )
    except Exception as e:
        logger.exception("[%s] Error processing chat request", request_id)
        raise ApiError(500, CHAT_FAILED) from e


@router.get("/mcp", response_model=ManifestResponse)
async def discovery_manifest():
    """List the available catalog operations (MCP-style discovery)."""
    return ManifestResponse(
        tools=[ToolInfo(name=spec.name, description=spec.description) for spec in REGISTRY.values()],
        contact=get_contact(),
    )


@router.post("/mcp")
async def discovery(http_request: Request):
    """Invoke one operation directly, or answer a free-text query.

    ``{"tool": ..., "params": {...}}`` takes precedence when the tool is
    registered; otherwise ``{"query": ...}`` is classified by keywords.
    """
    request_id = getattr(http_request.state, "request_id", "?")
    payload = await _read_json(http_request)
    try:
        body = DiscoveryRequest.model_validate(payload)
    except ValidationError:
        raise ApiError(400, QUERY_OR_TOOL_REQUIRED) from None

    try:
        if body.tool and body.tool in REGISTRY:
            result = execute(body.tool, body.params)
            return ToolResultResponse(tool=body.tool, result=result)

        if body.query:
            answer = answer_query(body.query)
            return QueryResponse(
                query=body.query,
                intents=answer.intents,
                response=answer.response,
                raw=answer.raw,
            )
    except Exception as e:
        logger.exception("[%s] Error processing discovery request", request_id)
        raise ApiError(500, INTERNAL_ERROR) from e

    raise ApiError(400, QUERY_OR_TOOL_REQUIRED)
