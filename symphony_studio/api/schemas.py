"""Pydantic schemas for the FastAPI endpoints."""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, Field


class ChatMessage(BaseModel):
    """One turn of the conversation as the website keeps it."""

    role: Literal["user", "assistant"]
    content: str


class ChatRequest(BaseModel):
    """The whole conversation so far, oldest turn first."""

    messages: list[ChatMessage] = Field(..., min_length=1)


class DiscoveryRequest(BaseModel):
    """Either a direct ``tool`` invocation or a natural-language ``query``."""

    query: str | None = None
    tool: str | None = None
    params: dict[str, Any] | None = None


class ToolResultResponse(BaseModel):
    success: bool = True
    tool: str
    result: Any


class QueryResponse(BaseModel):
    success: bool = True
    query: str
    intents: list[str]
    response: str
    raw: dict[str, Any]


class ToolInfo(BaseModel):
    name: str
    description: str


class ManifestResponse(BaseModel):
    """Static description of the discovery endpoint."""

    name: str = "Symphony Studio MCP Server"
    version: str = "1.0.0"
    description: str = "MCP server exposing Symphony Studio services, pricing, and capabilities"
    tools: list[ToolInfo]
    contact: dict[str, Any]


class HealthResponse(BaseModel):
    """Health check response."""

    status: str = "ok"
    service: str = "symphony-studio-assistant"
