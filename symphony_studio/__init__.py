"""Symphony Studio Assistant — the question-answering backend of the studio website.

Architecture Overview
=====================

Two stateless request paths share one static catalog:

1. **Chat** (``POST /api/chat``) — a LangGraph tool-calling loop. Claude
   receives the conversation and a manifest of catalog tools, calls them
   as often as it needs, and its final answer is streamed back as
   ``text/plain`` with inline ``[TOOL:…]`` progress markers.

2. **Discovery** (``/api/mcp``) — no model involved. Either a named catalog
   operation is invoked directly, or a free-text query is classified by
   keyword matching and the matched operations are rendered as text.

Key Design Decisions
--------------------
- **Catalog**: a validated JSON resource loaded once at import
  (``data/studio_data.json``); frozen Pydantic records, never mutated.
- **Tool dispatcher**: a fixed registry of total operations; unknown ids
  give ``{"error": "... not found"}`` values rather than exceptions.
- **Resilience**: a failure inside the chat loop becomes a fixed apology
  line in the stream; nothing is retried.
- **No memory**: the website sends the whole conversation each time.

Package Structure
-----------------
- ``symphony_studio/catalog.py`` — catalog records and loader
- ``symphony_studio/tools/registry.py`` — tool dispatcher + tier recommendation
- ``symphony_studio/tools/studio.py`` — LangChain tools offered to the model
- ``symphony_studio/agent.py`` — LangGraph StateGraph and reply streaming
- ``symphony_studio/streaming.py`` — progress events and ``[TOOL:…]`` markers
- ``symphony_studio/intents.py`` — keyword intent classifier and renderer
- ``symphony_studio/prompts.py`` — system prompt
- ``symphony_studio/config.py`` — configuration from environment variables
- ``symphony_studio/server.py`` — FastAPI application
- ``symphony_studio/api/`` — routes, schemas, error type
- ``symphony_studio/services/`` — CloudWatch metrics
"""
