"""LangGraph tool-calling loop for the Symphony Studio assistant.

Architecture:
  A two-node StateGraph:

    1. **chatbot** — ChatAnthropic bound to the catalog tools.  Receives the
                     system prompt plus the full conversation so far.
    2. **tools**   — executes the tool calls from the chatbot's last turn,
                     one after another in the order the model asked for
                     them, and appends one ToolMessage per call.

  Routing:
    chatbot → (has tool calls?) → tools → chatbot (loop)
            → (no tool calls?)  → END

  The website sends the whole conversation with every request, so the
  graph is compiled without a checkpointer: nothing survives the request.

Streaming:
  ``stream_reply`` runs the graph in ``updates`` mode and turns node
  updates into progress / text events (see ``streaming.py``).  A failure
  anywhere in the loop is logged and replaced by a fixed apology so the
  stream always completes cleanly.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Iterable, Iterator
from typing import Annotated, Any

from langchain_anthropic import ChatAnthropic
from langchain_core.messages import AIMessage, AnyMessage, HumanMessage, SystemMessage, ToolMessage
from langgraph.graph import END, StateGraph
from langgraph.graph.message import add_messages
from typing_extensions import TypedDict

from symphony_studio.config import (
    ANTHROPIC_API_KEY,
    LLM_TEMPERATURE,
    LLM_TIMEOUT_SECONDS,
    MAX_TOKENS,
    MAX_TOOL_ROUNDS,
    MODEL_NAME,
)
from symphony_studio.prompts import get_system_prompt
from symphony_studio.services.metrics import metrics
from symphony_studio.streaming import StreamEvent, TextChunk, ToolsFinished, ToolStarted
from symphony_studio.tools.registry import UNKNOWN_TOOL
from symphony_studio.tools.studio import ALL_TOOLS, TOOLS_BY_NAME

logger = logging.getLogger(__name__)

APOLOGY_MESSAGE = "I'm having trouble connecting right now. Please try again."

# chatbot + tools per round, one final chatbot step, one step of slack
RECURSION_LIMIT = MAX_TOOL_ROUNDS * 2 + 2


class AgentState(TypedDict):
    """``messages`` uses the ``add_messages`` reducer so each node appends."""

    messages: Annotated[list[AnyMessage], add_messages]


# ── LLM builder ─────────────────────────────────────────────────────


def _build_llm():
    """ChatAnthropic with the catalog tools bound.  SDK retries are off."""
    llm = ChatAnthropic(
        model=MODEL_NAME,
        api_key=ANTHROPIC_API_KEY,
        temperature=LLM_TEMPERATURE,
        max_tokens=MAX_TOKENS,
        timeout=LLM_TIMEOUT_SECONDS,
        max_retries=0,
    )
    return llm.bind_tools(ALL_TOOLS)


# ── Node: chatbot ───────────────────────────────────────────────────


def _make_chatbot_node():
    """Create the chatbot node.

    The bound LLM is captured in the closure so repeated invocations
    (chatbot → tools → chatbot → …) share one client.
    """
    llm_with_tools = _build_llm()

    def chatbot_node(state: AgentState) -> dict:
        logger.debug("chatbot node invoked — model: %s", MODEL_NAME)
        system = SystemMessage(content=get_system_prompt())
        t0 = time.perf_counter()
        try:
            response = llm_with_tools.invoke([system] + state["messages"])
            elapsed = (time.perf_counter() - t0) * 1000
            metrics.record_success("anthropic", "llm_invoke", latency_ms=elapsed)
            logger.debug("chatbot responded in %.0fms", elapsed)
            return {"messages": [response]}
        except Exception as exc:
            elapsed = (time.perf_counter() - t0) * 1000
            metrics.record_failure(
                "anthropic", "llm_invoke",
                error_type=type(exc).__name__, latency_ms=elapsed,
            )
            raise

    return chatbot_node


# ── Node: tools ─────────────────────────────────────────────────────


def tools_node(state: AgentState) -> dict:
    """Run every tool call of the last AI turn, sequentially and in order."""
    last_message = state["messages"][-1]
    results: list[ToolMessage] = []
    for call in last_message.tool_calls:
        tool = TOOLS_BY_NAME.get(call["name"])
        if tool is None:
            logger.warning("Model requested unknown tool %r", call["name"])
            content = json.dumps(UNKNOWN_TOOL)
        else:
            content = tool.invoke(call.get("args") or {})
        results.append(
            ToolMessage(content=content, tool_call_id=call["id"], name=call["name"])
        )
    return {"messages": results}


# ── Conditional edge ────────────────────────────────────────────────


def should_use_tools(state: AgentState) -> str:
    """Route to the tools node if the last message has tool calls."""
    last_message = state["messages"][-1]
    if getattr(last_message, "tool_calls", None):
        return "tools"
    return END


# ── Graph assembly ──────────────────────────────────────────────────


def create_studio_agent():
    """Build and compile the tool-calling graph.

    Returns a compiled graph that can be streamed with:
        graph.stream({"messages": [...]}, stream_mode="updates")
    """
    graph = StateGraph(AgentState)
    graph.add_node("chatbot", _make_chatbot_node())
    graph.add_node("tools", tools_node)
    graph.set_entry_point("chatbot")
    graph.add_conditional_edges("chatbot", should_use_tools, {"tools": "tools", END: END})
    graph.add_edge("tools", "chatbot")

    compiled = graph.compile()
    logger.debug("Studio agent compiled — model: %s, tools: %d", MODEL_NAME, len(ALL_TOOLS))
    return compiled


# ── Request helpers ─────────────────────────────────────────────────


def to_langchain_messages(messages: Iterable[Any]) -> list[AnyMessage]:
    """Convert ``{role, content}`` chat turns into LangChain messages."""
    converted: list[AnyMessage] = []
    for message in messages:
        if message.role == "assistant":
            converted.append(AIMessage(content=message.content))
        else:
            converted.append(HumanMessage(content=message.content))
    return converted


def _text_blocks(message: AnyMessage) -> list[str]:
    """Text parts of a model turn (content is a str or a list of blocks)."""
    content = message.content
    if isinstance(content, str):
        return [content] if content else []
    texts = []
    for block in content:
        if isinstance(block, str):
            texts.append(block)
        elif isinstance(block, dict) and block.get("type") == "text":
            texts.append(block.get("text", ""))
    return [text for text in texts if text]


def stream_reply(agent, messages: list[AnyMessage]) -> Iterator[StreamEvent]:
    """Drive the graph for one request and yield progress and text events.

    ``ToolStarted`` is yielded for each requested tool (in request order)
    as soon as the model asks for it, before the tools node runs.
    ``ToolsFinished`` is yielded once, only if any tool ran, right before
    the answer text.
    """
    used_tools = False
    rounds = 0
    try:
        for update in agent.stream(
            {"messages": messages},
            config={"recursion_limit": RECURSION_LIMIT},
            stream_mode="updates",
        ):
            reply = update.get("chatbot") if update else None
            if not reply:
                continue
            rounds += 1
            message = reply["messages"][-1]
            tool_calls = getattr(message, "tool_calls", None)
            if tool_calls:
                used_tools = True
                for call in tool_calls:
                    yield ToolStarted(call["name"])
                continue

            if used_tools:
                yield ToolsFinished()
            for text in _text_blocks(message):
                yield TextChunk(text)
        logger.info("Chat reply completed after %d model round(s)", rounds)
    except Exception:
        logger.exception("Chat reply failed after %d model round(s)", rounds)
        yield TextChunk(APOLOGY_MESSAGE)
