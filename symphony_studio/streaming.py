"""Progress events for the chat stream and their inline text encoding.

Inside the service, the tool-calling loop yields typed events on two
logical channels: progress (``ToolStarted`` / ``ToolsFinished``) and answer
text (``TextChunk``).  They are flattened into one ``text/plain`` stream
only at the HTTP boundary, where progress becomes inline markers::

    [TOOL:pricing][TOOL:case studies][TOOL:done]Here is what we offer…

The website strips these markers to show "looking up pricing…" indicators.
``parse_stream`` does the same for Python consumers and tests.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Iterator
from dataclasses import dataclass, field

from symphony_studio.tools.registry import REGISTRY

DONE_MARKER_NAME = "done"
_MARKER_RE = re.compile(r"\[TOOL:([^\]]*)\]")


def tool_display_name(tool_name: str) -> str:
    """``get_case_studies`` → ``case studies``; ``recommend_tier`` → ``recommend tier``."""
    name = tool_name.replace("_", " ")
    if name.startswith("get "):
        name = name[len("get "):]
    return name


_TOOL_BY_DISPLAY_NAME = {tool_display_name(name): name for name in REGISTRY}


@dataclass(frozen=True)
class ToolStarted:
    tool_name: str

    @property
    def display_name(self) -> str:
        return tool_display_name(self.tool_name)


@dataclass(frozen=True)
class ToolsFinished:
    pass


@dataclass(frozen=True)
class TextChunk:
    text: str


StreamEvent = ToolStarted | ToolsFinished | TextChunk


def encode_event(event: StreamEvent) -> str:
    if isinstance(event, ToolStarted):
        return f"[TOOL:{event.display_name}]"
    if isinstance(event, ToolsFinished):
        return f"[TOOL:{DONE_MARKER_NAME}]"
    return event.text


def encode_stream(events: Iterable[StreamEvent]) -> Iterator[str]:
    """Flatten events into the wire format, one string per event."""
    for event in events:
        yield encode_event(event)


@dataclass
class ParsedReply:
    """A chat stream split back into its two channels."""

    tool_names: list[str] = field(default_factory=list)
    finished: bool = False
    text: str = ""


def parse_stream(body: str) -> ParsedReply:
    """Strip every ``[TOOL:…]`` marker from *body*.

    Display names are mapped back to registry operation names; names that
    are not in the registry are kept as they appear.
    """
    reply = ParsedReply()
    for match in _MARKER_RE.finditer(body):
        name = match.group(1)
        if name == DONE_MARKER_NAME:
            reply.finished = True
        else:
            reply.tool_names.append(_TOOL_BY_DISPLAY_NAME.get(name, name))
    reply.text = _MARKER_RE.sub("", body)
    return reply
