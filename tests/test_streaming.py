"""Tests for chat stream events and the inline marker format."""

from __future__ import annotations

import pytest

from symphony_studio.streaming import (
    TextChunk,
    ToolsFinished,
    ToolStarted,
    encode_event,
    encode_stream,
    parse_stream,
    tool_display_name,
)
from symphony_studio.tools.registry import REGISTRY


class TestDisplayNames:
    @pytest.mark.parametrize(
        ("tool_name", "display"),
        [
            ("get_services", "services"),
            ("get_case_studies", "case studies"),
            ("get_faq", "faq"),
            ("recommend_tier", "recommend tier"),
        ],
    )
    def test_display_name(self, tool_name, display):
        assert tool_display_name(tool_name) == display

    def test_display_names_are_unique(self):
        names = [tool_display_name(name) for name in REGISTRY]
        assert len(set(names)) == len(names)


class TestEncoding:
    def test_encode_each_event(self):
        assert encode_event(ToolStarted("get_pricing")) == "[TOOL:pricing]"
        assert encode_event(ToolsFinished()) == "[TOOL:done]"
        assert encode_event(TextChunk("Hello")) == "Hello"

    def test_encode_stream_is_lazy_and_ordered(self):
        events = iter([ToolStarted("get_contact"), ToolsFinished(), TextChunk("Email us.")])
        assert list(encode_stream(events)) == ["[TOOL:contact]", "[TOOL:done]", "Email us."]


class TestParsing:
    def test_plain_text_has_no_markers(self):
        reply = parse_stream("Just an answer.")
        assert reply.tool_names == []
        assert reply.finished is False
        assert reply.text == "Just an answer."

    def test_markers_recover_operation_names(self):
        names = ["get_pricing", "get_case_studies", "recommend_tier"]
        events = [ToolStarted(n) for n in names] + [ToolsFinished(), TextChunk("[see above] ok")]
        reply = parse_stream("".join(encode_stream(events)))
        assert reply.tool_names == names
        assert reply.finished is True
        assert reply.text == "[see above] ok"

    def test_recovered_names_do_not_depend_on_text(self):
        names = list(REGISTRY)
        for text in ("", "short", "**Our Services:**\n• a [TOOL"):
            body = "".join(encode_stream([*map(ToolStarted, names), ToolsFinished(), TextChunk(text)]))
            assert parse_stream(body).tool_names == names

    def test_unknown_display_name_kept(self):
        assert parse_stream("[TOOL:weather]Sunny").tool_names == ["weather"]
