"""Shared test fixtures for the Symphony Studio test suite."""

from __future__ import annotations

import os
from unittest.mock import MagicMock

import pytest


def pytest_configure(config):
    """Set test environment variables BEFORE collection starts.

    This runs before any imports, so config.py won't fail on module load.
    """
    os.environ.setdefault("ANTHROPIC_API_KEY", "test-anthropic-key-123")
    os.environ.setdefault("METRICS_ENABLED", "false")


@pytest.fixture
def tool_call():
    """Factory for the tool-call dicts carried by an AIMessage."""

    def _make(name: str, args: dict | None = None, call_id: str = "call_1") -> dict:
        return {"name": name, "args": args or {}, "id": call_id}

    return _make


@pytest.fixture
def mock_llm():
    """Factory for a fake bound LLM that returns the given turns in order."""

    def _make(*responses):
        llm = MagicMock()
        llm.invoke.side_effect = list(responses)
        return llm

    return _make
