"""Error type raised by the route handlers.

Rendered by the application's exception handler (see ``server.py``) as
``{"error": message}`` with the given status code, which is the shape the
website's fetch calls expect.
"""

from __future__ import annotations

MESSAGES_REQUIRED = "Messages array required"
CHAT_FAILED = "Failed to process request"
QUERY_OR_TOOL_REQUIRED = "Please provide a 'query' or 'tool' parameter"
INTERNAL_ERROR = "Internal server error"
AGENT_STARTING = "The assistant is still starting up. Please try again in a moment."


class ApiError(Exception):
    """An error that maps directly onto an HTTP response."""

    def __init__(self, status_code: int, message: str):
        self.status_code = status_code
        self.message = message
        super().__init__(message)
