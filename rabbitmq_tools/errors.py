"""Exceptions raised by broker tools."""

from __future__ import annotations

from typing import Any


class BrokerToolError(Exception):
    """Base class for all tool errors."""


class ToolNotFoundError(BrokerToolError):
    """Raised when a tool name is not registered."""

    def __init__(self, tool_name: str) -> None:
        self.tool_name = tool_name
        super().__init__(f"Tool not found: {tool_name}")


class ValidationError(BrokerToolError):
    """Raised when tool arguments do not match the declared parameters.

    Always raised before any request reaches the broker, so the call can be
    retried once the input is corrected.
    """

    def __init__(self, tool_name: str, message: str) -> None:
        self.tool_name = tool_name
        self.message = message
        super().__init__(f"Invalid arguments for {tool_name}: {message}")


class TransportError(BrokerToolError):
    """Raised when the management API call fails.

    ``status`` is None when no HTTP response was received at all.
    """

    def __init__(
        self,
        method: str,
        path: str,
        status: int | None = None,
        body: Any = None,
        reason: str | None = None,
    ) -> None:
        self.method = method
        self.path = path
        self.status = status
        self.body = body
        self.reason = reason

        if status is None:
            detail = reason or "connection failed"
        else:
            detail = f"HTTP {status}"
            if body:
                detail = f"{detail}: {body}"
        super().__init__(f"{method} {path} failed ({detail})")
