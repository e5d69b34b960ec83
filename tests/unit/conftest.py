"""Shared fixtures for unit tests."""

from __future__ import annotations

from typing import Any

import pytest

from rabbitmq_tools.tools.registry import ToolRegistry
from rabbitmq_tools.tools.queue import create_queue_tools


class RecordingClient:
    """Stands in for BrokerClient and records every request."""

    def __init__(self, response: Any = None, error: Exception | None = None) -> None:
        self.response = response
        self.error = error
        self.calls: list[dict[str, Any]] = []

    async def request(
        self,
        path: str,
        method: str = "GET",
        body: Any = None,
    ) -> Any:
        self.calls.append({"path": path, "method": method, "body": body})
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def client() -> RecordingClient:
    return RecordingClient(response={"ok": True})


@pytest.fixture
def registry(client: RecordingClient) -> ToolRegistry:
    return ToolRegistry(create_queue_tools(client))


@pytest.fixture
def make_client():
    """Factory for clients with a custom response or error."""
    return RecordingClient
