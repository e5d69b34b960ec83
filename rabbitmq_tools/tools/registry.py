"""Tool registry for looking up and executing tools."""

from __future__ import annotations

import time
import uuid
from collections.abc import Iterable
from typing import Any

import structlog

from rabbitmq_tools.broker.client import BrokerClient
from rabbitmq_tools.errors import ToolNotFoundError, ValidationError
from rabbitmq_tools.tools.base import BaseTool, ToolResult
from rabbitmq_tools.tools.queue import create_queue_tools

logger = structlog.get_logger()


class ToolRegistry:
    """Immutable, ordered collection of tools.

    Built once at startup and handed to whatever dispatches tool calls.
    Holds no per-call state, so ``execute`` may run concurrently.
    """

    def __init__(self, tools: Iterable[BaseTool]) -> None:
        self._log = logger.bind(component="tool_registry")

        tools_by_name: dict[str, BaseTool] = {}
        for tool in tools:
            if tool.name in tools_by_name:
                raise ValueError(f"Duplicate tool name: {tool.name}")
            tools_by_name[tool.name] = tool

        self._tools = tools_by_name
        self._log.info("Registered tools", tools=list(self._tools))

    def get(self, tool_name: str) -> BaseTool | None:
        """Get a tool by name."""
        return self._tools.get(tool_name)

    async def execute(self, tool_name: str, arguments: dict[str, Any] | None) -> ToolResult:
        """Execute a tool by name.

        Raises:
            ToolNotFoundError: if no tool has that name.
            ValidationError: if the arguments are rejected; nothing is sent.
            TransportError: if the management API call fails.
        """
        tool = self._tools.get(tool_name)
        if not tool:
            raise ToolNotFoundError(tool_name)

        call_id = uuid.uuid4().hex[:8]
        log = self._log.bind(tool=tool_name, call_id=call_id)
        log.debug("Executing tool")

        start_time = time.monotonic()

        try:
            result = await tool.execute(arguments)

        except ValidationError as e:
            log.warning("Invalid tool arguments", error=e.message)
            raise

        except Exception as e:
            execution_time = (time.monotonic() - start_time) * 1000
            log.error("Tool execution failed", error=str(e), execution_time_ms=execution_time)
            raise

        execution_time = (time.monotonic() - start_time) * 1000
        log.debug("Tool execution complete", execution_time_ms=execution_time)

        return result

    def get_tool_definitions(self) -> list[dict[str, Any]]:
        """Get MCP tool definitions for all registered tools."""
        return [tool.get_definition().to_mcp_format() for tool in self._tools.values()]

    def get_tools_description(self) -> str:
        """Get human-readable description of all tools."""
        lines = []
        for name, tool in self._tools.items():
            definition = tool.get_definition()
            lines.append(f"- {name}: {definition.description}")

            for param in definition.parameters:
                required = "(required)" if param.required else "(optional)"
                description = param.description or param.type.value
                lines.append(f"    - {param.name}: {description} {required}")

        return "\n".join(lines)

    @property
    def tool_names(self) -> list[str]:
        """Get list of registered tool names."""
        return list(self._tools.keys())

    @property
    def tool_count(self) -> int:
        """Get number of registered tools."""
        return len(self._tools)

    def __contains__(self, tool_name: str) -> bool:
        return tool_name in self._tools

    def __len__(self) -> int:
        return len(self._tools)


def create_default_registry(client: BrokerClient | None = None) -> ToolRegistry:
    """Build the registry of all queue tools over one client."""
    return ToolRegistry(create_queue_tools(client or BrokerClient()))
