"""Tool system - registry, base interfaces, and queue tools."""

from rabbitmq_tools.tools.base import BaseTool, ToolDefinition, ToolParameter, ToolResult
from rabbitmq_tools.tools.broker_tool import BrokerTool, ToolSpec
from rabbitmq_tools.tools.queue import QUEUE_TOOL_SPECS, create_queue_tools
from rabbitmq_tools.tools.registry import ToolRegistry, create_default_registry

__all__ = [
    "BaseTool",
    "BrokerTool",
    "QUEUE_TOOL_SPECS",
    "ToolDefinition",
    "ToolParameter",
    "ToolRegistry",
    "ToolResult",
    "ToolSpec",
    "create_default_registry",
    "create_queue_tools",
]
