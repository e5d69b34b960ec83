"""Tool definitions for the RabbitMQ HTTP management API."""

from rabbitmq_tools.broker import BrokerClient, BrokerConfig
from rabbitmq_tools.errors import BrokerToolError, ToolNotFoundError, TransportError, ValidationError
from rabbitmq_tools.tools import ToolRegistry, ToolResult, create_default_registry

__version__ = "0.1.0"

__all__ = [
    "BrokerClient",
    "BrokerConfig",
    "BrokerToolError",
    "ToolNotFoundError",
    "ToolRegistry",
    "ToolResult",
    "TransportError",
    "ValidationError",
    "create_default_registry",
]
