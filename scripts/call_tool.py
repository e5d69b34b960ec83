#!/usr/bin/env python3
"""List the queue tools or call one of them against a live broker."""

from __future__ import annotations

import argparse
import asyncio
import json
import logging
import sys
from pathlib import Path

import structlog

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from rabbitmq_tools.broker.client import BrokerClient
from rabbitmq_tools.errors import BrokerToolError
from rabbitmq_tools.tools.registry import create_default_registry
from rabbitmq_tools.utils.config import get_settings, load_config


logger = structlog.get_logger()


def configure_logging(log_level: str) -> None:
    """Send logs to stderr so stdout carries only tool output."""
    structlog.configure(
        wrapper_class=structlog.make_filtering_bound_logger(
            logging.getLevelName(log_level.upper())
        ),
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
    )


async def call_tool(tool_name: str, arguments: dict, config_path: str | None) -> int:
    """Run one tool call and print its text result."""
    settings = get_settings()

    if config_path:
        broker_config = load_config(config_path).to_broker_config()
    else:
        broker_config = settings.to_broker_config()

    registry = create_default_registry(BrokerClient(broker_config))

    try:
        result = await registry.execute(tool_name, arguments)
    except BrokerToolError as e:
        logger.error("Tool call failed", tool=tool_name, error=str(e))
        print(str(e), file=sys.stderr)
        return 1

    print(result.text)
    return 0


def main() -> None:
    """Main entry point."""
    parser = argparse.ArgumentParser(description="Call a RabbitMQ management tool")
    parser.add_argument("tool", nargs="?", help="Tool name, e.g. list-queues")
    parser.add_argument(
        "--args",
        type=str,
        default="{}",
        help="Tool arguments as a JSON object",
    )
    parser.add_argument(
        "--config",
        type=str,
        default=None,
        help="Optional YAML file with management API settings",
    )
    parser.add_argument(
        "--list",
        action="store_true",
        help="Print the tool definitions and exit",
    )
    args = parser.parse_args()

    configure_logging(get_settings().log_level)

    if args.list or not args.tool:
        registry = create_default_registry()
        print(json.dumps(registry.get_tool_definitions(), indent=2))
        return

    try:
        arguments = json.loads(args.args)
    except json.JSONDecodeError as e:
        parser.error(f"--args is not valid JSON: {e}")

    sys.exit(asyncio.run(call_tool(args.tool, arguments, args.config)))


if __name__ == "__main__":
    main()
