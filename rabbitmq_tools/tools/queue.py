"""Queue tools for the RabbitMQ management API.

Each entry of ``QUEUE_TOOL_SPECS`` declares one tool: its parameters, the
HTTP method, and the path it targets. ``create_queue_tools`` binds the specs
to a client.
"""

from __future__ import annotations

from typing import Any

from rabbitmq_tools.broker.client import BrokerClient
from rabbitmq_tools.tools.base import (
    ParameterType,
    ToolAnnotations,
    ToolDefinition,
    ToolParameter,
)
from rabbitmq_tools.tools.broker_tool import BrokerTool, ToolSpec

DEFAULT_TRUNCATE = 50000

# Public ackmode -> broker ackmode
ACKMODES = {
    "get": "ack_requeue_true",
    "reject_requeue_true": "reject_requeue_true",
}

VHOST = ToolParameter(name="vhost", type=ParameterType.STRING, description="The vhost name")
QUEUE_NAME = ToolParameter(name="name", type=ParameterType.STRING, description="The queue name")


def _queue_tool(
    name: str,
    description: str,
    title: str,
    method: str = "GET",
    action: str | None = None,
    read_only: bool = False,
) -> ToolSpec:
    """Spec for a tool addressing a single queue with no request body."""
    return ToolSpec(
        definition=ToolDefinition(
            name=name,
            description=description,
            parameters=[VHOST, QUEUE_NAME],
            annotations=ToolAnnotations(title=title, read_only_hint=read_only),
        ),
        method=method,
        resource="queues",
        path_params=("vhost", "name"),
        action=action,
    )


def _put_queue_body(args: dict[str, Any]) -> dict[str, Any]:
    body = {
        "durable": args["durable"],
        "auto_delete": args["auto_delete"],
    }
    if "arguments" in args:
        body["arguments"] = args["arguments"]
    return body


def _get_messages_body(args: dict[str, Any]) -> dict[str, Any]:
    # requeue is accepted but the broker derives it from ackmode
    return {
        "count": args["count"],
        "ackmode": ACKMODES[args["ackmode"]],
        "encoding": args["encoding"],
        "truncate": args.get("truncate", DEFAULT_TRUNCATE),
    }


def _publish_body(args: dict[str, Any]) -> dict[str, Any]:
    return {
        "properties": args.get("properties") or {},
        "routing_key": args["routing_key"],
        "payload": args["payload"],
        "payload_encoding": args["payload_encoding"],
    }


def _format_publish(data: Any) -> str:
    routed = data.get("routed") if isinstance(data, dict) else None
    return f"Message published. Routed: {'true' if routed else 'false'}"


LIST_QUEUES = ToolSpec(
    definition=ToolDefinition(
        name="list-queues",
        description="List all queues across all known vhosts",
        annotations=ToolAnnotations(title="List Queues", read_only_hint=True),
    ),
    method="GET",
    resource="queues",
)

LIST_QUEUES_VHOST = ToolSpec(
    definition=ToolDefinition(
        name="list-queues-vhost",
        description="List queues for a specific vhost",
        parameters=[VHOST],
        annotations=ToolAnnotations(title="List Queues (Vhost)", read_only_hint=True),
    ),
    method="GET",
    resource="queues",
    path_params=("vhost",),
)

GET_QUEUE = _queue_tool(
    "get-queue",
    "Get details for a specific queue",
    "Get Queue Details",
    read_only=True,
)

PUT_QUEUE = ToolSpec(
    definition=ToolDefinition(
        name="put-queue",
        description="Create or update a queue",
        parameters=[
            VHOST,
            QUEUE_NAME,
            ToolParameter(
                name="durable",
                type=ParameterType.BOOLEAN,
                description="Whether the queue survives a broker restart",
                required=False,
                default=True,
            ),
            ToolParameter(
                name="auto_delete",
                type=ParameterType.BOOLEAN,
                description="Whether the queue is deleted when its last consumer unsubscribes",
                required=False,
                default=False,
            ),
            ToolParameter(
                name="arguments",
                type=ParameterType.OBJECT,
                description="Optional queue arguments (x-message-ttl, x-queue-type, ...)",
                required=False,
            ),
        ],
        annotations=ToolAnnotations(title="Create or Update Queue"),
    ),
    method="PUT",
    resource="queues",
    path_params=("vhost", "name"),
    build_body=_put_queue_body,
)

DELETE_QUEUE = _queue_tool("delete-queue", "Delete a queue", "Delete Queue", method="DELETE")

PURGE_QUEUE = _queue_tool(
    "purge-queue",
    "Purge a queue",
    "Purge Queue",
    method="DELETE",
    action="contents",
)

GET_QUEUE_MESSAGES = ToolSpec(
    definition=ToolDefinition(
        name="get-queue-messages",
        description="Get messages from a queue",
        parameters=[
            VHOST,
            QUEUE_NAME,
            ToolParameter(
                name="count",
                type=ParameterType.NUMBER,
                description="Maximum number of messages to fetch",
                required=False,
                default=1,
                coerce=True,
            ),
            ToolParameter(
                name="ackmode",
                type=ParameterType.STRING,
                description="'get' acknowledges and requeues, 'reject_requeue_true' rejects and requeues",
                required=False,
                default="get",
                enum=list(ACKMODES),
            ),
            ToolParameter(
                name="encoding",
                type=ParameterType.STRING,
                description="Payload encoding of the returned messages",
                required=False,
                default="auto",
                enum=["auto", "base64"],
            ),
            ToolParameter(
                name="truncate",
                type=ParameterType.INTEGER,
                description="Truncate payloads longer than this many bytes",
                required=False,
                default=DEFAULT_TRUNCATE,
                coerce=True,
            ),
            ToolParameter(
                name="requeue",
                type=ParameterType.BOOLEAN,
                description="Whether fetched messages are requeued",
                required=False,
                default=False,
            ),
        ],
        annotations=ToolAnnotations(title="Get Queue Messages", read_only_hint=True),
    ),
    method="POST",
    resource="queues",
    path_params=("vhost", "name"),
    action="get",
    build_body=_get_messages_body,
)

PUBLISH_MESSAGE = ToolSpec(
    definition=ToolDefinition(
        name="publish-message",
        description="Publish a message to a specific exchange",
        parameters=[
            VHOST,
            ToolParameter(name="exchange", type=ParameterType.STRING, description="The exchange name"),
            ToolParameter(
                name="routing_key",
                type=ParameterType.STRING,
                description="The routing key",
                required=False,
                default="",
            ),
            ToolParameter(
                name="payload",
                type=ParameterType.STRING,
                description="The message content (payload)",
            ),
            ToolParameter(
                name="payload_encoding",
                type=ParameterType.STRING,
                description="Encoding of the payload (e.g., string)",
                required=False,
                default="string",
            ),
            ToolParameter(
                name="properties",
                type=ParameterType.OBJECT,
                description="Optional message properties",
                required=False,
                default={},
            ),
        ],
        annotations=ToolAnnotations(title="Publish Message"),
    ),
    method="POST",
    resource="exchanges",
    path_params=("vhost", "exchange"),
    action="publish",
    build_body=_publish_body,
    format_response=_format_publish,
)

GET_QUEUE_BINDINGS = _queue_tool(
    "get-queue-bindings",
    "List queue bindings",
    "List Queue Bindings",
    action="bindings",
    read_only=True,
)

GET_QUEUE_UNACKED = _queue_tool(
    "get-queue-unacked",
    "List unacked messages for a queue",
    "List Unacked Messages",
    action="unacked",
    read_only=True,
)

PAUSE_QUEUE = _queue_tool("pause-queue", "Pause a queue", "Pause Queue", method="PUT", action="pause")

RESUME_QUEUE = _queue_tool("resume-queue", "Resume a queue", "Resume Queue", method="PUT", action="resume")

QUEUE_TOOL_SPECS: tuple[ToolSpec, ...] = (
    LIST_QUEUES,
    LIST_QUEUES_VHOST,
    GET_QUEUE,
    PUT_QUEUE,
    DELETE_QUEUE,
    PURGE_QUEUE,
    GET_QUEUE_MESSAGES,
    PUBLISH_MESSAGE,
    GET_QUEUE_BINDINGS,
    GET_QUEUE_UNACKED,
    PAUSE_QUEUE,
    RESUME_QUEUE,
)


def create_queue_tools(client: BrokerClient) -> list[BrokerTool]:
    """Bind every queue tool spec to the given client."""
    return [BrokerTool(spec, client) for spec in QUEUE_TOOL_SPECS]
