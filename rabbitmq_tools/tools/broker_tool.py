"""Generic management API tool driven by a declarative spec."""

from __future__ import annotations

import json
from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

from rabbitmq_tools.broker.client import BrokerClient, build_path
from rabbitmq_tools.tools.base import BaseTool, ToolDefinition, ToolResult

BodyBuilder = Callable[[dict[str, Any]], Any]
ResponseFormatter = Callable[[Any], str]


def format_json(data: Any) -> str:
    """Pretty-print a decoded JSON response."""
    return json.dumps(data, indent=2, ensure_ascii=False)


@dataclass(frozen=True)
class ToolSpec:
    """How one tool maps validated arguments onto a single API call.

    The request path is ``/<resource>/<args[p] for p in path_params>/<action>``
    with every segment percent-encoded on its own. Arguments not named in
    ``path_params`` are what ``build_body`` gets to see.
    """

    definition: ToolDefinition
    method: str
    resource: str
    path_params: tuple[str, ...] = ()
    action: str | None = None
    build_body: BodyBuilder | None = None
    format_response: ResponseFormatter = format_json

    def build_request(self, arguments: dict[str, Any]) -> tuple[str, Any]:
        """Return (path, body) for already validated arguments."""
        segments = [self.resource]
        segments.extend(arguments[name] for name in self.path_params)
        if self.action:
            segments.append(self.action)

        body = None
        if self.build_body is not None:
            remaining = {k: v for k, v in arguments.items() if k not in self.path_params}
            body = self.build_body(remaining)

        return build_path(*segments), body


class BrokerTool(BaseTool):
    """A tool spec bound to a management API client."""

    def __init__(self, spec: ToolSpec, client: BrokerClient) -> None:
        self.spec = spec
        self.client = client

    @property
    def definition(self) -> ToolDefinition:
        return self.spec.definition

    async def execute(self, arguments: dict[str, Any] | None) -> ToolResult:
        """Validate, issue exactly one request, and format the response."""
        validated = self.validate_arguments(arguments)
        path, body = self.spec.build_request(validated)

        data = await self.client.request(path, self.spec.method, body=body)

        return ToolResult.from_text(self.spec.format_response(data))
