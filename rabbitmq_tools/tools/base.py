"""Base tool interface and definitions."""

from __future__ import annotations

import copy
import math
from abc import ABC, abstractmethod
from enum import Enum
from typing import Any, Literal

from pydantic import BaseModel, ConfigDict, Field

from rabbitmq_tools.errors import ValidationError


class ParameterType(str, Enum):
    """JSON Schema parameter types."""

    STRING = "string"
    NUMBER = "number"
    INTEGER = "integer"
    BOOLEAN = "boolean"
    ARRAY = "array"
    OBJECT = "object"


class ToolParameter(BaseModel):
    """Definition of a tool parameter."""

    model_config = ConfigDict(frozen=True)

    name: str
    type: ParameterType
    description: str = ""
    required: bool = True
    default: Any | None = None
    enum: list[Any] | None = None
    items: dict[str, Any] | None = None  # For array types
    properties: dict[str, Any] | None = None  # For object types
    coerce: bool = False  # Accept numeric strings for number/integer types

    def to_schema(self) -> dict[str, Any]:
        """JSON schema fragment for this parameter."""
        prop: dict[str, Any] = {"type": self.type.value}
        if self.coerce:
            prop["type"] = [self.type.value, ParameterType.STRING.value]

        if self.description:
            prop["description"] = self.description

        if self.enum:
            prop["enum"] = list(self.enum)

        if self.type == ParameterType.ARRAY and self.items:
            prop["items"] = self.items

        if self.type == ParameterType.OBJECT:
            if self.properties:
                prop["properties"] = self.properties
            else:
                prop["additionalProperties"] = True

        if self.default is not None:
            prop["default"] = self.default

        return prop


class ToolAnnotations(BaseModel):
    """Hints for clients that display or gate tool calls."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    title: str
    read_only_hint: bool = Field(default=False, alias="readOnlyHint")
    open_world_hint: bool = Field(default=True, alias="openWorldHint")


class ToolDefinition(BaseModel):
    """Declared contract of a tool.

    The parameter list is the only place where required fields, types,
    enumerations and defaults are declared. Both the published input schema
    and argument validation are derived from it.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    parameters: list[ToolParameter] = Field(default_factory=list)
    annotations: ToolAnnotations

    def input_schema(self) -> dict[str, Any]:
        """Build the JSON schema describing the tool arguments."""
        properties = {}
        required = []

        for param in self.parameters:
            properties[param.name] = param.to_schema()
            if param.required:
                required.append(param.name)

        return {
            "type": "object",
            "properties": properties,
            "required": required,
        }

    def to_mcp_format(self) -> dict[str, Any]:
        """Convert to the MCP tool listing format."""
        return {
            "name": self.name,
            "description": self.description,
            "inputSchema": self.input_schema(),
            "annotations": self.annotations.model_dump(by_alias=True),
        }

    def validate_arguments(self, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """Validate arguments and return a normalized copy with defaults applied.

        Raises:
            ValidationError: if a required parameter is missing, a value has
                the wrong type, or a value is outside the declared enum.
        """
        if arguments is None:
            arguments = {}
        if not isinstance(arguments, dict):
            raise ValidationError(self.name, "arguments must be an object")

        normalized: dict[str, Any] = {}

        for param in self.parameters:
            value = arguments.get(param.name)

            # Empty numeric strings count as omitted
            if param.coerce and value == "":
                value = None

            if value is None:
                if param.required:
                    raise ValidationError(self.name, f"Missing required parameter: {param.name}")
                if param.default is not None:
                    normalized[param.name] = copy.deepcopy(param.default)
                continue

            if param.coerce and isinstance(value, str):
                value = self._coerce_number(param, value)

            self._check_type(param, value)

            if param.type == ParameterType.INTEGER:
                value = int(value)

            if param.enum and value not in param.enum:
                raise ValidationError(
                    self.name,
                    f"Parameter {param.name} must be one of: {param.enum}",
                )

            normalized[param.name] = value

        return normalized

    def _coerce_number(self, param: ToolParameter, value: str) -> int | float:
        """Convert a numeric string to int or float."""
        text = value.strip()
        try:
            return int(text)
        except ValueError:
            pass

        if param.type == ParameterType.NUMBER:
            try:
                number = float(text)
            except ValueError:
                pass
            else:
                if math.isfinite(number):
                    return number

        raise ValidationError(
            self.name,
            f"Parameter {param.name} must be a {param.type.value}, got {value!r}",
        )

    def _check_type(self, param: ToolParameter, value: Any) -> None:
        is_number = isinstance(value, (int, float)) and not isinstance(value, bool)
        is_integral = is_number and (isinstance(value, int) or value.is_integer())
        if isinstance(value, float) and not math.isfinite(value):
            raise ValidationError(self.name, f"Parameter {param.name} must be a finite number")

        if param.type == ParameterType.STRING and not isinstance(value, str):
            raise ValidationError(self.name, f"Parameter {param.name} must be a string")
        elif param.type == ParameterType.NUMBER and not is_number:
            raise ValidationError(self.name, f"Parameter {param.name} must be a number")
        elif param.type == ParameterType.INTEGER and not is_integral:
            raise ValidationError(self.name, f"Parameter {param.name} must be an integer")
        elif param.type == ParameterType.BOOLEAN and not isinstance(value, bool):
            raise ValidationError(self.name, f"Parameter {param.name} must be a boolean")
        elif param.type == ParameterType.ARRAY and not isinstance(value, list):
            raise ValidationError(self.name, f"Parameter {param.name} must be an array")
        elif param.type == ParameterType.OBJECT and not isinstance(value, dict):
            raise ValidationError(self.name, f"Parameter {param.name} must be an object")


class TextContent(BaseModel):
    """A single text item of a tool result."""

    type: Literal["text"] = "text"
    text: str


class ToolResult(BaseModel):
    """Result returned to the dispatcher."""

    content: list[TextContent] = Field(default_factory=list)

    @classmethod
    def from_text(cls, text: str) -> ToolResult:
        return cls(content=[TextContent(text=text)])

    @property
    def text(self) -> str:
        """Concatenated text of all content items."""
        return "\n".join(item.text for item in self.content)


class BaseTool(ABC):
    """Abstract base class for all tools."""

    @property
    @abstractmethod
    def definition(self) -> ToolDefinition:
        """Declared contract of the tool."""
        ...

    @property
    def name(self) -> str:
        return self.definition.name

    @property
    def description(self) -> str:
        return self.definition.description

    @property
    def parameters(self) -> list[ToolParameter]:
        return self.definition.parameters

    @property
    def annotations(self) -> ToolAnnotations:
        return self.definition.annotations

    def get_definition(self) -> ToolDefinition:
        """Get tool definition."""
        return self.definition

    def validate_arguments(self, arguments: dict[str, Any] | None) -> dict[str, Any]:
        """Validate arguments against parameter definitions."""
        return self.definition.validate_arguments(arguments)

    @abstractmethod
    async def execute(self, arguments: dict[str, Any] | None) -> ToolResult:
        """Validate the arguments and execute the tool."""
        ...
