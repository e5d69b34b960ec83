"""Tests for tool system."""

import pytest

from rabbitmq_tools.errors import ToolNotFoundError, ValidationError
from rabbitmq_tools.tools.base import (
    ParameterType,
    ToolAnnotations,
    ToolDefinition,
    ToolParameter,
)
from rabbitmq_tools.tools.queue import GET_QUEUE_MESSAGES, PUT_QUEUE, create_queue_tools
from rabbitmq_tools.tools.registry import ToolRegistry


class TestToolDefinition:
    """Tests for ToolDefinition validation and schema."""

    @pytest.fixture
    def definition(self) -> ToolDefinition:
        return ToolDefinition(
            name="sample",
            description="Sample tool",
            parameters=[
                ToolParameter(name="vhost", type=ParameterType.STRING),
                ToolParameter(name="limit", type=ParameterType.INTEGER, required=False, coerce=True),
                ToolParameter(
                    name="mode",
                    type=ParameterType.STRING,
                    required=False,
                    default="fast",
                    enum=["fast", "slow"],
                ),
                ToolParameter(name="ratio", type=ParameterType.NUMBER, required=False),
                ToolParameter(name="tags", type=ParameterType.ARRAY, required=False),
            ],
            annotations=ToolAnnotations(title="Sample", read_only_hint=True),
        )

    def test_defaults_applied(self, definition: ToolDefinition) -> None:
        """Test defaults fill in omitted optional fields."""
        assert definition.validate_arguments({"vhost": "/"}) == {"vhost": "/", "mode": "fast"}

    def test_none_arguments(self) -> None:
        """Test None is treated as an empty argument object."""
        definition = ToolDefinition(
            name="empty",
            description="No parameters",
            annotations=ToolAnnotations(title="Empty"),
        )
        assert definition.validate_arguments(None) == {}

    def test_non_object_arguments(self, definition: ToolDefinition) -> None:
        """Test arguments must be a mapping."""
        with pytest.raises(ValidationError):
            definition.validate_arguments(["/"])

    def test_missing_required(self, definition: ToolDefinition) -> None:
        """Test missing required parameter."""
        with pytest.raises(ValidationError, match="Missing required parameter: vhost"):
            definition.validate_arguments({})

    def test_wrong_type(self, definition: ToolDefinition) -> None:
        """Test wrong primitive type is rejected."""
        with pytest.raises(ValidationError, match="must be a string"):
            definition.validate_arguments({"vhost": 1})

        with pytest.raises(ValidationError, match="must be an array"):
            definition.validate_arguments({"vhost": "/", "tags": "a"})

    def test_bool_is_not_a_number(self, definition: ToolDefinition) -> None:
        """Test booleans are rejected for numeric parameters."""
        with pytest.raises(ValidationError, match="must be a number"):
            definition.validate_arguments({"vhost": "/", "ratio": True})

    def test_enum(self, definition: ToolDefinition) -> None:
        """Test enum membership."""
        with pytest.raises(ValidationError, match="must be one of"):
            definition.validate_arguments({"vhost": "/", "mode": "medium"})

        assert definition.validate_arguments({"vhost": "/", "mode": "slow"})["mode"] == "slow"

    def test_coerce(self, definition: ToolDefinition) -> None:
        """Test numeric strings are converted."""
        assert definition.validate_arguments({"vhost": "/", "limit": " 42 "})["limit"] == 42
        assert definition.validate_arguments({"vhost": "/", "limit": 7})["limit"] == 7

        with pytest.raises(ValidationError, match="must be a integer"):
            definition.validate_arguments({"vhost": "/", "limit": "4.5"})

    def test_non_finite(self, definition: ToolDefinition) -> None:
        """Test infinity and NaN raise ValidationError for numeric types."""
        for args in (
            {"limit": float("inf")},
            {"limit": float("nan")},
            {"ratio": float("-inf")},
            {"ratio": float("nan")},
        ):
            with pytest.raises(ValidationError, match="finite"):
                definition.validate_arguments({"vhost": "/", **args})

    def test_integer_normalized(self, definition: ToolDefinition) -> None:
        """Test integral floats become ints and large ints pass through."""
        assert definition.validate_arguments({"vhost": "/", "limit": 3.0})["limit"] == 3
        assert type(definition.validate_arguments({"vhost": "/", "limit": 3.0})["limit"]) is int
        assert definition.validate_arguments({"vhost": "/", "limit": 10**400})["limit"] == 10**400

    def test_unknown_arguments_dropped(self, definition: ToolDefinition) -> None:
        """Test undeclared arguments are not forwarded."""
        assert "extra" not in definition.validate_arguments({"vhost": "/", "extra": 1})

    def test_input_schema(self, definition: ToolDefinition) -> None:
        """Test schema generated from the parameters."""
        schema = definition.input_schema()

        assert schema["type"] == "object"
        assert schema["required"] == ["vhost"]
        assert schema["properties"]["mode"] == {
            "type": "string",
            "enum": ["fast", "slow"],
            "default": "fast",
        }
        assert schema["properties"]["limit"]["type"] == ["integer", "string"]

    def test_mcp_format(self, definition: ToolDefinition) -> None:
        """Test MCP listing entry."""
        entry = definition.to_mcp_format()

        assert entry["name"] == "sample"
        assert entry["description"] == "Sample tool"
        assert entry["annotations"] == {
            "title": "Sample",
            "readOnlyHint": True,
            "openWorldHint": True,
        }


class TestSchemaAgreement:
    """Declared schema and validation agree for the queue tools."""

    def test_put_queue_schema(self) -> None:
        """Test put-queue declares the defaults it applies."""
        schema = PUT_QUEUE.definition.input_schema()

        assert schema["required"] == ["vhost", "name"]
        assert schema["properties"]["durable"]["default"] is True
        assert schema["properties"]["auto_delete"]["default"] is False
        assert schema["properties"]["arguments"]["additionalProperties"] is True

    def test_get_messages_schema(self) -> None:
        """Test get-queue-messages declares its enums and defaults."""
        properties = GET_QUEUE_MESSAGES.definition.input_schema()["properties"]

        assert properties["ackmode"]["enum"] == ["get", "reject_requeue_true"]
        assert properties["ackmode"]["default"] == "get"
        assert properties["encoding"]["enum"] == ["auto", "base64"]
        assert properties["truncate"]["default"] == 50000
        assert properties["count"]["default"] == 1


class TestToolRegistry:
    """Tests for ToolRegistry."""

    def test_registration(self, registry: ToolRegistry) -> None:
        """Test tool registration."""
        assert "list-queues" in registry
        assert "publish-message" in registry
        assert registry.tool_count == 12
        assert len(registry) == 12

    def test_order_preserved(self, registry: ToolRegistry) -> None:
        """Test tools keep their declaration order."""
        assert registry.tool_names[:3] == ["list-queues", "list-queues-vhost", "get-queue"]
        assert registry.tool_names[-1] == "resume-queue"

    def test_duplicate_names(self, client) -> None:
        """Test duplicate names are rejected."""
        tools = create_queue_tools(client)
        with pytest.raises(ValueError, match="Duplicate tool name"):
            ToolRegistry(tools + tools[:1])

    def test_get_tool(self, registry: ToolRegistry) -> None:
        """Test getting a tool."""
        tool = registry.get("get-queue")
        assert tool is not None
        assert tool.name == "get-queue"
        assert tool.annotations.read_only_hint is True
        assert registry.get("missing") is None

    def test_get_tool_definitions(self, registry: ToolRegistry) -> None:
        """Test getting MCP definitions."""
        definitions = registry.get_tool_definitions()
        assert len(definitions) == 12

        for defn in definitions:
            assert set(defn) == {"name", "description", "inputSchema", "annotations"}
            assert defn["annotations"]["openWorldHint"] is True

    def test_read_only_hints(self, registry: ToolRegistry) -> None:
        """Test mutating tools are not marked read-only."""
        definitions = {d["name"]: d for d in registry.get_tool_definitions()}

        assert definitions["list-queues"]["annotations"]["readOnlyHint"] is True
        assert definitions["delete-queue"]["annotations"]["readOnlyHint"] is False
        assert definitions["publish-message"]["annotations"]["readOnlyHint"] is False

    def test_tools_description(self, registry: ToolRegistry) -> None:
        """Test human-readable listing."""
        text = registry.get_tools_description()
        assert "- put-queue: Create or update a queue" in text
        assert "    - durable:" in text
        assert "(optional)" in text

    @pytest.mark.asyncio
    async def test_execute(self, registry: ToolRegistry) -> None:
        """Test tool execution through registry."""
        result = await registry.execute("get-queue", {"vhost": "/", "name": "q1"})
        assert result.text == '{\n  "ok": true\n}'

    @pytest.mark.asyncio
    async def test_unknown_tool(self, registry: ToolRegistry, client) -> None:
        """Test unknown tool name."""
        with pytest.raises(ToolNotFoundError, match="no-such-tool"):
            await registry.execute("no-such-tool", {})
        assert client.calls == []
