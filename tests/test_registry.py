"""Tests for the tool catalog."""

import pytest
from pydantic import Field

from salesforce_mcp.mcp.catalog import tool_registry
from salesforce_mcp.mcp.registry import ToolArgs, ToolRegistry, get_tool, list_tools, register_tool
from salesforce_mcp.mcp.server import to_mcp_tool


class EchoArgs(ToolArgs):
    message: str = Field(description="Text to echo")


class TestToolRegistry:

    def test_catalog_order(self):
        names = [descriptor.name for descriptor in tool_registry.list_tools()]
        assert names == [
            "search_objects",
            "describe_object",
            "query_records",
            "dml_records",
            "manage_object",
            "manage_field",
            "search_all",
        ]

    def test_lookup_miss_returns_none(self):
        assert tool_registry.get("salesforce_nope") is None
        assert "salesforce_nope" not in tool_registry

    def test_list_is_immutable(self):
        assert isinstance(tool_registry.list_tools(), tuple)

    def test_duplicate_name_rejected(self):
        registry = ToolRegistry()

        @register_tool("echo", "Echo text", EchoArgs, registry=registry)
        def echo(sf, args):
            return args.message

        with pytest.raises(ValueError):
            register_tool("echo", "Echo again", EchoArgs, registry=registry)(echo)

    def test_input_schema_uses_wire_names(self):
        schema = tool_registry.get("query_records").input_schema
        assert set(schema["required"]) == {"objectName", "fields"}
        assert "whereClause" in schema["properties"]
        assert "orderBy" in schema["properties"]

    def test_input_schema_enums(self):
        schema = tool_registry.get("dml_records").input_schema
        assert schema["properties"]["operation"]["enum"] == ["insert", "update", "delete", "upsert"]

    def test_nested_object_schema(self):
        schema = tool_registry.get("search_all").input_schema
        assert "objects" in schema["required"]
        assert schema["properties"]["objects"]["type"] == "array"

    def test_mcp_tool_conversion(self):
        tool = to_mcp_tool(tool_registry.get("describe_object"))
        assert tool.name == "describe_object"
        assert tool.inputSchema["required"] == ["objectName"]

    def test_module_level_lookup(self):
        assert get_tool("search_all") is tool_registry.get("search_all")
        assert get_tool("salesforce_nope") is None
        assert list_tools() == tool_registry.list_tools()

    def test_required_names_have_min_length(self):
        schema = tool_registry.get("describe_object").input_schema
        assert schema["properties"]["objectName"]["minLength"] == 1
