"""Tests for the tool descriptors."""

from __future__ import annotations

import dataclasses

import pytest
from mcp.types import Tool

from matlab_mcp.tools.definitions import (
    EXECUTE_CODE,
    GENERATE_CODE,
    TOOLS,
    ParameterSpec,
    ToolDefinition,
    get_tool,
)


class TestToolSet:
    def test_exactly_two_tools(self) -> None:
        assert [t.name for t in TOOLS] == [EXECUTE_CODE, GENERATE_CODE]

    def test_one_required_field_each(self) -> None:
        assert get_tool(EXECUTE_CODE).required == ["code"]  # type: ignore[union-attr]
        assert get_tool(GENERATE_CODE).required == ["description"]  # type: ignore[union-attr]

    def test_get_unknown_tool(self) -> None:
        assert get_tool("nope") is None

    def test_optional_save_parameters(self) -> None:
        for tool in TOOLS:
            assert tool.parameters["saveScript"].type == "boolean"
            assert tool.parameters["scriptPath"].type == "string"
            assert not tool.parameters["saveScript"].required


class TestImmutability:
    def test_frozen_fields(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            TOOLS[0].name = "other"  # type: ignore[misc]

    def test_parameters_read_only(self) -> None:
        with pytest.raises(TypeError):
            TOOLS[0].parameters["extra"] = ParameterSpec("string", "x")  # type: ignore[index]


class TestSchema:
    def test_input_schema(self) -> None:
        tool = ToolDefinition(
            "t",
            "demo",
            {"a": ParameterSpec("string", "first", required=True)},  # type: ignore[arg-type]
        )
        assert tool.input_schema == {
            "type": "object",
            "properties": {"a": {"type": "string", "description": "first"}},
            "required": ["a"],
        }

    def test_to_mcp(self) -> None:
        tool = get_tool(EXECUTE_CODE)
        assert tool is not None
        mcp_tool = tool.to_mcp()
        assert isinstance(mcp_tool, Tool)
        assert mcp_tool.name == "execute_code"
        assert mcp_tool.inputSchema["required"] == ["code"]
        assert "MATLAB" in (mcp_tool.description or "")
