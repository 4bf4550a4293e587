"""Tool descriptors exposed through ``tools/list``.

Defines the immutable :class:`ToolDefinition` type and the two tools
this server offers: ``execute_code`` and ``generate_code``.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from mcp.types import Tool

EXECUTE_CODE = "execute_code"
GENERATE_CODE = "generate_code"


@dataclass(frozen=True, slots=True)
class ParameterSpec:
    """One named tool parameter."""

    type: str
    description: str
    required: bool = False


@dataclass(frozen=True, slots=True)
class ToolDefinition:
    """Schema definition for a tool."""

    name: str
    description: str
    parameters: MappingProxyType[str, ParameterSpec] = field(
        default_factory=lambda: MappingProxyType({})
    )

    @property
    def required(self) -> list[str]:
        return [name for name, spec in self.parameters.items() if spec.required]

    @property
    def input_schema(self) -> dict[str, Any]:
        """JSON Schema for the tool's arguments."""
        return {
            "type": "object",
            "properties": {
                name: {"type": spec.type, "description": spec.description}
                for name, spec in self.parameters.items()
            },
            "required": self.required,
        }

    def to_mcp(self) -> Tool:
        return Tool(
            name=self.name,
            description=self.description,
            inputSchema=self.input_schema,
        )


def _define(
    name: str, description: str, parameters: dict[str, ParameterSpec]
) -> ToolDefinition:
    return ToolDefinition(name, description, MappingProxyType(parameters))


TOOLS: tuple[ToolDefinition, ...] = (
    _define(
        EXECUTE_CODE,
        "Execute MATLAB code and return the results",
        {
            "code": ParameterSpec(
                "string", "MATLAB code to execute", required=True
            ),
            "saveScript": ParameterSpec(
                "boolean", "Whether to save the MATLAB script for future reference"
            ),
            "scriptPath": ParameterSpec(
                "string", "Custom path to save the MATLAB script (optional)"
            ),
        },
    ),
    _define(
        GENERATE_CODE,
        "Generate MATLAB code from a natural language description",
        {
            "description": ParameterSpec(
                "string",
                "Natural language description of what the code should do",
                required=True,
            ),
            "saveScript": ParameterSpec(
                "boolean", "Whether to save the generated MATLAB script"
            ),
            "scriptPath": ParameterSpec(
                "string", "Custom path to save the MATLAB script (optional)"
            ),
        },
    ),
)


def get_tool(name: str) -> ToolDefinition | None:
    """Look up a tool by name."""
    return next((tool for tool in TOOLS if tool.name == name), None)
