"""Tool descriptors for the MATLAB server."""

from matlab_mcp.tools.definitions import (
    EXECUTE_CODE,
    GENERATE_CODE,
    TOOLS,
    ParameterSpec,
    ToolDefinition,
    get_tool,
)

__all__ = [
    "EXECUTE_CODE",
    "GENERATE_CODE",
    "TOOLS",
    "ParameterSpec",
    "ToolDefinition",
    "get_tool",
]
