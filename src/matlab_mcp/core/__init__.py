"""Core utilities: errors."""

from matlab_mcp.core.errors import (
    ConfigError,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MatlabMcpError,
    MethodNotFoundError,
    RpcError,
)

__all__ = [
    "ConfigError",
    "InternalError",
    "InvalidParamsError",
    "InvalidRequestError",
    "MatlabMcpError",
    "MethodNotFoundError",
    "RpcError",
]
