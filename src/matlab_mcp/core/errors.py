"""Exception hierarchy for matlab-mcp.

Every module imports from here. The hierarchy is:

    MatlabMcpError
    ├── ConfigError
    └── RpcError(code, message, data)
        ├── InvalidRequestError   (-32600)
        ├── MethodNotFoundError   (-32601)
        ├── InvalidParamsError    (-32602)
        └── InternalError         (-32603)

Engine failures are deliberately absent: the engine adapter reports them
as data on ``ExecutionResult`` rather than raising.
"""

from __future__ import annotations

from typing import Any, ClassVar

from mcp.types import (
    INTERNAL_ERROR,
    INVALID_PARAMS,
    INVALID_REQUEST,
    METHOD_NOT_FOUND,
)


class MatlabMcpError(Exception):
    """Base exception for all matlab-mcp errors."""


# ─── Configuration Errors ─────────────────────────────────────


class ConfigError(MatlabMcpError):
    """Invalid configuration."""


# ─── Protocol Errors ──────────────────────────────────────────


class RpcError(MatlabMcpError):
    """An error that maps onto a JSON-RPC error object."""

    code: ClassVar[int] = INTERNAL_ERROR

    def __init__(self, message: str, data: Any = None) -> None:
        self.message = message
        self.data = data
        super().__init__(message)

    def to_dict(self) -> dict[str, Any]:
        """Render as a JSON-RPC ``error`` member."""
        error: dict[str, Any] = {"code": self.code, "message": self.message}
        if self.data is not None:
            error["data"] = self.data
        return error


class InvalidRequestError(RpcError):
    """Payload is JSON but not a usable JSON-RPC envelope."""

    code = INVALID_REQUEST


class MethodNotFoundError(RpcError):
    """Unknown method or unknown tool name."""

    code = METHOD_NOT_FOUND


class InvalidParamsError(RpcError):
    """A required parameter is missing or has the wrong type."""

    code = INVALID_PARAMS


class InternalError(RpcError):
    """Unexpected failure while handling a request."""

    code = INTERNAL_ERROR
