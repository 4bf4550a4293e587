"""JSON-RPC (Model Context Protocol) message handling and stdio transport."""

from matlab_mcp.mcp.dispatcher import EngineAvailability, MethodDispatcher
from matlab_mcp.mcp.messages import (
    Notification,
    Request,
    Response,
    decode_message,
)
from matlab_mcp.mcp.stdio import StdioTransport

__all__ = [
    "EngineAvailability",
    "MethodDispatcher",
    "Notification",
    "Request",
    "Response",
    "StdioTransport",
    "decode_message",
]
