"""JSON-RPC method dispatch for the MATLAB server.

:class:`MethodDispatcher` is shared by both transports: it takes one
decoded JSON payload, routes it by ``method``, and returns the response
envelope (or ``None`` for notifications).
"""

from __future__ import annotations

import logging
import time
from pathlib import Path
from typing import TYPE_CHECKING, Any

from mcp.types import CallToolResult, TextContent

from matlab_mcp import SERVER_NAME, __version__
from matlab_mcp.core.errors import (
    InternalError,
    InvalidParamsError,
    MethodNotFoundError,
    RpcError,
)
from matlab_mcp.engine.matlab import ExecutionRequest
from matlab_mcp.mcp import resources
from matlab_mcp.mcp.messages import (
    Notification,
    Request,
    Response,
    decode_message,
    failure,
    request_id_of,
    success,
    to_wire,
)
from matlab_mcp.tools.definitions import EXECUTE_CODE, TOOLS, get_tool

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from matlab_mcp.engine.matlab import MatlabEngine

    _MethodHandler = Callable[[dict[str, Any]], Awaitable[dict[str, Any]]]

logger = logging.getLogger(__name__)

DEFAULT_PROTOCOL_VERSION = "2025-03-26"
INSTRUCTIONS = "MATLAB MCP Server - Execute MATLAB code and generate scripts"
UNAVAILABLE_TEXT = (
    "Error: MATLAB is not available. Please make sure MATLAB is installed "
    "and the path is correctly set in the environment variable MATLAB_PATH."
)


def server_info() -> dict[str, str]:
    return {"name": SERVER_NAME, "version": __version__}


def capabilities() -> dict[str, dict[str, Any]]:
    return {"tools": {}, "resources": {}, "prompts": {}}


class EngineAvailability:
    """One-way flag: set once the engine has answered a probe."""

    def __init__(self) -> None:
        self._confirmed = False

    @property
    def confirmed(self) -> bool:
        return self._confirmed

    def mark_available(self) -> None:
        self._confirmed = True


class MethodDispatcher:
    """Route JSON-RPC messages to method handlers."""

    def __init__(self, engine: MatlabEngine) -> None:
        self._engine = engine
        self.availability = EngineAvailability()
        self._methods: dict[str, _MethodHandler] = {
            "initialize": self._initialize,
            "tools/list": self._list_tools,
            "tools/call": self._call_tool,
            "resources/list": self._list_resources,
            "resources/read": self._read_resource,
        }

    @property
    def engine(self) -> MatlabEngine:
        return self._engine

    async def handle(self, message: Any) -> dict[str, Any] | None:
        """Handle one decoded JSON payload.

        Returns:
            The response envelope, or ``None`` when no reply is due
            (notifications and client-sent responses).
        """
        try:
            decoded = decode_message(message)
        except RpcError as e:
            logger.warning("Rejected message: %s", e.data)
            return failure(request_id_of(message), e)

        if isinstance(decoded, Notification):
            logger.debug("Notification received: %s", decoded.method)
            if decoded.method == "notifications/initialized":
                logger.info("Client initialized")
            return None
        if isinstance(decoded, Response):
            logger.debug("Ignoring client response for id %r", decoded.id)
            return None

        return await self._dispatch(decoded)

    async def _dispatch(self, request: Request) -> dict[str, Any]:
        logger.debug("Processing request: %s", request.method)
        handler = self._methods.get(request.method)
        try:
            if handler is None:
                msg = f"Method not found: {request.method}"
                raise MethodNotFoundError(msg)
            result = await handler(request.params)
        except RpcError as e:
            return failure(request.id, e)
        except Exception as e:
            logger.exception("Error processing %s", request.method)
            return failure(request.id, InternalError("Internal error", data=str(e)))
        return success(request.id, result)

    # ── protocol methods ─────────────────────────────────────────

    async def _initialize(self, params: dict[str, Any]) -> dict[str, Any]:
        requested = params.get("protocolVersion")
        return {
            "protocolVersion": requested or DEFAULT_PROTOCOL_VERSION,
            "capabilities": capabilities(),
            "serverInfo": server_info(),
            "instructions": INSTRUCTIONS,
        }

    async def _list_tools(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"tools": [to_wire(tool.to_mcp()) for tool in TOOLS]}

    async def _list_resources(self, params: dict[str, Any]) -> dict[str, Any]:
        return {"resources": resources.list_resources()}

    async def _read_resource(self, params: dict[str, Any]) -> dict[str, Any]:
        uri = params.get("uri")
        if not isinstance(uri, str) or not uri:
            msg = "Resource URI is required"
            raise InvalidParamsError(msg)
        return {"contents": resources.read_resource(uri)}

    async def _call_tool(self, params: dict[str, Any]) -> dict[str, Any]:
        name = params.get("name")
        arguments = params.get("arguments") or {}
        if not isinstance(arguments, dict):
            msg = "Tool arguments must be an object"
            raise InvalidParamsError(msg)

        tool = get_tool(name) if isinstance(name, str) else None
        if tool is None:
            msg = f"Unknown tool: {name}"
            raise MethodNotFoundError(msg)

        if tool.name == EXECUTE_CODE:
            result = await self._execute_code(arguments)
        else:
            result = self._generate_code(arguments)
        return to_wire(result)

    # ── tools ────────────────────────────────────────────────────

    async def _execute_code(self, arguments: dict[str, Any]) -> CallToolResult:
        code = _required_string(arguments, "code", "MATLAB code is required")
        save_script, script_path = _save_options(arguments)

        if not await self._ensure_engine():
            return _tool_result(UNAVAILABLE_TEXT, is_error=True)

        result = await self._engine.execute(
            ExecutionRequest(code=code, persist=save_script, persist_path=script_path)
        )

        if result.error:
            text = f"Error executing MATLAB code:\n{result.error}"
        else:
            text = f"MATLAB execution result:\n{result.output}"
        if result.script_path:
            text += f"\n\nMATLAB script saved to: {result.script_path}"
        return _tool_result(text, is_error=bool(result.error))

    def _generate_code(self, arguments: dict[str, Any]) -> CallToolResult:
        description = _required_string(
            arguments, "description", "Description is required"
        )
        save_script, script_path = _save_options(arguments)

        code = self._engine.generate_placeholder_code(description)
        text = f'Generated MATLAB code for: "{description}"\n\n```matlab\n{code}\n```'

        if save_script:
            target = Path(
                script_path
                or Path.cwd() / f"matlab_generated_{time.time_ns() // 1_000_000}.m"
            )
            try:
                target.write_text(code, encoding="utf-8")
            except OSError as e:
                logger.error("Cannot save generated script to %s: %s", target, e)
                return _tool_result(f"Error generating MATLAB code: {e}", is_error=True)
            text += f"\n\nGenerated MATLAB script saved to: {target}"

        return _tool_result(text)

    async def _ensure_engine(self) -> bool:
        """Probe the engine unless a previous probe already succeeded."""
        if self.availability.confirmed:
            return True
        if await self._engine.is_available():
            self.availability.mark_available()
            return True
        return False


def _required_string(arguments: dict[str, Any], key: str, message: str) -> str:
    value = arguments.get(key)
    if not isinstance(value, str) or not value:
        raise InvalidParamsError(message, data={"missing": key})
    return value


def _save_options(arguments: dict[str, Any]) -> tuple[bool, str | None]:
    script_path = arguments.get("scriptPath")
    if script_path is not None and not isinstance(script_path, str):
        msg = "scriptPath must be a string"
        raise InvalidParamsError(msg)
    save_script = arguments.get("saveScript", False)
    if not isinstance(save_script, bool):
        msg = "saveScript must be a boolean"
        raise InvalidParamsError(msg)
    return save_script, script_path or None


def _tool_result(text: str, is_error: bool = False) -> CallToolResult:
    return CallToolResult(
        content=[TextContent(type="text", text=text)],
        isError=is_error,
    )
