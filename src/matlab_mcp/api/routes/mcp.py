"""MCP endpoint: discovery on GET, JSON-RPC relay on POST."""

from __future__ import annotations

import json
import logging
from typing import Any

from fastapi import APIRouter, Request, Response
from fastapi.responses import JSONResponse
from mcp.types import INTERNAL_ERROR

from matlab_mcp.mcp.dispatcher import (
    DEFAULT_PROTOCOL_VERSION,
    capabilities,
    server_info,
)
from matlab_mcp.mcp.messages import JSONRPC_VERSION, request_id_of

logger = logging.getLogger(__name__)

router = APIRouter(tags=["mcp"])

HANDLER_NOT_READY = -32000


@router.get("/mcp")
async def mcp_discovery() -> dict[str, Any]:
    """Capability descriptor; informational only."""
    return {
        "version": DEFAULT_PROTOCOL_VERSION,
        "capabilities": capabilities(),
        "serverInfo": server_info(),
    }


@router.post("/mcp")
async def mcp_request(request: Request) -> Response:
    """Relay one JSON-RPC message to the dispatcher."""
    try:
        body = await request.body()
        message = json.loads(body)
    except (json.JSONDecodeError, UnicodeDecodeError, RecursionError) as e:
        logger.warning("Undecodable MCP request body: %s", e)
        return _internal_error(str(e))

    dispatcher = getattr(request.app.state, "dispatcher", None)
    if dispatcher is None:
        return JSONResponse(
            status_code=503,
            content={
                "jsonrpc": JSONRPC_VERSION,
                "error": {"code": HANDLER_NOT_READY, "message": "Handler not ready"},
                "id": request_id_of(message),
            },
        )

    try:
        response = await dispatcher.handle(message)
    except Exception as e:
        logger.exception("Error relaying MCP request")
        return _internal_error(str(e))

    if response is None:
        return Response(status_code=202)
    return JSONResponse(content=response)


def _internal_error(detail: str) -> JSONResponse:
    return JSONResponse(
        status_code=500,
        content={
            "jsonrpc": JSONRPC_VERSION,
            "error": {"code": INTERNAL_ERROR, "message": "Internal error", "data": detail},
            "id": None,
        },
    )
