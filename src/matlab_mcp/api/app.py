"""FastAPI application factory for the MATLAB MCP HTTP transport."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from fastapi import FastAPI

from matlab_mcp import __version__

if TYPE_CHECKING:
    from collections.abc import Awaitable, Callable

    from fastapi import Request, Response

    from matlab_mcp.mcp.dispatcher import MethodDispatcher

logger = logging.getLogger(__name__)


def create_app(dispatcher: MethodDispatcher | None = None) -> FastAPI:
    """Create and configure the FastAPI application.

    ``dispatcher`` may be wired later through ``app.state.dispatcher``;
    until then ``POST /mcp`` answers 503.
    """
    app = FastAPI(
        title="matlab-mcp",
        description="MATLAB MCP server (Streamable HTTP)",
        version=__version__,
    )
    app.state.dispatcher = dispatcher

    from fastapi.middleware.cors import CORSMiddleware

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST"],
        allow_headers=["Content-Type", "Accept"],
    )

    @app.middleware("http")
    async def log_requests(
        request: Request, call_next: Callable[[Request], Awaitable[Response]]
    ) -> Response:
        logger.debug("[HTTP] %s %s", request.method, request.url.path)
        return await call_next(request)

    from matlab_mcp.api.health import router as health_router
    from matlab_mcp.api.routes.discovery import router as discovery_router
    from matlab_mcp.api.routes.mcp import router as mcp_router

    app.include_router(discovery_router)
    app.include_router(health_router)
    app.include_router(mcp_router)

    return app
