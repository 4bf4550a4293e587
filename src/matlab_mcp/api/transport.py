"""HTTP transport: serves the FastAPI app with uvicorn."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

import uvicorn

from matlab_mcp.api.app import create_app

if TYPE_CHECKING:
    from fastapi import FastAPI

    from matlab_mcp.mcp.dispatcher import MethodDispatcher

logger = logging.getLogger(__name__)


class HttpTransport:
    """Expose a :class:`MethodDispatcher` on ``/mcp`` over HTTP."""

    def __init__(
        self,
        port: int = 3000,
        host: str = "0.0.0.0",
        log_level: str = "info",
    ) -> None:
        self.port = port
        self.host = host
        self.app: FastAPI = create_app()
        self._server = uvicorn.Server(
            uvicorn.Config(
                self.app,
                host=host,
                port=port,
                log_level=log_level.lower(),
                log_config=None,
            )
        )

    def set_message_handler(self, dispatcher: MethodDispatcher) -> None:
        self.app.state.dispatcher = dispatcher

    async def start(self) -> None:
        """Serve until :meth:`stop` or a shutdown signal.

        Raises:
            SystemExit: If uvicorn cannot bind the port.
        """
        logger.info("MATLAB MCP server (Streamable HTTP) on port %s", self.port)
        logger.info("Endpoint: http://localhost:%s/mcp", self.port)
        await self._server.serve()
        logger.info("HTTP server stopped")

    def stop(self) -> None:
        self._server.should_exit = True
