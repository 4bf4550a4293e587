"""Stdio transport: JSON-RPC with the parent process over stdin/stdout.

Line framing and envelope decoding come from the MCP SDK's
``stdio_server``. Messages are handled strictly in arrival order and each
reply is written before the next line is read. Nothing else may be
written to stdout, so logging goes to stderr.
"""

from __future__ import annotations

import asyncio
import logging
from typing import TYPE_CHECKING, Any

from mcp.server.stdio import stdio_server
from mcp.shared.message import SessionMessage
from mcp.types import JSONRPCMessage
from pydantic import ValidationError

from matlab_mcp.mcp.messages import to_wire

if TYPE_CHECKING:
    import anyio
    from anyio.streams.memory import MemoryObjectSendStream

    from matlab_mcp.mcp.dispatcher import MethodDispatcher

logger = logging.getLogger(__name__)


class StdioTransport:
    """Serve a :class:`MethodDispatcher` over stdin/stdout.

    ``stdin`` and ``stdout`` default to the process's standard streams.
    """

    def __init__(
        self,
        dispatcher: MethodDispatcher,
        stdin: anyio.AsyncFile[str] | None = None,
        stdout: anyio.AsyncFile[str] | None = None,
    ) -> None:
        self._dispatcher = dispatcher
        self._stdin = stdin
        self._stdout = stdout
        self._task: asyncio.Task[Any] | None = None
        self._stopping = False

    async def start(self) -> None:
        """Run the read/handle/write loop until EOF or :meth:`stop`."""
        if self._stopping:
            return
        self._task = asyncio.current_task()
        logger.info("MATLAB MCP server running on stdio")

        try:
            async with stdio_server(self._stdin, self._stdout) as (
                read_stream,
                write_stream,
            ):
                async with write_stream:
                    async for item in read_stream:
                        await self._handle(item, write_stream)
            logger.info("stdin closed, shutting down")
        except asyncio.CancelledError:
            if not self._stopping:
                raise
            logger.info("Stdio transport stopped")
        finally:
            self._task = None

    def stop(self) -> None:
        """Interrupt :meth:`start` from a signal handler or another task.

        A read already blocked on stdin finishes before the loop exits.
        """
        self._stopping = True
        if self._task is not None:
            self._task.cancel()

    async def _handle(
        self,
        item: SessionMessage | Exception,
        write_stream: MemoryObjectSendStream[SessionMessage],
    ) -> None:
        # Undecodable lines carry no usable id, so there is nothing to reply to.
        if isinstance(item, Exception):
            logger.warning("Undecodable message on stdin: %s", item)
            return

        payload = to_wire(item.message)
        response = await self._dispatcher.handle(payload)
        if response is None:
            return

        try:
            reply = JSONRPCMessage.model_validate(response)
        except ValidationError:
            logger.exception("Dropping reply that is not a valid JSON-RPC message")
            return
        await write_stream.send(SessionMessage(reply))
