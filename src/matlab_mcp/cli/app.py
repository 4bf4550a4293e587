"""Command-line entrypoint.

Selects exactly one transport (stdio by default, HTTP with ``--http``),
wires it to a shared :class:`MethodDispatcher`, and runs it until EOF or
an interrupt signal.
"""

from __future__ import annotations

import asyncio
import contextlib
import logging
import signal
import sys
from typing import TYPE_CHECKING, Any, Protocol

import click

from matlab_mcp import __version__
from matlab_mcp.config.loader import load_config
from matlab_mcp.config.schema import LOG_LEVELS
from matlab_mcp.core.errors import ConfigError

if TYPE_CHECKING:
    from matlab_mcp.config.schema import LoggingConfig, MatlabMcpConfig

logger = logging.getLogger(__name__)


class Transport(Protocol):
    """Anything the entrypoint can run: ``start`` blocks, ``stop`` interrupts."""

    async def start(self) -> None: ...
    def stop(self) -> None: ...


# ── Helpers ──────────────────────────────────────────────────────


def _error(msg: str) -> None:
    """Print an error message to stderr and exit."""
    click.echo(f"Error: {msg}", err=True)
    sys.exit(1)


def _load_config(
    config_path: str | None, overrides: dict[str, Any]
) -> MatlabMcpConfig:
    """Load config with user-friendly error handling."""
    try:
        return load_config(path=config_path, overrides=overrides)
    except ConfigError as e:
        _error(str(e))
        raise  # unreachable, keeps mypy happy


def _setup_logging(config: LoggingConfig) -> None:
    """Send log records to stderr (stdout belongs to the stdio transport)."""
    from rich.console import Console
    from rich.logging import RichHandler

    handlers: list[logging.Handler] = [
        RichHandler(
            console=Console(stderr=True),
            show_path=False,
            rich_tracebacks=True,
        )
    ]
    if config.file:
        file_handler = logging.FileHandler(config.file)
        file_handler.setFormatter(
            logging.Formatter("%(asctime)s %(levelname)s %(name)s: %(message)s")
        )
        handlers.append(file_handler)

    logging.basicConfig(
        level=config.level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=handlers,
        force=True,
    )


def _build_transport(config: MatlabMcpConfig) -> Transport:
    """Construct the engine, the dispatcher, and the selected transport."""
    from matlab_mcp.engine.matlab import MatlabEngine
    from matlab_mcp.mcp.dispatcher import MethodDispatcher

    dispatcher = MethodDispatcher(MatlabEngine(config.matlab))

    if config.server.transport == "http":
        from matlab_mcp.api.transport import HttpTransport

        logger.info(
            "Starting MATLAB MCP server in HTTP mode on port %s", config.server.port
        )
        http = HttpTransport(
            port=config.server.port,
            host=config.server.host,
            log_level=config.logging.level,
        )
        http.set_message_handler(dispatcher)
        return http

    from matlab_mcp.mcp.stdio import StdioTransport

    logger.info("Starting MATLAB MCP server in stdio mode")
    return StdioTransport(dispatcher)


async def _serve(transport: Transport) -> None:
    """Run ``transport`` with SIGINT/SIGTERM wired to ``stop``."""
    from matlab_mcp.api.transport import HttpTransport

    # uvicorn installs and restores its own signal handlers.
    if not isinstance(transport, HttpTransport):
        loop = asyncio.get_running_loop()
        for sig in (signal.SIGINT, signal.SIGTERM):
            with contextlib.suppress(NotImplementedError):
                loop.add_signal_handler(sig, transport.stop)
    await transport.start()


# ── command ──────────────────────────────────────────────────────


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(version=__version__, prog_name="matlab-mcp-server")
@click.option(
    "--http",
    "--sse",
    "use_http",
    is_flag=True,
    default=False,
    help="Use HTTP transport instead of stdio (--sse is an alias).",
)
@click.option(
    "--port", type=int, default=None, help="Port for HTTP mode (default: 3000)."
)
@click.option("--host", default=None, help="Host to bind in HTTP mode.")
@click.option(
    "--config",
    "config_path",
    type=click.Path(exists=True),
    default=None,
    help="Path to config file.",
)
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default=None,
    help="Logging level (overrides config).",
)
def cli(
    use_http: bool,
    port: int | None,
    host: str | None,
    config_path: str | None,
    log_level: str | None,
) -> None:
    """MATLAB MCP Server - execute MATLAB code and generate scripts.

    \b
    Environment variables:
      USE_HTTP=true      Use HTTP transport (USE_SSE=true is an alias)
      PORT=<number>      Port for HTTP mode
      MATLAB_PATH        Path to MATLAB executable
      MATLAB_MCP_CONFIG  Path to a TOML config file

    \b
    Examples:
      matlab-mcp-server                      # stdio mode (default)
      matlab-mcp-server --http --port=3001   # HTTP mode
      USE_HTTP=true PORT=3000 matlab-mcp-server
    """
    overrides: dict[str, Any] = {}
    server: dict[str, Any] = {}
    if use_http:
        server["transport"] = "http"
    if port is not None:
        server["port"] = port
    if host is not None:
        server["host"] = host
    if server:
        overrides["server"] = server
    if log_level is not None:
        overrides["logging"] = {"level": log_level}

    config = _load_config(config_path, overrides)
    _setup_logging(config.logging)

    transport = _build_transport(config)
    # uvicorn re-raises a captured SIGINT once it has shut down cleanly
    with contextlib.suppress(KeyboardInterrupt):
        asyncio.run(_serve(transport))


def main() -> None:
    cli()
