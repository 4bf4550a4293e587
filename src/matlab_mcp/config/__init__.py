"""Configuration loading and validation."""

from matlab_mcp.config.loader import load_config
from matlab_mcp.config.schema import (
    LoggingConfig,
    MatlabConfig,
    MatlabMcpConfig,
    ServerConfig,
)

__all__ = [
    "LoggingConfig",
    "MatlabConfig",
    "MatlabMcpConfig",
    "ServerConfig",
    "load_config",
]
