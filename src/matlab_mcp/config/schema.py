"""Pydantic models for matlab-mcp configuration."""

from __future__ import annotations

import tempfile
from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, field_validator

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL")


def _default_temp_dir() -> str:
    return str(Path(tempfile.gettempdir()) / "matlab-mcp")


class MatlabConfig(BaseModel):
    """Location and invocation settings for the MATLAB engine."""

    executable_path: str = "matlab"
    temp_dir: str = Field(default_factory=_default_temp_dir)
    probe_timeout: float = 60.0


class ServerConfig(BaseModel):
    """Transport selection and HTTP bind address."""

    transport: Literal["stdio", "http"] = "stdio"
    host: str = "0.0.0.0"
    port: int = Field(default=3000, ge=0, le=65535)


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = "INFO"
    file: str = ""

    @field_validator("level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper()
        if level not in LOG_LEVELS:
            expected = ", ".join(LOG_LEVELS)
            msg = f"unknown log level {value!r}; expected one of {expected}"
            raise ValueError(msg)
        return level


class MatlabMcpConfig(BaseModel):
    """Top-level configuration for matlab-mcp."""

    matlab: MatlabConfig = Field(default_factory=MatlabConfig)
    server: ServerConfig = Field(default_factory=ServerConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
