"""Configuration loading for the MATLAB server.

Settings are assembled from layers, lowest priority first:

    1. Model defaults
    2. ``$XDG_CONFIG_HOME/matlab-mcp/config.toml`` (``~/.config`` fallback)
    3. ``./matlab-mcp.toml``
    4. The file named by ``$MATLAB_MCP_CONFIG``
    5. The file passed as ``path`` (``--config``)
    6. Launcher variables: ``MATLAB_PATH``, ``USE_HTTP``/``USE_SSE``, ``PORT``
    7. ``overrides`` (command-line flags)
"""

from __future__ import annotations

import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from matlab_mcp.core.errors import ConfigError

from .schema import MatlabMcpConfig

APP_DIR = "matlab-mcp"
PROJECT_FILE = "matlab-mcp.toml"
CONFIG_ENV = "MATLAB_MCP_CONFIG"


def config_files(
    explicit: str | Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> list[Path]:
    """Return the config files to read, lowest priority first.

    The user and project files are optional. A file named by
    ``$MATLAB_MCP_CONFIG`` or ``explicit`` must exist.
    """
    env = os.environ if environ is None else environ
    config_home = Path(env.get("XDG_CONFIG_HOME") or Path.home() / ".config")
    candidates = (config_home / APP_DIR / "config.toml", Path.cwd() / PROJECT_FILE)
    found = [candidate for candidate in candidates if candidate.is_file()]

    for source, value in ((CONFIG_ENV, env.get(CONFIG_ENV)), ("--config", explicit)):
        if not value:
            continue
        named = Path(value)
        if not named.is_file():
            msg = f"Config file not found ({source}): {value}"
            raise ConfigError(msg)
        found.append(named)
    return found


def _file_layer(path: Path) -> dict[str, Any]:
    try:
        return tomllib.loads(path.read_text(encoding="utf-8"))
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        msg = f"Invalid TOML in {path}: {e}"
        raise ConfigError(msg) from e
    except OSError as e:
        msg = f"Cannot read config file {path}: {e}"
        raise ConfigError(msg) from e


def environment_layer(environ: Mapping[str, str]) -> dict[str, Any]:
    """Translate the launcher's environment variables into a config layer."""
    matlab: dict[str, Any] = {}
    server: dict[str, Any] = {}

    if environ.get("MATLAB_PATH"):
        matlab["executable_path"] = environ["MATLAB_PATH"]

    # Only the exact string "true" counts.
    if "true" in (environ.get("USE_HTTP"), environ.get("USE_SSE")):
        server["transport"] = "http"

    port = environ.get("PORT")
    if port:
        try:
            server["port"] = int(port)
        except ValueError as e:
            msg = f"PORT must be an integer, got: {port!r}"
            raise ConfigError(msg) from e

    return {
        section: values
        for section, values in (("matlab", matlab), ("server", server))
        if values
    }


def merge_layers(*layers: Mapping[str, Any]) -> dict[str, Any]:
    """Merge layers left to right; tables merge, scalars are replaced.

    Inputs are never mutated.
    """
    merged: dict[str, Any] = {}
    for layer in layers:
        for key, value in layer.items():
            current = merged.get(key)
            if isinstance(current, dict) and isinstance(value, Mapping):
                merged[key] = merge_layers(current, value)
            elif isinstance(value, Mapping):
                merged[key] = merge_layers(value)
            else:
                merged[key] = value
    return merged


def load_config(
    path: str | Path | None = None,
    overrides: Mapping[str, Any] | None = None,
    environ: Mapping[str, str] | None = None,
) -> MatlabMcpConfig:
    """Load and validate configuration.

    Args:
        path: Explicit config file (``--config``).
        overrides: Highest-priority layer, normally built from CLI flags.
        environ: Environment to read instead of ``os.environ``.

    Raises:
        ConfigError: On a missing named file, invalid TOML, a bad ``PORT``,
            or a value the schema rejects.
    """
    env = os.environ if environ is None else environ
    layers: list[Mapping[str, Any]] = [_file_layer(f) for f in config_files(path, env)]
    layers.append(environment_layer(env))
    if overrides:
        layers.append(overrides)

    try:
        return MatlabMcpConfig.model_validate(merge_layers(*layers))
    except ValidationError as e:
        msg = f"Configuration validation failed: {e}"
        raise ConfigError(msg) from e
