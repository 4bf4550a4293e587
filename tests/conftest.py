"""Shared test fixtures for matlab-mcp."""

from __future__ import annotations

import sys
from pathlib import Path
from typing import TYPE_CHECKING

import pytest

from matlab_mcp.config.schema import MatlabConfig
from matlab_mcp.engine.matlab import MatlabEngine
from matlab_mcp.mcp.dispatcher import MethodDispatcher

if TYPE_CHECKING:
    from collections.abc import Callable

# Stands in for ``matlab -batch <command>``:
#   * ``run('<file>');`` echoes the file to stdout. Quotes in the path
#     must be doubled. A line starting with ``error(`` exits 1 with the
#     line on stderr; ``warning(`` goes to stderr with exit 0.
#   * ``disp('<text>')`` prints the text.
FAKE_MATLAB = """\
#!{python}
import re
import sys

args = sys.argv[1:]
command = args[args.index("-batch") + 1]

run = re.fullmatch(r"run\\('(.+)'\\);", command)
if run:
    if "'" in run.group(1).replace("''", ""):
        sys.stderr.write("unterminated character vector\\n")
        sys.exit(1)
    with open(run.group(1).replace("''", "'"), encoding="utf-8") as f:
        source = f.read()
    for line in source.splitlines():
        if line.startswith("error("):
            sys.stderr.write(line + "\\n")
            sys.exit(1)
        if line.startswith("warning("):
            sys.stderr.write(line + "\\n")
    sys.stdout.write(source)
    sys.exit(0)

disp = re.fullmatch(r"disp\\('(.*)'\\)", command)
if disp:
    print(disp.group(1))
    sys.exit(0)

sys.exit(2)
"""

FAILING_MATLAB = """\
#!/bin/sh
echo "License checkout failed" >&2
exit 1
"""


def _write_executable(path: Path, content: str) -> Path:
    path.write_text(content)
    path.chmod(0o755)
    return path


@pytest.fixture
def fake_matlab(tmp_path: Path) -> Path:
    """Executable that mimics ``matlab -batch``."""
    return _write_executable(
        tmp_path / "fake_matlab", FAKE_MATLAB.format(python=sys.executable)
    )


@pytest.fixture
def failing_matlab(tmp_path: Path) -> Path:
    """Executable that always exits 1."""
    return _write_executable(tmp_path / "failing_matlab", FAILING_MATLAB)


@pytest.fixture
def missing_matlab(tmp_path: Path) -> Path:
    """A path where no executable exists."""
    return tmp_path / "no-such-matlab"


@pytest.fixture
def scripts_dir(tmp_path: Path) -> Path:
    return tmp_path / "scripts"


@pytest.fixture
def make_engine(scripts_dir: Path) -> Callable[[Path], MatlabEngine]:
    """Factory for engines bound to a given executable."""

    def _make(executable: Path, probe_timeout: float = 30.0) -> MatlabEngine:
        return MatlabEngine(
            MatlabConfig(
                executable_path=str(executable),
                temp_dir=str(scripts_dir),
                probe_timeout=probe_timeout,
            )
        )

    return _make


@pytest.fixture
def engine(make_engine: Callable[[Path], MatlabEngine], fake_matlab: Path) -> MatlabEngine:
    return make_engine(fake_matlab)


@pytest.fixture
def dispatcher(engine: MatlabEngine) -> MethodDispatcher:
    return MethodDispatcher(engine)


@pytest.fixture
def unavailable_dispatcher(
    make_engine: Callable[[Path], MatlabEngine], missing_matlab: Path
) -> MethodDispatcher:
    return MethodDispatcher(make_engine(missing_matlab))
