"""MATLAB engine adapter: runs submitted code in a batch subprocess.

Each execution writes the code to its own temp ``.m`` script, invokes
``matlab -batch`` against it, and removes the script afterwards. Engine
failures never raise; they come back as :class:`ExecutionResult` data.
"""

from __future__ import annotations

import asyncio
import itertools
import logging
import shutil
import time
from dataclasses import dataclass
from datetime import UTC, datetime
from pathlib import Path

from matlab_mcp.config.schema import MatlabConfig

logger = logging.getLogger(__name__)

_ASCII_REPLACEMENTS = {
    "‘": "'",
    "’": "'",
    "“": '"',
    "”": '"',
    "—": "--",
    "–": "-",
    "…": "...",
}
_ASCII_TABLE = str.maketrans(_ASCII_REPLACEMENTS)

_script_counter = itertools.count()


def normalize_ascii(code: str) -> str:
    """Replace typographic punctuation with the ASCII MATLAB expects."""
    return code.translate(_ASCII_TABLE)


def _timestamp_ms() -> int:
    return time.time_ns() // 1_000_000


@dataclass(frozen=True, slots=True)
class ExecutionRequest:
    """A single code execution, as requested by a tool call."""

    code: str
    persist: bool = False
    persist_path: str | None = None


@dataclass(frozen=True, slots=True)
class ExecutionResult:
    """Captured outcome of one engine run.

    ``output`` and ``error`` are independent: a successful run may still
    carry warning text on ``error``.
    """

    output: str
    error: str | None = None
    script_path: str | None = None


class MatlabEngine:
    """Adapter over the MATLAB executable."""

    def __init__(self, config: MatlabConfig | None = None) -> None:
        self._config = config or MatlabConfig()

    @property
    def executable(self) -> str:
        return self._config.executable_path

    @property
    def temp_dir(self) -> Path:
        return Path(self._config.temp_dir)

    async def execute(self, request: ExecutionRequest) -> ExecutionResult:
        """Run an :class:`ExecutionRequest`."""
        return await self.execute_source(
            request.code, persist=request.persist, persist_path=request.persist_path
        )

    async def execute_source(
        self,
        code: str,
        persist: bool = False,
        persist_path: str | None = None,
    ) -> ExecutionResult:
        """Execute MATLAB source text.

        Args:
            code: MATLAB source to run.
            persist: Copy the script to ``persist_path`` (or a timestamped
                file in the working directory) before running it.
            persist_path: Target path for the persisted copy.

        Returns:
            The captured output. Failures are reported on ``error`` with
            empty ``output``.
        """
        try:
            script = self._write_temp_script(normalize_ascii(code))
        except OSError as exc:
            logger.error("Cannot write temp script: %s", exc)
            return ExecutionResult(output="", error=f"Cannot write script: {exc}")

        try:
            saved_path: str | None = None
            if persist:
                target = Path(
                    persist_path or Path.cwd() / f"matlab_script_{_timestamp_ms()}.m"
                )
                try:
                    shutil.copyfile(script, target)
                except OSError as exc:
                    logger.error("Cannot save script to %s: %s", target, exc)
                    return ExecutionResult(
                        output="", error=f"Cannot save script to {target}: {exc}"
                    )
                saved_path = str(target)

            return await self._run_script(script, saved_path)
        finally:
            self._remove(script)

    async def is_available(self) -> bool:
        """Probe the engine with a trivial batch command.

        Returns False on a missing binary, non-zero exit, or timeout.
        """
        try:
            proc = await asyncio.create_subprocess_exec(
                self.executable,
                "-batch",
                "disp('MATLAB is available')",
                stdout=asyncio.subprocess.DEVNULL,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            logger.warning("MATLAB is not available (%s): %s", self.executable, exc)
            return False

        try:
            _, stderr = await asyncio.wait_for(
                proc.communicate(), timeout=self._config.probe_timeout
            )
        except TimeoutError:
            proc.kill()
            await proc.communicate()
            logger.warning(
                "MATLAB probe timed out after %s seconds", self._config.probe_timeout
            )
            return False

        if proc.returncode != 0:
            logger.warning(
                "MATLAB probe exited with status %s: %s",
                proc.returncode,
                stderr.decode(errors="replace").strip(),
            )
            return False
        return True

    def generate_placeholder_code(
        self, description: str, now: datetime | None = None
    ) -> str:
        """Produce templated MATLAB code for a description.

        This is a fixed template, not real code generation; only the
        embedded timestamp varies between calls with the same description.
        """
        stamp = (now or datetime.now(UTC)).isoformat()
        comment = " ".join(description.splitlines())
        quoted = comment.replace("'", "''")
        return (
            f"% MATLAB code generated from description: {comment}\n"
            f"% Generated on: {stamp}\n"
            "\n"
            "% Your code here:\n"
            "% This is a placeholder implementation.\n"
            "% In a real system, this would be generated based on the description.\n"
            "\n"
            "% Call the function\n"
            "generatedFunction()\n"
            "\n"
            "function result = generatedFunction()\n"
            f"    % Based on description: {comment}\n"
            f"    disp('Executing function based on description: {quoted}');\n"
            "\n"
            "    % Placeholder implementation\n"
            "    result = 'Function executed successfully';\n"
            "end"
        )

    # ── internals ────────────────────────────────────────────────

    def _write_temp_script(self, code: str) -> Path:
        self.temp_dir.mkdir(parents=True, exist_ok=True)
        path = self.temp_dir / f"script_{time.time_ns()}_{next(_script_counter)}.m"
        path.write_text(code, encoding="utf-8")
        return path

    async def _run_script(self, script: Path, saved_path: str | None) -> ExecutionResult:
        quoted = script.as_posix().replace("'", "''")
        run_command = f"run('{quoted}');"
        try:
            proc = await asyncio.create_subprocess_exec(
                self.executable,
                "-batch",
                run_command,
                stdout=asyncio.subprocess.PIPE,
                stderr=asyncio.subprocess.PIPE,
            )
        except OSError as exc:
            logger.error("Error starting MATLAB (%s): %s", self.executable, exc)
            return ExecutionResult(
                output="",
                error=f"Failed to start MATLAB ({self.executable}): {exc}",
                script_path=saved_path,
            )

        stdout, stderr = await proc.communicate()
        out_text = stdout.decode(errors="replace")
        err_text = stderr.decode(errors="replace")

        if proc.returncode != 0:
            detail = err_text.strip() or out_text.strip()
            message = f"MATLAB exited with status {proc.returncode}"
            logger.error("Error executing MATLAB code: %s", message)
            return ExecutionResult(
                output="",
                error=f"{message}\n{detail}" if detail else message,
                script_path=saved_path,
            )

        return ExecutionResult(
            output=out_text,
            error=err_text or None,
            script_path=saved_path,
        )

    @staticmethod
    def _remove(script: Path) -> None:
        try:
            script.unlink(missing_ok=True)
        except OSError as exc:
            logger.warning("Could not remove temp script %s: %s", script, exc)
