"""End-to-end test: the installed entrypoint speaking MCP over stdio."""

from __future__ import annotations

import asyncio
import json
import os
import sys
from pathlib import Path

_MESSAGES = [
    {"jsonrpc": "2.0", "id": 1, "method": "initialize", "params": {}},
    {"jsonrpc": "2.0", "method": "notifications/initialized"},
    {"jsonrpc": "2.0", "id": 2, "method": "tools/list"},
    {
        "jsonrpc": "2.0",
        "id": 3,
        "method": "tools/call",
        "params": {"name": "execute_code", "arguments": {"code": "disp(7)"}},
    },
]


async def test_stdio_session(fake_matlab: Path, tmp_path: Path):
    env = {
        **os.environ,
        "MATLAB_PATH": str(fake_matlab),
        "XDG_CONFIG_HOME": str(tmp_path / "xdg"),
    }
    for var in ("USE_HTTP", "USE_SSE", "PORT", "MATLAB_MCP_CONFIG"):
        env.pop(var, None)

    proc = await asyncio.create_subprocess_exec(
        sys.executable,
        "-c",
        "from matlab_mcp.cli.app import main; main()",
        stdin=asyncio.subprocess.PIPE,
        stdout=asyncio.subprocess.PIPE,
        stderr=asyncio.subprocess.PIPE,
        cwd=tmp_path,
        env=env,
    )
    payload = "".join(json.dumps(m) + "\n" for m in _MESSAGES).encode()
    stdout, stderr = await asyncio.wait_for(proc.communicate(payload), timeout=60)

    assert proc.returncode == 0, stderr.decode()
    replies = [json.loads(line) for line in stdout.decode().splitlines()]
    assert [r["id"] for r in replies] == [1, 2, 3]
    assert replies[0]["result"]["serverInfo"]["name"] == "matlab-server"
    assert replies[2]["result"]["content"][0]["text"] == "MATLAB execution result:\ndisp(7)"
