"""Documentation resources served through ``resources/list`` and ``resources/read``."""

from __future__ import annotations

import re
from typing import Any

from mcp.types import Resource, TextResourceContents

from matlab_mcp.core.errors import InvalidRequestError
from matlab_mcp.mcp.messages import to_wire

_URI_PATTERN = re.compile(r"^matlab://documentation/(.+)$")
_MIME_TYPE = "text/markdown"

GETTING_STARTED = """\
# MATLAB MCP Server - Getting Started

This MCP server allows you to interact with MATLAB directly from your AI assistant.

## Available Tools

1. **execute_code** - Execute MATLAB code and get the results
2. **generate_code** - Generate MATLAB code from a natural language description

Both tools accept `saveScript` and `scriptPath` to keep a copy of the script.

## Examples

### Executing MATLAB Code

```
% Create a simple plot
x = 0:0.1:2*pi;
y = sin(x);
plot(x, y);
title('Sine Wave');
xlabel('x');
ylabel('sin(x)');
```

### Generating MATLAB Code

You can ask the AI to generate MATLAB code for specific tasks, such as:

- "Create a script to calculate the Fibonacci sequence"
- "Write code to perform image processing on a sample image"
- "Generate a function to solve a system of linear equations"

## Requirements

- MATLAB must be installed on your system
- The MATLAB executable must be in your PATH or specified via the MATLAB_PATH environment variable
"""

_DOCUMENTS: dict[str, tuple[str, str, str]] = {
    "getting-started": (
        "MATLAB Getting Started Guide",
        "Basic guide for getting started with MATLAB through the MCP server",
        GETTING_STARTED,
    ),
}


def list_resources() -> list[dict[str, Any]]:
    """Describe every documentation resource."""
    return [
        to_wire(
            Resource(
                uri=f"matlab://documentation/{slug}",  # type: ignore[arg-type]
                name=name,
                description=description,
                mimeType=_MIME_TYPE,
            )
        )
        for slug, (name, description, _) in _DOCUMENTS.items()
    ]


def read_resource(uri: str) -> list[dict[str, Any]]:
    """Return the contents for a documentation URI.

    Raises:
        InvalidRequestError: For malformed URIs or unknown documents.
    """
    match = _URI_PATTERN.match(uri)
    if match is None:
        msg = f"Invalid URI format: {uri}"
        raise InvalidRequestError(msg)

    doc = _DOCUMENTS.get(match.group(1))
    if doc is None:
        msg = f"Documentation not found: {match.group(1)}"
        raise InvalidRequestError(msg)

    contents = TextResourceContents(
        uri=uri,  # type: ignore[arg-type]
        mimeType=_MIME_TYPE,
        text=doc[2],
    )
    return [to_wire(contents)]
