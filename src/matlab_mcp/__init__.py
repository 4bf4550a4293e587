"""matlab-mcp: MATLAB tool server for AI agents."""

__version__ = "0.1.0"

SERVER_NAME = "matlab-server"
