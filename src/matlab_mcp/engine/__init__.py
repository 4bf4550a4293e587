"""MATLAB engine adapter."""

from matlab_mcp.engine.matlab import (
    ExecutionRequest,
    ExecutionResult,
    MatlabEngine,
    normalize_ascii,
)

__all__ = ["ExecutionRequest", "ExecutionResult", "MatlabEngine", "normalize_ascii"]
