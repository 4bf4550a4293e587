"""JSON-RPC 2.0 envelopes.

Inbound payloads are decoded into one of three variants, distinguished by
which members are present:

* :class:`Request`: ``method`` and ``id``; expects a response.
* :class:`Notification`: ``method`` without ``id``; never answered.
* :class:`Response`: ``id`` with exactly one of ``result`` / ``error``.
"""

from __future__ import annotations

from typing import Any, Literal

from pydantic import BaseModel, ValidationError, model_validator

from matlab_mcp.core.errors import InvalidRequestError, RpcError

JSONRPC_VERSION = "2.0"

RequestId = int | str


class ErrorObject(BaseModel):
    """A JSON-RPC 2.0 error object."""

    code: int
    message: str
    data: Any = None


class Request(BaseModel):
    """A JSON-RPC 2.0 request message."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    id: RequestId | None
    method: str
    params: dict[str, Any] = {}


class Notification(BaseModel):
    """A JSON-RPC 2.0 notification (no ``id``, no reply)."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    method: str
    params: dict[str, Any] = {}


class Response(BaseModel):
    """A JSON-RPC 2.0 response message."""

    jsonrpc: Literal["2.0"] = JSONRPC_VERSION
    id: RequestId | None
    result: dict[str, Any] | None = None
    error: ErrorObject | None = None

    @model_validator(mode="after")
    def _result_xor_error(self) -> Response:
        if (self.result is None) == (self.error is None):
            msg = "response must carry exactly one of 'result' or 'error'"
            raise ValueError(msg)
        return self


Message = Request | Notification | Response


def decode_message(raw: Any) -> Message:
    """Validate a decoded JSON value as a JSON-RPC envelope.

    Raises:
        InvalidRequestError: If the value is not a well-formed envelope.
    """
    if not isinstance(raw, dict):
        msg = "Invalid Request"
        raise InvalidRequestError(msg, data="message must be a JSON object")

    model: type[BaseModel]
    if "method" in raw:
        model = Request if "id" in raw else Notification
    elif "result" in raw or "error" in raw:
        model = Response
    else:
        msg = "Invalid Request"
        raise InvalidRequestError(msg, data="message has neither 'method' nor a result")

    try:
        return model.model_validate(raw)  # type: ignore[return-value]
    except ValidationError as e:
        msg = "Invalid Request"
        raise InvalidRequestError(msg, data=str(e)) from e


def request_id_of(raw: Any) -> RequestId | None:
    """Best-effort ``id`` extraction from a payload that may not validate."""
    if isinstance(raw, dict):
        value = raw.get("id")
        if isinstance(value, (int, str)) and not isinstance(value, bool):
            return value
    return None


def success(request_id: RequestId | None, result: dict[str, Any]) -> dict[str, Any]:
    """Build a success response envelope."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "result": result}


def failure(request_id: RequestId | None, error: RpcError) -> dict[str, Any]:
    """Build an error response envelope."""
    return {"jsonrpc": JSONRPC_VERSION, "id": request_id, "error": error.to_dict()}


def to_wire(model: BaseModel) -> dict[str, Any]:
    """Dump an MCP SDK model with its camelCase wire names."""
    return model.model_dump(mode="json", by_alias=True, exclude_none=True)
