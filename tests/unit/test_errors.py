"""Tests for the error hierarchy."""

from matlab_mcp.core.errors import (
    ConfigError,
    InternalError,
    InvalidParamsError,
    InvalidRequestError,
    MatlabMcpError,
    MethodNotFoundError,
    RpcError,
)


class TestHierarchy:
    def test_config_error_is_base(self):
        assert isinstance(ConfigError("bad"), MatlabMcpError)

    def test_rpc_errors(self):
        for cls in (
            InvalidRequestError,
            MethodNotFoundError,
            InvalidParamsError,
            InternalError,
        ):
            err = cls("x")
            assert isinstance(err, RpcError)
            assert isinstance(err, MatlabMcpError)


class TestCodes:
    def test_standard_codes(self):
        assert InvalidRequestError.code == -32600
        assert MethodNotFoundError.code == -32601
        assert InvalidParamsError.code == -32602
        assert InternalError.code == -32603


class TestToDict:
    def test_without_data(self):
        assert MethodNotFoundError("Unknown tool: x").to_dict() == {
            "code": -32601,
            "message": "Unknown tool: x",
        }

    def test_with_data(self):
        err = InvalidParamsError("Description is required", data={"missing": "description"})
        assert err.to_dict()["data"] == {"missing": "description"}
        assert str(err) == "Description is required"
