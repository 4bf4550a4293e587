"""Tests for the health check endpoint."""

from __future__ import annotations

from datetime import datetime

from fastapi import FastAPI
from fastapi.testclient import TestClient

from matlab_mcp.api.health import router as health_router


def _client() -> TestClient:
    app = FastAPI()
    app.include_router(health_router)
    return TestClient(app, raise_server_exceptions=False)


class TestHealth:
    def test_status_ok(self):
        resp = _client().get("/health")
        assert resp.status_code == 200
        assert resp.json()["status"] == "ok"
        assert resp.json()["transport"] == "streamable-http"

    def test_timestamp_is_iso8601(self):
        stamp = _client().get("/health").json()["timestamp"]
        parsed = datetime.fromisoformat(stamp)
        assert parsed.tzinfo is not None

    def test_no_dispatcher_needed(self):
        from matlab_mcp.api.app import create_app

        resp = TestClient(create_app()).get("/health")
        assert resp.status_code == 200
