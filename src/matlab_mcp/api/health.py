"""Health check endpoint."""

from __future__ import annotations

from datetime import UTC, datetime

from fastapi import APIRouter

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict[str, str]:
    """Liveness check -- always returns quickly."""
    return {
        "status": "ok",
        "transport": "streamable-http",
        "timestamp": datetime.now(UTC).isoformat(),
    }
