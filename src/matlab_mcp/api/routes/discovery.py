"""Discovery endpoints: server descriptor and no-auth OAuth stubs.

Generic HTTP MCP clients probe the OAuth discovery documents before
connecting; these answers tell them no authorization is required.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Request

from matlab_mcp import __version__

router = APIRouter(tags=["discovery"])


@router.get("/")
async def root() -> dict[str, Any]:
    """Static server descriptor."""
    return {
        "name": "MATLAB MCP Server",
        "version": __version__,
        "transport": "Streamable HTTP",
        "endpoints": {"health": "/health", "mcp": "/mcp"},
    }


@router.get("/.well-known/oauth-protected-resource")
async def oauth_protected_resource(request: Request) -> dict[str, Any]:
    scheme = request.headers.get("x-forwarded-proto") or request.url.scheme
    host = request.headers.get("host") or request.url.netloc
    return {
        "resource": f"{scheme}://{host}/mcp",
        "authorization_servers": [],
        "protected": False,
    }


@router.get("/.well-known/oauth-authorization-server")
async def oauth_authorization_server() -> dict[str, Any]:
    return {
        "issuer": "none",
        "authorization_endpoint": "none",
        "token_endpoint": "none",
        "registration_endpoint": "none",
        "scopes_supported": [],
        "response_types_supported": [],
        "grant_types_supported": [],
    }


@router.post("/register")
async def register() -> dict[str, str]:
    """Dynamic client registration stub."""
    return {
        "client_id": "no-auth-required",
        "client_secret": "no-auth-required",
    }
