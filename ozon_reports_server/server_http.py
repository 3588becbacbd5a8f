"""HTTP transport entry point with optional ScaleKit OAuth 2.1 authentication."""

from __future__ import annotations

import logging
import os

from dotenv import load_dotenv
from fastmcp.server.auth.providers.scalekit import ScalekitProvider
from starlette.applications import Starlette
from starlette.middleware.cors import CORSMiddleware
from starlette.requests import Request
from starlette.responses import JSONResponse
from starlette.routing import Route, Mount

from .server import create_mcp_server

load_dotenv()

logger = logging.getLogger("ozon_reports_server.server_http")

# ScaleKit Configuration
SCALEKIT_ENVIRONMENT_URL = os.getenv("SCALEKIT_ENVIRONMENT_URL")
SCALEKIT_RESOURCE_ID = os.getenv("SCALEKIT_RESOURCE_ID")
SERVER_URL = os.getenv("SERVER_URL", "http://localhost:8000")


def create_auth_provider() -> ScalekitProvider | None:
    """Create ScaleKit auth provider if configured."""
    required = [SCALEKIT_ENVIRONMENT_URL, SCALEKIT_RESOURCE_ID, SERVER_URL]
    if not all(required):
        logger.warning(
            "ScaleKit OAuth not configured. Set SCALEKIT_ENVIRONMENT_URL, "
            "SCALEKIT_RESOURCE_ID, and SERVER_URL environment variables."
        )
        return None

    return ScalekitProvider(
        environment_url=SCALEKIT_ENVIRONMENT_URL,
        resource_id=SCALEKIT_RESOURCE_ID,
        base_url=SERVER_URL,
    )


async def health(request: Request) -> JSONResponse:
    """Health check endpoint."""
    return JSONResponse({
        "status": "ok",
        "transport": "streamable-http",
        "oauth_provider": "scalekit" if auth_provider else "none",
    })


auth_provider = create_auth_provider()
mcp_server = create_mcp_server(auth=auth_provider)


def create_app():
    """Create ASGI app with CORS middleware and a health endpoint."""
    mcp_app = mcp_server.http_app()

    # FastMCP's session manager starts in mcp_app.lifespan
    app = Starlette(
        routes=[
            Route("/health", health, methods=["GET"]),
            Mount("/", app=mcp_app),
        ],
        lifespan=mcp_app.lifespan,
    )

    # MCP Inspector and browser clients
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["GET", "POST", "DELETE", "OPTIONS"],
        allow_headers=["*"],
        expose_headers=["*"],
    )

    return app


app = create_app()


def main() -> None:
    """Run MCP server with HTTP transport."""
    import uvicorn

    if not auth_provider:
        logger.warning("Starting server WITHOUT OAuth authentication!")
    else:
        logger.info("ScaleKit environment: %s", SCALEKIT_ENVIRONMENT_URL)
        logger.info("ScaleKit resource ID: %s", SCALEKIT_RESOURCE_ID)

    port = int(os.getenv("PORT", "8000"))
    host = os.getenv("HOST", "0.0.0.0")

    logger.info("Starting Ozon reports MCP server on %s:%s", host, port)
    logger.info("Server URL: %s", SERVER_URL)

    uvicorn.run(app, host=host, port=port)


if __name__ == "__main__":
    main()
