"""
FastAPI Application Entry Point.

Law Proxy API - law.go.kr DRF proxy

Run with:
    lawproxy serve

Or directly with uvicorn (the factory refuses to start without OC):
    uvicorn lawproxy.server.main:create_app --factory --port 5000
"""

import logging
from contextlib import asynccontextmanager
from typing import Optional

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from ..config import Settings, load_settings
from ..proxy import UpstreamClient
from .api import router

# Configure logging
logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
)
logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    *,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        settings: Settings to use; loaded from the environment when omitted,
            exiting the process if the OC credential is missing
        transport: Optional httpx transport for the upstream client
    """
    settings = settings or load_settings()

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Open the shared upstream client for the lifetime of the app."""
        logger.info("Starting Law Proxy API Server...")
        logger.info(f"  Upstream: {settings.upstream_base_url}")
        logger.info(f"  OC: {'set' if settings.credential_configured else 'not set'}")
        app.state.upstream = UpstreamClient(settings, transport=transport)

        yield

        await app.state.upstream.aclose()
        logger.info("Shutting down Law Proxy API Server...")

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        description="""
## Law Proxy API

Proxies the National Law Information Center open API (law.go.kr DRF),
injecting the shared OC credential.

### Collections

- **law**: statutes (법령)
- **precedent**: court decisions (판례)
- **interpretation**: administrative interpretations (법령해석례)

Upstream authentication failures (reported by the upstream with HTTP 200)
are surfaced as 401; malformed or unreachable upstream as 500.
""",
        lifespan=lifespan,
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
    )
    app.state.settings = settings

    # Configure CORS
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials="*" not in settings.cors_origins,
        allow_methods=["GET"],
        allow_headers=["*"],
    )

    app.include_router(router)

    return app


if __name__ == "__main__":
    import uvicorn

    settings = load_settings()

    uvicorn.run(
        create_app(settings),
        host=settings.host,
        port=settings.port,
    )
