"""FastAPI application factory."""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import TYPE_CHECKING, AsyncIterator

import httpx
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from catalogsync import __version__
from catalogsync.api.routes import actions_router, catalog_router, health_router
from catalogsync.client import CatalogSyncClient
from catalogsync.config import CatalogSyncSettings, get_settings

if TYPE_CHECKING:
    from catalogsync.ledger.base import LedgerClient

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan manager.

    Builds the catalog client on startup and closes its HTTP clients on shutdown.
    """
    settings: CatalogSyncSettings = app.state.settings

    logger.info("Initializing catalog client...")
    app.state.catalog_client = CatalogSyncClient(
        app.state.ledger,
        settings,
        transport=app.state.transport,
    )
    if app.state.ledger is None:
        logger.warning("No ledger client configured; catalog passes will fail")

    logger.info("Application startup complete")

    yield

    logger.info("Shutting down application...")
    await app.state.catalog_client.close()
    logger.info("Application shutdown complete")


def create_app(
    ledger: LedgerClient | None = None,
    *,
    settings: CatalogSyncSettings | None = None,
    transport: httpx.AsyncBaseTransport | None = None,
    title: str = "Catalogsync API",
    description: str = "Marketplace catalog synchronization API",
    cors_origins: list[str] | None = None,
) -> FastAPI:
    """
    Create and configure the FastAPI application.

    Args:
        ledger: Marketplace/NFT contract client
        settings: Application settings. If not provided, loaded from environment.
        transport: Optional httpx transport for metadata and pinning requests
        title: API title for OpenAPI docs
        description: API description for OpenAPI docs
        cors_origins: List of allowed CORS origins (defaults to settings)

    Returns:
        Configured FastAPI application
    """
    settings = settings or get_settings()
    logging.getLogger("catalogsync").setLevel(settings.log_level.upper())

    app = FastAPI(
        title=title,
        description=description,
        version=__version__,
        debug=settings.debug,
        lifespan=lifespan,
        openapi_url="/api/openapi.json",
        docs_url="/api/docs",
        redoc_url="/api/redoc",
    )
    app.state.ledger = ledger
    app.state.settings = settings
    app.state.transport = transport

    app.add_middleware(
        CORSMiddleware,
        allow_origins=cors_origins if cors_origins is not None else settings.cors_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Register routes
    app.include_router(health_router, prefix="/api/v1")
    app.include_router(catalog_router, prefix="/api/v1")
    app.include_router(actions_router, prefix="/api/v1")

    return app


# For uvicorn direct execution; without a ledger only health and readiness are useful
app = create_app()
