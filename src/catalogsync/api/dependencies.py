"""FastAPI dependency injection."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends, HTTPException, Request

from catalogsync.client import CatalogSyncClient


async def get_catalog_client(request: Request) -> CatalogSyncClient:
    """Get the catalog client from app state."""
    client = getattr(request.app.state, "catalog_client", None)
    if client is None:
        raise HTTPException(status_code=503, detail="Catalog client is not initialized")
    return client


# Type aliases for cleaner dependency injection
Client = Annotated[CatalogSyncClient, Depends(get_catalog_client)]
