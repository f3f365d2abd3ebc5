"""Health check endpoints."""

from __future__ import annotations

from typing import Literal

from fastapi import APIRouter, Request

from catalogsync import __version__
from catalogsync.api.schemas import HealthResponse

router = APIRouter(tags=["health"])


@router.get(
    "/health",
    response_model=HealthResponse,
    operation_id="getHealth",
    summary="Health check",
    description="Check the health status of the API and its collaborators.",
)
async def health_check(request: Request) -> HealthResponse:
    """Check API health status."""
    services: dict[str, Literal["up", "down", "unknown"]] = {}
    overall_status: Literal["healthy", "degraded", "unhealthy"] = "healthy"
    metadata: dict[str, int] = {}

    client = getattr(request.app.state, "catalog_client", None)
    if client is None:
        services["ledger"] = "unknown"
        overall_status = "unhealthy"
    else:
        services["ledger"] = "up" if client.ledger_connected else "down"
        if not client.ledger_connected:
            overall_status = "unhealthy"

        # A failed last pass degrades but does not take the API down
        if client.marketplace.error is not None and overall_status == "healthy":
            overall_status = "degraded"
        services["catalog"] = "down" if client.marketplace.error else "up"
        metadata = client.resolver.stats

    return HealthResponse(
        status=overall_status,
        version=__version__,
        services=services,
        metadata=metadata,
    )


@router.get(
    "/ready",
    operation_id="getReady",
    summary="Readiness check",
    description="Check if the API is ready to serve traffic.",
)
async def readiness_check(request: Request) -> dict[str, bool]:
    """Check if API is ready to serve traffic."""
    client = getattr(request.app.state, "catalog_client", None)
    return {"ready": client is not None and client.ledger_connected}
