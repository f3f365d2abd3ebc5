"""API schema definitions."""

from catalogsync.api.schemas.base import APIBaseSchema
from catalogsync.api.schemas.requests import MintAndListRequest
from catalogsync.api.schemas.responses import (
    ActionResponse,
    CatalogEntryResponse,
    CatalogResponse,
    FeedStateResponse,
    HealthResponse,
    ListingsResponse,
)

__all__ = [
    # Base
    "APIBaseSchema",
    # Requests
    "MintAndListRequest",
    # Responses
    "ActionResponse",
    "CatalogEntryResponse",
    "CatalogResponse",
    "FeedStateResponse",
    "HealthResponse",
    "ListingsResponse",
]
