"""Catalogsync - resilient marketplace catalog synchronization."""

from catalogsync.actions.dispatcher import ActionDispatcher, ActionRecord
from catalogsync.catalog.aggregator import CatalogAggregator
from catalogsync.catalog.feed import CatalogFeed
from catalogsync.client import CatalogSyncClient
from catalogsync.core.models import (
    CatalogEntry,
    ItemRecord,
    ListingDraft,
    MetadataDocument,
    OwnedCatalog,
)
from catalogsync.core.types import ActionStatus, CatalogView, FeedStatus
from catalogsync.resolution.metadata import MetadataResolver
from catalogsync.resolution.pacing import RateLimitGovernor

__version__ = "0.1.0"
__all__ = [
    # Client
    "CatalogSyncClient",
    # Pipeline
    "ActionDispatcher",
    "ActionRecord",
    "CatalogAggregator",
    "CatalogFeed",
    "MetadataResolver",
    "RateLimitGovernor",
    # Types
    "ActionStatus",
    "CatalogView",
    "FeedStatus",
    # Models
    "CatalogEntry",
    "ItemRecord",
    "ListingDraft",
    "MetadataDocument",
    "OwnedCatalog",
    # Version
    "__version__",
]
