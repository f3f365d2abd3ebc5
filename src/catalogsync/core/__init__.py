"""Core types, models, and utilities."""

from .exceptions import (
    ActionError,
    CatalogSyncError,
    InvalidMetadataError,
    InvalidURIError,
    IssuanceEventNotFoundError,
    MetadataFetchError,
    MissingContextError,
    PassError,
    PinningError,
    TokenURILookupError,
    ValidationError,
)
from .models import (
    ISSUANCE_EVENT,
    PLACEHOLDER_IMAGE,
    CatalogEntry,
    ItemRecord,
    ListingDraft,
    MetadataDocument,
    OwnedCatalog,
    ReceiptEvent,
    TransactionReceipt,
)
from .types import (
    ActionKind,
    ActionStatus,
    CatalogView,
    FeedStatus,
    FetchOutcome,
    MintStep,
)
from .units import format_ether, parse_ether
from .uri import gateway_uri, is_unresolved_uri, normalize_uri

__all__ = [
    # Types
    "ActionKind",
    "ActionStatus",
    "CatalogView",
    "FeedStatus",
    "FetchOutcome",
    "MintStep",
    # Models
    "ISSUANCE_EVENT",
    "PLACEHOLDER_IMAGE",
    "CatalogEntry",
    "ItemRecord",
    "ListingDraft",
    "MetadataDocument",
    "OwnedCatalog",
    "ReceiptEvent",
    "TransactionReceipt",
    # Helpers
    "format_ether",
    "gateway_uri",
    "is_unresolved_uri",
    "normalize_uri",
    "parse_ether",
    # Exceptions
    "ActionError",
    "CatalogSyncError",
    "InvalidMetadataError",
    "InvalidURIError",
    "IssuanceEventNotFoundError",
    "MetadataFetchError",
    "MissingContextError",
    "PassError",
    "PinningError",
    "TokenURILookupError",
    "ValidationError",
]
