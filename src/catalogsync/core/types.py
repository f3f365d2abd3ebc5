"""Core enums and type definitions."""

from enum import StrEnum


class CatalogView(StrEnum):
    """Aggregation modes for a catalog pass."""

    MARKETPLACE = "marketplace"  # Unsold items from every seller
    OWNED = "owned"  # Items listed by one account, sold or not


class FetchOutcome(StrEnum):
    """Outcome of a single metadata fetch attempt."""

    SUCCESS = "success"
    HTTP_ERROR = "http_error"
    INVALID_JSON = "invalid_json"
    INVALID_STRUCTURE = "invalid_structure"
    INVALID_URI = "invalid_uri"
    TRANSPORT_ERROR = "transport_error"


class ActionKind(StrEnum):
    """State-changing operations submitted to the ledger."""

    PURCHASE = "purchase"
    MINT_AND_LIST = "mint_and_list"


class ActionStatus(StrEnum):
    """Lifecycle of a dispatched action."""

    PENDING = "pending"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class MintStep(StrEnum):
    """Ordered steps of a mint-and-list action."""

    MINT = "mint"
    EXTRACT_TOKEN = "extract_token"
    APPROVE = "approve"
    LIST = "list"


class FeedStatus(StrEnum):
    """Presentation state of a published catalog."""

    IDLE = "idle"
    LOADING = "loading"
    READY = "ready"
    FAILED = "failed"
