"""Custom exception hierarchy for catalogsync."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, ClassVar

from catalogsync.core.types import FetchOutcome, MintStep

if TYPE_CHECKING:
    from catalogsync.actions.dispatcher import ActionRecord


class CatalogSyncError(Exception):
    """Base exception for all catalogsync errors."""

    def __init__(self, message: str, details: dict[str, Any] | None = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(CatalogSyncError):
    """Input validation failed."""

    pass


class MetadataFetchError(CatalogSyncError):
    """A metadata fetch attempt failed and may be retried."""

    DEFAULT_OUTCOME: ClassVar[FetchOutcome] = FetchOutcome.HTTP_ERROR

    def __init__(
        self,
        message: str,
        uri: str,
        status_code: int | None = None,
        outcome: FetchOutcome | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.uri = uri
        self.status_code = status_code
        self.outcome = outcome or self.DEFAULT_OUTCOME


class InvalidURIError(MetadataFetchError):
    """Metadata URI is empty or still holds an unresolved placeholder."""

    DEFAULT_OUTCOME: ClassVar[FetchOutcome] = FetchOutcome.INVALID_URI


class InvalidMetadataError(MetadataFetchError):
    """Metadata document parsed but carries none of the display fields."""

    DEFAULT_OUTCOME: ClassVar[FetchOutcome] = FetchOutcome.INVALID_STRUCTURE


class TokenURILookupError(CatalogSyncError):
    """The ledger could not return a token URI for an item."""

    def __init__(
        self,
        message: str,
        token_id: int,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.token_id = token_id


class PassError(CatalogSyncError):
    """An aggregation pass was aborted before it could publish."""

    pass


class MissingContextError(PassError):
    """A pass was started without its ledger or account."""

    pass


class ActionError(CatalogSyncError):
    """A state-changing ledger action failed."""

    def __init__(
        self,
        message: str,
        record: ActionRecord,
        step: MintStep | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.record = record
        self.step = step


class IssuanceEventNotFoundError(ActionError):
    """Mint receipt did not contain the token issuance event."""

    pass


class PinningError(CatalogSyncError):
    """The pinning service rejected an upload."""

    def __init__(
        self,
        message: str,
        status_code: int | None = None,
        details: dict[str, Any] | None = None,
    ) -> None:
        super().__init__(message, details)
        self.status_code = status_code
