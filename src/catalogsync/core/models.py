"""Domain models for ledger items and catalog entries."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

PLACEHOLDER_IMAGE = "https://via.placeholder.com/400x400?text=Image+Not+Available"
UNKNOWN_NAME = "Unknown NFT"
MISSING_DESCRIPTION = "No description available"
SENTINEL_DESCRIPTION = "Metadata could not be loaded"

# The token issuance event emitted by the NFT contract on mint
ISSUANCE_EVENT = "Transfer"


class ItemRecord(BaseModel):
    """A marketplace item as stored on the ledger."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    item_id: int = Field(..., ge=1, alias="itemId", description="Marketplace item ID")
    token_id: int = Field(..., ge=0, alias="tokenId", description="NFT token ID")
    seller: str = Field(..., description="Seller account address")
    price: int = Field(..., ge=0, description="Listing price in wei")
    sold: bool = Field(default=False, description="Whether the item has been purchased")

    def is_sold_by(self, account: str) -> bool:
        """Case-insensitive seller comparison."""
        return self.seller.lower() == account.lower()


class MetadataDocument(BaseModel):
    """Display metadata for a token. Always fully populated."""

    model_config = ConfigDict(frozen=True)

    name: str
    description: str
    image: str
    is_placeholder: bool = Field(
        default=False,
        exclude=True,
        description="True when this is the fallback document",
    )

    @classmethod
    def sentinel(cls) -> MetadataDocument:
        """The document returned when resolution permanently fails."""
        return cls(
            name=UNKNOWN_NAME,
            description=SENTINEL_DESCRIPTION,
            image=PLACEHOLDER_IMAGE,
            is_placeholder=True,
        )

    @classmethod
    def has_display_fields(cls, payload: Any) -> bool:
        """Whether a parsed payload carries at least one display field."""
        if not isinstance(payload, dict):
            return False
        return any(payload.get(key) for key in ("name", "description", "image"))

    @classmethod
    def from_payload(cls, payload: dict[str, Any]) -> MetadataDocument:
        """Build a document, substituting placeholders for missing fields."""
        return cls(
            name=_as_text(payload.get("name")) or UNKNOWN_NAME,
            description=_as_text(payload.get("description")) or MISSING_DESCRIPTION,
            image=_as_text(payload.get("image")) or PLACEHOLDER_IMAGE,
        )


def _as_text(value: Any) -> str | None:
    if value is None or value == "":
        return None
    return value if isinstance(value, str) else str(value)


class CatalogEntry(BaseModel):
    """One display-ready catalog row, created fresh on every pass."""

    model_config = ConfigDict(frozen=True)

    item_id: int
    token_id: int
    seller: str
    price: int = Field(..., description="Listing price in wei")
    total_price: int = Field(..., description="Price plus marketplace fee, in wei")
    name: str
    description: str
    image: str

    @classmethod
    def assemble(
        cls,
        record: ItemRecord,
        metadata: MetadataDocument,
        total_price: int,
    ) -> CatalogEntry:
        """Combine a ledger record with its resolved metadata."""
        return cls(
            item_id=record.item_id,
            token_id=record.token_id,
            seller=record.seller,
            price=record.price,
            total_price=total_price,
            name=metadata.name,
            description=metadata.description,
            image=metadata.image,
        )


class OwnedCatalog(BaseModel):
    """Catalog for one seller: everything listed, and the sold subset."""

    model_config = ConfigDict(frozen=True)

    listed: tuple[CatalogEntry, ...] = ()
    sold: tuple[CatalogEntry, ...] = ()


class ReceiptEvent(BaseModel):
    """A decoded log event from a transaction receipt."""

    model_config = ConfigDict(frozen=True)

    event: str | None = None
    args: dict[str, Any] = Field(default_factory=dict)


class TransactionReceipt(BaseModel):
    """Confirmation receipt returned once a transaction is mined."""

    model_config = ConfigDict(frozen=True)

    transaction_hash: str | None = None
    events: list[ReceiptEvent] = Field(default_factory=list)

    def find_event(self, name: str) -> ReceiptEvent | None:
        """Return the first event with the given name."""
        return next((e for e in self.events if e.event == name), None)


class ListingDraft(BaseModel):
    """User input for creating and listing a new token."""

    name: str = ""
    description: str = ""
    image: str = Field(default="", description="Gateway URI of the pinned image")
    price: str = Field(default="", description="Listing price in ether")

    def missing_fields(self) -> list[str]:
        """Names of required fields that are blank."""
        return [
            field
            for field in ("image", "price", "name", "description")
            if not str(getattr(self, field)).strip()
        ]
