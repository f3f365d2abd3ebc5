"""Request schemas for API endpoints."""

from __future__ import annotations

from typing import Annotated

from pydantic import Field, model_validator

from catalogsync.api.schemas.base import APIBaseSchema


class MintAndListRequest(APIBaseSchema):
    """Request to mint a token for pinned metadata and list it."""

    content_id: Annotated[
        str | None,
        Field(
            default=None,
            min_length=1,
            description="Content identifier of the pinned metadata document",
        ),
    ]

    uri: Annotated[
        str | None,
        Field(
            default=None,
            min_length=1,
            description="Full metadata URI; takes precedence over contentId",
        ),
    ]

    price: Annotated[
        str,
        Field(
            min_length=1,
            max_length=64,
            description="Listing price in ether, e.g. '0.05'",
        ),
    ]

    @model_validator(mode="after")
    def _require_location(self) -> MintAndListRequest:
        if not self.content_id and not self.uri:
            raise ValueError("Either contentId or uri is required")
        return self
