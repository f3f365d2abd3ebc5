"""Action endpoints: purchases and new listings."""

from __future__ import annotations

from fastapi import APIRouter, HTTPException

from catalogsync.api.dependencies import Client
from catalogsync.api.schemas import ActionResponse, MintAndListRequest
from catalogsync.core.exceptions import ActionError, MissingContextError
from catalogsync.core.units import parse_ether
from catalogsync.core.uri import gateway_uri

router = APIRouter(tags=["actions"])


def _action_failed(error: ActionError) -> HTTPException:
    return HTTPException(
        status_code=502,
        detail={
            "message": error.message,
            "step": error.step.value if error.step else None,
            "status": error.record.status.value,
        },
    )


@router.post(
    "/items/{item_id}/purchase",
    response_model=ActionResponse,
    operation_id="purchaseItem",
    summary="Purchase an item",
    description="Buy a catalog item at its total price and refresh the catalogs once confirmed.",
)
async def purchase_item(item_id: int, client: Client) -> ActionResponse:
    """Purchase an item currently in the marketplace catalog."""
    entry = next((e for e in client.marketplace.snapshot if e.item_id == item_id), None)
    if entry is None:
        raise HTTPException(
            status_code=404,
            detail=f"Item {item_id} is not in the marketplace catalog",
        )

    try:
        record = await client.purchase(entry)
    except MissingContextError as e:
        raise HTTPException(status_code=503, detail=e.message) from e
    except ActionError as e:
        raise _action_failed(e) from e

    return ActionResponse.from_record(record)


@router.post(
    "/listings",
    response_model=ActionResponse,
    status_code=201,
    operation_id="mintAndList",
    summary="Mint and list a token",
    description="Mint a token for pinned metadata, approve the marketplace, and list it.",
)
async def mint_and_list(request: MintAndListRequest, client: Client) -> ActionResponse:
    """Mint and list a token for already-pinned metadata."""
    try:
        price = parse_ether(request.price)
    except ValueError as e:
        raise HTTPException(status_code=422, detail=str(e)) from e

    uri = request.uri or gateway_uri(request.content_id, client.settings.ipfs_gateway_url)

    try:
        record = await client.mint_and_list(uri, price)
    except MissingContextError as e:
        raise HTTPException(status_code=503, detail=e.message) from e
    except ActionError as e:
        raise _action_failed(e) from e

    return ActionResponse.from_record(record)
