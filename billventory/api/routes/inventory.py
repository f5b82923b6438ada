"""Inventory endpoints."""

from fastapi import APIRouter, Depends

from billventory.api.dependencies import (
    get_derive_inventory_use_case,
    get_inv_store,
    get_rebuild_inventory_use_case,
    get_upsert_inventory_use_case,
)
from billventory.application.dto.requests import InventoryItemRequest
from billventory.application.dto.responses import (
    ErrorResponse,
    InventoryListResponse,
    InventoryUpsertResponse,
)
from billventory.application.use_cases.rebuild_inventory import (
    DeriveInventoryUseCase,
    RebuildInventoryUseCase,
)
from billventory.application.use_cases.upsert_inventory_item import UpsertInventoryItemUseCase
from billventory.core.interfaces.inventory_store import IInventoryStore

router = APIRouter(prefix="/api/inventory", tags=["inventory"])


@router.get("", response_model=InventoryListResponse)
async def list_inventory(
    store: IInventoryStore = Depends(get_inv_store),
) -> InventoryListResponse:
    """Current stock levels as maintained by the ledger."""
    items = await store.list()
    return InventoryListResponse.from_items(items)


@router.post(
    "",
    response_model=InventoryUpsertResponse,
    responses={400: {"model": ErrorResponse}, 422: {"model": ErrorResponse}},
)
async def upsert_inventory_item(
    request: InventoryItemRequest,
    use_case: UpsertInventoryItemUseCase = Depends(get_upsert_inventory_use_case),
) -> InventoryUpsertResponse:
    """Overwrite one inventory record (e.g. after a stock count)."""
    item = await use_case.execute(request)
    return use_case.to_response(item)


@router.get("/derived", response_model=InventoryListResponse)
async def derived_inventory(
    use_case: DeriveInventoryUseCase = Depends(get_derive_inventory_use_case),
) -> InventoryListResponse:
    """Inventory folded from the full transaction history. Nothing is stored."""
    items = await use_case.execute()
    return use_case.to_response(items)


@router.post(
    "/rebuild",
    response_model=InventoryListResponse,
    responses={500: {"model": ErrorResponse}},
)
async def rebuild_inventory(
    use_case: RebuildInventoryUseCase = Depends(get_rebuild_inventory_use_case),
) -> InventoryListResponse:
    """Replace stored inventory with the derived view."""
    items = await use_case.execute()
    return use_case.to_response(items)
