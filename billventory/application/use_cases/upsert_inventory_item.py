"""Upsert Inventory Item Use Case: administrative overwrite of a stock record."""

from billventory.application.dto.requests import InventoryItemRequest
from billventory.application.dto.responses import InventoryItemResponse, InventoryUpsertResponse
from billventory.config import get_logger
from billventory.core.entities.inventory import InventoryItem
from billventory.core.exceptions import ValidationError
from billventory.core.interfaces.inventory_store import IInventoryStore
from billventory.core.services.ledger import normalize_product_key

logger = get_logger(__name__)


class UpsertInventoryItemUseCase:
    """
    Overwrite one inventory record, e.g. after a physical stock count.

    The id goes through the same normalization as ledger keys, so an
    override for "Laptop " lands on the "laptop" row the ledger maintains.
    """

    def __init__(self, inventory_store: IInventoryStore | None = None):
        self._inventory_store = inventory_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from billventory.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    async def execute(self, request: InventoryItemRequest) -> InventoryItem:
        item_id = normalize_product_key(request.id if request.id is not None else request.name)
        if not item_id:
            raise ValidationError("id", "Inventory id must not be blank", request.id)

        store = await self._get_inventory_store()
        item = await store.upsert(request.to_entity(item_id))

        logger.info(
            "inventory_item_overridden",
            item_id=item.id,
            quantity=item.quantity,
            average_cost=item.average_cost,
        )
        return item

    def to_response(self, item: InventoryItem) -> InventoryUpsertResponse:
        return InventoryUpsertResponse(item=InventoryItemResponse.from_entity(item))
