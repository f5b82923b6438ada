"""Inventory derivation use cases: on-demand view and persisted rebuild."""

from billventory.application.dto.responses import InventoryListResponse
from billventory.config import get_logger
from billventory.core.entities.inventory import InventoryItem
from billventory.core.interfaces.ledger_store import ILedgerStore
from billventory.core.interfaces.transaction_store import ITransactionStore
from billventory.core.services.ledger import derive_inventory

logger = get_logger(__name__)


class DeriveInventoryUseCase:
    """Fold the full transaction history into an inventory snapshot without storing it."""

    def __init__(self, transaction_store: ITransactionStore | None = None):
        self._transaction_store = transaction_store

    async def _get_transaction_store(self) -> ITransactionStore:
        if self._transaction_store is None:
            from billventory.infrastructure.storage.sqlite import get_transaction_store

            self._transaction_store = await get_transaction_store()
        return self._transaction_store

    async def execute(self) -> list[InventoryItem]:
        store = await self._get_transaction_store()
        history = await store.list_for_ledger()
        derived = derive_inventory(history)
        logger.debug("inventory_derived", transactions=len(history), items=len(derived))
        return sorted(derived.values(), key=lambda i: (i.name.lower(), i.id))

    def to_response(self, items: list[InventoryItem]) -> InventoryListResponse:
        return InventoryListResponse.from_items(items)


class RebuildInventoryUseCase:
    """
    Replace the stored inventory with the fold over the full history.

    This reconciles edits and deletions, which the incremental ledger does
    not reflect. Administrative overrides are discarded.
    """

    def __init__(self, ledger_store: ILedgerStore | None = None):
        self._ledger_store = ledger_store

    async def _get_ledger_store(self) -> ILedgerStore:
        if self._ledger_store is None:
            from billventory.infrastructure.storage.sqlite import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self) -> list[InventoryItem]:
        ledger = await self._get_ledger_store()
        items = await ledger.rebuild()
        logger.info("inventory_rebuild_complete", items=len(items))
        return items

    def to_response(self, items: list[InventoryItem]) -> InventoryListResponse:
        return InventoryListResponse.from_items(items)
