"""
SQLite unit of work for ledger writes.

A submit reads the touched inventory rows, folds the transaction in and
writes everything back inside a single ``BEGIN IMMEDIATE`` transaction, so
either the transaction row and all inventory deltas are committed or none
are. An asyncio lock additionally serializes ledger writes within the
process; the immediate transaction covers writers in other processes.
"""

import asyncio

import aiosqlite

from billventory.config import get_logger
from billventory.core.entities.inventory import InventoryItem
from billventory.core.entities.transaction import Transaction
from billventory.core.exceptions import LedgerUpdateError
from billventory.core.interfaces.ledger_store import ILedgerStore, LedgerWriteResult
from billventory.core.services.ledger import apply_transaction, derive_inventory, touched_keys
from billventory.infrastructure.storage.sqlite.connection import get_transaction
from billventory.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from billventory.infrastructure.storage.sqlite.transaction_store import SQLiteTransactionStore

logger = get_logger(__name__)


class SQLiteLedgerStore(ILedgerStore):
    """Atomic transaction + inventory writes over the SQLite stores."""

    def __init__(
        self,
        transaction_store: SQLiteTransactionStore | None = None,
        inventory_store: SQLiteInventoryStore | None = None,
    ):
        self._transactions = transaction_store or SQLiteTransactionStore()
        self._inventory = inventory_store or SQLiteInventoryStore()
        self._lock = asyncio.Lock()

    async def submit(
        self,
        transaction: Transaction,
        recompute_on_edit: bool = False,
    ) -> LedgerWriteResult:
        async with self._lock:
            try:
                async with get_transaction(immediate=True) as conn:
                    existing = await self._transactions.find_on(conn, transaction.id)

                    if existing is None:
                        touched = await self._fold_in(conn, transaction)
                        await self._transactions.upsert_on(conn, transaction)
                        logger.info(
                            "ledger_applied",
                            transaction_id=transaction.id,
                            type=transaction.type.value,
                            items=len(touched),
                        )
                        return LedgerWriteResult(
                            transaction=transaction,
                            is_new=True,
                            ledger_applied=True,
                            inventory=touched,
                        )

                    await self._transactions.upsert_on(conn, transaction)
                    if not recompute_on_edit:
                        logger.info("transaction_edited", transaction_id=transaction.id)
                        return LedgerWriteResult(
                            transaction=transaction,
                            is_new=False,
                            ledger_applied=False,
                        )

                    rebuilt = await self._rebuild_on(conn)
                    keys = set(touched_keys(existing)) | set(touched_keys(transaction))
                    logger.info(
                        "transaction_edited_inventory_rebuilt",
                        transaction_id=transaction.id,
                    )
                    return LedgerWriteResult(
                        transaction=transaction,
                        is_new=False,
                        ledger_applied=True,
                        inventory=[item for item in rebuilt if item.id in keys],
                    )
            except aiosqlite.Error as e:
                logger.error(
                    "ledger_update_failed",
                    transaction_id=transaction.id,
                    error=str(e),
                )
                raise LedgerUpdateError(transaction.id, str(e)) from e

    async def rebuild(self) -> list[InventoryItem]:
        async with self._lock:
            try:
                async with get_transaction(immediate=True) as conn:
                    items = await self._rebuild_on(conn)
            except aiosqlite.Error as e:
                logger.error("inventory_rebuild_failed", error=str(e))
                raise LedgerUpdateError("*", str(e)) from e
        logger.info("inventory_rebuilt", items=len(items))
        return items

    async def _fold_in(
        self, conn: aiosqlite.Connection, transaction: Transaction
    ) -> list[InventoryItem]:
        """Apply a new transaction to the stored rows it touches; return them."""
        keys = touched_keys(transaction)
        state = await self._inventory.get_many_on(conn, keys)
        state = apply_transaction(state, transaction)
        touched = [state[key] for key in keys]
        for item in touched:
            await self._inventory.upsert_on(conn, item)
        return touched

    async def _rebuild_on(self, conn: aiosqlite.Connection) -> list[InventoryItem]:
        history = await self._transactions.list_for_ledger_on(conn)
        items = sorted(derive_inventory(history).values(), key=lambda i: (i.name.lower(), i.id))
        await self._inventory.replace_all_on(conn, items)
        return items
