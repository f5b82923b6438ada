"""
SQLite-backed stores.

The getters hand out one instance of each store per process. The ledger
store in particular must be shared: its lock is what serializes ledger
writes.
"""

from billventory.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from billventory.infrastructure.storage.sqlite.inventory_store import SQLiteInventoryStore
from billventory.infrastructure.storage.sqlite.ledger_store import SQLiteLedgerStore
from billventory.infrastructure.storage.sqlite.transaction_store import SQLiteTransactionStore

# Names the application lifespan and health check import
get_connection_pool = get_pool
close_connection_pool = close_pool

_transaction_store: SQLiteTransactionStore | None = None
_inventory_store: SQLiteInventoryStore | None = None
_ledger_store: SQLiteLedgerStore | None = None


async def get_transaction_store() -> SQLiteTransactionStore:
    global _transaction_store
    if _transaction_store is None:
        _transaction_store = SQLiteTransactionStore()
    return _transaction_store


async def get_inventory_store() -> SQLiteInventoryStore:
    global _inventory_store
    if _inventory_store is None:
        _inventory_store = SQLiteInventoryStore()
    return _inventory_store


async def get_ledger_store() -> SQLiteLedgerStore:
    global _ledger_store
    if _ledger_store is None:
        _ledger_store = SQLiteLedgerStore(
            transaction_store=await get_transaction_store(),
            inventory_store=await get_inventory_store(),
        )
    return _ledger_store


__all__ = [
    "ConnectionPool",
    "SQLiteInventoryStore",
    "SQLiteLedgerStore",
    "SQLiteTransactionStore",
    "close_connection_pool",
    "close_pool",
    "get_connection",
    "get_connection_pool",
    "get_inventory_store",
    "get_ledger_store",
    "get_pool",
    "get_transaction",
    "get_transaction_store",
]
