"""Persistence for transactions and inventory."""

from billventory.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteLedgerStore,
    SQLiteTransactionStore,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)

__all__ = [
    # SQLite stores
    "SQLiteTransactionStore",
    "SQLiteInventoryStore",
    "SQLiteLedgerStore",
    # Connection pool
    "get_pool",
    "close_pool",
    "get_connection",
    "get_transaction",
]
