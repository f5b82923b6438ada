"""Core interfaces (ports) for dependency injection."""

from billventory.core.interfaces.inventory_store import IInventoryStore
from billventory.core.interfaces.ledger_store import ILedgerStore, LedgerWriteResult
from billventory.core.interfaces.transaction_store import (
    ITransactionStore,
    TransactionUpsert,
)

__all__ = [
    # Storage interfaces
    "ITransactionStore",
    "IInventoryStore",
    "ILedgerStore",
    # Results
    "TransactionUpsert",
    "LedgerWriteResult",
]
