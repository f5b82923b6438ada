"""Abstract interface for transaction storage."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass

from billventory.core.entities.transaction import Transaction, TransactionType


@dataclass
class TransactionUpsert:
    """Stored transaction plus whether its id was new to the store."""

    transaction: Transaction
    is_new: bool


class ITransactionStore(ABC):
    """Interface for transaction persistence, idempotent on transaction id."""

    @abstractmethod
    async def upsert(self, transaction: Transaction) -> TransactionUpsert:
        """Insert, or replace every field of the record with the same id."""
        pass

    @abstractmethod
    async def delete(self, transaction_id: str) -> bool:
        """Delete by id. Returns False if nothing was stored under the id."""
        pass

    @abstractmethod
    async def find(self, transaction_id: str) -> Transaction | None:
        """Get transaction by id."""
        pass

    @abstractmethod
    async def list(
        self, transaction_type: TransactionType | None = None
    ) -> list[Transaction]:
        """List transactions, newest business date first."""
        pass

    @abstractmethod
    async def list_for_ledger(self) -> list[Transaction]:
        """List transactions in folding order: date ASC, ties by insertion order."""
        pass
