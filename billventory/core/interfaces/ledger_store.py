"""Abstract interface for atomic ledger writes."""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from billventory.core.entities.inventory import InventoryItem
from billventory.core.entities.transaction import Transaction


@dataclass
class LedgerWriteResult:
    """Outcome of submitting one transaction to the ledger."""

    transaction: Transaction
    is_new: bool
    ledger_applied: bool
    inventory: list[InventoryItem] = field(default_factory=list)


class ILedgerStore(ABC):
    """
    Unit of work over the transaction and inventory stores.

    Implementations must commit inventory changes and the transaction write
    together, and serialize ledger writes so read-modify-write cycles on the
    same product key never interleave.
    """

    @abstractmethod
    async def submit(
        self,
        transaction: Transaction,
        recompute_on_edit: bool = False,
    ) -> LedgerWriteResult:
        """
        Upsert a transaction and adjust inventory.

        A new id folds the transaction into the current inventory. A known id
        replaces the record; inventory is only touched when recompute_on_edit
        is set, in which case it is rebuilt from the full history.
        """
        pass

    @abstractmethod
    async def rebuild(self) -> list[InventoryItem]:
        """Replace stored inventory with the fold over the full history."""
        pass
