"""Seed Demo Data Use Case: load a starter purchase and sale into an empty database."""

from datetime import date

from billventory.config import get_logger
from billventory.core.entities.transaction import (
    InvoiceStatus,
    LineItem,
    Transaction,
    TransactionType,
)
from billventory.core.interfaces.ledger_store import ILedgerStore
from billventory.core.interfaces.transaction_store import ITransactionStore

logger = get_logger(__name__)

DEMO_TRANSACTIONS = [
    Transaction(
        id="1",
        type=TransactionType.PURCHASE,
        invoice_number="INV-VENDOR-001",
        party_name="Tech Suppliers Inc",
        date=date(2024, 2, 15),
        status=InvoiceStatus.PAID,
        items=[LineItem(id="1", description="Laptops", quantity=5, price=30000)],
        total_amount=150000,
    ),
    Transaction(
        id="2",
        type=TransactionType.SALE,
        invoice_number="BILL-0001",
        party_name="Rahul Sharma",
        date=date(2024, 2, 20),
        status=InvoiceStatus.PAID,
        items=[LineItem(id="1", description="Laptops", quantity=1, price=35000)],
        total_amount=35000,
    ),
]


class SeedDemoDataUseCase:
    """Submit the demo transactions through the ledger when no transactions exist."""

    def __init__(
        self,
        transaction_store: ITransactionStore | None = None,
        ledger_store: ILedgerStore | None = None,
    ):
        self._transaction_store = transaction_store
        self._ledger_store = ledger_store

    async def _get_transaction_store(self) -> ITransactionStore:
        if self._transaction_store is None:
            from billventory.infrastructure.storage.sqlite import get_transaction_store

            self._transaction_store = await get_transaction_store()
        return self._transaction_store

    async def _get_ledger_store(self) -> ILedgerStore:
        if self._ledger_store is None:
            from billventory.infrastructure.storage.sqlite import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self) -> int:
        """Returns the number of transactions seeded (0 if data already existed)."""
        store = await self._get_transaction_store()
        if await store.list():
            logger.debug("demo_seed_skipped")
            return 0

        ledger = await self._get_ledger_store()
        for transaction in DEMO_TRANSACTIONS:
            await ledger.submit(transaction.model_copy(deep=True))

        logger.info("demo_data_seeded", transactions=len(DEMO_TRANSACTIONS))
        return len(DEMO_TRANSACTIONS)
