"""Tests for delete, summary and demo seed use cases."""

from unittest.mock import AsyncMock

from billventory.application.use_cases import (
    DEMO_TRANSACTIONS,
    BusinessSummaryUseCase,
    DeleteTransactionUseCase,
    SeedDemoDataUseCase,
)
from billventory.core.entities import InventoryItem, TransactionType
from billventory.core.services import BusinessSummaryService


class TestDeleteTransactionUseCase:
    async def test_deleted(self):
        store = AsyncMock()
        store.delete.return_value = True
        use_case = DeleteTransactionUseCase(transaction_store=store)

        assert await use_case.execute("t1") is True
        store.delete.assert_awaited_once_with("t1")

    async def test_unknown_id_is_not_an_error(self):
        store = AsyncMock()
        store.delete.return_value = False
        use_case = DeleteTransactionUseCase(transaction_store=store)

        deleted = await use_case.execute("missing")

        assert deleted is False
        assert use_case.to_response(deleted).model_dump() == {"success": True, "deleted": False}


class TestBusinessSummaryUseCase:
    async def test_reads_both_stores(self, make_transaction):
        txn_store = AsyncMock()
        txn_store.list.return_value = [
            make_transaction("1", TransactionType.SALE, [("Laptop", 1, 35000)]),
        ]
        inv_store = AsyncMock()
        inv_store.list.return_value = [
            InventoryItem(id="laptop", name="Laptop", quantity=4, average_cost=30000)
        ]
        use_case = BusinessSummaryUseCase(
            transaction_store=txn_store,
            inventory_store=inv_store,
            summary_service=BusinessSummaryService(),
        )

        summary = await use_case.execute()

        assert summary.total_revenue == 35000
        assert summary.stock_value == 120000
        assert summary.low_stock_count == 1

        body = use_case.to_response(summary).model_dump(by_alias=True)
        assert body["totalRevenue"] == 35000
        assert body["recentTransactions"][0]["partyName"] == "Tech Suppliers Inc"

    async def test_service_built_from_settings(self, monkeypatch):
        monkeypatch.setenv("REPORT_LOW_STOCK_THRESHOLD", "50")
        txn_store = AsyncMock()
        txn_store.list.return_value = []
        inv_store = AsyncMock()
        inv_store.list.return_value = [InventoryItem(id="a", name="A", quantity=40)]
        use_case = BusinessSummaryUseCase(transaction_store=txn_store, inventory_store=inv_store)

        summary = await use_case.execute()

        assert summary.low_stock_count == 1


class TestSeedDemoDataUseCase:
    async def test_seeds_empty_database(self):
        txn_store = AsyncMock()
        txn_store.list.return_value = []
        ledger = AsyncMock()
        use_case = SeedDemoDataUseCase(transaction_store=txn_store, ledger_store=ledger)

        seeded = await use_case.execute()

        assert seeded == 2
        submitted = [call.args[0] for call in ledger.submit.await_args_list]
        assert [t.id for t in submitted] == ["1", "2"]
        assert submitted[0].type == TransactionType.PURCHASE
        assert submitted[0].items[0].description == "Laptops"

    async def test_skips_when_data_exists(self):
        txn_store = AsyncMock()
        txn_store.list.return_value = [DEMO_TRANSACTIONS[0]]
        ledger = AsyncMock()
        use_case = SeedDemoDataUseCase(transaction_store=txn_store, ledger_store=ledger)

        assert await use_case.execute() == 0
        ledger.submit.assert_not_called()

    def test_demo_totals_match_items(self):
        for txn in DEMO_TRANSACTIONS:
            assert txn.total_amount == txn.items_total
