"""API tests for the business summary report."""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from billventory.api.dependencies import get_business_summary_use_case
from billventory.api.main import app
from billventory.application.use_cases import BusinessSummaryUseCase
from billventory.core.entities import InventoryItem, InvoiceStatus, TransactionType
from billventory.core.services import BusinessSummaryService


@pytest.fixture
async def report_client(make_transaction):
    txn_store = AsyncMock()
    txn_store.list.return_value = [
        make_transaction(
            "1",
            TransactionType.PURCHASE,
            [("Laptops", 5, 30000)],
            status=InvoiceStatus.PAID,
        ),
        make_transaction(
            "2",
            TransactionType.SALE,
            [("Laptops", 1, 35000)],
            txn_date=date(2024, 2, 20),
            party_name="Rahul Sharma",
            status=InvoiceStatus.PENDING,
        ),
    ]
    inv_store = AsyncMock()
    inv_store.list.return_value = [
        InventoryItem(id="laptops", name="Laptops", quantity=4, average_cost=30000),
    ]
    app.dependency_overrides[get_business_summary_use_case] = lambda: BusinessSummaryUseCase(
        transaction_store=txn_store,
        inventory_store=inv_store,
        summary_service=BusinessSummaryService(),
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


async def test_summary(report_client: AsyncClient):
    response = await report_client.get("/api/reports/summary")

    assert response.status_code == 200
    data = response.json()
    assert data["totalRevenue"] == 35000
    assert data["totalExpenses"] == 150000
    assert data["salesCount"] == 1
    assert data["purchaseCount"] == 1
    assert data["pendingAmount"] == 35000
    assert data["stockValue"] == 120000
    assert data["topCustomers"][0]["partyName"] == "Rahul Sharma"
    assert data["recentTransactions"][0]["id"] == "2"
