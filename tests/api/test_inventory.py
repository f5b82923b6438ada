"""API tests for inventory endpoints."""

from datetime import date
from unittest.mock import AsyncMock

import pytest
from httpx import ASGITransport, AsyncClient

from billventory.api.dependencies import (
    get_derive_inventory_use_case,
    get_inv_store,
    get_rebuild_inventory_use_case,
    get_upsert_inventory_use_case,
)
from billventory.api.main import app
from billventory.application.use_cases import (
    DeriveInventoryUseCase,
    RebuildInventoryUseCase,
    UpsertInventoryItemUseCase,
)
from billventory.core.entities import InventoryItem, TransactionType

LAPTOPS = InventoryItem(
    id="laptops",
    name="Laptops",
    quantity=4,
    average_cost=30000,
    selling_price=35000,
    last_updated=date(2024, 2, 20),
)


@pytest.fixture
def mock_inventory_store():
    store = AsyncMock()
    store.list.return_value = [LAPTOPS]
    store.upsert.side_effect = lambda item: item
    return store


@pytest.fixture
def mock_txn_store(make_transaction):
    store = AsyncMock()
    store.list_for_ledger.return_value = [
        make_transaction("1", TransactionType.PURCHASE, [("Laptops", 5, 30000)]),
        make_transaction(
            "2", TransactionType.SALE, [("Laptops", 1, 35000)], txn_date=date(2024, 2, 20)
        ),
    ]
    return store


@pytest.fixture
def mock_ledger_store():
    store = AsyncMock()
    store.rebuild.return_value = [LAPTOPS]
    return store


@pytest.fixture
async def inv_client(mock_inventory_store, mock_txn_store, mock_ledger_store):
    app.dependency_overrides[get_inv_store] = lambda: mock_inventory_store
    app.dependency_overrides[get_upsert_inventory_use_case] = lambda: UpsertInventoryItemUseCase(
        inventory_store=mock_inventory_store
    )
    app.dependency_overrides[get_derive_inventory_use_case] = lambda: DeriveInventoryUseCase(
        transaction_store=mock_txn_store
    )
    app.dependency_overrides[get_rebuild_inventory_use_case] = lambda: RebuildInventoryUseCase(
        ledger_store=mock_ledger_store
    )
    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as ac:
        yield ac
    app.dependency_overrides.clear()


class TestInventoryAPI:
    async def test_list(self, inv_client: AsyncClient):
        response = await inv_client.get("/api/inventory")

        assert response.status_code == 200
        data = response.json()
        assert data["total"] == 1
        assert data["totalValue"] == 120000
        item = data["inventory"][0]
        assert item["averageCost"] == 30000
        assert item["sellingPrice"] == 35000
        assert item["lastUpdated"] == "2024-02-20"

    async def test_upsert(self, inv_client: AsyncClient, mock_inventory_store):
        response = await inv_client.post(
            "/api/inventory",
            json={"name": "Laptops", "quantity": 3, "averageCost": 29000},
        )

        assert response.status_code == 200
        assert response.json()["item"]["id"] == "laptops"
        stored = mock_inventory_store.upsert.await_args.args[0]
        assert stored.quantity == 3

    async def test_upsert_allows_negative_quantity(self, inv_client: AsyncClient):
        response = await inv_client.post(
            "/api/inventory", json={"id": "desk", "name": "Desk", "quantity": -2}
        )

        assert response.status_code == 200
        assert response.json()["item"]["quantity"] == -2

    async def test_upsert_blank_id_is_400(self, inv_client: AsyncClient):
        response = await inv_client.post("/api/inventory", json={"id": "  ", "name": "Desk"})

        assert response.status_code == 400
        assert response.json()["error_code"] == "VALIDATION_ERROR"

    async def test_upsert_missing_name_is_422(self, inv_client: AsyncClient):
        response = await inv_client.post("/api/inventory", json={"quantity": 1})

        assert response.status_code == 422

    async def test_derived(self, inv_client: AsyncClient, mock_inventory_store):
        response = await inv_client.get("/api/inventory/derived")

        assert response.status_code == 200
        item = response.json()["inventory"][0]
        assert item["quantity"] == 4
        assert item["averageCost"] == 30000
        mock_inventory_store.replace_all.assert_not_called()

    async def test_rebuild(self, inv_client: AsyncClient, mock_ledger_store):
        response = await inv_client.post("/api/inventory/rebuild")

        assert response.status_code == 200
        assert response.json()["inventory"][0]["id"] == "laptops"
        mock_ledger_store.rebuild.assert_awaited_once()
