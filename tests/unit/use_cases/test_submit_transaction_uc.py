"""Tests for SubmitTransactionUseCase."""

from unittest.mock import AsyncMock

import pytest
from pydantic import ValidationError

from billventory.application.dto.requests import TransactionRequest
from billventory.application.use_cases.submit_transaction import SubmitTransactionUseCase
from billventory.core.entities import InventoryItem, TransactionType
from billventory.core.exceptions import InvalidTransactionError, TotalMismatchError
from billventory.core.interfaces import LedgerWriteResult


def _request(**overrides) -> TransactionRequest:
    body = {
        "id": "t1",
        "type": "PURCHASE",
        "invoiceNumber": "INV-VENDOR-001",
        "partyName": "Tech Suppliers Inc",
        "date": "2024-02-15",
        "status": "Paid",
        "items": [{"id": "1", "description": "Laptop", "quantity": 5, "price": 30000}],
        "totalAmount": 150000,
    }
    body.update(overrides)
    return TransactionRequest.model_validate(body)


@pytest.fixture
def mock_ledger_store():
    store = AsyncMock()

    async def submit(transaction, recompute_on_edit=False):
        return LedgerWriteResult(
            transaction=transaction,
            is_new=True,
            ledger_applied=True,
            inventory=[
                InventoryItem(id="laptop", name="Laptop", quantity=5, average_cost=30000)
            ],
        )

    store.submit.side_effect = submit
    return store


@pytest.fixture
def use_case(mock_ledger_store):
    return SubmitTransactionUseCase(
        ledger_store=mock_ledger_store,
        recompute_on_edit=False,
        total_tolerance=0.01,
    )


class TestSubmitTransactionUseCase:
    async def test_new_transaction_applied(self, use_case, mock_ledger_store):
        result = await use_case.execute(_request())

        assert result.is_new is True
        assert result.ledger_applied is True
        assert result.inventory[0].id == "laptop"
        submitted = mock_ledger_store.submit.call_args[0][0]
        assert submitted.id == "t1"
        assert submitted.items[0].description == "Laptop"
        assert mock_ledger_store.submit.call_args.kwargs["recompute_on_edit"] is False

    async def test_recompute_flag_forwarded(self, mock_ledger_store):
        use_case = SubmitTransactionUseCase(
            ledger_store=mock_ledger_store, recompute_on_edit=True
        )
        await use_case.execute(_request())

        assert mock_ledger_store.submit.call_args.kwargs["recompute_on_edit"] is True

    async def test_settings_supply_defaults(self, mock_ledger_store, monkeypatch):
        monkeypatch.setenv("LEDGER_RECOMPUTE_ON_EDIT", "true")
        from billventory.config import reset_settings

        reset_settings()
        use_case = SubmitTransactionUseCase(ledger_store=mock_ledger_store)
        await use_case.execute(_request())

        assert mock_ledger_store.submit.call_args.kwargs["recompute_on_edit"] is True

    async def test_edit_passthrough(self, use_case, mock_ledger_store):
        async def submit(transaction, recompute_on_edit=False):
            return LedgerWriteResult(transaction=transaction, is_new=False, ledger_applied=False)

        mock_ledger_store.submit.side_effect = submit

        result = await use_case.execute(_request())

        assert result.is_new is False
        assert result.ledger_applied is False
        assert result.inventory == []

    async def test_no_items_rejected(self, use_case, mock_ledger_store):
        with pytest.raises(InvalidTransactionError) as exc_info:
            await use_case.execute(_request(items=[], totalAmount=0))

        assert exc_info.value.details["field"] == "items"
        mock_ledger_store.submit.assert_not_called()

    def test_blank_description_rejected(self, use_case, make_transaction):
        transaction = make_transaction("t1", TransactionType.PURCHASE, [("   ", 1, 10)])

        with pytest.raises(InvalidTransactionError) as exc_info:
            use_case.validate(transaction)

        assert exc_info.value.details["field"] == "items[0].description"

    def test_blank_description_never_reaches_the_use_case(self):
        with pytest.raises(ValidationError, match="non-space"):
            _request(items=[{"description": "   ", "quantity": 1, "price": 10}], totalAmount=10)

    async def test_total_mismatch_rejected(self, use_case, mock_ledger_store):
        with pytest.raises(TotalMismatchError) as exc_info:
            await use_case.execute(_request(totalAmount=100))

        assert exc_info.value.details["items_total"] == 150000
        mock_ledger_store.submit.assert_not_called()

    async def test_total_within_tolerance_accepted(self, use_case):
        result = await use_case.execute(_request(totalAmount=150000.005))
        assert result.is_new is True

    async def test_negative_tolerance_disables_check(self, mock_ledger_store):
        use_case = SubmitTransactionUseCase(ledger_store=mock_ledger_store, total_tolerance=-1)

        result = await use_case.execute(_request(totalAmount=1))

        assert result.transaction.total_amount == 1

    async def test_to_response_uses_wire_names(self, use_case):
        result = await use_case.execute(_request())
        body = use_case.to_response(result).model_dump(by_alias=True, mode="json")

        assert body["isNew"] is True
        assert body["ledgerApplied"] is True
        assert body["transaction"]["invoiceNumber"] == "INV-VENDOR-001"
        assert body["inventory"][0]["averageCost"] == 30000
