"""Unit tests for domain exceptions."""

import pytest

from billventory.core.exceptions import (
    BillventoryError,
    ConfigurationError,
    InvalidTransactionError,
    LedgerUpdateError,
    StorageError,
    TotalMismatchError,
    TransactionNotFoundError,
    ValidationError,
)


class TestBillventoryError:
    def test_basic_initialization(self):
        error = BillventoryError("Something went wrong")
        assert str(error) == "Something went wrong"
        assert error.message == "Something went wrong"
        assert error.code == "BillventoryError"
        assert error.details == {}

    def test_explicit_code_wins(self):
        error = BillventoryError("Error message", code="CUSTOM_ERROR")
        assert error.code == "CUSTOM_ERROR"

    def test_details_are_copied(self):
        details = {"extra": "info"}
        error = BillventoryError("Test error", details=details)
        error.details["more"] = 1
        assert details == {"extra": "info"}


class TestStorageErrors:
    def test_transaction_not_found(self):
        error = TransactionNotFoundError("txn-42")
        assert isinstance(error, StorageError)
        assert error.code == "TRANSACTION_NOT_FOUND"
        assert error.details["transaction_id"] == "txn-42"
        assert "txn-42" in error.message

    def test_ledger_update_error(self):
        error = LedgerUpdateError("t1", "database is locked")
        assert isinstance(error, StorageError)
        assert error.code == "LEDGER_UPDATE_FAILED"
        assert error.details["reason"] == "database is locked"


class TestValidationErrors:
    def test_validation_error_truncates_value(self):
        error = ValidationError("description", "too long", "x" * 500)
        assert error.code == "VALIDATION_ERROR"
        assert len(error.details["value"]) == 100

    def test_missing_value_stays_none(self):
        error = ValidationError("id", "must not be blank")
        assert error.details["value"] is None

    def test_invalid_transaction(self):
        error = InvalidTransactionError("t1", "items", "At least one line item is required")
        assert isinstance(error, ValidationError)
        assert error.code == "INVALID_TRANSACTION"
        assert error.details["transaction_id"] == "t1"
        assert error.details["field"] == "items"

    def test_total_mismatch(self):
        error = TotalMismatchError("t1", 100.0, 150.0)
        assert isinstance(error, ValidationError)
        assert error.code == "TOTAL_MISMATCH"
        assert error.details["total_amount"] == 100.0
        assert error.details["items_total"] == 150.0
        assert error.details["field"] == "totalAmount"


@pytest.mark.parametrize(
    "error",
    [
        TransactionNotFoundError("x"),
        LedgerUpdateError("x", "y"),
        InvalidTransactionError("x", "f", "m"),
        TotalMismatchError("x", 1, 2),
        ConfigurationError("bad"),
    ],
)
def test_all_errors_share_base(error):
    assert isinstance(error, BillventoryError)
