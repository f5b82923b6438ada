"""
Errors raised by the ledger.

Each carries a stable ``code`` that reaches API clients unchanged, a
human ``message`` and a ``details`` dict with the offending values. The
HTTP layer maps the class to a status code; nothing in core knows about
HTTP.

Arithmetic edge cases (selling more than is in stock, zero-quantity lines)
are never errors here: the ledger accepts them and reports what it did.
"""

from typing import Any


class BillventoryError(Exception):
    """Root of every error the ledger raises on purpose."""

    default_code: str | None = None

    def __init__(
        self,
        message: str,
        code: str | None = None,
        details: dict[str, Any] | None = None,
    ):
        super().__init__(message)
        self.message = message
        self.code = code or self.default_code or type(self).__name__
        self.details = dict(details or {})


class ConfigurationError(BillventoryError):
    pass


class StorageError(BillventoryError):
    """The store could not read or write what was asked."""


class TransactionNotFoundError(StorageError):
    default_code = "TRANSACTION_NOT_FOUND"

    def __init__(self, transaction_id: str):
        super().__init__(
            f"Transaction not found: {transaction_id}",
            details={"transaction_id": transaction_id},
        )


class LedgerUpdateError(StorageError):
    """The transaction row and its inventory deltas were rolled back together."""

    default_code = "LEDGER_UPDATE_FAILED"

    def __init__(self, transaction_id: str, reason: str):
        super().__init__(
            f"Ledger update failed for transaction {transaction_id}: {reason}",
            details={"transaction_id": transaction_id, "reason": reason},
        )


class ValidationError(BillventoryError):
    """A request value was rejected before anything was written."""

    default_code = "VALIDATION_ERROR"
    # Offending values are echoed back, so long ones are cut
    max_value_length = 100

    def __init__(self, field: str, message: str, value: Any = None, **extra: Any):
        shown = None if value is None else str(value)[: self.max_value_length]
        super().__init__(
            f"Validation error for '{field}': {message}",
            details={"field": field, "message": message, "value": shown, **extra},
        )


class InvalidTransactionError(ValidationError):
    """Missing items, a blank description or a non-numeric figure."""

    default_code = "INVALID_TRANSACTION"

    def __init__(self, transaction_id: str, field: str, message: str, value: Any = None):
        super().__init__(field, message, value, transaction_id=transaction_id)


class TotalMismatchError(ValidationError):
    default_code = "TOTAL_MISMATCH"

    def __init__(self, transaction_id: str, total_amount: float, items_total: float):
        super().__init__(
            "totalAmount",
            f"Total {total_amount} does not match line items total {items_total}",
            total_amount,
            transaction_id=transaction_id,
            total_amount=total_amount,
            items_total=items_total,
        )
