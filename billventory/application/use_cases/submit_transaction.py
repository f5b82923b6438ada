"""Submit Transaction Use Case: validate, then record a purchase or sale through the ledger."""

import math
from dataclasses import dataclass, field

from billventory.application.dto.requests import TransactionRequest
from billventory.application.dto.responses import (
    InventoryItemResponse,
    SubmitTransactionResponse,
    TransactionResponse,
)
from billventory.config import get_logger, get_settings
from billventory.core.entities.inventory import InventoryItem
from billventory.core.entities.transaction import Transaction
from billventory.core.exceptions import InvalidTransactionError, TotalMismatchError
from billventory.core.interfaces.ledger_store import ILedgerStore

logger = get_logger(__name__)


@dataclass
class SubmitTransactionResult:
    """Result of submitting a transaction."""

    transaction: Transaction
    is_new: bool
    ledger_applied: bool
    inventory: list[InventoryItem] = field(default_factory=list)


class SubmitTransactionUseCase:
    """
    Record a purchase invoice or sales bill.

    A first submission of an id folds its line items into inventory; a
    repeat submission replaces the stored record and, unless
    recompute_on_edit is set, leaves inventory as it was. Malformed
    requests are rejected before anything is read or written.
    """

    def __init__(
        self,
        ledger_store: ILedgerStore | None = None,
        recompute_on_edit: bool | None = None,
        total_tolerance: float | None = None,
    ):
        self._ledger_store = ledger_store
        settings = get_settings()
        self._recompute_on_edit = (
            settings.ledger.recompute_on_edit if recompute_on_edit is None else recompute_on_edit
        )
        self._total_tolerance = (
            settings.ledger.total_tolerance if total_tolerance is None else total_tolerance
        )

    async def _get_ledger_store(self) -> ILedgerStore:
        if self._ledger_store is None:
            from billventory.infrastructure.storage.sqlite import get_ledger_store

            self._ledger_store = await get_ledger_store()
        return self._ledger_store

    async def execute(self, request: TransactionRequest) -> SubmitTransactionResult:
        """Execute submit transaction use case."""
        transaction = request.to_entity()
        self.validate(transaction)

        logger.info(
            "transaction_submit_started",
            transaction_id=transaction.id,
            type=transaction.type.value,
            items=len(transaction.items),
        )

        ledger = await self._get_ledger_store()
        written = await ledger.submit(transaction, recompute_on_edit=self._recompute_on_edit)

        logger.info(
            "transaction_submitted",
            transaction_id=transaction.id,
            is_new=written.is_new,
            ledger_applied=written.ledger_applied,
        )

        return SubmitTransactionResult(
            transaction=written.transaction,
            is_new=written.is_new,
            ledger_applied=written.ledger_applied,
            inventory=list(written.inventory),
        )

    def validate(self, transaction: Transaction) -> None:
        """Reject transactions the ledger should never see."""
        if not transaction.items:
            raise InvalidTransactionError(
                transaction.id, "items", "At least one line item is required"
            )

        for index, item in enumerate(transaction.items):
            if not item.description.strip():
                raise InvalidTransactionError(
                    transaction.id,
                    f"items[{index}].description",
                    "Description must not be blank",
                    item.description,
                )
            if not (math.isfinite(item.quantity) and math.isfinite(item.price)):
                raise InvalidTransactionError(
                    transaction.id,
                    f"items[{index}]",
                    "Quantity and price must be finite numbers",
                )

        if self._total_tolerance >= 0:
            items_total = transaction.items_total
            if abs(transaction.total_amount - items_total) > self._total_tolerance:
                raise TotalMismatchError(transaction.id, transaction.total_amount, items_total)

    def to_response(self, result: SubmitTransactionResult) -> SubmitTransactionResponse:
        """Convert result to API response."""
        return SubmitTransactionResponse(
            transaction=TransactionResponse.from_entity(result.transaction),
            is_new=result.is_new,
            ledger_applied=result.ledger_applied,
            inventory=[InventoryItemResponse.from_entity(i) for i in result.inventory],
        )
