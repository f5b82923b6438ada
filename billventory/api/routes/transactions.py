"""Transaction endpoints: purchases and sales."""

from fastapi import APIRouter, Depends

from billventory.api.dependencies import (
    get_delete_transaction_use_case,
    get_submit_transaction_use_case,
    get_txn_store,
)
from billventory.application.dto.requests import TransactionRequest
from billventory.application.dto.responses import (
    DeleteTransactionResponse,
    ErrorResponse,
    SubmitTransactionResponse,
    TransactionListResponse,
    TransactionResponse,
)
from billventory.application.use_cases.delete_transaction import DeleteTransactionUseCase
from billventory.application.use_cases.submit_transaction import SubmitTransactionUseCase
from billventory.core.entities.transaction import TransactionType
from billventory.core.exceptions import TransactionNotFoundError
from billventory.core.interfaces.transaction_store import ITransactionStore

router = APIRouter(prefix="/api/transactions", tags=["transactions"])


@router.get("", response_model=TransactionListResponse)
async def list_transactions(
    type: TransactionType | None = None,
    store: ITransactionStore = Depends(get_txn_store),
) -> TransactionListResponse:
    """List transactions, newest first. Filter with ?type=PURCHASE or ?type=SALE."""
    transactions = await store.list(transaction_type=type)
    return TransactionListResponse(
        transactions=[TransactionResponse.from_entity(t) for t in transactions],
        total=len(transactions),
    )


@router.post(
    "",
    response_model=SubmitTransactionResponse,
    responses={
        400: {"model": ErrorResponse},
        422: {"model": ErrorResponse},
        500: {"model": ErrorResponse},
    },
)
async def submit_transaction(
    request: TransactionRequest,
    use_case: SubmitTransactionUseCase = Depends(get_submit_transaction_use_case),
) -> SubmitTransactionResponse:
    """
    Record a purchase or sale.

    A new id adjusts inventory; re-submitting a known id replaces the record.
    """
    result = await use_case.execute(request)
    return use_case.to_response(result)


@router.get(
    "/{transaction_id}",
    response_model=TransactionResponse,
    responses={404: {"model": ErrorResponse}},
)
async def get_transaction(
    transaction_id: str,
    store: ITransactionStore = Depends(get_txn_store),
) -> TransactionResponse:
    transaction = await store.find(transaction_id)
    if transaction is None:
        raise TransactionNotFoundError(transaction_id)
    return TransactionResponse.from_entity(transaction)


@router.delete("/{transaction_id}", response_model=DeleteTransactionResponse)
async def delete_transaction(
    transaction_id: str,
    use_case: DeleteTransactionUseCase = Depends(get_delete_transaction_use_case),
) -> DeleteTransactionResponse:
    """Delete a transaction. Inventory is not adjusted; use /api/inventory/rebuild."""
    deleted = await use_case.execute(transaction_id)
    return use_case.to_response(deleted)
