"""Delete Transaction Use Case."""

from billventory.application.dto.responses import DeleteTransactionResponse
from billventory.config import get_logger
from billventory.core.interfaces.transaction_store import ITransactionStore

logger = get_logger(__name__)


class DeleteTransactionUseCase:
    """Remove a transaction record. Inventory is not reversed."""

    def __init__(self, transaction_store: ITransactionStore | None = None):
        self._transaction_store = transaction_store

    async def _get_transaction_store(self) -> ITransactionStore:
        if self._transaction_store is None:
            from billventory.infrastructure.storage.sqlite import get_transaction_store

            self._transaction_store = await get_transaction_store()
        return self._transaction_store

    async def execute(self, transaction_id: str) -> bool:
        store = await self._get_transaction_store()
        deleted = await store.delete(transaction_id)
        if not deleted:
            logger.info("transaction_delete_noop", transaction_id=transaction_id)
        return deleted

    def to_response(self, deleted: bool) -> DeleteTransactionResponse:
        return DeleteTransactionResponse(success=True, deleted=deleted)
