"""Business Summary Use Case: dashboard figures over both stores."""

from billventory.application.dto.responses import BusinessSummaryResponse
from billventory.config import get_logger
from billventory.core.entities.report import BusinessSummary
from billventory.core.interfaces.inventory_store import IInventoryStore
from billventory.core.interfaces.transaction_store import ITransactionStore
from billventory.core.services.business_summary import BusinessSummaryService

logger = get_logger(__name__)


class BusinessSummaryUseCase:
    """Read transactions and inventory, then summarize them."""

    def __init__(
        self,
        transaction_store: ITransactionStore | None = None,
        inventory_store: IInventoryStore | None = None,
        summary_service: BusinessSummaryService | None = None,
    ):
        self._transaction_store = transaction_store
        self._inventory_store = inventory_store
        self._summary_service = summary_service

    async def _get_transaction_store(self) -> ITransactionStore:
        if self._transaction_store is None:
            from billventory.infrastructure.storage.sqlite import get_transaction_store

            self._transaction_store = await get_transaction_store()
        return self._transaction_store

    async def _get_inventory_store(self) -> IInventoryStore:
        if self._inventory_store is None:
            from billventory.infrastructure.storage.sqlite import get_inventory_store

            self._inventory_store = await get_inventory_store()
        return self._inventory_store

    def _get_summary_service(self) -> BusinessSummaryService:
        if self._summary_service is None:
            from billventory.application.services import get_business_summary_service

            self._summary_service = get_business_summary_service()
        return self._summary_service

    async def execute(self) -> BusinessSummary:
        transactions = await (await self._get_transaction_store()).list()
        inventory = await (await self._get_inventory_store()).list()

        summary = self._get_summary_service().summarize(transactions, inventory)
        logger.info(
            "business_summary_computed",
            transactions=len(transactions),
            products=summary.product_count,
            net_profit=summary.net_profit,
        )
        return summary

    def to_response(self, summary: BusinessSummary) -> BusinessSummaryResponse:
        return BusinessSummaryResponse.from_entity(summary)
