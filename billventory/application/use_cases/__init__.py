"""Application use cases."""

from billventory.application.use_cases.business_summary import BusinessSummaryUseCase
from billventory.application.use_cases.delete_transaction import DeleteTransactionUseCase
from billventory.application.use_cases.rebuild_inventory import (
    DeriveInventoryUseCase,
    RebuildInventoryUseCase,
)
from billventory.application.use_cases.seed_demo_data import (
    DEMO_TRANSACTIONS,
    SeedDemoDataUseCase,
)
from billventory.application.use_cases.submit_transaction import (
    SubmitTransactionResult,
    SubmitTransactionUseCase,
)
from billventory.application.use_cases.upsert_inventory_item import UpsertInventoryItemUseCase

__all__ = [
    "SubmitTransactionUseCase",
    "SubmitTransactionResult",
    "DeleteTransactionUseCase",
    "UpsertInventoryItemUseCase",
    "DeriveInventoryUseCase",
    "RebuildInventoryUseCase",
    "BusinessSummaryUseCase",
    "SeedDemoDataUseCase",
    "DEMO_TRANSACTIONS",
]
