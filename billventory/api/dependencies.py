"""
Dependency injection container for FastAPI.

Provides store and use case instances to route handlers. Tests swap these
out through ``app.dependency_overrides``.
"""

from functools import lru_cache

from billventory.application.use_cases import (
    BusinessSummaryUseCase,
    DeleteTransactionUseCase,
    DeriveInventoryUseCase,
    RebuildInventoryUseCase,
    SubmitTransactionUseCase,
    UpsertInventoryItemUseCase,
)
from billventory.config import Settings, get_settings
from billventory.infrastructure.storage.sqlite import (
    SQLiteInventoryStore,
    SQLiteTransactionStore,
    get_inventory_store,
    get_transaction_store,
)


@lru_cache
def get_app_settings() -> Settings:
    """Get cached application settings."""
    return get_settings()


# Store dependencies
async def get_txn_store() -> SQLiteTransactionStore:
    """Get transaction store."""
    return await get_transaction_store()


async def get_inv_store() -> SQLiteInventoryStore:
    """Get inventory store."""
    return await get_inventory_store()


# Use case dependencies
def get_submit_transaction_use_case() -> SubmitTransactionUseCase:
    return SubmitTransactionUseCase()


def get_delete_transaction_use_case() -> DeleteTransactionUseCase:
    return DeleteTransactionUseCase()


def get_upsert_inventory_use_case() -> UpsertInventoryItemUseCase:
    return UpsertInventoryItemUseCase()


def get_derive_inventory_use_case() -> DeriveInventoryUseCase:
    return DeriveInventoryUseCase()


def get_rebuild_inventory_use_case() -> RebuildInventoryUseCase:
    return RebuildInventoryUseCase()


def get_business_summary_use_case() -> BusinessSummaryUseCase:
    return BusinessSummaryUseCase()
