"""
Application layer - Use cases, DTOs, and service factories.

This layer orchestrates business logic by:
1. Defining request/response DTOs for API contracts
2. Implementing use cases that coordinate core services and stores
3. Providing factory functions for dependency injection
"""

from billventory.application.dto.requests import (
    InventoryItemRequest,
    LineItemRequest,
    TransactionRequest,
)
from billventory.application.dto.responses import (
    BusinessSummaryResponse,
    ErrorResponse,
    HealthResponse,
    InventoryListResponse,
    SubmitTransactionResponse,
    TransactionListResponse,
    TransactionResponse,
)
from billventory.application.services import get_business_summary_service, reset_services
from billventory.application.use_cases import (
    BusinessSummaryUseCase,
    DeleteTransactionUseCase,
    DeriveInventoryUseCase,
    RebuildInventoryUseCase,
    SeedDemoDataUseCase,
    SubmitTransactionUseCase,
    UpsertInventoryItemUseCase,
)

__all__ = [
    # Request DTOs
    "TransactionRequest",
    "LineItemRequest",
    "InventoryItemRequest",
    # Response DTOs
    "TransactionResponse",
    "TransactionListResponse",
    "SubmitTransactionResponse",
    "InventoryListResponse",
    "BusinessSummaryResponse",
    "HealthResponse",
    "ErrorResponse",
    # Use Cases
    "SubmitTransactionUseCase",
    "DeleteTransactionUseCase",
    "UpsertInventoryItemUseCase",
    "DeriveInventoryUseCase",
    "RebuildInventoryUseCase",
    "BusinessSummaryUseCase",
    "SeedDemoDataUseCase",
    # Service factories
    "get_business_summary_service",
    "reset_services",
]
