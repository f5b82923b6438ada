"""Data Transfer Objects for API contracts."""

from billventory.application.dto.requests import (
    InventoryItemRequest,
    LineItemRequest,
    TransactionRequest,
)
from billventory.application.dto.responses import (
    BusinessSummaryResponse,
    DeleteTransactionResponse,
    ErrorResponse,
    HealthResponse,
    InventoryItemResponse,
    InventoryListResponse,
    InventoryUpsertResponse,
    LineItemResponse,
    PartyTotalResponse,
    ProviderHealthResponse,
    SubmitTransactionResponse,
    TransactionListResponse,
    TransactionResponse,
)

__all__ = [
    # Requests
    "TransactionRequest",
    "LineItemRequest",
    "InventoryItemRequest",
    # Responses
    "TransactionResponse",
    "LineItemResponse",
    "TransactionListResponse",
    "SubmitTransactionResponse",
    "DeleteTransactionResponse",
    "InventoryItemResponse",
    "InventoryListResponse",
    "InventoryUpsertResponse",
    "BusinessSummaryResponse",
    "PartyTotalResponse",
    "HealthResponse",
    "ProviderHealthResponse",
    "ErrorResponse",
]
