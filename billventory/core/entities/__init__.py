"""Core domain entities."""

from billventory.core.entities.inventory import InventoryItem
from billventory.core.entities.report import BusinessSummary, PartyTotal
from billventory.core.entities.transaction import (
    InvoiceStatus,
    LineItem,
    Transaction,
    TransactionType,
)

__all__ = [
    # Transaction entities
    "Transaction",
    "LineItem",
    "TransactionType",
    "InvoiceStatus",
    # Inventory entities
    "InventoryItem",
    # Report entities
    "BusinessSummary",
    "PartyTotal",
]
