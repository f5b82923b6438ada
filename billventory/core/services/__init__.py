"""
Core business logic services.

Layer-pure services that depend only on:
- billventory/core/entities/*
- billventory/core/interfaces/*
- billventory/core/exceptions.py

NO infrastructure imports.
"""

from billventory.core.services.business_summary import BusinessSummaryService
from billventory.core.services.ledger import (
    apply_transaction,
    derive_inventory,
    normalize_product_key,
    sort_for_ledger,
    touched_keys,
)

__all__ = [
    # Ledger
    "normalize_product_key",
    "apply_transaction",
    "derive_inventory",
    "sort_for_ledger",
    "touched_keys",
    # Reporting
    "BusinessSummaryService",
]
