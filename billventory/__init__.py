"""Billventory - billing and inventory ledger service."""

__version__ = "1.0.0"
