"""Pytest configuration and fixtures."""

from datetime import date

import pytest

from billventory.application.services import reset_services
from billventory.config import reset_settings
from billventory.core.entities import LineItem, Transaction, TransactionType


@pytest.fixture(autouse=True)
def fresh_settings():
    """Each test sees settings rebuilt from its own environment."""
    reset_settings()
    reset_services()
    yield
    reset_settings()
    reset_services()


@pytest.fixture
def make_transaction():
    """Build a Transaction from (description, quantity, price) tuples.

    totalAmount defaults to the line item sum.
    """

    def _make(
        txn_id: str,
        txn_type: TransactionType,
        items: list[tuple[str, float, float]],
        txn_date: date = date(2024, 2, 15),
        **kwargs,
    ) -> Transaction:
        kwargs.setdefault("invoice_number", f"INV-{txn_id}")
        kwargs.setdefault("party_name", "Tech Suppliers Inc")
        kwargs.setdefault("total_amount", sum(q * p for _, q, p in items))
        return Transaction(
            id=txn_id,
            type=txn_type,
            date=txn_date,
            items=[
                LineItem(id=str(n), description=d, quantity=q, price=p)
                for n, (d, q, p) in enumerate(items, start=1)
            ],
            **kwargs,
        )

    return _make
