"""Transaction domain entities (purchases and sales)."""

import datetime
from enum import Enum

from pydantic import BaseModel, Field


class TransactionType(str, Enum):
    """Direction of a business event.

    PURCHASE is an incoming vendor invoice (stock in), SALE is a customer
    bill (stock out).
    """

    PURCHASE = "PURCHASE"
    SALE = "SALE"


class InvoiceStatus(str, Enum):
    """Payment status of a transaction."""

    DRAFT = "Draft"
    PENDING = "Pending"
    PAID = "Paid"
    OVERDUE = "Overdue"


class LineItem(BaseModel):
    """One entry within a transaction."""

    id: str | None = None  # opaque client row id
    description: str
    quantity: float
    price: float  # purchase cost or sale price, depending on the transaction type

    @property
    def line_total(self) -> float:
        return self.quantity * self.price


class Transaction(BaseModel):
    """A purchase invoice or sales bill, keyed by a caller-chosen id."""

    id: str
    type: TransactionType
    invoice_number: str
    party_name: str  # vendor (purchase) or customer (sale)
    date: datetime.date
    due_date: datetime.date | None = None
    status: InvoiceStatus = InvoiceStatus.PENDING
    items: list[LineItem] = Field(default_factory=list)
    total_amount: float = 0.0
    notes: str | None = None

    @property
    def items_total(self) -> float:
        """Sum of quantity * price over the line items."""
        return sum(item.line_total for item in self.items)
