"""Request DTOs for API endpoints.

Pydantic v2 models for API request validation.
These are the ONLY contracts between API and use cases.

Field names go over the wire in camelCase (``invoiceNumber``,
``partyName``); snake_case is accepted as well.
"""

import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from billventory.core.entities.inventory import InventoryItem
from billventory.core.entities.transaction import (
    InvoiceStatus,
    LineItem,
    Transaction,
    TransactionType,
)


class WireModel(BaseModel):
    """Base for camelCase request bodies. NaN and infinity are rejected."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        allow_inf_nan=False,
    )


class LineItemRequest(WireModel):
    """One line of a purchase invoice or sales bill."""

    id: str | None = Field(default=None, description="Client-side row id, echoed back")
    description: str = Field(
        ...,
        min_length=1,
        max_length=500,
        description="Free-text product description; normalized into the inventory key",
        examples=["Laptop", "Wireless Mouse"],
    )
    quantity: float = Field(..., gt=0, description="Units bought or sold")
    price: float = Field(
        ...,
        ge=0,
        description="Unit purchase cost (PURCHASE) or unit selling price (SALE)",
    )

    @field_validator("description")
    @classmethod
    def description_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("description must contain a non-space character")
        return v

    def to_entity(self) -> LineItem:
        return LineItem(
            id=self.id,
            description=self.description,
            quantity=self.quantity,
            price=self.price,
        )


class TransactionRequest(WireModel):
    """Request to record (or re-submit) a purchase or a sale.

    The id is the idempotency key: submitting the same id again replaces
    the stored record instead of creating a second one.
    """

    id: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Caller-chosen transaction id",
        examples=["1718031234567"],
    )
    type: TransactionType = Field(..., description="PURCHASE or SALE")
    invoice_number: str = Field(
        ...,
        min_length=1,
        max_length=100,
        description="Vendor invoice number or own bill number",
        examples=["INV-VENDOR-001", "BILL-0001"],
    )
    party_name: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Vendor (purchase) or customer (sale)",
    )
    date: datetime.date = Field(..., description="Business date; orders the ledger")
    due_date: datetime.date | None = Field(default=None, description="Payment due date")
    status: InvoiceStatus = Field(default=InvoiceStatus.PENDING)
    items: list[LineItemRequest] = Field(default_factory=list)
    total_amount: float = Field(
        default=0.0,
        ge=0,
        description="Invoice total; checked against the sum of the line items",
    )
    notes: str | None = Field(default=None, max_length=2000)

    def to_entity(self) -> Transaction:
        return Transaction(
            id=self.id,
            type=self.type,
            invoice_number=self.invoice_number,
            party_name=self.party_name,
            date=self.date,
            due_date=self.due_date,
            status=self.status,
            items=[item.to_entity() for item in self.items],
            total_amount=self.total_amount,
            notes=self.notes,
        )


class InventoryItemRequest(WireModel):
    """Administrative overwrite of one inventory record.

    The ledger never needs this; it exists to correct stock after a
    physical count. ``id`` defaults to the normalized ``name``.
    """

    id: str | None = Field(default=None, max_length=500)
    name: str = Field(..., min_length=1, max_length=500)
    quantity: float = Field(default=0.0)
    average_cost: float = Field(default=0.0, ge=0)
    selling_price: float = Field(default=0.0, ge=0)
    last_updated: datetime.date | None = None

    def to_entity(self, item_id: str) -> InventoryItem:
        return InventoryItem(
            id=item_id,
            name=self.name,
            quantity=self.quantity,
            average_cost=self.average_cost,
            selling_price=self.selling_price,
            last_updated=self.last_updated,
        )
