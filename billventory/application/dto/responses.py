"""
Response bodies.

Ledger bodies are camelCase on the wire; the error and health bodies keep
snake_case field names.
"""

import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from billventory.core.entities.inventory import InventoryItem
from billventory.core.entities.report import BusinessSummary
from billventory.core.entities.transaction import (
    InvoiceStatus,
    LineItem,
    Transaction,
    TransactionType,
)


class WireResponse(BaseModel):
    """Base for camelCase response bodies."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# --- Transactions ---


class LineItemResponse(WireResponse):
    id: str | None = None
    description: str
    quantity: float
    price: float

    @classmethod
    def from_entity(cls, item: LineItem) -> "LineItemResponse":
        return cls(
            id=item.id,
            description=item.description,
            quantity=item.quantity,
            price=item.price,
        )


class TransactionResponse(WireResponse):
    """One transaction as stored, items in their original order."""

    id: str
    type: TransactionType
    invoice_number: str
    party_name: str
    date: datetime.date
    due_date: datetime.date | None = None
    status: InvoiceStatus
    items: list[LineItemResponse] = Field(default_factory=list)
    total_amount: float
    notes: str | None = None

    @classmethod
    def from_entity(cls, transaction: Transaction) -> "TransactionResponse":
        return cls(
            id=transaction.id,
            type=transaction.type,
            invoice_number=transaction.invoice_number,
            party_name=transaction.party_name,
            date=transaction.date,
            due_date=transaction.due_date,
            status=transaction.status,
            items=[LineItemResponse.from_entity(i) for i in transaction.items],
            total_amount=transaction.total_amount,
            notes=transaction.notes,
        )


class TransactionListResponse(WireResponse):
    """List of transactions, newest first."""

    transactions: list[TransactionResponse]
    total: int


class DeleteTransactionResponse(WireResponse):
    """Result of a delete; ``deleted`` is False when the id was unknown."""

    success: bool = True
    deleted: bool


# --- Inventory ---


class InventoryItemResponse(WireResponse):
    """Stock line with its weighted-average cost."""

    id: str
    name: str
    quantity: float
    average_cost: float
    selling_price: float
    last_updated: datetime.date | None = None
    total_value: float = Field(..., description="quantity * averageCost")

    @classmethod
    def from_entity(cls, item: InventoryItem) -> "InventoryItemResponse":
        return cls(
            id=item.id,
            name=item.name,
            quantity=item.quantity,
            average_cost=item.average_cost,
            selling_price=item.selling_price,
            last_updated=item.last_updated,
            total_value=item.total_value,
        )


class InventoryListResponse(WireResponse):
    """Inventory snapshot with its aggregate value."""

    inventory: list[InventoryItemResponse]
    total: int
    total_value: float

    @classmethod
    def from_items(cls, items: list[InventoryItem]) -> "InventoryListResponse":
        return cls(
            inventory=[InventoryItemResponse.from_entity(i) for i in items],
            total=len(items),
            total_value=sum(i.total_value for i in items),
        )


class InventoryUpsertResponse(WireResponse):
    """Stored inventory record after an administrative overwrite."""

    item: InventoryItemResponse


class SubmitTransactionResponse(WireResponse):
    """Outcome of submitting a transaction to the ledger."""

    transaction: TransactionResponse
    is_new: bool = Field(..., description="False when the id replaced an existing record")
    ledger_applied: bool = Field(..., description="True when inventory was adjusted")
    inventory: list[InventoryItemResponse] = Field(
        default_factory=list,
        description="Inventory rows touched by this submit",
    )


# --- Reports ---


class PartyTotalResponse(WireResponse):
    """Revenue attributed to one customer."""

    party_name: str
    amount: float


class BusinessSummaryResponse(WireResponse):
    """Dashboard figures over transactions and inventory."""

    total_revenue: float
    total_expenses: float
    net_profit: float
    profit_margin: float
    sales_count: int
    purchase_count: int
    pending_count: int
    pending_amount: float
    overdue_count: int
    overdue_amount: float
    product_count: int
    stock_value: float
    out_of_stock_count: int
    low_stock_count: int
    well_stocked_count: int
    top_customers: list[PartyTotalResponse] = Field(default_factory=list)
    recent_transactions: list[TransactionResponse] = Field(default_factory=list)

    @classmethod
    def from_entity(cls, summary: BusinessSummary) -> "BusinessSummaryResponse":
        data = summary.model_dump(exclude={"top_customers", "recent_transactions"})
        return cls(
            **data,
            top_customers=[
                PartyTotalResponse(party_name=c.party_name, amount=c.amount)
                for c in summary.top_customers
            ],
            recent_transactions=[
                TransactionResponse.from_entity(t) for t in summary.recent_transactions
            ],
        )


# --- Health / errors ---


class ProviderHealthResponse(BaseModel):
    name: str
    available: bool
    latency_ms: float | None = None
    error: str | None = None


class HealthResponse(BaseModel):
    """Liveness body; ``database`` is filled only by the database check."""

    status: str
    version: str = "1.0.0"
    uptime_seconds: float
    database: ProviderHealthResponse | None = None


class ErrorResponse(BaseModel):
    """Body of every non-2xx response; ``error_code`` is stable across releases."""

    error_code: str = Field(..., description="Machine-readable error code")
    message: str = Field(..., description="Human-readable error description")
    hint: str | None = Field(default=None, description="Suggested recovery action")
    detail: str | None = Field(default=None, description="Additional details")
    path: str | None = Field(default=None, description="Request path")
    timestamp: datetime.datetime = Field(default_factory=datetime.datetime.now)
