"""Read-only business summary entities."""

from pydantic import BaseModel, Field

from billventory.core.entities.transaction import Transaction


class PartyTotal(BaseModel):
    """Revenue attributed to one customer."""

    party_name: str
    amount: float


class BusinessSummary(BaseModel):
    """Headline figures computed over both stores."""

    # Financials
    total_revenue: float = 0.0
    total_expenses: float = 0.0
    net_profit: float = 0.0
    profit_margin: float = 0.0  # percent of revenue
    sales_count: int = 0
    purchase_count: int = 0

    # Receivables
    pending_count: int = 0
    pending_amount: float = 0.0
    overdue_count: int = 0
    overdue_amount: float = 0.0

    # Stock health
    product_count: int = 0
    stock_value: float = 0.0
    out_of_stock_count: int = 0
    low_stock_count: int = 0
    well_stocked_count: int = 0

    top_customers: list[PartyTotal] = Field(default_factory=list)
    recent_transactions: list[Transaction] = Field(default_factory=list)
