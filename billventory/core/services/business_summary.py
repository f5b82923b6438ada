"""
Business summary service.

Computes the dashboard figures (revenue, expenses, receivables, stock
health) from the transaction list and the inventory snapshot. Read-only:
it is handed plain lists and never talks to a store.
"""

import math
from collections import defaultdict

from billventory.core.entities.inventory import InventoryItem
from billventory.core.entities.report import BusinessSummary, PartyTotal
from billventory.core.entities.transaction import (
    InvoiceStatus,
    Transaction,
    TransactionType,
)


def _amount(value: float) -> float:
    """Totals from malformed records (NaN, inf) count as zero."""
    return value if math.isfinite(value) else 0.0


class BusinessSummaryService:
    """Summarize transactions and inventory into a BusinessSummary."""

    def __init__(
        self,
        low_stock_threshold: float = 5.0,
        well_stocked_threshold: float = 20.0,
        top_customers: int = 5,
        recent_limit: int = 8,
    ) -> None:
        self.low_stock_threshold = low_stock_threshold
        self.well_stocked_threshold = well_stocked_threshold
        self.top_customers = top_customers
        self.recent_limit = recent_limit

    def summarize(
        self,
        transactions: list[Transaction],
        inventory: list[InventoryItem],
    ) -> BusinessSummary:
        sales = [t for t in transactions if t.type == TransactionType.SALE]
        purchases = [t for t in transactions if t.type == TransactionType.PURCHASE]

        total_revenue = sum(_amount(t.total_amount) for t in sales)
        total_expenses = sum(_amount(t.total_amount) for t in purchases)
        net_profit = total_revenue - total_expenses
        profit_margin = (net_profit / total_revenue) * 100 if total_revenue > 0 else 0.0

        pending = [t for t in sales if t.status == InvoiceStatus.PENDING]
        overdue = [t for t in sales if t.status == InvoiceStatus.OVERDUE]

        recent = sorted(transactions, key=lambda t: t.date, reverse=True)

        return BusinessSummary(
            total_revenue=total_revenue,
            total_expenses=total_expenses,
            net_profit=net_profit,
            profit_margin=round(profit_margin, 1),
            sales_count=len(sales),
            purchase_count=len(purchases),
            pending_count=len(pending),
            pending_amount=sum(_amount(t.total_amount) for t in pending),
            overdue_count=len(overdue),
            overdue_amount=sum(_amount(t.total_amount) for t in overdue),
            product_count=len(inventory),
            stock_value=sum(_amount(i.total_value) for i in inventory),
            out_of_stock_count=sum(1 for i in inventory if i.quantity <= 0),
            low_stock_count=sum(
                1 for i in inventory if 0 < i.quantity <= self.low_stock_threshold
            ),
            well_stocked_count=sum(
                1 for i in inventory if i.quantity > self.well_stocked_threshold
            ),
            top_customers=self._top_customers(sales),
            recent_transactions=recent[: self.recent_limit],
        )

    def _top_customers(self, sales: list[Transaction]) -> list[PartyTotal]:
        """Customers ranked by revenue, highest first."""
        totals: dict[str, float] = defaultdict(float)
        for sale in sales:
            totals[sale.party_name] += _amount(sale.total_amount)

        ranked = sorted(totals.items(), key=lambda kv: kv[1], reverse=True)
        return [
            PartyTotal(party_name=name, amount=amount)
            for name, amount in ranked[: self.top_customers]
        ]
