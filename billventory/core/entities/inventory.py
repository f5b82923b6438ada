"""Inventory domain entities."""

from datetime import date

from pydantic import BaseModel


class InventoryItem(BaseModel):
    """Stock level and weighted average cost for one product key."""

    id: str  # normalized product key
    name: str  # display name, first description seen for the key
    quantity: float = 0.0  # may go negative when sales outrun recorded purchases
    average_cost: float = 0.0  # Weighted Average Cost
    selling_price: float = 0.0  # last sale unit price
    last_updated: date | None = None  # business date, not wall clock

    @property
    def total_value(self) -> float:
        """Total inventory value = quantity * average_cost."""
        return self.quantity * self.average_cost
