"""Abstract interface for inventory storage."""

from __future__ import annotations

from abc import ABC, abstractmethod

from billventory.core.entities.inventory import InventoryItem


class IInventoryStore(ABC):
    """Interface for inventory item persistence, keyed by product key."""

    @abstractmethod
    async def upsert(self, item: InventoryItem) -> InventoryItem:
        """Replace or insert the item stored under item.id."""
        pass

    @abstractmethod
    async def get(self, item_id: str) -> InventoryItem | None:
        """Get inventory item by product key."""
        pass

    @abstractmethod
    async def list(self) -> list[InventoryItem]:
        """List all inventory items."""
        pass

    @abstractmethod
    async def replace_all(self, items: list[InventoryItem]) -> None:
        """Drop every stored item and store the given ones instead."""
        pass
