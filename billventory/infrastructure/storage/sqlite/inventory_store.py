"""Stored inventory rows, keyed by normalized item name."""

from __future__ import annotations

from datetime import date

import aiosqlite

from billventory.config import get_logger
from billventory.core.entities.inventory import InventoryItem
from billventory.core.interfaces.inventory_store import IInventoryStore
from billventory.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteInventoryStore(IInventoryStore):
    """SQLite implementation of inventory item storage, keyed by product key."""

    async def upsert(self, item: InventoryItem) -> InventoryItem:
        async with get_transaction() as conn:
            await self.upsert_on(conn, item)
            logger.info("inventory_item_saved", item_id=item.id, quantity=item.quantity)
            return item

    async def get(self, item_id: str) -> InventoryItem | None:
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_items WHERE id = ?", (item_id,)
            )
            row = await cursor.fetchone()
            if row is None:
                return None
            return self._row_to_inventory_item(row)

    async def list(self) -> list[InventoryItem]:
        """List inventory items ordered by display name."""
        async with get_connection() as conn:
            cursor = await conn.execute(
                "SELECT * FROM inventory_items ORDER BY name COLLATE NOCASE, id"
            )
            rows = await cursor.fetchall()
            return [self._row_to_inventory_item(row) for row in rows]

    async def replace_all(self, items: list[InventoryItem]) -> None:
        async with get_transaction() as conn:
            await self.replace_all_on(conn, items)

    # Connection-scoped operations

    async def get_many_on(
        self, conn: aiosqlite.Connection, item_ids: list[str]
    ) -> dict[str, InventoryItem]:
        """Load the given product keys; missing keys are simply absent."""
        if not item_ids:
            return {}
        placeholders = ",".join("?" * len(item_ids))
        cursor = await conn.execute(
            f"SELECT * FROM inventory_items WHERE id IN ({placeholders})",
            item_ids,
        )
        rows = await cursor.fetchall()
        return {row["id"]: self._row_to_inventory_item(row) for row in rows}

    async def upsert_on(self, conn: aiosqlite.Connection, item: InventoryItem) -> None:
        await conn.execute(
            """
            INSERT INTO inventory_items (
                id, name, quantity, average_cost, selling_price, last_updated
            ) VALUES (?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                name = excluded.name,
                quantity = excluded.quantity,
                average_cost = excluded.average_cost,
                selling_price = excluded.selling_price,
                last_updated = excluded.last_updated,
                updated_at = datetime('now')
            """,
            (
                item.id,
                item.name,
                item.quantity,
                item.average_cost,
                item.selling_price,
                item.last_updated.isoformat() if item.last_updated else None,
            ),
        )

    async def replace_all_on(
        self, conn: aiosqlite.Connection, items: list[InventoryItem]
    ) -> None:
        await conn.execute("DELETE FROM inventory_items")
        for item in items:
            await self.upsert_on(conn, item)
        logger.info("inventory_replaced", items=len(items))

    @staticmethod
    def _row_to_inventory_item(row: aiosqlite.Row) -> InventoryItem:
        last_updated = None
        if row["last_updated"]:
            try:
                last_updated = date.fromisoformat(row["last_updated"])
            except (ValueError, TypeError):
                pass

        return InventoryItem(
            id=row["id"],
            name=row["name"],
            quantity=float(row["quantity"]),
            average_cost=float(row["average_cost"]),
            selling_price=float(row["selling_price"]),
            last_updated=last_updated,
        )
