"""
SQLite implementation of transaction storage.

Transactions live in two tables: the header row in ``transactions`` and the
line items in ``transaction_items``. Upserts replace the header in place so
its insertion sequence never moves, then rewrite the items wholesale.

The ``*_on`` methods run on a caller-supplied connection so the ledger store
can combine them with inventory writes inside one database transaction.
"""

from __future__ import annotations

from datetime import date

import aiosqlite

from billventory.config import get_logger
from billventory.core.entities.transaction import (
    InvoiceStatus,
    LineItem,
    Transaction,
    TransactionType,
)
from billventory.core.interfaces.transaction_store import (
    ITransactionStore,
    TransactionUpsert,
)
from billventory.infrastructure.storage.sqlite.connection import get_connection, get_transaction

logger = get_logger(__name__)


class SQLiteTransactionStore(ITransactionStore):
    """SQLite implementation of purchase and sale storage."""

    async def upsert(self, transaction: Transaction) -> TransactionUpsert:
        """Insert or fully replace a transaction keyed by its id."""
        async with get_transaction() as conn:
            return await self.upsert_on(conn, transaction)

    async def delete(self, transaction_id: str) -> bool:
        """Delete a transaction and its line items. Inventory is left alone."""
        async with get_transaction() as conn:
            await conn.execute(
                "DELETE FROM transaction_items WHERE transaction_id = ?",
                (transaction_id,),
            )
            cursor = await conn.execute(
                "DELETE FROM transactions WHERE id = ?",
                (transaction_id,),
            )
            deleted = cursor.rowcount > 0
            logger.info("transaction_deleted", transaction_id=transaction_id, deleted=deleted)
            return deleted

    async def find(self, transaction_id: str) -> Transaction | None:
        async with get_connection() as conn:
            return await self.find_on(conn, transaction_id)

    async def list(
        self, transaction_type: TransactionType | None = None
    ) -> list[Transaction]:
        """List transactions newest first, optionally filtered by type."""
        async with get_connection() as conn:
            if transaction_type is None:
                cursor = await conn.execute(
                    "SELECT * FROM transactions ORDER BY date DESC, seq DESC"
                )
            else:
                cursor = await conn.execute(
                    """
                    SELECT * FROM transactions
                    WHERE type = ?
                    ORDER BY date DESC, seq DESC
                    """,
                    (transaction_type.value,),
                )
            rows = await cursor.fetchall()
            return await self._with_items(conn, rows)

    async def list_for_ledger(self) -> list[Transaction]:
        async with get_connection() as conn:
            return await self.list_for_ledger_on(conn)

    # Connection-scoped operations

    async def find_on(
        self, conn: aiosqlite.Connection, transaction_id: str
    ) -> Transaction | None:
        cursor = await conn.execute(
            "SELECT * FROM transactions WHERE id = ?",
            (transaction_id,),
        )
        row = await cursor.fetchone()
        if row is None:
            return None
        transactions = await self._with_items(conn, [row])
        return transactions[0]

    async def list_for_ledger_on(self, conn: aiosqlite.Connection) -> list[Transaction]:
        """All transactions in folding order: date ASC, then first insertion."""
        cursor = await conn.execute(
            "SELECT * FROM transactions ORDER BY date ASC, seq ASC"
        )
        rows = await cursor.fetchall()
        return await self._with_items(conn, rows)

    async def upsert_on(
        self, conn: aiosqlite.Connection, transaction: Transaction
    ) -> TransactionUpsert:
        cursor = await conn.execute(
            "SELECT 1 FROM transactions WHERE id = ?",
            (transaction.id,),
        )
        is_new = await cursor.fetchone() is None

        await conn.execute(
            """
            INSERT INTO transactions (
                id, type, invoice_number, party_name, date,
                due_date, status, total_amount, notes
            ) VALUES (?, ?, ?, ?, ?, ?, ?, ?, ?)
            ON CONFLICT(id) DO UPDATE SET
                type = excluded.type,
                invoice_number = excluded.invoice_number,
                party_name = excluded.party_name,
                date = excluded.date,
                due_date = excluded.due_date,
                status = excluded.status,
                total_amount = excluded.total_amount,
                notes = excluded.notes,
                updated_at = datetime('now')
            """,
            (
                transaction.id,
                transaction.type.value,
                transaction.invoice_number,
                transaction.party_name,
                transaction.date.isoformat(),
                transaction.due_date.isoformat() if transaction.due_date else None,
                transaction.status.value,
                transaction.total_amount,
                transaction.notes,
            ),
        )

        await conn.execute(
            "DELETE FROM transaction_items WHERE transaction_id = ?",
            (transaction.id,),
        )
        if transaction.items:
            await conn.executemany(
                """
                INSERT INTO transaction_items (
                    transaction_id, position, item_ref,
                    description, quantity, price
                ) VALUES (?, ?, ?, ?, ?, ?)
                """,
                [
                    (
                        transaction.id,
                        position,
                        item.id,
                        item.description,
                        item.quantity,
                        item.price,
                    )
                    for position, item in enumerate(transaction.items)
                ],
            )

        logger.info(
            "transaction_saved",
            transaction_id=transaction.id,
            type=transaction.type.value,
            is_new=is_new,
            items=len(transaction.items),
        )
        return TransactionUpsert(transaction=transaction, is_new=is_new)

    async def _with_items(
        self, conn: aiosqlite.Connection, rows: list[aiosqlite.Row]
    ) -> list[Transaction]:
        """Attach line items to header rows with a single item query."""
        if not rows:
            return []

        ids = [row["id"] for row in rows]
        placeholders = ",".join("?" * len(ids))
        cursor = await conn.execute(
            f"""
            SELECT * FROM transaction_items
            WHERE transaction_id IN ({placeholders})
            ORDER BY transaction_id, position
            """,
            ids,
        )
        items_by_txn: dict[str, list[LineItem]] = {}
        for item_row in await cursor.fetchall():
            items_by_txn.setdefault(item_row["transaction_id"], []).append(
                self._row_to_line_item(item_row)
            )

        return [
            self._row_to_transaction(row, items_by_txn.get(row["id"], []))
            for row in rows
        ]

    @staticmethod
    def _row_to_line_item(row: aiosqlite.Row) -> LineItem:
        return LineItem(
            id=row["item_ref"],
            description=row["description"],
            quantity=float(row["quantity"]),
            price=float(row["price"]),
        )

    @staticmethod
    def _row_to_transaction(row: aiosqlite.Row, items: list[LineItem]) -> Transaction:
        """Convert a header row plus its items to a Transaction entity."""
        due_date = None
        if row["due_date"]:
            try:
                due_date = date.fromisoformat(row["due_date"])
            except (ValueError, TypeError):
                pass

        return Transaction(
            id=row["id"],
            type=TransactionType(row["type"]),
            invoice_number=row["invoice_number"],
            party_name=row["party_name"],
            date=date.fromisoformat(row["date"]),
            due_date=due_date,
            status=InvoiceStatus(row["status"]),
            items=items,
            total_amount=float(row["total_amount"]),
            notes=row["notes"],
        )
