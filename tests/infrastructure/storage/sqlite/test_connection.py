"""Tests for the aiosqlite connection pool and its module-level helpers."""

import asyncio
from pathlib import Path
from unittest.mock import AsyncMock, MagicMock, patch

import aiosqlite
import pytest

import billventory.infrastructure.storage.sqlite.connection as conn_module
from billventory.infrastructure.storage.sqlite.connection import (
    ConnectionPool,
    close_pool,
    get_connection,
    get_pool,
    get_transaction,
)
from billventory.infrastructure.storage.sqlite.migrations import initialize_database


@pytest.fixture
async def schema_db(temp_db_path: Path) -> Path:
    await initialize_database(temp_db_path, create_backup_before=False)
    return temp_db_path


@pytest.fixture
async def open_pool():
    """Factory for pools that are closed when the test ends."""
    pools: list[ConnectionPool] = []

    async def _open(db_path: Path, **kwargs) -> ConnectionPool:
        pool = ConnectionPool(db_path, **kwargs)
        await pool.initialize()
        pools.append(pool)
        return pool

    yield _open
    for pool in pools:
        await pool.close()


@pytest.fixture
def patched_settings(temp_db_path: Path):
    settings = MagicMock()
    settings.storage.db_path = temp_db_path
    settings.storage.pool_size = 1
    settings.storage.busy_timeout = 5000
    conn_module._pool = None
    with patch.object(conn_module, "get_settings", return_value=settings):
        yield settings


async def _count_items(conn: aiosqlite.Connection) -> int:
    cursor = await conn.execute("SELECT COUNT(*) FROM inventory_items")
    return (await cursor.fetchone())[0]


async def _add_item(conn: aiosqlite.Connection, item_id: str) -> None:
    await conn.execute(
        "INSERT INTO inventory_items (id, name) VALUES (?, ?)", (item_id, item_id.title())
    )


class TestOpening:
    async def test_missing_parent_directories_are_created(self, tmp_path: Path, open_pool):
        db_path = tmp_path / "a" / "b" / "ledger.db"
        await open_pool(db_path, pool_size=1)
        assert db_path.parent.is_dir()

    async def test_second_initialize_opens_nothing_new(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, pool_size=2)
        await pool.initialize()
        await pool.initialize()
        assert len(pool._connections) == 2

        await pool.close()
        assert pool._initialized is False
        assert pool._connections == []

    async def test_connections_use_wal_and_foreign_keys(self, temp_db_path: Path):
        pool = ConnectionPool(temp_db_path, busy_timeout=1234)
        conn = await pool._create_connection()
        try:
            pragmas = {}
            for name in ("journal_mode", "foreign_keys", "busy_timeout"):
                cursor = await conn.execute(f"PRAGMA {name}")
                pragmas[name] = (await cursor.fetchone())[0]
            assert pragmas == {"journal_mode": "wal", "foreign_keys": 1, "busy_timeout": 1234}
            assert conn.row_factory is aiosqlite.Row
        finally:
            await conn.close()


class TestBorrowing:
    async def test_connection_goes_back_after_an_error(self, temp_db_path: Path, open_pool):
        pool = await open_pool(temp_db_path, pool_size=1)

        with pytest.raises(RuntimeError):
            async with pool.acquire():
                raise RuntimeError("boom")

        assert pool._pool.qsize() == 1

    async def test_waits_while_every_connection_is_out(self, temp_db_path: Path, open_pool):
        pool = await open_pool(temp_db_path, pool_size=1)

        async with pool.acquire():
            with pytest.raises(TimeoutError):
                async with asyncio.timeout(0.1):
                    async with pool.acquire():
                        pass


class TestTransactions:
    async def test_changes_are_committed(self, schema_db: Path, open_pool):
        pool = await open_pool(schema_db, pool_size=1)

        async with pool.transaction() as conn:
            await _add_item(conn, "laptop")

        async with pool.acquire() as conn:
            cursor = await conn.execute("SELECT name FROM inventory_items")
            assert (await cursor.fetchone())["name"] == "Laptop"

    @pytest.mark.parametrize("immediate", [False, True])
    async def test_error_discards_changes(self, schema_db: Path, open_pool, immediate):
        pool = await open_pool(schema_db, pool_size=1)

        with pytest.raises(RuntimeError):
            async with pool.transaction(immediate=immediate) as conn:
                await _add_item(conn, "laptop")
                raise RuntimeError("abort")

        async with pool.acquire() as conn:
            assert await _count_items(conn) == 0

    async def test_immediate_blocks_other_writers(self, schema_db: Path, open_pool):
        pool = await open_pool(schema_db, pool_size=1)

        async with pool.transaction(immediate=True) as conn:
            assert conn.in_transaction
            async with aiosqlite.connect(schema_db, timeout=0.05) as other:
                with pytest.raises(aiosqlite.OperationalError, match="locked"):
                    await other.execute("BEGIN IMMEDIATE")

    async def test_failed_commit_releases_the_write_lock(self, schema_db: Path, open_pool):
        pool = await open_pool(schema_db, pool_size=1)
        async with pool.acquire() as conn:
            pooled = conn

        failing_commit = AsyncMock(side_effect=aiosqlite.OperationalError("disk I/O error"))
        with patch.object(pooled, "commit", failing_commit):
            with pytest.raises(aiosqlite.OperationalError, match="disk I/O error"):
                async with pool.transaction(immediate=True) as conn:
                    await _add_item(conn, "laptop")

        assert pooled.in_transaction is False
        async with asyncio.timeout(2):
            async with pool.transaction(immediate=True) as conn:
                assert await _count_items(conn) == 0
                await _add_item(conn, "mouse")
        async with pool.acquire() as conn:
            assert await _count_items(conn) == 1


class TestProcessPool:
    async def test_pool_is_shared(self, patched_settings):
        try:
            first = await get_pool()
            assert await get_pool() is first
            assert first.db_path == patched_settings.storage.db_path
        finally:
            await close_pool()
        assert conn_module._pool is None

    async def test_close_without_pool(self):
        conn_module._pool = None
        await close_pool()
        assert conn_module._pool is None

    async def test_get_transaction_then_get_connection(self, patched_settings, schema_db: Path):
        patched_settings.storage.db_path = schema_db
        try:
            async with get_transaction(immediate=True) as conn:
                await _add_item(conn, "mouse")
            async with get_connection() as conn:
                assert await _count_items(conn) == 1
        finally:
            await close_pool()
