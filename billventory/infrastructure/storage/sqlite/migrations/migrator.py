"""
Versioned schema migrations for the ledger database.

Migration files live next to this module and are named ``vNNN_name.sql``.
Each one runs inside its own transaction together with the row that
records it in ``schema_migrations``, so a failed file leaves no partial
schema behind. A file copy of the database is taken before pending
migrations run and restored if the run blows up.

    python -m billventory.infrastructure.storage.sqlite.migrations.migrator --status
"""

import asyncio
import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from billventory.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent
FILENAME_PATTERN = re.compile(r"^v(\d+)_(\w+)\.sql$")

REQUIRED_TABLES = [
    "transactions",
    "transaction_items",
    "inventory_items",
    "schema_migrations",
]


@dataclass(frozen=True)
class MigrationInfo:
    """One migration file on disk."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        match = FILENAME_PATTERN.match(path.name)
        if match is None:
            raise ValueError(f"Invalid migration filename: {path.name}")
        digest = hashlib.sha256(path.read_bytes()).hexdigest()
        return cls(
            version=match.group(1),
            name=match.group(2),
            path=path,
            checksum=digest[:16],
        )


@dataclass
class MigrationResult:
    """Outcome of applying one migration."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


def discover_migrations() -> list[MigrationInfo]:
    """Migration files in version order; misnamed files are skipped."""
    found = []
    for path in MIGRATIONS_DIR.glob("*.sql"):
        try:
            found.append(MigrationInfo.from_file(path))
        except ValueError:
            logger.warning("migration_file_skipped", path=path.name)
    return sorted(found, key=lambda m: int(m.version))


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Applied version -> checksum. Empty before the first migration."""
    try:
        cursor = await conn.execute("SELECT version, checksum FROM schema_migrations")
    except aiosqlite.OperationalError:
        return {}
    return {version: checksum for version, checksum in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await get_applied_migrations(conn)
    if not applied:
        return None
    return max(applied, key=int)


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration file and record it, atomically."""
    started = time.perf_counter()
    # version, name and checksum are constrained to digits, word chars and hex
    script = (
        "BEGIN;\n"
        f"{migration.path.read_text(encoding='utf-8')}\n"
        "INSERT OR REPLACE INTO schema_migrations (version, name, checksum) "
        f"VALUES ('{migration.version}', '{migration.name}', '{migration.checksum}');\n"
        "COMMIT;"
    )

    try:
        await conn.executescript(script)
    except aiosqlite.Error as e:
        if conn.in_transaction:
            await conn.rollback()
        elapsed = int((time.perf_counter() - started) * 1000)
        logger.error(
            "migration_failed",
            version=migration.version,
            name=migration.name,
            error=str(e),
        )
        return MigrationResult(migration.version, migration.name, False, elapsed, str(e))

    elapsed = int((time.perf_counter() - started) * 1000)
    await conn.execute(
        "UPDATE schema_migrations SET execution_time_ms = ? WHERE version = ?",
        (elapsed, migration.version),
    )
    await conn.commit()
    logger.info(
        "migration_applied",
        version=migration.version,
        name=migration.name,
        execution_time_ms=elapsed,
    )
    return MigrationResult(migration.version, migration.name, True, elapsed)


def create_backup(db_path: Path) -> Path:
    stamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_name(f"{db_path.stem}.backup_{stamp}{db_path.suffix}")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.warning("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Apply every pending migration, stopping at the first failure.

    Args:
        db_path: Database file (default from settings). Created if missing.
        create_backup_before: Copy an existing database file before applying
            anything, and restore it if the run raises.

    Returns:
        One result per migration attempted; empty when already up to date.
    """
    db_path = db_path or get_settings().storage.db_path
    db_path.parent.mkdir(parents=True, exist_ok=True)

    results: list[MigrationResult] = []
    backup_path: Path | None = None

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")

            applied = await get_applied_migrations(conn)
            pending = []
            for migration in discover_migrations():
                if migration.version not in applied:
                    pending.append(migration)
                elif applied[migration.version] != migration.checksum:
                    # Applied files are immutable; ship a new version instead
                    logger.warning("migration_checksum_changed", version=migration.version)

            if not pending:
                logger.debug("database_up_to_date", db_path=str(db_path))
                return results

            if create_backup_before and db_path.stat().st_size > 0 and applied:
                backup_path = create_backup(db_path)

            for migration in pending:
                result = await apply_migration(conn, migration)
                results.append(result)
                if not result.success:
                    break

                cursor = await conn.execute("PRAGMA foreign_key_check")
                violations = await cursor.fetchall()
                if violations:
                    logger.error(
                        "migration_foreign_key_violations",
                        version=migration.version,
                        count=len(violations),
                    )
                    result.success = False
                    result.error = f"{len(violations)} foreign key violation(s)"
                    break

    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path is not None:
            restore_backup(db_path, backup_path)
        raise

    if backup_path is not None and all(r.success for r in results):
        backup_path.unlink()

    logger.info(
        "database_initialized",
        db_path=str(db_path),
        applied=sum(1 for r in results if r.success),
    )
    return results


# Name used by the application lifespan
run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    db_path = db_path or get_settings().storage.db_path
    versions = [m.version for m in discover_migrations()]

    if not db_path.exists():
        return {
            "exists": False,
            "current_version": None,
            "applied_migrations": [],
            "pending_migrations": versions,
        }

    async with aiosqlite.connect(db_path) as conn:
        applied = await get_applied_migrations(conn)
        current = await get_current_version(conn)

    return {
        "exists": True,
        "current_version": current,
        "applied_migrations": sorted(applied, key=int),
        "pending_migrations": [v for v in versions if v not in applied],
        "total_migrations": len(versions),
    }


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """PASS/FAIL checks for foreign keys, page integrity and the ledger tables."""
    db_path = db_path or get_settings().storage.db_path

    async with aiosqlite.connect(db_path) as conn:
        cursor = await conn.execute("PRAGMA foreign_key_check")
        fk_violations = len(await cursor.fetchall())

        cursor = await conn.execute("PRAGMA integrity_check")
        (integrity,) = await cursor.fetchone()

        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {row[0] for row in await cursor.fetchall()}

    missing = [t for t in REQUIRED_TABLES if t not in tables]

    def verdict(ok: bool) -> str:
        return "PASS" if ok else "FAIL"

    return [
        {"check": "foreign_keys", "status": verdict(fk_violations == 0), "violations": fk_violations},
        {"check": "integrity", "status": verdict(integrity == "ok"), "result": integrity},
        {"check": "required_tables", "status": verdict(not missing), "missing": missing},
    ]


def main() -> None:
    """Apply migrations, or report status / integrity, from the command line."""
    import argparse

    parser = argparse.ArgumentParser(description="Billventory database migrations")
    parser.add_argument("--db-path", type=Path, help="Database file (default from settings)")
    mode = parser.add_mutually_exclusive_group()
    mode.add_argument("--status", action="store_true", help="List applied and pending versions")
    mode.add_argument("--verify", action="store_true", help="Run schema integrity checks")
    parser.add_argument("--no-backup", action="store_true", help="Do not copy the database first")
    args = parser.parse_args()

    if args.status:
        status = asyncio.run(get_migration_status(args.db_path))
        for key, value in status.items():
            print(f"{key:>20}: {value}")
        return

    if args.verify:
        checks = asyncio.run(verify_schema_integrity(args.db_path))
        for check in checks:
            extra = {k: v for k, v in check.items() if k not in ("check", "status")}
            print(f"[{check['status']}] {check['check']} {extra}")
        raise SystemExit(0 if all(c["status"] == "PASS" for c in checks) else 1)

    results = asyncio.run(
        initialize_database(args.db_path, create_backup_before=not args.no_backup)
    )
    if not results:
        print("Database is up to date.")
    for result in results:
        line = f"[{'OK' if result.success else 'FAILED'}] v{result.version} {result.name}"
        print(f"{line} ({result.execution_time_ms}ms)")
        if result.error:
            print(f"    {result.error}")
    raise SystemExit(0 if all(r.success for r in results) else 1)


if __name__ == "__main__":
    main()
