"""
Versioned SQL migrations for the reminders database.

Scripts named ``vNNN_<name>.sql`` live next to this module and are recorded
with a content checksum in ``schema_migrations``. Editing an applied script
is refused. An existing database is backed up before a run and restored when
a migration fails.
"""

import hashlib
import re
import shutil
import time
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path

import aiosqlite

from src.config import get_logger, get_settings

logger = get_logger(__name__)

MIGRATIONS_DIR = Path(__file__).parent

REQUIRED_TABLES = [
    "companies",
    "applications",
    "reminders",
    "reminder_templates",
    "notification_history",
    "sync_queue",
    "schema_migrations",
]

_MIGRATIONS_TABLE_SQL = """
CREATE TABLE IF NOT EXISTS schema_migrations (
    version TEXT PRIMARY KEY,
    name TEXT NOT NULL,
    checksum TEXT NOT NULL,
    execution_time_ms INTEGER NOT NULL DEFAULT 0,
    applied_at TEXT NOT NULL DEFAULT (strftime('%Y-%m-%dT%H:%M:%f', 'now', 'localtime'))
)
"""


@dataclass
class MigrationInfo:
    """Information about a migration file."""

    version: str
    name: str
    path: Path
    checksum: str

    @classmethod
    def from_file(cls, path: Path) -> "MigrationInfo":
        """Parse migration info from a ``v001_name.sql`` filename."""
        match = re.match(r"v(\d+)_(.+)\.sql", path.name)
        if not match:
            raise ValueError(f"Invalid migration filename: {path.name}")

        content = path.read_text(encoding="utf-8")
        checksum = hashlib.sha256(content.encode()).hexdigest()[:16]

        return cls(version=match.group(1), name=match.group(2), path=path, checksum=checksum)


@dataclass
class MigrationResult:
    """Result of a migration operation."""

    version: str
    name: str
    success: bool
    execution_time_ms: int
    error: str | None = None


async def ensure_migrations_table(conn: aiosqlite.Connection) -> None:
    await conn.execute(_MIGRATIONS_TABLE_SQL)
    await conn.commit()


async def get_applied_migrations(conn: aiosqlite.Connection) -> dict[str, str]:
    """Map applied versions to their recorded checksums (empty before the first run)."""
    try:
        cursor = await conn.execute(
            "SELECT version, checksum FROM schema_migrations ORDER BY version"
        )
    except aiosqlite.OperationalError:
        return {}
    return {row[0]: row[1] for row in await cursor.fetchall()}


async def get_current_version(conn: aiosqlite.Connection) -> str | None:
    applied = await get_applied_migrations(conn)
    return max(applied) if applied else None


def discover_migrations(directory: Path | None = None) -> list[MigrationInfo]:
    """Bundled (or ``directory``) migrations in version order; bad names are skipped."""
    migrations = []
    for path in sorted((directory or MIGRATIONS_DIR).glob("v*.sql")):
        try:
            migrations.append(MigrationInfo.from_file(path))
        except ValueError as e:
            logger.warning("skipping_invalid_migration", path=str(path), error=str(e))
    return migrations


def pending_migrations(
    migrations: list[MigrationInfo], applied: dict[str, str]
) -> list[MigrationInfo]:
    """
    Migrations still to run.

    Raises:
        ValueError: If an applied migration file was edited afterwards.
    """
    pending = []
    for migration in migrations:
        recorded = applied.get(migration.version)
        if recorded is None:
            pending.append(migration)
        elif recorded != migration.checksum:
            raise ValueError(
                f"Migration v{migration.version} changed after it was applied "
                f"(recorded {recorded}, found {migration.checksum})"
            )
    return pending


async def _foreign_key_violations(conn: aiosqlite.Connection) -> int:
    cursor = await conn.execute("PRAGMA foreign_key_check")
    return len(await cursor.fetchall())


async def apply_migration(
    conn: aiosqlite.Connection,
    migration: MigrationInfo,
) -> MigrationResult:
    """Run one migration script and record it in ``schema_migrations``."""
    logger.info("applying_migration", version=migration.version, name=migration.name)
    started = time.perf_counter()

    def elapsed_ms() -> int:
        return int((time.perf_counter() - started) * 1000)

    try:
        await conn.executescript(migration.path.read_text(encoding="utf-8"))
        await conn.execute(
            "INSERT OR REPLACE INTO schema_migrations "
            "(version, name, checksum, execution_time_ms) VALUES (?, ?, ?, ?)",
            (migration.version, migration.name, migration.checksum, elapsed_ms()),
        )
        await conn.commit()
        violations = await _foreign_key_violations(conn)
    except aiosqlite.Error as e:
        await conn.rollback()
        logger.error(
            "migration_failed", version=migration.version, name=migration.name, error=str(e)
        )
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=elapsed_ms(),
            error=str(e),
        )

    if violations:
        logger.error(
            "migration_left_foreign_key_violations",
            version=migration.version,
            violations=violations,
        )
        return MigrationResult(
            version=migration.version,
            name=migration.name,
            success=False,
            execution_time_ms=elapsed_ms(),
            error=f"{violations} foreign key violations after migration",
        )

    result = MigrationResult(
        version=migration.version,
        name=migration.name,
        success=True,
        execution_time_ms=elapsed_ms(),
    )
    logger.info(
        "migration_applied",
        version=result.version,
        name=result.name,
        execution_time_ms=result.execution_time_ms,
    )
    return result


def create_backup(db_path: Path) -> Path:
    """Copy the database next to itself as ``<name>.backup_<timestamp>.db``."""
    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    backup_path = db_path.with_suffix(f".backup_{timestamp}.db")
    shutil.copy2(db_path, backup_path)
    logger.info("database_backup_created", backup_path=str(backup_path))
    return backup_path


def restore_backup(db_path: Path, backup_path: Path) -> None:
    shutil.copy2(backup_path, db_path)
    logger.info("database_restored_from_backup", backup_path=str(backup_path))


async def initialize_database(
    db_path: Path | None = None,
    create_backup_before: bool = True,
) -> list[MigrationResult]:
    """
    Bring the database up to date.

    Pending migrations run in version order and the run stops at the first
    failure. An existing database is backed up first; the backup is restored
    if anything fails and removed once every migration succeeded.

    Args:
        db_path: Database file (default from settings)
        create_backup_before: Back up an existing database before migrating

    Returns:
        Results for the migrations that were attempted (empty when up to date)
    """
    db_path = Path(db_path or get_settings().storage.db_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)
    logger.info("initializing_database", db_path=str(db_path))

    backup_path = create_backup(db_path) if create_backup_before and db_path.exists() else None
    results: list[MigrationResult] = []

    try:
        async with aiosqlite.connect(db_path) as conn:
            await conn.execute("PRAGMA journal_mode=WAL")
            await conn.execute("PRAGMA foreign_keys=ON")
            await ensure_migrations_table(conn)

            pending = pending_migrations(
                discover_migrations(), await get_applied_migrations(conn)
            )
            for migration in pending:
                result = await apply_migration(conn, migration)
                results.append(result)
                if not result.success:
                    break
    except Exception as e:
        logger.error("database_initialization_failed", error=str(e))
        if backup_path is not None and backup_path.exists():
            restore_backup(db_path, backup_path)
        raise

    if any(not r.success for r in results):
        if backup_path is not None:
            restore_backup(db_path, backup_path)
    elif backup_path is not None:
        backup_path.unlink()

    logger.info(
        "database_initialized",
        applied=[r.version for r in results if r.success],
        failed=[r.version for r in results if not r.success],
    )
    return results


# Alias used by the API lifespan
run_migrations = initialize_database


async def get_migration_status(db_path: Path | None = None) -> dict:
    """Current version plus applied and pending migration versions."""
    db_path = Path(db_path or get_settings().storage.db_path)
    discovered = discover_migrations()

    applied: dict[str, str] = {}
    if db_path.exists():
        async with aiosqlite.connect(db_path) as conn:
            applied = await get_applied_migrations(conn)

    return {
        "exists": db_path.exists(),
        "current_version": max(applied) if applied else None,
        "applied_migrations": list(applied),
        "pending_migrations": [m.version for m in discovered if m.version not in applied],
        "total_migrations": len(discovered),
    }


def _check(name: str, passed: bool, **extra) -> dict:
    return {"check": name, "status": "PASS" if passed else "FAIL", **extra}


async def verify_schema_integrity(db_path: Path | None = None) -> list[dict]:
    """
    Check a migrated database.

    Covers SQLite's own integrity and foreign key checks, the presence of
    every required table and, once the tables exist, the seeded system
    templates and the stored reminder dates.
    """
    db_path = Path(db_path or get_settings().storage.db_path)

    async with aiosqlite.connect(db_path) as conn:
        violations = await _foreign_key_violations(conn)
        cursor = await conn.execute("PRAGMA integrity_check")
        integrity = (await cursor.fetchone())[0]
        cursor = await conn.execute("SELECT name FROM sqlite_master WHERE type = 'table'")
        tables = {row[0] for row in await cursor.fetchall()}
        missing = [t for t in REQUIRED_TABLES if t not in tables]

        checks = [
            _check("foreign_keys", violations == 0, violations=violations),
            _check("integrity", integrity == "ok", result=integrity),
            _check("required_tables", not missing, missing=missing),
        ]
        if missing:
            return checks

        cursor = await conn.execute(
            "SELECT COUNT(*) FROM reminder_templates "
            "WHERE is_system_template = 1 AND deleted_at IS NULL"
        )
        system_templates = (await cursor.fetchone())[0]
        checks.append(_check("system_templates", system_templates > 0, count=system_templates))

        # date() is NULL for text SQLite cannot parse as a date
        cursor = await conn.execute(
            "SELECT COUNT(*) FROM reminders WHERE date(reminder_date) IS NULL"
        )
        bad_dates = (await cursor.fetchone())[0]
        checks.append(_check("reminder_dates", bad_dates == 0, invalid=bad_dates))

    return checks
