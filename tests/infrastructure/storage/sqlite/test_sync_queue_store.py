"""Tests for SQLiteSyncQueueStore."""

import json
from datetime import date
from pathlib import Path

import pytest

from src.core.entities.sync import SyncOperation, SyncQueueItem
from src.core.exceptions import SyncEnqueueError
from src.infrastructure.storage.sqlite.connection import ConnectionPool
from src.infrastructure.storage.sqlite.sync_queue_store import SQLiteSyncQueueStore


async def _queued_items(pool: ConnectionPool, limit: int = 100) -> list[SyncQueueItem]:
    """Unsynced rows, oldest first."""
    async with pool.acquire() as conn:
        cursor = await conn.execute(
            "SELECT * FROM sync_queue WHERE synced_at IS NULL ORDER BY id ASC LIMIT ?",
            (limit,),
        )
        rows = await cursor.fetchall()
    return [
        SyncQueueItem(
            id=row["id"],
            entity_kind=row["table_name"],
            entity_id=row["record_id"],
            operation=row["operation"],
            payload=json.loads(row["data"]) if row["data"] else None,
            retry_count=row["retry_count"],
            created_at=row["created_at"],
            synced_at=row["synced_at"],
        )
        for row in rows
    ]


class TestSQLiteSyncQueueStore:
    async def test_enqueue_records_changes_in_order(
        self, sync_queue_store: SQLiteSyncQueueStore, db_pool: ConnectionPool
    ):
        await sync_queue_store.enqueue(
            "reminders", 1, SyncOperation.CREATE, {"id": 1, "title": "Call recruiter"}
        )
        await sync_queue_store.enqueue("reminders", 1, SyncOperation.DELETE)

        queued = await _queued_items(db_pool)

        assert [(i.entity_kind, i.entity_id, i.operation) for i in queued] == [
            ("reminders", 1, SyncOperation.CREATE),
            ("reminders", 1, SyncOperation.DELETE),
        ]
        assert queued[0].payload == {"id": 1, "title": "Call recruiter"}
        assert queued[1].payload is None
        assert queued[0].retry_count == 0
        assert queued[0].synced_at is None

    async def test_payload_values_serialized_as_text(
        self, sync_queue_store: SQLiteSyncQueueStore, db_pool: ConnectionPool
    ):
        await sync_queue_store.enqueue(
            "reminders", 3, SyncOperation.UPDATE, {"reminder_date": date(2024, 1, 8)}
        )

        queued = await _queued_items(db_pool)

        assert queued[0].payload == {"reminder_date": "2024-01-08"}

    async def test_operation_given_as_text(
        self, sync_queue_store: SQLiteSyncQueueStore, db_pool: ConnectionPool
    ):
        await sync_queue_store.enqueue("reminders", 2, "update")

        queued = await _queued_items(db_pool)

        assert queued[0].operation == SyncOperation.UPDATE

    async def test_unknown_operation_raises_sync_error(
        self, sync_queue_store: SQLiteSyncQueueStore, db_pool: ConnectionPool
    ):
        with pytest.raises(SyncEnqueueError):
            await sync_queue_store.enqueue("reminders", 2, "merge")

        assert await _queued_items(db_pool) == []

    async def test_enqueue_failure_raises_sync_error(self, tmp_path: Path):
        """A database without the sync_queue table cannot accept records."""
        pool = ConnectionPool(tmp_path / "bare.db", pool_size=1)
        store = SQLiteSyncQueueStore(pool)
        try:
            with pytest.raises(SyncEnqueueError) as exc_info:
                await store.enqueue("reminders", 7, SyncOperation.UPDATE)
        finally:
            await pool.close()

        assert exc_info.value.details["entity_id"] == 7
