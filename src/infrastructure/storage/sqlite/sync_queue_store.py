"""
SQLite sync queue.

Records outbound changes for a later synchronization pass. Only the write
side lives here; draining the queue is not part of this service.
"""

import json
from datetime import datetime
from typing import Any

import aiosqlite

from src.config import get_logger
from src.core.entities.sync import SyncOperation
from src.core.exceptions import SyncEnqueueError
from src.core.interfaces.storage import ISyncQueue
from src.infrastructure.storage.sqlite.base import SQLiteStore, format_timestamp

logger = get_logger(__name__)


class SQLiteSyncQueueStore(SQLiteStore, ISyncQueue):
    """Sync queue backed by the sync_queue table."""

    async def enqueue(
        self,
        entity_kind: str,
        entity_id: int,
        operation: SyncOperation,
        payload: dict[str, Any] | None = None,
    ) -> None:
        try:
            data = json.dumps(payload, default=str) if payload is not None else None
            async with self._transaction() as conn:
                await conn.execute(
                    """
                    INSERT INTO sync_queue (table_name, record_id, operation, data, created_at)
                    VALUES (?, ?, ?, ?, ?)
                    """,
                    (
                        entity_kind,
                        entity_id,
                        SyncOperation(operation).value,
                        data,
                        format_timestamp(datetime.now()),
                    ),
                )
        except (aiosqlite.Error, TypeError, ValueError) as e:
            raise SyncEnqueueError(entity_kind, entity_id, str(e)) from e

        logger.debug(
            "sync_enqueued",
            entity_kind=entity_kind,
            entity_id=entity_id,
            operation=SyncOperation(operation).value,
        )
