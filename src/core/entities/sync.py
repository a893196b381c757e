"""Sync queue entries for best-effort replication."""

from datetime import datetime
from enum import Enum
from typing import Any

from pydantic import BaseModel, Field


class SyncOperation(str, Enum):
    """Kind of change recorded for replication."""

    CREATE = "create"
    UPDATE = "update"
    DELETE = "delete"


class SyncQueueItem(BaseModel):
    """One pending change awaiting synchronization."""

    id: int | None = None
    entity_kind: str
    entity_id: int
    operation: SyncOperation
    payload: dict[str, Any] | None = None
    retry_count: int = 0
    created_at: datetime = Field(default_factory=datetime.now)
    synced_at: datetime | None = None
