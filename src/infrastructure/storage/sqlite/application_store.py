"""SQLite read access to job applications."""

from src.core.entities.application import JobApplication
from src.core.interfaces.storage import IApplicationStore
from src.infrastructure.storage.sqlite.base import SQLiteStore
from src.infrastructure.storage.sqlite.connection import database_errors


class SQLiteApplicationStore(SQLiteStore, IApplicationStore):
    """Looks up applications joined with their company name."""

    async def get_application(self, application_id: int) -> JobApplication | None:
        async with database_errors("application_get"), self._connection() as conn:
            cursor = await conn.execute(
                """
                SELECT a.id, a.title, a.position, a.location, a.status,
                       a.application_date, a.deadline,
                       c.name AS company_name
                FROM applications a
                LEFT JOIN companies c ON c.id = a.company_id
                WHERE a.id = ? AND a.deleted_at IS NULL
                """,
                (application_id,),
            )
            row = await cursor.fetchone()
        if row is None:
            return None
        return JobApplication.model_validate(dict(row))
