"""Download repository.

Downloads are unique per (user_id, app_name). Logging the same pair twice
is not an error: ``insert_or_confirm_exists`` reports which case occurred
and relies on the unique constraint rather than a read-then-write check,
so concurrent identical requests still store a single row.
"""

import enum
from datetime import datetime

from sqlalchemy import Insert, func, select
from sqlalchemy.dialects import postgresql, sqlite
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.download import Download

# Dialects with native INSERT ... ON CONFLICT DO NOTHING support.
_UPSERT_INSERTS = {
    "postgresql": postgresql.insert,
    "sqlite": sqlite.insert,
}


class DownloadInsertResult(enum.Enum):
    """Outcome of logging a download."""

    INSERTED = "inserted"
    ALREADY_EXISTS = "already_exists"


class DownloadRepository:
    """Repository for download events.

    Follows Pattern 1: session passed to methods (not held in __init__).
    """

    async def insert_or_confirm_exists(
        self,
        db: AsyncSession,
        *,
        user_id: str,
        app_name: str,
        timestamp: datetime,
    ) -> DownloadInsertResult:
        """Store a download unless one already exists for the pair.

        Args:
            db: Database session.
            user_id: User who downloaded the app.
            app_name: Downloaded app.
            timestamp: Event time of the download.

        Returns:
            INSERTED if a row was written, ALREADY_EXISTS otherwise.

        Raises:
            NotImplementedError: If the database has no ON CONFLICT support.
        """
        dialect = db.get_bind().dialect.name
        insert_factory = _UPSERT_INSERTS.get(dialect)
        if insert_factory is None:
            raise NotImplementedError(f"Download dedup is not supported on {dialect!r}")

        stmt: Insert = (
            insert_factory(Download)
            .values(user_id=user_id, app_name=app_name, timestamp=timestamp)
            .on_conflict_do_nothing(index_elements=["user_id", "app_name"])
            .returning(Download.id)
        )
        result = await db.execute(stmt)
        if result.scalar_one_or_none() is None:
            return DownloadInsertResult.ALREADY_EXISTS
        return DownloadInsertResult.INSERTED

    async def find_in_window(
        self,
        db: AsyncSession,
        *,
        start: datetime,
        end: datetime,
        app_name: str | None = None,
    ) -> list[Download]:
        """Return downloads whose event time falls in [start, end], oldest first."""
        query = select(Download).where(Download.timestamp >= start, Download.timestamp <= end)
        if app_name:
            query = query.where(Download.app_name == app_name)
        result = await db.execute(query.order_by(Download.timestamp, Download.id))
        return list(result.scalars().all())

    async def count_unique_users(
        self,
        db: AsyncSession,
        *,
        start: datetime,
        end: datetime,
        app_name: str | None = None,
    ) -> int:
        """Count distinct users with a download in [start, end]."""
        query = select(func.count(func.distinct(Download.user_id))).where(
            Download.timestamp >= start, Download.timestamp <= end
        )
        if app_name:
            query = query.where(Download.app_name == app_name)
        result = await db.execute(query)
        return result.scalar_one()

    async def count_for_pair(self, db: AsyncSession, user_id: str, app_name: str) -> int:
        result = await db.execute(
            select(func.count(Download.id)).where(
                Download.user_id == user_id, Download.app_name == app_name
            )
        )
        return result.scalar_one()
