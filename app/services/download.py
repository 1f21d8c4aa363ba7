"""Download logging and download statistics."""

import logging
from datetime import UTC, datetime

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.repositories.download import DownloadInsertResult, DownloadRepository
from app.schemas.download import (
    DownloadCreate,
    DownloadLogResponse,
    DownloadPeriod,
    DownloadRead,
    DownloadStatistics,
    DownloadStatisticsResponse,
)
from app.services.aggregation import Granularity, bucket_downloads
from app.services.time_window import as_utc, resolve_window

logger = logging.getLogger(__name__)

LOGGED_MESSAGE = "Download logged successfully"
DUPLICATE_MESSAGE = "Download already logged for this user and app"


class DownloadService:
    """Service for download events."""

    def __init__(self, db: AsyncSession, repository: DownloadRepository | None = None) -> None:
        self.db = db
        self.repository = repository or DownloadRepository()

    async def log_download(self, download_in: DownloadCreate) -> DownloadLogResponse:
        """Record a user's download of an app, at most once per pair.

        A repeated (userId, appName) pair succeeds without writing anything.
        """
        timestamp = as_utc(download_in.timestamp) if download_in.timestamp else datetime.now(UTC)
        result = await self.repository.insert_or_confirm_exists(
            self.db,
            user_id=download_in.user_id,
            app_name=download_in.app_name,
            timestamp=timestamp,
        )

        if result is DownloadInsertResult.ALREADY_EXISTS:
            logger.info(
                "Duplicate download ignored",
                extra={"user_id": download_in.user_id, "app_name": download_in.app_name},
            )
            return DownloadLogResponse(message=DUPLICATE_MESSAGE)

        logger.info(
            "Download logged",
            extra={"user_id": download_in.user_id, "app_name": download_in.app_name},
        )
        return DownloadLogResponse(
            message=LOGGED_MESSAGE,
            data=DownloadRead(
                user_id=download_in.user_id,
                app_name=download_in.app_name,
                timestamp=timestamp,
            ),
        )

    async def statistics(
        self,
        *,
        app_name: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        group_by: str | None = None,
        include_details: bool = False,
    ) -> DownloadStatisticsResponse:
        """Downloads and unique users per time bucket."""
        granularity = Granularity.parse(group_by)
        window = resolve_window(
            start_date, end_date, default_days=settings.DOWNLOAD_STATS_DEFAULT_DAYS
        )

        with logfire.span("DownloadService.statistics", group_by=granularity.value):
            downloads = await self.repository.find_in_window(
                self.db, start=window.start, end=window.end, app_name=app_name
            )
            total_unique = await self.repository.count_unique_users(
                self.db, start=window.start, end=window.end, app_name=app_name
            )

        periods = [
            DownloadPeriod(
                period=bucket.label,
                unique_users=bucket.unique_users,
                total_downloads=bucket.total_downloads,
                details=(
                    [DownloadRead.model_validate(d) for d in bucket.downloads]
                    if include_details
                    else None
                ),
            )
            for bucket in bucket_downloads(downloads, granularity)
        ]

        return DownloadStatisticsResponse(
            data=DownloadStatistics(
                downloads=periods,
                total_unique_users=total_unique,
                period_type=granularity.value,
                start_date=window.start,
                end_date=window.end,
            )
        )
