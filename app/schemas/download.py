"""Download schemas."""

from datetime import datetime

from pydantic import Field

from app.schemas.base import CamelModel, UTCDateTime


class DownloadCreate(CamelModel):
    user_id: str = Field(..., min_length=1)
    app_name: str = Field(..., min_length=1)
    timestamp: datetime | None = Field(
        default=None, description="Event time; defaults to the time of the request"
    )


class DownloadRead(CamelModel):
    user_id: str
    app_name: str
    timestamp: UTCDateTime


class DownloadLogResponse(CamelModel):
    success: bool = True
    message: str
    data: DownloadRead | None = None


class DownloadPeriod(CamelModel):
    period: str
    unique_users: int
    total_downloads: int
    details: list[DownloadRead] | None = None


class DownloadStatistics(CamelModel):
    downloads: list[DownloadPeriod]
    total_unique_users: int
    period_type: str
    start_date: UTCDateTime
    end_date: UTCDateTime


class DownloadStatisticsResponse(CamelModel):
    success: bool = True
    data: DownloadStatistics
