"""Download logging and statistics routes."""

from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import DownloadSvc
from app.core.middleware import set_user_id
from app.schemas.download import DownloadCreate, DownloadLogResponse, DownloadStatisticsResponse

router = APIRouter()


@router.post("/log-download", response_model=DownloadLogResponse, response_model_exclude_none=True)
async def log_download(download_in: DownloadCreate, service: DownloadSvc) -> DownloadLogResponse:
    """Log a download. Repeating a (userId, appName) pair succeeds without a new record."""
    set_user_id(download_in.user_id)
    return await service.log_download(download_in)


@router.get(
    "/downloads",
    response_model=DownloadStatisticsResponse,
    response_model_exclude_none=True,
)
async def download_statistics(
    service: DownloadSvc,
    app_name: Annotated[str | None, Query(alias="appName")] = None,
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
    group_by: Annotated[str, Query(alias="groupBy")] = "day",
    include_details: Annotated[bool, Query(alias="includeDetails")] = False,
) -> DownloadStatisticsResponse:
    """Downloads and unique users per time bucket (default: last 30 days by day)."""
    return await service.statistics(
        app_name=app_name,
        start_date=start_date,
        end_date=end_date,
        group_by=group_by,
        include_details=include_details,
    )
