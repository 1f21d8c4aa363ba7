"""Pydantic schemas."""

from app.schemas.base import CamelModel, MessageResponse
from app.schemas.download import (
    DownloadCreate,
    DownloadLogResponse,
    DownloadPeriod,
    DownloadRead,
    DownloadStatistics,
    DownloadStatisticsResponse,
)
from app.schemas.purchase import (
    AppListResponse,
    PurchaseCreate,
    PurchaseListResponse,
    PurchaseLoggedResponse,
    PurchaseRead,
    PurchaseStats,
    PurchaseSummaryBucket,
    PurchaseSummaryResponse,
)
from app.schemas.trial import ConversionStatsRead, TrialStatistics, TrialStatsResponse
from app.schemas.user import TokenUpdate, UserCreate, UserCreatedResponse, UserRead

__all__ = [
    "AppListResponse",
    "CamelModel",
    "ConversionStatsRead",
    "DownloadCreate",
    "DownloadLogResponse",
    "DownloadPeriod",
    "DownloadRead",
    "DownloadStatistics",
    "DownloadStatisticsResponse",
    "MessageResponse",
    "PurchaseCreate",
    "PurchaseListResponse",
    "PurchaseLoggedResponse",
    "PurchaseRead",
    "PurchaseStats",
    "PurchaseSummaryBucket",
    "PurchaseSummaryResponse",
    "TokenUpdate",
    "TrialStatistics",
    "TrialStatsResponse",
    "UserCreate",
    "UserCreatedResponse",
    "UserRead",
]
