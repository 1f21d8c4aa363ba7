"""Trial conversion schemas."""

from app.schemas.base import CamelModel


class ConversionStatsRead(CamelModel):
    total_purchases: int
    trials: int
    conversions: int
    conversion_rate: float
    revenue: float


class TrialStatistics(CamelModel):
    by_app: dict[str, ConversionStatsRead]
    overall: ConversionStatsRead


class TrialStatsResponse(CamelModel):
    success: bool = True
    data: TrialStatistics
