"""Purchase schemas."""

from pydantic import Field

from app.schemas.base import CamelModel, UTCDateTime


class PurchaseCreate(CamelModel):
    """Purchase reported by a client app."""

    currency_code: str = Field(..., min_length=1, description="ISO 4217 code, any case")
    price: float = Field(..., ge=0, allow_inf_nan=False)
    price_formatted: str | None = None
    kind: str = Field(..., min_length=1, description="Product identifier")
    is_sandbox: bool
    app_name: str = Field(..., min_length=1)
    store_front: str | None = None
    is_trial: bool = False
    trial_period: str | None = None


class PurchaseRead(CamelModel):
    id: int
    currency_code: str
    price: float
    price_formatted: str | None = None
    kind: str
    is_sandbox: bool
    app_name: str
    store_front: str | None = None
    is_trial: bool
    trial_period: str | None = None
    created_at: UTCDateTime


class PurchaseLoggedResponse(CamelModel):
    success: bool = True
    message: str = "Purchase logged and notifications sent"
    data: PurchaseRead


class PurchaseStats(CamelModel):
    total: int
    trials: int
    paid: int


class PurchaseListResponse(CamelModel):
    success: bool = True
    purchases: list[PurchaseRead]
    total_in_usd: str = Field(..., serialization_alias="totalInUSD", description="Two-decimal string")
    stats: PurchaseStats


class AppListResponse(CamelModel):
    success: bool = True
    apps: list[str]


class PurchaseSummaryBucket(CamelModel):
    group: str
    total_in_usd: float = Field(..., serialization_alias="totalInUSD")
    total_price: float = Field(..., description="Unconverted sum across currencies")
    count: int
    trial_count: int
    paid_count: int


class PurchaseSummaryResponse(CamelModel):
    success: bool = True
    grouped: list[PurchaseSummaryBucket]
