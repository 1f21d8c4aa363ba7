"""Purchase logging and revenue report routes."""

from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import PurchaseSvc
from app.schemas.purchase import (
    AppListResponse,
    PurchaseCreate,
    PurchaseListResponse,
    PurchaseLoggedResponse,
    PurchaseRead,
    PurchaseSummaryResponse,
)
from app.services.purchase import PurchaseListQuery

router = APIRouter()

AppNameParam = Annotated[str | None, Query(alias="appName")]
StartDateParam = Annotated[
    str | None, Query(alias="startDate", description="YYYY-MM-DD or ISO-8601 timestamp")
]
EndDateParam = Annotated[
    str | None,
    Query(alias="endDate", description="YYYY-MM-DD (inclusive) or ISO-8601 timestamp"),
]
IncludeSandboxParam = Annotated[bool, Query(alias="includeSandbox")]


@router.post("/log-purchase", response_model=PurchaseLoggedResponse)
async def log_purchase(purchase_in: PurchaseCreate, service: PurchaseSvc) -> PurchaseLoggedResponse:
    """Record a purchase and notify every registered device.

    Notification failures are logged and do not fail the request.
    """
    purchase = await service.log_purchase(purchase_in)
    return PurchaseLoggedResponse(data=PurchaseRead.model_validate(purchase))


@router.get("/purchases", response_model=PurchaseListResponse)
async def list_purchases(
    service: PurchaseSvc,
    app_name: AppNameParam = None,
    page: Annotated[int, Query(ge=1)] = 1,
    limit: Annotated[int, Query(ge=1, le=1000)] = 10,
    start_date: StartDateParam = None,
    end_date: EndDateParam = None,
    include_sandbox: IncludeSandboxParam = True,
    include_trials: Annotated[bool, Query(alias="includeTrials")] = True,
    trial_status: Annotated[
        str | None,
        Query(alias="trialStatus", description="'trials-only' or 'paid-only'"),
    ] = None,
) -> PurchaseListResponse:
    """List purchases newest first, with the USD total of all matching purchases.

    Trials are listed but never counted towards ``totalInUSD``.
    """
    return await service.list_purchases(
        PurchaseListQuery(
            app_name=app_name,
            page=page,
            limit=limit,
            start_date=start_date,
            end_date=end_date,
            include_sandbox=include_sandbox,
            include_trials=include_trials,
            trial_status=trial_status,
        )
    )


@router.get("/apps", response_model=AppListResponse)
async def list_apps(service: PurchaseSvc) -> AppListResponse:
    """Distinct app names that have purchases."""
    return AppListResponse(apps=await service.list_apps())


@router.get("/purchases/summary", response_model=PurchaseSummaryResponse)
async def purchases_summary(
    service: PurchaseSvc,
    app_name: AppNameParam = None,
    start_date: StartDateParam = None,
    end_date: EndDateParam = None,
    include_sandbox: IncludeSandboxParam = True,
    group_by: Annotated[
        str | None,
        Query(alias="groupBy", description="hour, day, week, month or total"),
    ] = None,
) -> PurchaseSummaryResponse:
    """USD revenue and purchase counts per time bucket (default: last 7 days by day)."""
    return await service.summarize(
        app_name=app_name,
        start_date=start_date,
        end_date=end_date,
        include_sandbox=include_sandbox,
        group_by=group_by,
    )
