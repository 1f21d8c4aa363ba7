"""Trial conversion statistics routes."""

from typing import Annotated

from fastapi import APIRouter, Query

from app.api.deps import PurchaseSvc
from app.schemas.trial import TrialStatsResponse

router = APIRouter()


@router.get("/trials/stats", response_model=TrialStatsResponse)
async def trial_stats(
    service: PurchaseSvc,
    app_name: Annotated[str | None, Query(alias="appName")] = None,
    start_date: Annotated[str | None, Query(alias="startDate")] = None,
    end_date: Annotated[str | None, Query(alias="endDate")] = None,
) -> TrialStatsResponse:
    """Trial-to-paid conversion per app and overall.

    ``revenue`` sums non-trial prices in their original currencies; it is
    not converted to USD.
    """
    return await service.trial_statistics(
        app_name=app_name,
        start_date=start_date,
        end_date=end_date,
    )
