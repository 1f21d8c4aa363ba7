"""Purchase logging and revenue reporting."""

import logging
from dataclasses import dataclass

import logfire
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.models.purchase import Purchase
from app.repositories.purchase import PurchaseFilter, PurchaseRepository
from app.repositories.user import UserRepository
from app.schemas.purchase import (
    PurchaseCreate,
    PurchaseListResponse,
    PurchaseRead,
    PurchaseStats,
    PurchaseSummaryBucket,
    PurchaseSummaryResponse,
)
from app.schemas.trial import ConversionStatsRead, TrialStatistics, TrialStatsResponse
from app.services.aggregation import Granularity, bucket_purchases
from app.services.currency import CurrencyRateGateway, total_usd
from app.services.push import PushNotifier
from app.services.time_window import parse_end, parse_start, resolve_window
from app.services.trials import compute_trial_stats

logger = logging.getLogger(__name__)

TRIALS_ONLY = "trials-only"
PAID_ONLY = "paid-only"


def trial_filter(include_trials: bool, trial_status: str | None) -> bool | None:
    """Map list query flags to an is_trial filter (None = both)."""
    if not include_trials:
        return False
    if trial_status == TRIALS_ONLY:
        return True
    if trial_status == PAID_ONLY:
        return False
    return None


@dataclass(frozen=True)
class PurchaseListQuery:
    app_name: str | None = None
    page: int = 1
    limit: int = 10
    start_date: str | None = None
    end_date: str | None = None
    include_sandbox: bool = True
    include_trials: bool = True
    trial_status: str | None = None


class PurchaseService:
    """Service for the purchase log and its reports.

    Dependencies are injected so tests can substitute the rate gateway and
    the notifier.
    """

    def __init__(
        self,
        db: AsyncSession,
        rate_gateway: CurrencyRateGateway,
        notifier: PushNotifier,
        purchases: PurchaseRepository | None = None,
        users: UserRepository | None = None,
    ) -> None:
        self.db = db
        self.rate_gateway = rate_gateway
        self.notifier = notifier
        self.purchases = purchases or PurchaseRepository()
        self.users = users or UserRepository()

    async def log_purchase(self, purchase_in: PurchaseCreate) -> Purchase:
        """Persist a purchase, then notify every registered device.

        The purchase is committed before any notification is attempted;
        delivery failures never affect the stored record.
        """
        purchase = await self.purchases.create(self.db, **purchase_in.model_dump())
        await self.db.commit()
        logger.info(
            "Purchase logged",
            extra={"app_name": purchase.app_name, "kind": purchase.kind, "is_trial": purchase.is_trial},
        )

        tokens = await self.users.list_push_tokens(self.db)
        await self.notifier.notify_purchase(tokens, purchase)
        return purchase

    async def list_purchases(self, query: PurchaseListQuery) -> PurchaseListResponse:
        """Return one page of purchases plus USD total and counts over all matches."""
        purchase_filter = PurchaseFilter(
            app_name=query.app_name,
            include_sandbox=query.include_sandbox,
            is_trial=trial_filter(query.include_trials, query.trial_status),
            start=parse_start(query.start_date),
            end=parse_end(query.end_date),
        )

        with logfire.span("PurchaseService.list_purchases", page=query.page, limit=query.limit):
            page = await self.purchases.find(
                self.db,
                purchase_filter,
                offset=(query.page - 1) * query.limit,
                limit=query.limit,
            )
            matching = await self.purchases.find(self.db, purchase_filter)
            rates = await self.rate_gateway.fetch_eur_rates()

        trials = sum(1 for p in matching if p.is_trial)
        return PurchaseListResponse(
            purchases=[PurchaseRead.model_validate(p) for p in page],
            total_in_usd=f"{total_usd(matching, rates):.2f}",
            stats=PurchaseStats(total=len(matching), trials=trials, paid=len(matching) - trials),
        )

    async def list_apps(self) -> list[str]:
        return await self.purchases.distinct_app_names(self.db)

    async def summarize(
        self,
        *,
        app_name: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
        include_sandbox: bool = True,
        group_by: str | None = None,
    ) -> PurchaseSummaryResponse:
        """Bucket purchases by time and convert each bucket's revenue to USD."""
        granularity = Granularity.parse(group_by)
        window = resolve_window(
            start_date, end_date, default_days=settings.PURCHASE_SUMMARY_DEFAULT_DAYS
        )
        purchase_filter = PurchaseFilter(
            app_name=app_name,
            include_sandbox=include_sandbox,
            start=window.start,
            end=window.end,
        )

        with logfire.span("PurchaseService.summarize", group_by=granularity.value):
            purchases = await self.purchases.find(self.db, purchase_filter, newest_first=False)
            buckets = bucket_purchases(purchases, granularity)
            rates = await self.rate_gateway.fetch_eur_rates()

        return PurchaseSummaryResponse(
            grouped=[
                PurchaseSummaryBucket(
                    group=bucket.label,
                    total_in_usd=round(total_usd(bucket.purchases, rates), 2),
                    total_price=round(bucket.total_price, 2),
                    count=bucket.count,
                    trial_count=bucket.trial_count,
                    paid_count=bucket.paid_count,
                )
                for bucket in buckets
            ]
        )

    async def trial_statistics(
        self,
        *,
        app_name: str | None = None,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> TrialStatsResponse:
        """Trial-to-paid conversion per app and overall, revenue unconverted."""
        purchase_filter = PurchaseFilter(
            app_name=app_name,
            start=parse_start(start_date),
            end=parse_end(end_date),
        )
        purchases = await self.purchases.find(self.db, purchase_filter, newest_first=False)
        by_app, overall = compute_trial_stats(purchases)

        return TrialStatsResponse(
            data=TrialStatistics(
                by_app={
                    name: ConversionStatsRead.model_validate(stats.as_dict())
                    for name, stats in by_app.items()
                },
                overall=ConversionStatsRead.model_validate(overall.as_dict()),
            )
        )
