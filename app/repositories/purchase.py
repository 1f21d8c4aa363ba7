"""Purchase repository."""

from dataclasses import dataclass
from datetime import datetime

from sqlalchemy import Select, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.db.models.purchase import Purchase


@dataclass(frozen=True)
class PurchaseFilter:
    """Filter over the purchase log.

    ``is_trial`` of None matches both trials and paid purchases. Window
    bounds are inclusive and either may be omitted.
    """

    app_name: str | None = None
    include_sandbox: bool = True
    is_trial: bool | None = None
    start: datetime | None = None
    end: datetime | None = None


def _apply_filter(query: Select, purchase_filter: PurchaseFilter) -> Select:
    if purchase_filter.app_name:
        query = query.where(Purchase.app_name == purchase_filter.app_name)
    if not purchase_filter.include_sandbox:
        query = query.where(Purchase.is_sandbox.is_(False))
    if purchase_filter.is_trial is not None:
        query = query.where(Purchase.is_trial.is_(purchase_filter.is_trial))
    if purchase_filter.start is not None:
        query = query.where(Purchase.created_at >= purchase_filter.start)
    if purchase_filter.end is not None:
        query = query.where(Purchase.created_at <= purchase_filter.end)
    return query


class PurchaseRepository:
    """Repository for the append-only purchase log.

    Follows Pattern 1: session passed to methods (not held in __init__).
    """

    async def create(
        self,
        db: AsyncSession,
        *,
        currency_code: str,
        price: float,
        kind: str,
        is_sandbox: bool,
        app_name: str,
        price_formatted: str | None = None,
        store_front: str | None = None,
        is_trial: bool = False,
        trial_period: str | None = None,
        created_at: datetime | None = None,
    ) -> Purchase:
        """Append a purchase to the log."""
        purchase = Purchase(
            currency_code=currency_code,
            price=price,
            price_formatted=price_formatted,
            kind=kind,
            is_sandbox=is_sandbox,
            app_name=app_name,
            store_front=store_front,
            is_trial=is_trial,
            trial_period=trial_period,
        )
        if created_at is not None:
            purchase.created_at = created_at
        db.add(purchase)
        await db.flush()
        await db.refresh(purchase)
        return purchase

    async def find(
        self,
        db: AsyncSession,
        purchase_filter: PurchaseFilter,
        *,
        newest_first: bool = True,
        offset: int = 0,
        limit: int | None = None,
    ) -> list[Purchase]:
        """List purchases matching the filter, ordered by creation time.

        Args:
            db: Database session.
            purchase_filter: Which purchases to return.
            newest_first: Sort descending by created_at when True.
            offset: Number of matching rows to skip.
            limit: Maximum rows to return; None returns everything.
        """
        order = (
            (Purchase.created_at.desc(), Purchase.id.desc())
            if newest_first
            else (Purchase.created_at.asc(), Purchase.id.asc())
        )
        query = _apply_filter(select(Purchase), purchase_filter).order_by(*order)
        if offset:
            query = query.offset(offset)
        if limit is not None:
            query = query.limit(limit)
        result = await db.execute(query)
        return list(result.scalars().all())

    async def distinct_app_names(self, db: AsyncSession) -> list[str]:
        """Return every app name that has at least one purchase."""
        result = await db.execute(
            select(Purchase.app_name).distinct().order_by(Purchase.app_name)
        )
        return list(result.scalars().all())
