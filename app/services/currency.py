"""Currency conversion for revenue reporting.

Rates come from the fawazahmed0 currency API, which publishes one table per
day with every currency expressed per 1 EUR:

    GET {base}@2025-05-04/v1/currencies/eur.json
    {"date": "2025-05-04", "eur": {"usd": 1.13, "gbp": 0.85, ...}}

Purchases are converted price -> EUR -> USD. A purchase that cannot be
converted contributes nothing rather than failing the whole report.
"""

import logging
import math
from collections.abc import Iterable, Mapping
from datetime import UTC, date, datetime
from typing import Any

import httpx
import logfire

from app.core.exceptions import CurrencyRateError
from app.db.models.purchase import Purchase

logger = logging.getLogger(__name__)

RateTable = Mapping[str, float]

BASE_CURRENCY = "eur"
TARGET_CURRENCY = "usd"


class CurrencyRateGateway:
    """Client for the same-day EUR rate table.

    Usage:
        gateway = CurrencyRateGateway(httpx.AsyncClient(), base_url=settings.CURRENCY_API_BASE_URL)
        rates = await gateway.fetch_eur_rates()
    """

    def __init__(self, client: httpx.AsyncClient, base_url: str) -> None:
        self.client = client
        self.base_url = base_url.rstrip("/")

    def url_for(self, day: date) -> str:
        return f"{self.base_url}@{day.isoformat()}/v1/currencies/{BASE_CURRENCY}.json"

    async def fetch_eur_rates(self, day: date | None = None) -> dict[str, float]:
        """Fetch the rate table for ``day`` (today in UTC by default).

        Returns:
            Mapping of lowercase currency code to units per 1 EUR.

        Raises:
            CurrencyRateError: If the request fails or the payload is malformed.
        """
        day = day or datetime.now(UTC).date()
        url = self.url_for(day)

        with logfire.span("CurrencyRateGateway.fetch_eur_rates", day=day.isoformat()):
            try:
                response = await self.client.get(url)
                response.raise_for_status()
                payload = response.json()
            except (httpx.HTTPError, ValueError) as e:
                logger.error(f"Currency rate request failed for {day}: {e}")
                raise CurrencyRateError(error=str(e)) from e

            rates = parse_rate_table(payload)
            logfire.info("Currency rates fetched", currency_count=len(rates))
            return rates


def parse_rate_table(payload: Any) -> dict[str, float]:
    """Extract the EUR rate table from an API payload.

    Raises:
        CurrencyRateError: If the payload has no ``eur`` table or no USD rate.
    """
    table = payload.get(BASE_CURRENCY) if isinstance(payload, dict) else None
    if not isinstance(table, dict):
        raise CurrencyRateError(error="Rate payload has no 'eur' table")

    rates = {
        str(code).lower(): float(rate)
        for code, rate in table.items()
        if isinstance(rate, int | float) and not isinstance(rate, bool)
    }
    if not rates.get(TARGET_CURRENCY):
        raise CurrencyRateError(error="Rate payload has no 'usd' rate")
    return rates


def to_usd(price: Any, currency_code: str | None, rates: RateTable) -> float:
    """Convert an amount to USD via EUR, returning 0.0 when it can't be converted."""
    if not currency_code or not isinstance(price, int | float) or isinstance(price, bool):
        return 0.0
    if not math.isfinite(price):
        return 0.0

    per_eur = rates.get(currency_code.lower())
    usd_per_eur = rates.get(TARGET_CURRENCY)
    if not per_eur or not usd_per_eur:
        return 0.0

    amount_in_eur = price / per_eur
    return amount_in_eur * usd_per_eur


def purchase_usd_value(purchase: Purchase, rates: RateTable) -> float:
    """USD revenue from one purchase. Trials never count as revenue."""
    if purchase.is_trial:
        return 0.0
    return to_usd(purchase.price, purchase.currency_code, rates)


def total_usd(purchases: Iterable[Purchase], rates: RateTable) -> float:
    """Unrounded USD revenue across purchases."""
    return sum((purchase_usd_value(p, rates) for p in purchases), 0.0)
