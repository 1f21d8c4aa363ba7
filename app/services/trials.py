"""Trial-to-paid conversion statistics.

Revenue here is the plain sum of non-trial prices in whatever currency each
purchase was made in. It is not converted to USD, unlike the purchase list
and summary reports.
"""

import math
from collections.abc import Iterable
from dataclasses import dataclass

from app.db.models.purchase import Purchase


@dataclass
class ConversionStats:
    total_purchases: int = 0
    trials: int = 0
    conversions: int = 0
    revenue: float = 0.0

    def add(self, purchase: Purchase) -> None:
        self.total_purchases += 1
        if purchase.is_trial:
            self.trials += 1
            return
        self.conversions += 1
        if isinstance(purchase.price, int | float) and math.isfinite(purchase.price):
            self.revenue += purchase.price

    @property
    def conversion_rate(self) -> float:
        """Conversions per 100 trials, 0 when there were no trials."""
        if self.trials == 0:
            return 0.0
        return round(self.conversions / self.trials * 100, 2)

    def as_dict(self) -> dict:
        return {
            "totalPurchases": self.total_purchases,
            "trials": self.trials,
            "conversions": self.conversions,
            "conversionRate": self.conversion_rate,
            "revenue": self.revenue,
        }


def compute_trial_stats(purchases: Iterable[Purchase]) -> tuple[dict[str, ConversionStats], ConversionStats]:
    """Compute conversion statistics per app and across all apps.

    Returns:
        Tuple of (stats keyed by app name in first-seen order, overall stats).
    """
    by_app: dict[str, ConversionStats] = {}
    overall = ConversionStats()
    for purchase in purchases:
        by_app.setdefault(purchase.app_name, ConversionStats()).add(purchase)
        overall.add(purchase)
    return by_app, overall
