"""Time-bucketed aggregation of purchases and downloads.

Records are grouped by a label derived from their timestamp at the chosen
granularity. Only buckets that contain at least one record are produced,
and buckets come back sorted ascending by label.
"""

import enum
import math
from collections import defaultdict
from collections.abc import Callable, Iterable
from dataclasses import dataclass, field
from datetime import datetime
from typing import TypeVar

from app.db.models.download import Download
from app.db.models.purchase import Purchase
from app.services.time_window import as_utc

T = TypeVar("T")

TOTAL_LABEL = "total"


class Granularity(str, enum.Enum):
    HOUR = "hour"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    TOTAL = "total"

    @classmethod
    def parse(cls, value: str | None) -> "Granularity":
        """Parse a groupBy value; missing or unknown values mean ``day``."""
        try:
            return cls(value) if value else cls.DAY
        except ValueError:
            return cls.DAY


class WeekStyle(str, enum.Enum):
    """ISO week label conventions.

    Purchase summaries label weeks ``2025-07``; download statistics use
    ``2025-W07``. Existing dashboards parse both forms, so both are kept.
    """

    PLAIN = "plain"
    PREFIXED = "prefixed"


def bucket_label(
    moment: datetime,
    granularity: Granularity,
    week_style: WeekStyle = WeekStyle.PLAIN,
) -> str:
    """Format the bucket label ``moment`` falls into."""
    moment = as_utc(moment)
    if granularity is Granularity.HOUR:
        return moment.strftime("%Y-%m-%d %H:00")
    if granularity is Granularity.WEEK:
        iso_year, iso_week, _ = moment.isocalendar()
        prefix = "W" if week_style is WeekStyle.PREFIXED else ""
        return f"{iso_year:04d}-{prefix}{iso_week:02d}"
    if granularity is Granularity.MONTH:
        return moment.strftime("%Y-%m")
    if granularity is Granularity.TOTAL:
        return TOTAL_LABEL
    return moment.strftime("%Y-%m-%d")


def group_by_label(records: Iterable[T], label_of: Callable[[T], str]) -> list[tuple[str, list[T]]]:
    """Group records by label, sorted ascending by label."""
    groups: dict[str, list[T]] = defaultdict(list)
    for record in records:
        groups[label_of(record)].append(record)
    return sorted(groups.items())


@dataclass
class PurchaseBucket:
    label: str
    purchases: list[Purchase] = field(default_factory=list)

    @property
    def count(self) -> int:
        return len(self.purchases)

    @property
    def trial_count(self) -> int:
        return sum(1 for p in self.purchases if p.is_trial)

    @property
    def paid_count(self) -> int:
        return sum(1 for p in self.purchases if not p.is_trial)

    @property
    def total_price(self) -> float:
        """Raw sum of prices across currencies. Informational only."""
        return sum(p.price for p in self.purchases if _is_number(p.price))


@dataclass
class DownloadBucket:
    label: str
    downloads: list[Download] = field(default_factory=list)

    @property
    def total_downloads(self) -> int:
        return len(self.downloads)

    @property
    def unique_users(self) -> int:
        return len({d.user_id for d in self.downloads})


def _is_number(value: object) -> bool:
    return (
        isinstance(value, int | float)
        and not isinstance(value, bool)
        and math.isfinite(value)
    )


def bucket_purchases(
    purchases: Iterable[Purchase],
    granularity: Granularity,
) -> list[PurchaseBucket]:
    """Bucket purchases by creation time."""
    groups = group_by_label(purchases, lambda p: bucket_label(p.created_at, granularity))
    return [PurchaseBucket(label=label, purchases=members) for label, members in groups]


def bucket_downloads(
    downloads: Iterable[Download],
    granularity: Granularity,
) -> list[DownloadBucket]:
    """Bucket downloads by event time, using ``2025-W07`` style week labels."""
    groups = group_by_label(
        downloads,
        lambda d: bucket_label(d.timestamp, granularity, WeekStyle.PREFIXED),
    )
    return [DownloadBucket(label=label, downloads=members) for label, members in groups]
