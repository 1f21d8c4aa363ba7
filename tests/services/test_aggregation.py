"""Tests for time-bucketed aggregation."""

from datetime import UTC, datetime
from types import SimpleNamespace

import pytest

from app.services.aggregation import (
    Granularity,
    WeekStyle,
    bucket_downloads,
    bucket_label,
    bucket_purchases,
)


def purchase(created_at: datetime, *, price: float = 1.0, is_trial: bool = False):
    return SimpleNamespace(created_at=created_at, price=price, is_trial=is_trial, currency_code="USD")


def download(user_id: str, timestamp: datetime, app_name: str = "Paint"):
    return SimpleNamespace(user_id=user_id, timestamp=timestamp, app_name=app_name)


class TestBucketLabel:
    """Label formats per granularity."""

    moment = datetime(2025, 2, 14, 9, 41, 7, tzinfo=UTC)

    @pytest.mark.parametrize(
        ("granularity", "expected"),
        [
            (Granularity.HOUR, "2025-02-14 09:00"),
            (Granularity.DAY, "2025-02-14"),
            (Granularity.WEEK, "2025-07"),
            (Granularity.MONTH, "2025-02"),
            (Granularity.TOTAL, "total"),
        ],
    )
    def test_formats(self, granularity, expected):
        assert bucket_label(self.moment, granularity) == expected

    def test_prefixed_week(self):
        assert bucket_label(self.moment, Granularity.WEEK, WeekStyle.PREFIXED) == "2025-W07"

    def test_iso_week_year_differs_from_calendar_year(self):
        """30 Dec 2024 belongs to ISO week 1 of 2025."""
        moment = datetime(2024, 12, 30, 12, 0, tzinfo=UTC)
        assert bucket_label(moment, Granularity.WEEK) == "2025-01"

    def test_naive_datetime_treated_as_utc(self):
        assert bucket_label(datetime(2025, 2, 14, 23, 30), Granularity.DAY) == "2025-02-14"

    def test_aware_datetime_converted_to_utc(self):
        from datetime import timedelta, timezone

        moment = datetime(2025, 2, 15, 1, 30, tzinfo=timezone(timedelta(hours=3)))
        assert bucket_label(moment, Granularity.DAY) == "2025-02-14"


class TestGranularityParse:
    def test_known_values(self):
        assert Granularity.parse("month") is Granularity.MONTH

    @pytest.mark.parametrize("value", [None, "", "fortnight"])
    def test_defaults_to_day(self, value):
        assert Granularity.parse(value) is Granularity.DAY


class TestBucketPurchases:
    def test_empty_input_yields_no_buckets(self):
        assert bucket_purchases([], Granularity.DAY) == []

    def test_no_empty_buckets_for_days_without_purchases(self):
        day_one = datetime(2025, 3, 1, tzinfo=UTC)
        purchases = [
            purchase(day_one.replace(hour=8)),
            purchase(day_one.replace(hour=12), is_trial=True, price=0),
            purchase(day_one.replace(hour=20), price=2.5),
        ]

        buckets = bucket_purchases(purchases, Granularity.DAY)

        assert len(buckets) == 1
        bucket = buckets[0]
        assert bucket.label == "2025-03-01"
        assert bucket.count == 3
        assert bucket.trial_count == 1
        assert bucket.paid_count == 2
        assert bucket.total_price == pytest.approx(3.5)

    def test_buckets_sorted_ascending(self):
        purchases = [
            purchase(datetime(2025, 5, 3, tzinfo=UTC)),
            purchase(datetime(2025, 3, 9, tzinfo=UTC)),
            purchase(datetime(2025, 4, 1, tzinfo=UTC)),
        ]

        labels = [b.label for b in bucket_purchases(purchases, Granularity.MONTH)]

        assert labels == ["2025-03", "2025-04", "2025-05"]

    def test_total_puts_everything_in_one_bucket(self):
        purchases = [
            purchase(datetime(2024, 1, 1, tzinfo=UTC)),
            purchase(datetime(2025, 6, 1, tzinfo=UTC)),
        ]

        buckets = bucket_purchases(purchases, Granularity.TOTAL)

        assert [(b.label, b.count) for b in buckets] == [("total", 2)]

    def test_total_price_skips_nan(self):
        purchases = [
            purchase(datetime(2025, 1, 1, tzinfo=UTC), price=float("nan")),
            purchase(datetime(2025, 1, 1, tzinfo=UTC), price=4.0),
        ]

        assert bucket_purchases(purchases, Granularity.DAY)[0].total_price == 4.0


class TestBucketDownloads:
    def test_unique_users_and_totals(self):
        moment = datetime(2025, 2, 10, 10, tzinfo=UTC)
        downloads = [
            download("u1", moment, "Paint"),
            download("u1", moment, "Countdown"),
            download("u2", moment.replace(hour=11), "Paint"),
        ]

        buckets = bucket_downloads(downloads, Granularity.DAY)

        assert len(buckets) == 1
        assert buckets[0].unique_users == 2
        assert buckets[0].total_downloads == 3

    def test_week_labels_are_prefixed(self):
        downloads = [download("u1", datetime(2025, 2, 14, tzinfo=UTC))]

        assert bucket_downloads(downloads, Granularity.WEEK)[0].label == "2025-W07"

    def test_hourly_buckets(self):
        base = datetime(2025, 2, 14, tzinfo=UTC)
        downloads = [
            download("u1", base.replace(hour=9, minute=5)),
            download("u2", base.replace(hour=9, minute=55)),
            download("u3", base.replace(hour=10)),
        ]

        buckets = bucket_downloads(downloads, Granularity.HOUR)

        assert [(b.label, b.total_downloads) for b in buckets] == [
            ("2025-02-14 09:00", 2),
            ("2025-02-14 10:00", 1),
        ]
