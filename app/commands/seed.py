"""
Seed database with sample data.

Populates users, purchases and downloads with realistic test data for
local development of the reporting endpoints.
"""

import asyncio
import random
from datetime import UTC, datetime, timedelta

import click
from sqlalchemy import delete

from app.commands import command, error, info, success
from app.db.models import Download, Purchase, User
from app.db.session import get_db_context

APPS = [
    "Paint",
    "Countdown",
    "Weather Pro",
    "Fitness Tracker",
    "Photo Editor Plus",
]

# (store front, currency, monthly price, yearly price)
STORE_FRONTS = [
    ("USA", "USD", 4.99, 39.99),
    ("GBR", "GBP", 4.49, 34.99),
    ("DEU", "EUR", 4.99, 39.99),
    ("JPN", "JPY", 800, 6000),
    ("CAN", "CAD", 6.99, 54.99),
    ("BRA", "BRL", 24.90, 199.90),
]

PRODUCTS = [
    ("monthly", "1 week"),
    ("yearly", "3 days"),
]

TRIAL_SHARE = 0.4
SANDBOX_SHARE = 0.05


def generate_purchase(app_name: str, created_at: datetime) -> dict:
    """Generate one purchase or trial start."""
    store_front, currency, monthly, yearly = random.choice(STORE_FRONTS)
    product, trial_period = random.choice(PRODUCTS)
    price = monthly if product == "monthly" else yearly
    is_trial = random.random() < TRIAL_SHARE

    return {
        "currency_code": currency,
        "price": 0 if is_trial else price,
        "price_formatted": f"{price:,.2f} {currency}",
        "kind": f"{app_name.lower().replace(' ', '_')}.{product}",
        "is_sandbox": random.random() < SANDBOX_SHARE,
        "app_name": app_name,
        "store_front": store_front,
        "is_trial": is_trial,
        "trial_period": trial_period if is_trial else None,
        "created_at": created_at,
    }


def random_moment(day_start: datetime) -> datetime:
    return day_start + timedelta(seconds=random.randint(0, 24 * 60 * 60 - 1))


async def seed_data(days: int, users: int, clear: bool, dry_run: bool) -> dict[str, int]:
    """Seed the database with sample users, purchases and downloads."""
    today = datetime.now(UTC).replace(hour=0, minute=0, second=0, microsecond=0)
    start = today - timedelta(days=days - 1)
    user_ids = [f"seed-user-{n:04d}" for n in range(users)]

    purchases = []
    downloads = {}
    for offset in range(days):
        day_start = start + timedelta(days=offset)
        for app_name in APPS:
            for _ in range(random.randint(0, 6)):
                purchases.append(generate_purchase(app_name, random_moment(day_start)))
            for user_id in random.sample(user_ids, k=min(len(user_ids), random.randint(0, 8))):
                # First download wins; later ones would be rejected as duplicates.
                downloads.setdefault((user_id, app_name), random_moment(day_start))

    counts = {"users": len(user_ids), "purchases": len(purchases), "downloads": len(downloads)}

    if dry_run:
        info(f"Would create {counts['users']} users, {counts['purchases']} purchases, {counts['downloads']} downloads")
        info(f"Date range: {start.date()} to {today.date()}")
        info(f"Apps: {len(APPS)}")
        return counts

    async with get_db_context() as db:
        if clear:
            for model in (Download, Purchase, User):
                await db.execute(delete(model))
            info("Cleared existing users, purchases and downloads")

        db.add_all(
            User(user_id=user_id, email=f"{user_id}@example.com", user_token=None)
            for user_id in user_ids
        )
        db.add_all(Purchase(**record) for record in purchases)
        db.add_all(
            Download(user_id=user_id, app_name=app_name, timestamp=timestamp)
            for (user_id, app_name), timestamp in downloads.items()
        )
        await db.commit()

    return counts


@command("seed", help="Seed database with sample purchases and downloads")
@click.option("--days", "-d", default=30, type=int, help="Number of days of data to generate (default: 30)")
@click.option("--users", "-u", default=50, type=int, help="Number of users to create (default: 50)")
@click.option("--clear", is_flag=True, help="Clear existing data before seeding")
@click.option("--dry-run", is_flag=True, help="Show what would be created without making changes")
def seed(
    days: int,
    users: int,
    clear: bool,
    dry_run: bool,
) -> None:
    """
    Seed the database with sample purchase analytics data for development.

    Seeded users have no push token, so no notifications are sent.

    Example:
        purchase-analytics cmd seed
        purchase-analytics cmd seed --days 90 --users 200
        purchase-analytics cmd seed --clear
        purchase-analytics cmd seed --dry-run
    """
    try:
        counts = asyncio.run(seed_data(days, users, clear, dry_run))
        if dry_run:
            success(f"Dry run complete. Would create {sum(counts.values())} records.")
        else:
            success(
                f"Seeded {counts['users']} users, {counts['purchases']} purchases "
                f"and {counts['downloads']} downloads."
            )
    except Exception as e:
        error(f"Failed to seed database: {e}")
        raise SystemExit(1) from e
