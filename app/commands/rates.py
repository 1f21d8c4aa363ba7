"""Show today's currency rate table."""

import asyncio

import click
import httpx
from tabulate import tabulate

from app.commands import command, error, info
from app.core.config import settings
from app.core.exceptions import CurrencyRateError
from app.services.currency import CurrencyRateGateway, to_usd

DEFAULT_CURRENCIES = ("usd", "eur", "gbp", "jpy", "cad", "aud", "brl", "inr")


async def fetch_rates() -> dict[str, float]:
    async with httpx.AsyncClient(timeout=settings.CURRENCY_API_TIMEOUT) as client:
        gateway = CurrencyRateGateway(client, base_url=settings.CURRENCY_API_BASE_URL)
        return await gateway.fetch_eur_rates()


@command("rates", help="Show today's EUR rate table and USD value of 1 unit")
@click.option(
    "--currency",
    "-c",
    "currencies",
    multiple=True,
    help="Currency code to show (repeatable, default: a common set)",
)
def rates(currencies: tuple[str, ...]) -> None:
    """
    Print the rate table the purchase reports would use right now.

    Example:
        purchase-analytics cmd rates
        purchase-analytics cmd rates -c gbp -c chf
    """
    try:
        table = asyncio.run(fetch_rates())
    except CurrencyRateError as e:
        error(f"{e.message}: {e.error}")
        raise SystemExit(1) from e

    rows = []
    for code in currencies or DEFAULT_CURRENCIES:
        code = code.lower()
        per_eur = table.get(code)
        rows.append([code.upper(), per_eur if per_eur is not None else "-", round(to_usd(1, code, table), 6)])

    info(tabulate(rows, headers=["Currency", "Per 1 EUR", "1 unit in USD"], floatfmt=".6f"))
