"""CLI command tests."""

from unittest.mock import AsyncMock, patch

from click.testing import CliRunner

from app.core.exceptions import CurrencyRateError
from cli.commands import cli


def test_rates_prints_table():
    fetch = AsyncMock(return_value={"usd": 1.1, "eur": 1.0, "gbp": 0.85})

    with patch("app.commands.rates.fetch_rates", fetch):
        result = CliRunner().invoke(cli, ["cmd", "rates", "-c", "gbp", "-c", "xyz"])

    assert result.exit_code == 0
    assert "GBP" in result.output
    assert "1.294118" in result.output
    assert "XYZ" in result.output
    assert "0.000000" in result.output


def test_rates_failure_exits_nonzero():
    fetch = AsyncMock(side_effect=CurrencyRateError(error="timeout"))

    with patch("app.commands.rates.fetch_rates", fetch):
        result = CliRunner().invoke(cli, ["cmd", "rates"])

    assert result.exit_code == 1


def test_seed_dry_run_touches_nothing():
    with patch("app.commands.seed.get_db_context") as get_db_context:
        result = CliRunner().invoke(cli, ["cmd", "seed", "--dry-run", "--days", "3", "--users", "5"])

    assert result.exit_code == 0
    assert "Would create 5 users" in result.output
    get_db_context.assert_not_called()


def test_server_routes_api_only():
    result = CliRunner().invoke(cli, ["server", "routes", "--api-only"])

    assert result.exit_code == 0
    assert "/api/v1/log-download" in result.output
    assert "/api/v1/purchases/summary" in result.output
    assert "/health" not in result.output


def test_db_upgrade_runs_alembic():
    with patch("alembic.command.upgrade") as upgrade:
        result = CliRunner().invoke(cli, ["db", "upgrade", "--revision", "3f9a7c21b8d4"])

    assert result.exit_code == 0
    config, revision = upgrade.call_args.args
    assert config.config_file_name == "alembic.ini"
    assert revision == "3f9a7c21b8d4"


def test_db_stats_prints_table():
    stats = AsyncMock(return_value=[["users", 3, "-"], ["purchases", 12, "-"], ["downloads", 0, "-"]])

    with patch("cli.commands.table_stats", stats):
        result = CliRunner().invoke(cli, ["db", "stats"])

    assert result.exit_code == 0
    assert "purchases" in result.output
    assert "12" in result.output
