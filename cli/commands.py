"""purchase-analytics management CLI.

    purchase-analytics server run --reload
    purchase-analytics db upgrade
    purchase-analytics db stats
    purchase-analytics cmd seed --days 90
"""
# ruff: noqa: E402 - Import at bottom to avoid circular imports

import click
from tabulate import tabulate

ALEMBIC_INI = "alembic.ini"


def run_alembic(action: str, *args, **kwargs) -> None:
    """Call an ``alembic.command`` function with the project's alembic.ini."""
    from alembic import command
    from alembic.config import Config

    getattr(command, action)(Config(ALEMBIC_INI), *args, **kwargs)


@click.group()
@click.version_option(version="0.1.0", prog_name="purchase-analytics")
def cli():
    """Purchase and download analytics service."""


# === Server ===
@cli.group("server")
def server_cli():
    """API server."""


@server_cli.command("run")
@click.option("--host", default="0.0.0.0", help="Host to bind to")
@click.option("--port", default=None, type=int, help="Port to bind to (default: SERVER_PORT)")
@click.option("--reload", is_flag=True, help="Restart on code changes")
@click.option("--workers", default=1, type=int, help="Worker processes (ignored with --reload)")
def server_run(host: str, port: int | None, reload: bool, workers: int):
    """Serve the analytics API with uvicorn."""
    import uvicorn

    from app.core.config import settings

    uvicorn.run(
        "app.main:app",
        host=host,
        port=port or settings.SERVER_PORT,
        reload=reload,
        workers=None if reload else workers,
        log_level="debug" if settings.DEBUG else "info",
    )


@server_cli.command("routes")
@click.option("--api-only", is_flag=True, help="Hide docs and health routes")
def server_routes(api_only: bool):
    """List routes with their methods and tags, sorted by path."""
    from fastapi.routing import APIRoute

    from app.core.config import settings
    from app.main import app

    rows = []
    for route in app.routes:
        if not isinstance(route, APIRoute):
            continue
        if api_only and not route.path.startswith(settings.API_V1_PREFIX):
            continue
        methods = ",".join(sorted(route.methods - {"HEAD", "OPTIONS"}))
        rows.append([route.path, methods, route.name, ",".join(map(str, route.tags))])

    click.echo(tabulate(sorted(rows), headers=["Path", "Methods", "Name", "Tags"]))


# === Database ===
@cli.group("db")
def db_cli():
    """Schema migrations and table statistics."""


@db_cli.command("init")
def db_init():
    """Create the users, purchases and downloads tables."""
    click.echo("Applying all migrations...")
    run_alembic("upgrade", "head")
    click.secho("Database ready.", fg="green")


@db_cli.command("migrate")
@click.option("-m", "--message", required=True, help="Migration message")
def db_migrate(message: str):
    """Autogenerate a migration from the models."""
    run_alembic("revision", message=message, autogenerate=True)
    click.secho(f"Migration created: {message}", fg="green")


@db_cli.command("upgrade")
@click.option("--revision", default="head", help="Target revision")
def db_upgrade(revision: str):
    run_alembic("upgrade", revision)
    click.secho(f"Upgraded to: {revision}", fg="green")


@db_cli.command("downgrade")
@click.option("--revision", default="-1", help="Target revision")
def db_downgrade(revision: str):
    run_alembic("downgrade", revision)
    click.secho(f"Downgraded to: {revision}", fg="green")


@db_cli.command("current")
def db_current():
    run_alembic("current")


@db_cli.command("history")
def db_history():
    run_alembic("history")


async def table_stats() -> list[list]:
    """Row count and newest timestamp per table."""
    from sqlalchemy import func, select

    from app.db.models import Download, Purchase, User
    from app.db.session import get_db_context

    columns = [
        ("users", User.id, User.created_at),
        ("purchases", Purchase.id, Purchase.created_at),
        ("downloads", Download.id, Download.timestamp),
    ]
    rows = []
    async with get_db_context() as db:
        for table, id_column, time_column in columns:
            result = await db.execute(select(func.count(id_column), func.max(time_column)))
            count, latest = result.one()
            rows.append([table, count, latest or "-"])
    return rows


@db_cli.command("stats")
def db_stats():
    """Show row counts and the latest record per table."""
    import asyncio

    click.echo(tabulate(asyncio.run(table_stats()), headers=["Table", "Rows", "Latest"]))


# === Custom Commands ===
@cli.group("cmd")
def cmd_cli():
    """Custom commands (seed, rates)."""


# Register all custom commands from app/commands/
from app.commands import register_commands

register_commands(cmd_cli)


def main():
    cli()


if __name__ == "__main__":
    main()
