"""Logfire observability setup."""

import logfire
from fastapi import FastAPI

from app.core.config import settings


def setup_logfire() -> None:
    """Configure Logfire. Data is only sent when LOGFIRE_TOKEN is set."""
    logfire.configure(
        token=settings.LOGFIRE_TOKEN,
        service_name=settings.LOGFIRE_SERVICE_NAME,
        environment=settings.LOGFIRE_ENVIRONMENT,
        send_to_logfire="if-token-present",
        console=False,
    )


def instrument_app(app: FastAPI) -> None:
    """Instrument FastAPI request handling."""
    logfire.instrument_fastapi(app)


def instrument_httpx() -> None:
    """Instrument outgoing HTTP calls (currency rate gateway)."""
    logfire.instrument_httpx()


def instrument_sqlalchemy() -> None:
    """Instrument the application's database engine."""
    from app.db.session import engine

    logfire.instrument_sqlalchemy(engine=engine.sync_engine)
