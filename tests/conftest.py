"""Shared test fixtures.

Each test gets a fresh in-memory SQLite database. The currency gateway and
push notifier are replaced with fakes through FastAPI dependency overrides.
"""

from collections.abc import AsyncGenerator
from datetime import date

import logfire
import pytest
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

logfire.configure(send_to_logfire=False, console=False)

from app.api.deps import get_push_notifier, get_rate_gateway  # noqa: E402
from app.core.exceptions import CurrencyRateError  # noqa: E402
from app.db.models import Base  # noqa: E402
from app.db.models.purchase import Purchase  # noqa: E402
from app.db.session import get_db_session  # noqa: E402
from app.main import app  # noqa: E402
from app.services.push import NotificationReport  # noqa: E402

RATES = {"usd": 1.1, "eur": 1.0, "gbp": 0.85, "jpy": 160.0}


class FakeRateGateway:
    """Rate gateway returning a fixed table, or failing on demand."""

    def __init__(self, rates: dict[str, float] | None = None) -> None:
        self.rates = dict(RATES if rates is None else rates)
        self.fail = False
        self.calls: list[date | None] = []

    async def fetch_eur_rates(self, day: date | None = None) -> dict[str, float]:
        self.calls.append(day)
        if self.fail:
            raise CurrencyRateError(error="connection refused")
        return self.rates


class FakeNotifier:
    """Push notifier that records fan-outs instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[tuple[list[str], Purchase]] = []

    async def notify_purchase(self, tokens: list[str], purchase: Purchase) -> NotificationReport:
        self.sent.append((list(tokens), purchase))
        return NotificationReport(sent=len(tokens))


@pytest.fixture
def anyio_backend() -> str:
    return "asyncio"


@pytest.fixture
async def session_maker() -> AsyncGenerator[async_sessionmaker[AsyncSession], None]:
    """Session factory bound to a fresh in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest.fixture
async def db_session(session_maker) -> AsyncGenerator[AsyncSession, None]:
    async with session_maker() as session:
        yield session


@pytest.fixture
def rate_gateway() -> FakeRateGateway:
    return FakeRateGateway()


@pytest.fixture
def notifier() -> FakeNotifier:
    return FakeNotifier()


@pytest.fixture
async def client(session_maker, rate_gateway, notifier) -> AsyncGenerator[AsyncClient, None]:
    """HTTP client for the app with test database and fake collaborators."""

    async def override_get_db_session() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise

    app.dependency_overrides[get_db_session] = override_get_db_session
    app.dependency_overrides[get_rate_gateway] = lambda: rate_gateway
    app.dependency_overrides[get_push_notifier] = lambda: notifier

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as ac:
        yield ac

    app.dependency_overrides.clear()
