"""API dependencies.

Dependency injection factories for services and their external clients.
Long-lived handles (HTTP client, push notifier) are created in the
application lifespan and stored on ``app.state``; tests replace these
factories through ``app.dependency_overrides``.
"""

from typing import Annotated

from fastapi import Depends, Request
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.config import settings
from app.db.session import get_db_session
from app.services.currency import CurrencyRateGateway
from app.services.download import DownloadService
from app.services.purchase import PurchaseService
from app.services.push import PushNotifier
from app.services.user import UserService

# ===== Database Sessions =====

DBSession = Annotated[AsyncSession, Depends(get_db_session)]


# ===== External Clients =====


def get_rate_gateway(request: Request) -> CurrencyRateGateway:
    """Currency rate gateway backed by the shared HTTP client."""
    return CurrencyRateGateway(
        request.app.state.http_client,
        base_url=settings.CURRENCY_API_BASE_URL,
    )


def get_push_notifier(request: Request) -> PushNotifier:
    return request.app.state.push_notifier


RateGateway = Annotated[CurrencyRateGateway, Depends(get_rate_gateway)]
Notifier = Annotated[PushNotifier, Depends(get_push_notifier)]


# ===== Services =====


def get_user_service(db: DBSession) -> UserService:
    return UserService(db)


def get_purchase_service(
    db: DBSession,
    rate_gateway: RateGateway,
    notifier: Notifier,
) -> PurchaseService:
    """Create PurchaseService with injected dependencies."""
    return PurchaseService(db, rate_gateway=rate_gateway, notifier=notifier)


def get_download_service(db: DBSession) -> DownloadService:
    return DownloadService(db)


UserSvc = Annotated[UserService, Depends(get_user_service)]
PurchaseSvc = Annotated[PurchaseService, Depends(get_purchase_service)]
DownloadSvc = Annotated[DownloadService, Depends(get_download_service)]
