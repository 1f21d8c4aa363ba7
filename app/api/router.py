"""API router aggregation."""

from fastapi import APIRouter

from app.api.routes import downloads, health, purchases, trials, users
from app.core.config import settings

api_router = APIRouter()

api_router.include_router(health.router, tags=["health"])
api_router.include_router(users.router, prefix=settings.API_V1_PREFIX, tags=["users"])
api_router.include_router(purchases.router, prefix=settings.API_V1_PREFIX, tags=["purchases"])
api_router.include_router(trials.router, prefix=settings.API_V1_PREFIX, tags=["trials"])
api_router.include_router(downloads.router, prefix=settings.API_V1_PREFIX, tags=["downloads"])
