"""FastAPI application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import httpx
from fastapi import FastAPI

from app.api.exception_handlers import register_exception_handlers
from app.api.router import api_router
from app.core.config import settings
from app.core.logfire_setup import instrument_app, setup_logfire
from app.core.logging_config import setup_logging
from app.core.middleware import RequestContextMiddleware


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan - startup and shutdown events.

    Creates the shared HTTP client and push notifier that route
    dependencies hand to the services.
    """
    # === Startup ===
    setup_logging()
    setup_logfire()
    from app.core.logfire_setup import instrument_httpx, instrument_sqlalchemy
    from app.services.push import PushNotifier

    instrument_httpx()
    instrument_sqlalchemy()

    app.state.http_client = httpx.AsyncClient(timeout=settings.CURRENCY_API_TIMEOUT)
    app.state.push_notifier = PushNotifier.from_settings()

    yield

    # === Shutdown ===
    from app.db.session import close_db

    await app.state.http_client.aclose()
    app.state.push_notifier.close()
    await close_db()


# Environments where API docs should be visible
SHOW_DOCS_ENVIRONMENTS = ("local", "staging", "development")


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    show_docs = settings.ENVIRONMENT in SHOW_DOCS_ENVIRONMENTS
    openapi_url = "/openapi.json" if show_docs else None
    docs_url = "/docs" if show_docs else None
    redoc_url = "/redoc" if show_docs else None

    openapi_tags = [
        {
            "name": "health",
            "description": "Health check endpoints for monitoring and Kubernetes probes",
        },
        {
            "name": "users",
            "description": "User registration and push-notification tokens",
        },
        {
            "name": "purchases",
            "description": "Purchase log and USD revenue reports",
        },
        {
            "name": "trials",
            "description": "Trial conversion statistics (revenue in original currencies)",
        },
        {
            "name": "downloads",
            "description": "Download events and unique-user statistics",
        },
    ]

    app = FastAPI(
        title=settings.PROJECT_NAME,
        summary="App purchase and download analytics",
        description="""
Records app purchases and downloads, notifies registered devices of new
purchases, and reports revenue converted to USD.

## Documentation

- [Swagger UI](/docs) - Interactive API documentation
- [ReDoc](/redoc) - Alternative documentation view
        """.strip(),
        version="0.1.0",
        openapi_url=openapi_url,
        docs_url=docs_url,
        redoc_url=redoc_url,
        openapi_tags=openapi_tags,
        license_info={
            "name": "MIT",
            "identifier": "MIT",
        },
        lifespan=lifespan,
    )
    # Logfire instrumentation
    instrument_app(app)

    # Request ID, logging context and timing
    app.add_middleware(RequestContextMiddleware)

    # Exception handlers
    register_exception_handlers(app)

    # Include API router
    app.include_router(api_router)

    return app


app = create_app()
