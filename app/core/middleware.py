"""Application middleware."""

import logging
import time
from contextvars import ContextVar
from uuid import uuid4

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Context variables for request-scoped data
request_id_ctx: ContextVar[str | None] = ContextVar("request_id", default=None)
user_id_ctx: ContextVar[str | None] = ContextVar("user_id", default=None)

logger = logging.getLogger(__name__)


def get_logging_context() -> dict[str, str | None]:
    """Return request_id and user_id from the current context."""
    return {
        "request_id": request_id_ctx.get(),
        "user_id": user_id_ctx.get(),
    }


def set_user_id(user_id: str | None) -> None:
    """Set the user_id in the logging context."""
    user_id_ctx.set(user_id)


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Middleware that tags each request with an ID and logs its timing.

    The request ID is taken from the X-Request-ID header if present,
    otherwise a new UUID is generated. It is stored on request.state,
    in the logging context, and echoed back in the response headers.
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        """Process request with logging context."""
        request_id = request.headers.get(REQUEST_ID_HEADER, str(uuid4()))
        request.state.request_id = request_id
        request_id_ctx.set(request_id)
        user_id_ctx.set(None)

        start_time = time.perf_counter()

        logger.info(
            "Request started",
            extra={
                "method": request.method,
                "path": request.url.path,
            },
        )

        response = await call_next(request)

        duration_ms = (time.perf_counter() - start_time) * 1000

        logger.info(
            "Request completed",
            extra={
                "status_code": response.status_code,
                "duration_ms": round(duration_ms, 2),
            },
        )

        response.headers[REQUEST_ID_HEADER] = request_id
        return response
