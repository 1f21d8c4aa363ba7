"""Exception handlers rendering errors as ``{success, message, error}``."""

import logging

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.exceptions import AppError, DatabaseError, ValidationError

logger = logging.getLogger(__name__)

# Validation messages per route name; other routes use ValidationError's default.
VALIDATION_MESSAGES = {
    "create_user": "Missing userId, email, or userToken",
    "update_token": "Missing userId or userToken",
    "log_purchase": "Missing fields",
    "log_download": "Missing userId or appName",
}


def error_response(status_code: int, message: str, error=None, headers=None) -> JSONResponse:
    content = {"success": False, "message": message}
    if error is not None:
        content["error"] = jsonable_encoder(error)
    return JSONResponse(status_code=status_code, content=content, headers=headers)


async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{exc.message}: {exc.error}", extra={"path": request.url.path})
    return error_response(exc.status_code, exc.message, exc.error)


async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    route = request.scope.get("route")
    message = VALIDATION_MESSAGES.get(getattr(route, "name", None), ValidationError.default_message)
    errors = [{k: v for k, v in err.items() if k != "ctx"} for err in exc.errors()]
    return error_response(ValidationError.status_code, message, errors)


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    """Unknown routes, disallowed methods and undecodable bodies."""
    return error_response(exc.status_code, str(exc.detail), headers=getattr(exc, "headers", None))


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    logger.exception("Database error", extra={"path": request.url.path})
    detail = getattr(exc, "orig", None) or exc
    return error_response(DatabaseError.status_code, DatabaseError.default_message, str(detail))


def register_exception_handlers(app: FastAPI) -> None:
    """Register application exception handlers."""
    app.add_exception_handler(AppError, app_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
