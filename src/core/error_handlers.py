"""Exception handlers rendering every failure as a uniform error body.

Error details (driver messages, causes) are only exposed in development.
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from src.config import settings
from src.core.exceptions import InventoryAPIException

logger = logging.getLogger(__name__)

INTERNAL_ERROR_MESSAGE = "Error interno del servidor"


def error_response(status_code: int, message: str, details=None) -> JSONResponse:
    body: dict = {"success": False, "message": message}
    if details is not None and settings.expose_error_details:
        body["error"] = details
    return JSONResponse(status_code=status_code, content=body)


async def inventory_exception_handler(
    request: Request, exc: InventoryAPIException
) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(
            "%s on %s %s: %s",
            exc.message,
            request.method,
            request.url.path,
            exc.details,
            exc_info=exc,
        )
    return error_response(exc.status_code, exc.message, exc.details)


async def http_exception_handler(
    request: Request, exc: StarletteHTTPException
) -> JSONResponse:
    detail = exc.detail if isinstance(exc.detail, str) else str(exc.detail)
    return error_response(exc.status_code, detail)


async def sqlalchemy_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error(
        "Database error on %s %s: %s",
        request.method,
        request.url.path,
        exc,
        exc_info=True,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR_MESSAGE,
        f"Error de conexión a la base de datos: {exc}",
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled exception on %s %s", request.method, request.url.path)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, INTERNAL_ERROR_MESSAGE, str(exc)
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(InventoryAPIException, inventory_exception_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(SQLAlchemyError, sqlalchemy_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
