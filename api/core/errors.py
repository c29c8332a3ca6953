"""
Error types and the FastAPI handlers that render them.

Every error response body has the shape `{"error": message}`.
"""

from __future__ import annotations

import logging
from enum import Enum

import asyncpg
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

logger = logging.getLogger(__name__)


class ErrorType(Enum):
    NOT_FOUND = "not_found"
    CONFLICT = "conflict"
    DATABASE_ERROR = "database_error"
    INTERNAL_ERROR = "internal_error"


ERROR_STATUS_MAP = {
    ErrorType.NOT_FOUND: 404,
    ErrorType.CONFLICT: 409,
    ErrorType.DATABASE_ERROR: 500,
    ErrorType.INTERNAL_ERROR: 500,
}


class AppException(Exception):
    """Exception routers raise to produce a non-2xx response."""

    def __init__(self, error_type: ErrorType, message: str):
        self.error_type = error_type
        self.message = message
        super().__init__(message)


def not_found(message: str) -> AppException:
    return AppException(ErrorType.NOT_FOUND, message)


def _error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


async def app_exception_handler(_request: Request, exc: AppException) -> JSONResponse:
    status_code = ERROR_STATUS_MAP.get(exc.error_type, 500)
    return _error_response(status_code, exc.message)


async def http_exception_handler(_request: Request, exc: HTTPException) -> JSONResponse:
    return _error_response(exc.status_code, str(exc.detail))


async def unique_violation_handler(request: Request, exc: asyncpg.UniqueViolationError) -> JSONResponse:
    logger.info("unique_violation path=%s detail=%s", request.url.path, exc)
    return _error_response(ERROR_STATUS_MAP[ErrorType.CONFLICT], str(exc))


async def database_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("database_error path=%s", request.url.path, exc_info=exc)
    return _error_response(ERROR_STATUS_MAP[ErrorType.DATABASE_ERROR], str(exc))


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.error("unhandled_error path=%s", request.url.path, exc_info=exc)
    return _error_response(ERROR_STATUS_MAP[ErrorType.INTERNAL_ERROR], str(exc))


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppException, app_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(asyncpg.UniqueViolationError, unique_violation_handler)
    app.add_exception_handler(asyncpg.PostgresError, database_exception_handler)
    app.add_exception_handler(asyncpg.InterfaceError, database_exception_handler)
    app.add_exception_handler(OSError, database_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
