"""
Error taxonomy and FastAPI exception handlers.

Every error is an `HTTPException` subclass, so services raise them exactly like
plain FastAPI code would and the status code travels with the type.
All error responses share one body shape: {"message": "..."}.
"""

from __future__ import annotations

import asyncio
import functools
import logging
from typing import Any, Awaitable, Callable, TypeVar

import asyncpg
from fastapi import FastAPI, HTTPException, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

logger = logging.getLogger(__name__)

T = TypeVar("T")


class AppError(HTTPException):
    http_status: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message: str = "Server error"

    def __init__(self, message: str | None = None) -> None:
        super().__init__(status_code=self.http_status, detail=message or self.default_message)

    @property
    def message(self) -> str:
        return str(self.detail)


class ValidationError(AppError):
    http_status = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid request"


class AuthError(AppError):
    http_status = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized"


class MissingToken(AuthError):
    default_message = "Missing token"


class InvalidOrExpiredToken(AuthError):
    default_message = "Invalid or expired token"


class ForbiddenError(AppError):
    http_status = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFoundError(AppError):
    http_status = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class ConflictError(AppError):
    http_status = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class InternalError(AppError):
    http_status = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Server error"


class DatabaseNotReady(RuntimeError):
    pass


# Failures that originate in the store layer (driver, network, pool).
STORE_ERRORS: tuple[type[BaseException], ...] = (
    asyncpg.PostgresError,
    asyncpg.InterfaceError,
    OSError,
    asyncio.TimeoutError,
    DatabaseNotReady,
)


def store_errors(message: str) -> Callable[[Callable[..., Awaitable[T]]], Callable[..., Awaitable[T]]]:
    """
    Convert store-layer failures raised inside a service operation into
    `InternalError(message)`, logging the original exception.

    Validation/auth errors raised by the operation itself pass through untouched.
    """

    def decorator(func: Callable[..., Awaitable[T]]) -> Callable[..., Awaitable[T]]:
        @functools.wraps(func)
        async def wrapper(*args: Any, **kwargs: Any) -> T:
            try:
                return await func(*args, **kwargs)
            except STORE_ERRORS as exc:
                logger.exception("store_error operation=%s", func.__qualname__)
                raise InternalError(message) from exc

        return wrapper

    return decorator


async def http_exception_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"message": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


async def request_validation_handler(_: Request, exc: RequestValidationError) -> JSONResponse:
    errors = jsonable_encoder(exc.errors())
    fields = [".".join(str(part) for part in err.get("loc", ()) if part != "body") for err in errors]
    fields = [field for field in fields if field]
    message = "Invalid or missing fields: " + ", ".join(fields) if fields else "Invalid request"
    return JSONResponse(
        status_code=status.HTTP_400_BAD_REQUEST,
        content={"message": message, "errors": errors},
    )


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("unhandled_error method=%s path=%s", request.method, request.url.path)
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"message": "Server error"},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, request_validation_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)
