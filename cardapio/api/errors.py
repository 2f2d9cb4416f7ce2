"""Exception handlers mapping every ErrorKind to a fixed HTTP status."""

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from cardapio.errors import AppError, ErrorKind, InternalError
from cardapio.schemas.common import pydantic_violations

logger = logging.getLogger(__name__)

STATUS_BY_KIND: dict[ErrorKind, int] = {
    ErrorKind.VALIDATION: status.HTTP_400_BAD_REQUEST,
    ErrorKind.BUSINESS_LOGIC: status.HTTP_400_BAD_REQUEST,
    ErrorKind.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.REFERENCED_RESOURCE_NOT_FOUND: status.HTTP_404_NOT_FOUND,
    ErrorKind.CONFLICT: status.HTTP_409_CONFLICT,
    ErrorKind.FOREIGN_KEY_CONSTRAINT: status.HTTP_400_BAD_REQUEST,
    ErrorKind.FOREIGN_KEY_VIOLATION: status.HTTP_409_CONFLICT,
    ErrorKind.FORBIDDEN: status.HTTP_403_FORBIDDEN,
    ErrorKind.INVALID_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.EXPIRED_TOKEN: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.INVALID_CREDENTIALS: status.HTTP_401_UNAUTHORIZED,
    ErrorKind.PROVISIONING: status.HTTP_500_INTERNAL_SERVER_ERROR,
    ErrorKind.INTERNAL: status.HTTP_500_INTERNAL_SERVER_ERROR,
}

_unmapped = set(ErrorKind) - set(STATUS_BY_KIND)
if _unmapped:
    raise RuntimeError(f"ErrorKind values without an HTTP status: {sorted(k.value for k in _unmapped)}")

GENERIC_INTERNAL_MESSAGE = "Internal server error"


def error_body(kind: ErrorKind, message: str, details: list[tuple[str, str]] | None = None) -> dict:
    return {
        "error": kind.value,
        "message": message,
        "details": [{"field": field, "message": msg} for field, msg in details or []],
    }


def app_error_response(exc: AppError) -> JSONResponse:
    code = STATUS_BY_KIND[exc.kind]
    headers = {"WWW-Authenticate": "Bearer"} if code == status.HTTP_401_UNAUTHORIZED else None
    return JSONResponse(
        status_code=code,
        content=error_body(exc.kind, exc.message, exc.details),
        headers=headers,
    )


async def handle_app_error(request: Request, exc: AppError) -> JSONResponse:
    if isinstance(exc, InternalError):
        # Internal messages stay in the log
        logger.error("%s on %s %s: %s", exc.kind.value, request.method, request.url.path, exc.message)
        return app_error_response(type(exc)(GENERIC_INTERNAL_MESSAGE))
    return app_error_response(exc)


async def handle_request_validation(request: Request, exc: RequestValidationError) -> JSONResponse:
    details = pydantic_violations(exc)
    message = "; ".join(f"{field}: {msg}" for field, msg in details) or "Invalid request"
    return JSONResponse(
        status_code=STATUS_BY_KIND[ErrorKind.VALIDATION],
        content=error_body(ErrorKind.VALIDATION, f"Invalid data: {message}", details),
    )


async def handle_unexpected(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    return JSONResponse(
        status_code=STATUS_BY_KIND[ErrorKind.INTERNAL],
        content=error_body(ErrorKind.INTERNAL, GENERIC_INTERNAL_MESSAGE),
    )


def register_error_handlers(app: FastAPI) -> None:
    app.add_exception_handler(AppError, handle_app_error)
    app.add_exception_handler(RequestValidationError, handle_request_validation)
    app.add_exception_handler(Exception, handle_unexpected)
