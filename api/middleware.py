"""
Request logging and exception handlers for the NutriTrack API.

Every error leaves the API in one shape:
``{"success": false, "error": {"code", "message", "details"?}, "timestamp"}``.
"""

import time
import logging
from datetime import datetime, timezone
from uuid import uuid4
from decimal import Decimal

from fastapi import Request, status
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from app.exceptions import AppError
from domain.schemas.validation import to_field_errors

logger = logging.getLogger("nutritrack.middleware")


def make_serializable(obj):
    """Convert objects to JSON-serializable format"""
    if isinstance(obj, Decimal):
        return float(obj)
    if isinstance(obj, dict):
        return {k: make_serializable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [make_serializable(item) for item in obj]
    if isinstance(obj, Exception):
        return str(obj)
    return obj


def error_body(code: str, message: str, details=None) -> dict:
    error = {"code": code, "message": message}
    if details:
        error["details"] = make_serializable(details)
    return {
        "success": False,
        "error": error,
        "timestamp": datetime.now(timezone.utc).isoformat(),
    }


def _error_response(status_code: int, code: str, message: str, details=None):
    return JSONResponse(
        status_code=status_code, content=error_body(code, message, details)
    )


def integrity_error_message(exc: IntegrityError) -> str:
    """Friendly text for a storage constraint violation"""
    text = str(getattr(exc, "orig", exc)).lower()
    if "unique" in text or "duplicate" in text:
        return "A record with this value already exists."
    if "foreign key" in text or "not null" in text or "violates" in text:
        return "The record is still referenced by other data or references missing data."
    return "A database constraint failed."


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag each request with an id and log its outcome and duration.

    Responses carry ``X-Request-ID`` and ``X-Process-Time`` headers.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = uuid4().hex
        request.state.request_id = request_id
        client = request.client.host if request.client else "-"
        started = time.perf_counter()

        logger.debug(
            f"request_started id={request_id} method={request.method} "
            f"path={request.url.path} client={client}"
        )
        try:
            response = await call_next(request)
        except Exception:
            elapsed = time.perf_counter() - started
            logger.exception(
                f"request_failed id={request_id} method={request.method} "
                f"path={request.url.path} duration={elapsed:.4f}s"
            )
            raise

        elapsed = time.perf_counter() - started
        logger.info(
            f"request_completed id={request_id} method={request.method} "
            f"path={request.url.path} status={response.status_code} "
            f"duration={elapsed:.4f}s"
        )
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{elapsed:.4f}"
        return response


async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Malformed request bodies, path or query params (422)"""
    details = to_field_errors(exc.errors())
    logger.warning(f"request_invalid path={request.url.path} fields={len(details)}")
    return _error_response(422, "VALIDATION_ERROR", "Request validation failed", details)


async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    logger.warning(f"http_error path={request.url.path} status={exc.status_code}")
    return _error_response(exc.status_code, f"HTTP_{exc.status_code}", str(exc.detail))


async def app_error_handler(request: Request, exc: AppError):
    """Service errors carry their own status and code"""
    logger.warning(
        f"{exc.__class__.__name__} path={request.url.path} message={exc.message}"
    )
    return _error_response(exc.http_status, exc.code, exc.message, exc.details)


async def integrity_error_handler(request: Request, exc: IntegrityError):
    logger.warning(f"integrity_error path={request.url.path} orig={exc.orig}")
    return _error_response(
        status.HTTP_409_CONFLICT, "CONFLICT", integrity_error_message(exc)
    )


async def general_exception_handler(request: Request, exc: Exception):
    logger.exception(f"unexpected_error path={request.url.path}: {exc}")
    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred",
    )
