"""
NutriTrack API entry point.

Builds the FastAPI application: request logging, CORS, error translation and
the catalog, meal and account routers. Run with ``python main.py`` or
``uvicorn main:app``.
"""

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.exceptions import RequestValidationError
from sqlalchemy.exc import IntegrityError
from starlette.exceptions import HTTPException as StarletteHTTPException
import logging
import uvicorn
from contextlib import asynccontextmanager
import anyio

from api.routes import auth, categories, serving_units, foods, meals, health
from api.middleware import (
    RequestLoggingMiddleware,
    validation_exception_handler,
    http_exception_handler,
    app_error_handler,
    integrity_error_handler,
    general_exception_handler,
)
from app.config import settings
from app.exceptions import AppError
from domain.models import init_database

logging.basicConfig(level=settings.log_level, format=settings.log_format)
_logger = logging.getLogger("nutritrack.main")

ROUTERS = (health, auth, categories, serving_units, foods, meals)

EXCEPTION_HANDLERS = (
    (RequestValidationError, validation_exception_handler),
    (StarletteHTTPException, http_exception_handler),
    (AppError, app_error_handler),
    (IntegrityError, integrity_error_handler),
    (Exception, general_exception_handler),
)


async def create_schema_with_retries() -> None:
    """Create tables, waiting for the database to accept connections.

    Raises the last error once ``db_init_attempts`` is exhausted.
    """
    attempts = settings.db_init_attempts
    for attempt in range(1, attempts + 1):
        try:
            await anyio.to_thread.run_sync(init_database)
        except Exception as exc:
            if attempt == attempts:
                _logger.error("Database initialization failed after %d attempts", attempt)
                raise
            _logger.warning(
                "Database init attempt %d/%d failed: %s", attempt, attempts, exc
            )
            await anyio.sleep(settings.db_init_delay_sec)
        else:
            _logger.info("Database initialization succeeded")
            return


@asynccontextmanager
async def lifespan(app: FastAPI):
    _logger.info(f"Starting NutriTrack in {settings.environment.value} mode")
    await create_schema_with_retries()
    yield
    _logger.info("Shutting down NutriTrack")


def create_app() -> FastAPI:
    docs_enabled = not settings.is_production()
    application = FastAPI(
        title=settings.api_title,
        version=settings.app_version,
        description=settings.api_description,
        lifespan=lifespan,
        debug=settings.debug,
        openapi_url=f"{settings.api_prefix}/openapi.json" if docs_enabled else None,
        docs_url=f"{settings.api_prefix}/docs" if docs_enabled else None,
        redoc_url=f"{settings.api_prefix}/redoc" if docs_enabled else None,
    )

    application.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins,
        allow_credentials=settings.cors_allow_credentials,
        allow_methods=settings.cors_allow_methods,
        allow_headers=settings.cors_allow_headers,
    )
    application.add_middleware(RequestLoggingMiddleware)

    for exc_class, handler in EXCEPTION_HANDLERS:
        application.add_exception_handler(exc_class, handler)

    for module in ROUTERS:
        application.include_router(module.router, prefix=settings.api_prefix)

    return application


app = create_app()


if __name__ == "__main__":
    uvicorn.run(
        "main:app",
        host=settings.host,
        port=settings.port,
        reload=settings.is_development(),
        log_level=settings.log_level.lower(),
    )
