import logging
import uuid
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import DBAPIError, OperationalError
from sqlalchemy.ext.asyncio import AsyncEngine

from lifehacking.api import favorites
from lifehacking.cache import close_redis
from lifehacking.db.connection import dispose_engine, get_database_url, get_engine
from lifehacking.db.models import Base
from lifehacking.exceptions import AppError
from lifehacking.schemas.error import ErrorType, ValidationErrorDetail
from lifehacking.settings import get_settings
from lifehacking.utils.error_responses import (
    build_app_error_response,
    build_error_response,
    build_validation_error_response,
)
from lifehacking.utils.request_context import get_request_id, set_request_id

settings = get_settings()

logging.basicConfig(
    level=settings.log_level_numeric,
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
)
logger = logging.getLogger(__name__)


def validate_environment() -> None:
    """Log warnings for optional configuration that is not set."""
    warnings = settings.optional_config_warnings()
    if warnings:
        logger.warning("=" * 60)
        logger.warning("Environment Configuration Warnings:")
        for warning in warnings:
            logger.warning(f"  • {warning}")
        logger.warning("=" * 60)


def _sanitize_database_url(url: str) -> str:
    """Hide the password of ``url`` for logging."""
    if "://" not in url:
        return url
    scheme, rest = url.split("://", 1)
    if "@" not in rest:
        return url
    auth, host_db = rest.split("@", 1)
    if ":" in auth:
        user, _ = auth.split(":", 1)
        return f"{scheme}://{user}:***@{host_db}"
    return f"{scheme}://{auth}@{host_db}"


async def _prepare_sqlite(engine: AsyncEngine, url: str) -> None:
    """Create the local database file and the ``documents`` table if missing."""
    _, _, path = url.partition(":///")
    if path and path != ":memory:":
        Path(path).parent.mkdir(parents=True, exist_ok=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.create_all)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Lifespan context manager for startup and shutdown events."""
    validate_environment()

    db_url = get_database_url()
    logger.info("=" * 60)
    logger.info("Lifehacking Favorites API - Database Preflight Check")
    logger.info("=" * 60)
    logger.info(f"Database Type: {settings.database_type.upper()}")
    logger.info(f"Database URL: {_sanitize_database_url(db_url)}")
    logger.info(f"Collection namespace: {settings.collection_namespace}")

    if settings.database_type == "sqlite":
        logger.info("SQLite mode - creating the documents table if needed")
        await _prepare_sqlite(get_engine(), db_url)
    else:
        logger.info("PostgreSQL mode - using Alembic migrations")
    logger.info("=" * 60)

    yield

    logger.info("Shutting down Lifehacking Favorites API")
    await close_redis()
    await dispose_engine()


app = FastAPI(
    title="Lifehacking Favorites API",
    version="0.1.0",
    description="Bookmark, merge and search favorite tips from the Lifehacking catalog.",
    lifespan=lifespan,
    redirect_slashes=False,
)


def _default_origins() -> list[str]:
    ports = list(range(3000, 3011)) + [5173]
    origins = []
    for host in ("localhost", "127.0.0.1"):
        origins.extend([f"http://{host}:{port}" for port in ports])
    return origins


def _combine_origins(*origin_groups: list[str]) -> list[str]:
    """Merge origins preserving order and removing duplicates."""
    return list(dict.fromkeys(origin for group in origin_groups for origin in group))


allow_origins = _combine_origins(_default_origins(), settings.cors_allow_origins)
logger.info("Configured CORS allow_origins: %s", ", ".join(allow_origins))

app.add_middleware(
    CORSMiddleware,
    allow_origins=allow_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
    expose_headers=["X-Request-ID"],
)


@app.middleware("http")
async def add_request_id(request: Request, call_next):
    """Tag each request with an ``X-Request-ID``, reusing the caller's when given."""
    request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
    set_request_id(request_id)
    response = await call_next(request)
    response.headers["X-Request-ID"] = request_id
    return response


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle FastAPI request validation errors."""
    errors = [
        ValidationErrorDetail(
            field=".".join(str(loc) for loc in error["loc"]),
            message=error["msg"],
            value=error.get("input"),
        )
        for error in exc.errors()
    ]

    logger.warning(
        "Validation error for request %s to %s: %s errors",
        get_request_id(),
        request.url.path,
        len(errors),
    )

    error_response = build_validation_error_response(
        message="Request validation failed",
        detail=f"{len(errors)} validation error(s)",
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        path=str(request.url.path),
        errors=errors,
    )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(AppError)
async def app_exception_handler(request: Request, exc: AppError):
    """Translate use-case failures into structured error payloads."""
    if exc.error_type is ErrorType.INFRASTRUCTURE_ERROR:
        logger.error(
            "Infrastructure failure for request %s to %s: %s",
            get_request_id(),
            request.url.path,
            exc.message,
        )
    else:
        logger.info(
            "Request %s to %s failed: %s",
            get_request_id(),
            request.url.path,
            exc.message,
        )

    error_response = build_app_error_response(exc, path=str(request.url.path))
    return JSONResponse(
        status_code=error_response.status_code,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(OperationalError)
@app.exception_handler(DBAPIError)
async def database_connection_exception_handler(request: Request, exc: Exception):
    """Handle database connection errors."""
    logger.error(
        "Database connection error for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        str(exc),
    )

    error_response = build_error_response(
        error_type=ErrorType.DATABASE_ERROR,
        message="Database connection failed",
        detail="Unable to connect to the database. Please try again later.",
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        path=str(request.url.path),
        retry_after=5,
    )

    return JSONResponse(
        status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
        content=error_response.model_dump(mode="json"),
    )


@app.exception_handler(Exception)
async def generic_exception_handler(request: Request, exc: Exception):
    """Handle all other unhandled exceptions."""
    logger.exception(
        "Unhandled exception for request %s to %s: %s",
        get_request_id(),
        request.url.path,
        type(exc).__name__,
    )

    error_response = build_error_response(
        error_type=ErrorType.INTERNAL_ERROR,
        message="Internal server error",
        detail=f"An unexpected error occurred: {type(exc).__name__}",
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        path=str(request.url.path),
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=error_response.model_dump(mode="json"),
    )


@app.get("/health", tags=["system"])
async def healthcheck() -> dict[str, str]:
    """Simple health endpoint for readiness checks."""
    return {"status": "ok"}


app.include_router(favorites.router, prefix="/api/me/favorites", tags=["favorites"])
