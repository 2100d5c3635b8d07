import logging
import traceback
from contextlib import asynccontextmanager
from datetime import datetime
from typing import Any, Optional

from fastapi import FastAPI, Request, status
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from pydantic import BaseModel
from starlette.middleware.base import BaseHTTPMiddleware
from prometheus_fastapi_instrumentator import Instrumentator

from app.core.config import settings
from app.core.exceptions import (
    ConcurrentModificationError,
    EmployeeNotFoundError,
    EmployeeRegistryError,
    RecordStoreError,
    UniqueConstraintViolation,
)
from app.core.logging_config import SERVICE_NAME, setup_logging, RequestLoggingMiddleware
from app.core.version import APP_VERSION, get_full_version
from app.api.v1 import api_router
from app.db.session import Database

# Configure structured logging (JSON in production, colored in development)
setup_logging()
logger = logging.getLogger("employee_registry")


class SecurityHeadersMiddleware(BaseHTTPMiddleware):
    """
    Middleware to add security headers to all responses.
    """
    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)
        response.headers["X-Content-Type-Options"] = "nosniff"
        response.headers["X-Frame-Options"] = "DENY"
        response.headers["Referrer-Policy"] = "strict-origin-when-cross-origin"
        return response


class ErrorResponse(BaseModel):
    """Standardized error response format."""
    error: str
    detail: str | None = None
    context: dict[str, Any] | None = None
    timestamp: str
    path: str | None = None


class HealthResponse(BaseModel):
    """Health check response format."""
    status: str
    service: str
    version: str
    environment: str
    checks: dict[str, bool]


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Open the database on startup and release it on shutdown.

    A database already placed on ``app.state`` (for example by a test) is used
    as-is and left open on exit.
    """
    database: Optional[Database] = getattr(app.state, "database", None)
    owns_database = database is None
    if owns_database:
        database = Database.from_settings(settings)
        database.connect()
        app.state.database = database

    if settings.DB_CREATE_TABLES:
        await database.create_all()
        logger.info("Database tables ensured")

    logger.info("Application startup complete (version %s)", get_full_version())
    try:
        yield
    finally:
        logger.info("Application shutting down...")
        if owns_database:
            await database.dispose()
            app.state.database = None


app = FastAPI(
    title=f"{settings.PROJECT_NAME} API",
    description="CRUD, soft deletion, search and department filtering for employee records",
    version=APP_VERSION,
    docs_url="/docs" if settings.DEBUG else None,  # Disable docs in production
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

cors_origins = settings.ALLOWED_ORIGINS


def get_cors_headers(request: Request) -> dict:
    """Get CORS headers based on request origin."""
    origin = request.headers.get("origin", "")
    if origin in cors_origins:
        return {
            "Access-Control-Allow-Origin": origin,
            "Access-Control-Allow-Credentials": "true",
        }
    return {}


def _error_response(request: Request, status_code: int, exc: EmployeeRegistryError) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=ErrorResponse(
            error=exc.__class__.__name__,
            detail=exc.message,
            context=exc.details or None,
            timestamp=datetime.utcnow().isoformat(),
            path=request.url.path,
        ).model_dump(),
    )


@app.exception_handler(EmployeeNotFoundError)
async def employee_not_found_handler(request: Request, exc: EmployeeNotFoundError) -> JSONResponse:
    return _error_response(request, status.HTTP_404_NOT_FOUND, exc)


@app.exception_handler(UniqueConstraintViolation)
async def unique_violation_handler(request: Request, exc: UniqueConstraintViolation) -> JSONResponse:
    return _error_response(request, status.HTTP_409_CONFLICT, exc)


@app.exception_handler(ConcurrentModificationError)
async def concurrent_modification_handler(request: Request, exc: ConcurrentModificationError) -> JSONResponse:
    return _error_response(request, status.HTTP_409_CONFLICT, exc)


@app.exception_handler(RecordStoreError)
async def record_store_error_handler(request: Request, exc: RecordStoreError) -> JSONResponse:
    logger.error("Record store failure on %s %s: %s", request.method, request.url.path, exc.message)
    if settings.ENVIRONMENT.lower() == "production":
        exc = RecordStoreError(exc.operation)
    return _error_response(request, status.HTTP_503_SERVICE_UNAVAILABLE, exc)


# Global exception handler - catches all unhandled exceptions
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Global exception handler that returns consistent error responses.
    In production, sensitive details are hidden to prevent information leakage.
    """
    error_id = datetime.utcnow().strftime("%Y%m%d%H%M%S%f")

    logger.error(
        f"Unhandled exception [{error_id}]: {exc}\n"
        f"Path: {request.url.path}\n"
        f"Method: {request.method}\n"
        f"Traceback: {traceback.format_exc()}"
    )

    headers = get_cors_headers(request)

    if settings.ENVIRONMENT.lower() == "production":
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=ErrorResponse(
                error="Internal server error",
                detail=f"An unexpected error occurred. Reference ID: {error_id}",
                timestamp=datetime.utcnow().isoformat(),
                path=request.url.path,
            ).model_dump(),
            headers=headers,
        )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content=ErrorResponse(
            error=exc.__class__.__name__,
            detail=str(exc),
            timestamp=datetime.utcnow().isoformat(),
            path=request.url.path,
        ).model_dump(),
        headers=headers,
    )


# CORS Middleware (env-driven)
# When credentials are needed, we must specify exact origins (not "*")
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_middleware(SecurityHeadersMiddleware)

# Request logging middleware with timing and request IDs
app.add_middleware(RequestLoggingMiddleware)

app.include_router(api_router, prefix=settings.API_V1_STR)

# Prometheus metrics instrumentation
# Exposes /metrics endpoint for Prometheus scraping
instrumentator = Instrumentator(
    should_group_status_codes=False,
    should_ignore_untemplated=True,
    should_instrument_requests_inprogress=True,
    excluded_handlers=["/health", "/metrics"],
    inprogress_name="employee_registry_inprogress_requests",
    inprogress_labels=True,
)
instrumentator.instrument(app).expose(app, include_in_schema=False)


@app.get("/health", response_model=HealthResponse)
async def health_check(request: Request):
    """
    Health check endpoint. Returns 503 when the database is unreachable.
    """
    database: Optional[Database] = getattr(request.app.state, "database", None)
    db_healthy = database is not None and await database.check_connection()

    checks = {"database": db_healthy}
    response = HealthResponse(
        status="healthy" if db_healthy else "unhealthy",
        service=SERVICE_NAME,
        version=APP_VERSION,
        environment=settings.ENVIRONMENT,
        checks=checks,
    )

    if not db_healthy:
        logger.warning(f"Health check failed: {checks}")
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content=response.model_dump(),
        )

    return response


@app.get("/")
async def root():
    return {"message": f"Welcome to the {settings.PROJECT_NAME} API"}
