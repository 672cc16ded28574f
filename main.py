"""
main.py
-------
FastAPI application factory and entry point.

Application lifecycle:
  1. App is created by create_application(); the Database and the
     geocoding client are built here and stored on app.state.
  2. lifespan context manager runs on startup / shutdown.
  3. Routers are registered.
  4. Global exception handlers map every failure onto the response
     envelope {success: false, error, timestamp}.

Run with:
    uvicorn main:app --reload              # development
    uvicorn main:app --workers 4           # production (no --reload)
"""

import time
from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.api.routes import admin, auth, geocode, public
from app.core.config import settings
from app.core.exceptions import RegistryError, StorageError
from app.core.logging import bind_request_context, configure_logging, get_logger
from app.db.session import Database
from app.schemas.common import failure
from app.services.geocoding_service import GeocodingService

logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator:
    """
    Startup / shutdown lifecycle hook.

    Startup:
      - Configure structured logging

    Shutdown:
      - Dispose the async engine (graceful connection pool drain)
    """
    configure_logging()
    logger.info(
        "Starting up",
        app=settings.APP_NAME,
        env=settings.APP_ENV,
        debug=settings.DEBUG,
    )
    if not settings.SECRET_KEY:
        logger.warning("SECRET_KEY is not set; authentication endpoints will fail")
    yield
    logger.info("Shutting down, disposing DB engine")
    await app.state.database.dispose()


def _describe_validation_error(exc: RequestValidationError) -> str:
    messages = []
    for error in exc.errors():
        location = ".".join(
            str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")
        )
        messages.append(f"{location}: {error.get('msg')}" if location else error.get("msg"))
    return "; ".join(messages) or "Invalid request"


def create_application(
    database: Optional[Database] = None,
    geocoder: Optional[GeocodingService] = None,
) -> FastAPI:
    app = FastAPI(
        title=settings.APP_NAME,
        description=(
            "Facility registry: public facility browsing, owner-managed "
            "facility records, JWT auth and address geocoding."
        ),
        version="1.0.0",
        docs_url="/docs",
        redoc_url="/redoc",
        openapi_url="/openapi.json",
        lifespan=lifespan,
    )
    app.state.database = database or Database.from_settings(settings)
    app.state.geocoder = geocoder or GeocodingService(settings)

    # ── CORS ─────────────────────────────────────────────────────────────────
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
        allow_headers=["*"],
    )

    # ── Request logging ──────────────────────────────────────────────────────
    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        bind_request_context(method=request.method, path=request.url.path)
        start = time.monotonic()
        response = await call_next(request)
        logger.info(
            "Request handled",
            status_code=response.status_code,
            duration_ms=round((time.monotonic() - start) * 1000, 1),
        )
        return response

    # ── Routers ───────────────────────────────────────────────────────────────
    app.include_router(public.router)
    app.include_router(admin.router)
    app.include_router(auth.router)
    app.include_router(geocode.router)

    # ── Global Exception Handlers ─────────────────────────────────────────────

    @app.exception_handler(RegistryError)
    async def registry_error_handler(request: Request, exc: RegistryError) -> JSONResponse:
        log = logger.error if exc.status_code >= 500 else logger.info
        log(
            "Request failed",
            error_type=type(exc).__name__,
            error=exc.message,
            status_code=exc.status_code,
        )
        return JSONResponse(
            status_code=exc.status_code,
            content=failure(exc.public_message),
        )

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        message = _describe_validation_error(exc)
        logger.info("Request validation failed", error=message)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content=failure(message),
        )

    @app.exception_handler(StarletteHTTPException)
    async def http_error_handler(
        request: Request, exc: StarletteHTTPException
    ) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=failure(str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )

    @app.exception_handler(SQLAlchemyError)
    async def storage_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
        logger.error("Database error", error=str(exc), exc_info=True)
        error = StorageError()
        return JSONResponse(
            status_code=error.status_code,
            content=failure(error.public_message),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(
        request: Request, exc: Exception
    ) -> JSONResponse:
        logger.error(
            "Unhandled exception",
            error=str(exc),
            exc_info=True,
        )
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content=failure("Internal server error"),
        )

    # ── Health Check ──────────────────────────────────────────────────────────

    @app.get("/health", tags=["Health"], summary="Service health check")
    async def health() -> dict:
        return {"status": "ok", "app": settings.APP_NAME, "env": settings.APP_ENV}

    return app


app = create_application()
