"""
Admin Service - Main FastAPI Application

Administrative operations backend with:
- Health check for load balancers
- Placeholder admin endpoints (users, analytics, system)
- Environment-driven CORS policy
- Redis connection lifecycle
"""

import json
import time
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.datastructures import Headers
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

import structlog

from .core.config import (
    CORS_ALLOWED_HEADERS,
    CORS_ALLOWED_METHODS,
    CORS_MAX_AGE,
    Settings,
    get_settings,
)
from .core.cache import CacheManager
from .core.logging import configure_logging
from .models.responses import error_envelope

# Import routers
from .routers import admin, health

logger = structlog.get_logger(__name__)


def _elapsed_ms(started: float) -> float:
    return round((time.perf_counter() - started) * 1000, 3)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log each request once it finishes, tagged with the calling service."""

    async def dispatch(self, request: Request, call_next):
        started = time.perf_counter()
        request_logger = logger.bind(
            method=request.method,
            path=request.url.path,
            calling_service=request.headers.get("x-service-name"),
            client_ip=request.client.host if request.client else None,
        )

        try:
            response = await call_next(request)
        except Exception as e:
            request_logger.error(
                "request_failed", error=str(e), duration_ms=_elapsed_ms(started)
            )
            raise

        duration_ms = _elapsed_ms(started)
        request_logger.info(
            "request_completed",
            status_code=response.status_code,
            duration_ms=duration_ms,
        )

        # Seconds
        response.headers["X-Process-Time"] = f"{duration_ms / 1000:.6f}"
        return response


class UnhandledErrorMiddleware(BaseHTTPMiddleware):
    """Turn exceptions escaping a route into the 500 envelope.

    Must be the innermost middleware: CORS, pretty JSON and request logging
    wrap the responses it builds.
    """

    async def dispatch(self, request: Request, call_next):
        try:
            return await call_next(request)
        except Exception as exc:
            logger.error(
                "unhandled_error",
                error=str(exc),
                error_type=type(exc).__name__,
                path=request.url.path,
                method=request.method,
                exc_info=exc,
            )

            settings: Settings = request.app.state.settings
            return JSONResponse(
                status_code=500,
                content=error_envelope(
                    "INTERNAL_SERVER_ERROR",
                    "An unexpected error occurred",
                    details=str(exc) if settings.is_development else None,
                ),
            )


class EnvelopeCORSMiddleware(CORSMiddleware):
    """CORS middleware that answers rejected preflights with the error envelope."""

    def preflight_response(self, request_headers: Headers) -> Response:
        response = super().preflight_response(request_headers)
        if response.status_code < 400:
            return response

        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() not in ("content-length", "content-type")
        }
        return JSONResponse(
            status_code=response.status_code,
            content=error_envelope("CORS_REJECTED", response.body.decode("utf-8")),
            headers=headers,
        )

class PrettyJSONMiddleware(BaseHTTPMiddleware):
    """Indent JSON responses when the request asks for ``?pretty``."""

    def __init__(self, app, query_param: str = "pretty", indent: int = 2):
        super().__init__(app)
        self.query_param = query_param
        self.indent = indent

    async def dispatch(self, request: Request, call_next):
        response = await call_next(request)

        if self.query_param not in request.query_params:
            return response
        if not response.headers.get("content-type", "").startswith("application/json"):
            return response

        body = b"".join([chunk async for chunk in response.body_iterator])
        pretty_body = json.dumps(
            json.loads(body), indent=self.indent, ensure_ascii=False
        ).encode("utf-8")

        headers = {
            key: value
            for key, value in response.headers.items()
            if key.lower() != "content-length"
        }
        return Response(
            content=pretty_body,
            status_code=response.status_code,
            headers=headers,
            media_type="application/json",
        )


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager for startup and shutdown."""

    settings: Settings = app.state.settings
    cache = app.state.cache

    logger.info("connecting_to_redis")
    await cache.connect()

    logger.info(
        "admin_service_ready",
        port=settings.port,
        health_url=f"http://localhost:{settings.port}/health",
        admin_api=f"http://localhost:{settings.port}/api/admin/*",
        environment=settings.node_env,
    )

    try:
        yield
    finally:
        logger.info("admin_service_shutting_down")
        try:
            await cache.disconnect()
        except Exception as e:
            logger.error("redis_disconnect_failed", error=str(e), exc_info=True)
        logger.info("shutdown_complete")


def configure_cors(app: FastAPI, settings: Settings) -> None:
    """Any origin in development, the configured allow-list otherwise."""
    if settings.is_development:
        # A regex keeps the request origin reflected even with credentials on
        origin_options = {"allow_origins": [], "allow_origin_regex": ".*"}
    else:
        origin_options = {"allow_origins": settings.cors_origins}

    app.add_middleware(
        EnvelopeCORSMiddleware,
        allow_credentials=True,
        allow_methods=CORS_ALLOWED_METHODS,
        allow_headers=CORS_ALLOWED_HEADERS,
        max_age=CORS_MAX_AGE,
        **origin_options,
    )


def register_exception_handlers(app: FastAPI) -> None:
    """Convert HTTP exceptions into the standard error envelope."""

    @app.exception_handler(StarletteHTTPException)
    async def http_exception_handler(request: Request, exc: StarletteHTTPException):
        """Handle HTTP exceptions with structured logging."""

        logger.warning(
            "http_exception",
            status_code=exc.status_code,
            detail=exc.detail,
            path=request.url.path,
            method=request.method,
        )

        # Unknown methods on known paths are reported as missing routes
        if exc.status_code in (404, 405):
            return JSONResponse(
                status_code=404,
                content=error_envelope("NOT_FOUND", "Route not found"),
            )

        return JSONResponse(
            status_code=exc.status_code,
            content=error_envelope(f"HTTP_{exc.status_code}", str(exc.detail)),
            headers=getattr(exc, "headers", None),
        )


def create_app(
    settings: Optional[Settings] = None,
    cache: Optional[CacheManager] = None,
) -> FastAPI:
    """Build an application instance with its own settings and cache."""

    settings = settings or get_settings()
    configure_logging(settings)

    app = FastAPI(
        title="Admin Service API",
        description="Administrative operations backend",
        version=settings.app_version,
        docs_url="/docs" if settings.is_development else None,
        redoc_url="/redoc" if settings.is_development else None,
        openapi_url="/openapi.json" if settings.is_development else None,
        lifespan=lifespan,
    )
    app.state.settings = settings
    app.state.cache = cache if cache is not None else CacheManager(settings)

    # Added innermost first: error envelope, CORS, pretty JSON, then request logging
    app.add_middleware(UnhandledErrorMiddleware)
    configure_cors(app, settings)
    app.add_middleware(PrettyJSONMiddleware)
    app.add_middleware(RequestLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(health.router, tags=["Health & Monitoring"])
    app.include_router(admin.router, prefix="/api/admin", tags=["Administration"])

    return app


app = create_app()
