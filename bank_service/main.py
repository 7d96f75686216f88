"""
Bank Service

A FastAPI service exposing CRUD over users and a simple single-account
ledger. Deposits and withdrawals are stored as transactions; the balance is
never stored but derived from the whole history on each request.

Routes:
    GET    /                 greeting
    GET    /users            list users
    GET    /users/{id}       fetch one user
    POST   /users            create a user
    PUT    /users/{id}       rename a user
    DELETE /users/{id}       delete a user
    GET    /balance          current balance
    POST   /deposit          record a deposit
    POST   /withdraw         record a withdrawal if funds allow
    GET    /transactions     history, newest first
    DELETE /transactions     clear the history
"""
import time
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse, PlainTextResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest
from sqlalchemy.exc import SQLAlchemyError
from starlette.responses import Response

from bank_service import __version__, metrics
from bank_service.api import router
from bank_service.config import Settings, settings as default_settings
from bank_service.database import Database
from bank_service.errors import BankServiceError
from bank_service.logging import (
    clear_request_context,
    configure_logging,
    generate_request_id,
    get_logger,
    set_request_context,
)

# Configure structured logging
configure_logging(default_settings.log_level)
logger = get_logger(__name__)

GREETING = "Welcome to the backend! 🚀"


def create_app(settings: Optional[Settings] = None) -> FastAPI:
    """Build the application around an explicit settings object."""
    settings = settings or default_settings

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan manager: owns the record store handle."""
        logger.info("service_starting", service_name=settings.service_name)

        database = Database(settings.database_url)
        database.connect()
        app.state.database = database

        logger.info("service_started", service_name=settings.service_name)

        yield

        logger.info("service_stopping", service_name=settings.service_name)
        database.dispose()

    app = FastAPI(
        title="Bank Service",
        description="User CRUD and a derived-balance transaction ledger",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.settings = settings

    @app.middleware("http")
    async def request_logging_middleware(request: Request, call_next):
        """
        Middleware for request tracing, logging, and metrics.

        Sets up request context with:
        - request_id: Unique identifier for tracing
        - Timing for duration_ms calculation
        - Prometheus metrics collection
        """
        method = request.method
        path = request.url.path

        # Skip logging/metrics for health and metrics endpoints
        if path in ("/health", "/metrics"):
            return await call_next(request)

        request_id = request.headers.get("X-Request-ID") or generate_request_id()
        set_request_context(request_id)
        request.state.request_id = request_id

        start_time = time.perf_counter()
        logger.info("request_received", method=method, path=path)

        try:
            response = await call_next(request)

            duration = time.perf_counter() - start_time
            logger.info(
                "request_completed",
                method=method,
                path=path,
                status_code=response.status_code,
                duration_ms=round(duration * 1000, 2),
            )
            metrics.record_http_request(method, _endpoint_label(request), response.status_code, duration)

            response.headers["X-Request-ID"] = request_id
            return response

        except Exception as e:
            duration = time.perf_counter() - start_time
            logger.error(
                "request_failed",
                method=method,
                path=path,
                duration_ms=round(duration * 1000, 2),
                error=str(e),
            )
            metrics.record_http_request(method, _endpoint_label(request), 500, duration)
            raise

        finally:
            clear_request_context()

    @app.exception_handler(BankServiceError)
    async def bank_service_error_handler(request: Request, exc: BankServiceError):
        """Render domain errors as {"error": message}."""
        request_id = getattr(request.state, "request_id", "unknown")
        return JSONResponse(
            status_code=exc.status_code,
            content={"error": exc.message},
            headers={"X-Request-ID": request_id},
        )

    @app.exception_handler(SQLAlchemyError)
    async def store_error_handler(request: Request, exc: SQLAlchemyError):
        """Store faults are not retried; the request fails with a generic 500."""
        request_id = getattr(request.state, "request_id", "unknown")

        logger.error("store_error", error=str(exc), error_type=type(exc).__name__)

        return JSONResponse(
            status_code=500,
            content={"error": "Internal server error"},
            headers={"X-Request-ID": request_id},
        )

    @app.get("/", response_class=PlainTextResponse)
    async def root():
        return GREETING

    app.include_router(router)

    @app.get("/health")
    async def health_check():
        """Health check endpoint for container orchestration."""
        return {"status": "ok", "service": settings.service_name}

    @app.get("/metrics")
    async def prometheus_metrics():
        """Prometheus metrics endpoint."""
        return Response(
            content=generate_latest(),
            media_type=CONTENT_TYPE_LATEST
        )

    return app


def _endpoint_label(request: Request) -> str:
    """Label metrics by route template (/users/{user_id}), falling back to the raw path."""
    route = request.scope.get("route")
    return getattr(route, "path", None) or request.url.path


app = create_app()


def run() -> None:
    """Serve the module-level app with uvicorn."""
    logger.info(
        "server_listening",
        url=f"http://localhost:{default_settings.port}",
        host=default_settings.host,
        port=default_settings.port,
    )
    uvicorn.run(app, host=default_settings.host, port=default_settings.port)


if __name__ == "__main__":
    run()
