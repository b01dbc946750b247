# src/services/autocomplete_service/app/main.py
import logging
import time
from contextlib import asynccontextmanager
from uuid import uuid4

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse
from lot_common.config import CORS_HEADERS
from lot_common.db import async_engine, caller_async_engine
from lot_common.exceptions import CatalogReadError
from lot_common.health import create_health_router
from lot_common.logging_utils import (
    correlation_id_var,
    generate_correlation_id,
    request_id_var,
    setup_logging,
    trace_id_var,
)
from lot_common.monitoring import HTTP_REQUEST_LATENCY_SECONDS, HTTP_REQUESTS_TOTAL
from prometheus_fastapi_instrumentator import Instrumentator

from .routers import autocomplete

SERVICE_PREFIX = "ACS"
SERVICE_NAME = "autocomplete_service"
setup_logging()
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manages application startup and shutdown; pooled catalog connections
    are released on shutdown.
    """
    logger.info("Autocomplete Service starting up...")
    yield
    logger.info("Autocomplete Service shutting down, disposing catalog connection pools...")
    await async_engine.dispose()
    await caller_async_engine.dispose()
    logger.info("Autocomplete Service has shut down gracefully.")


app = FastAPI(
    title="Lot Catalog Autocomplete API",
    description=(
        "Autocomplete endpoints resolving partial text to textile qualities "
        "(by code or alias) and their colors (by label)."
    ),
    version="0.1.0",
    lifespan=lifespan,
)

# --- Prometheus Metrics ---
Instrumentator().instrument(app).expose(app)
logger.info("Prometheus metrics exposed at /metrics")


def custom_openapi():
    if app.openapi_schema:
        return app.openapi_schema
    schema = get_openapi(
        title=app.title,
        version=app.version,
        description=app.description,
        routes=app.routes,
    )
    metrics_response = (
        schema.get("paths", {}).get("/metrics", {}).get("get", {}).get("responses", {}).get("200")
    )
    if isinstance(metrics_response, dict):
        metrics_response["content"] = {"text/plain": {"schema": {"type": "string"}}}
    app.openapi_schema = schema
    return app.openapi_schema


app.openapi = custom_openapi


def _error_response(message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={"error": message},
        headers=CORS_HEADERS,
    )


@app.middleware("http")
async def add_cors_headers(request: Request, call_next):
    response = await call_next(request)
    response.headers.update(CORS_HEADERS)
    return response


# Correlation ID Middleware
@app.middleware("http")
async def add_correlation_id_middleware(request: Request, call_next):
    correlation_id = request.headers.get("X-Correlation-Id") or request.headers.get(
        "X-Correlation-ID"
    )
    if not correlation_id:
        correlation_id = generate_correlation_id(SERVICE_PREFIX)
    request_id = request.headers.get("X-Request-Id") or generate_correlation_id("REQ")
    trace_id = request.headers.get("X-Trace-Id") or uuid4().hex

    correlation_token = correlation_id_var.set(correlation_id)
    request_token = request_id_var.set(request_id)
    trace_token = trace_id_var.set(trace_id)
    try:
        response = await call_next(request)
    finally:
        correlation_id_var.reset(correlation_token)
        request_id_var.reset(request_token)
        trace_id_var.reset(trace_token)

    response.headers["X-Correlation-ID"] = correlation_id
    response.headers["X-Request-Id"] = request_id
    response.headers["X-Trace-Id"] = trace_id
    return response


@app.middleware("http")
async def emit_http_observability(request: Request, call_next):
    start = time.perf_counter()
    response = await call_next(request)
    elapsed = time.perf_counter() - start

    labels = {
        "service": SERVICE_NAME,
        "method": request.method,
        "path": request.url.path,
    }
    HTTP_REQUEST_LATENCY_SECONDS.labels(**labels).observe(elapsed)
    HTTP_REQUESTS_TOTAL.labels(status=str(response.status_code), **labels).inc()

    logger.info(
        "http_request_completed",
        extra={
            "method": request.method,
            "path": request.url.path,
            "status_code": response.status_code,
            "duration_ms": round(elapsed * 1000, 2),
        },
    )
    return response


@app.exception_handler(CatalogReadError)
async def catalog_read_error_handler(request: Request, exc: CatalogReadError):
    """Catalog failures surface to the client with the store's own message."""
    return _error_response(exc.message)


@app.exception_handler(RequestValidationError)
async def request_validation_error_handler(request: Request, exc: RequestValidationError):
    """
    Unparseable request bodies share the generic failure envelope; autocomplete
    clients only distinguish 'suggestions' from 'failed'.
    """
    details = "; ".join(
        f"{'.'.join(str(part) for part in error.get('loc', ()))}: {error.get('msg', '')}"
        for error in exc.errors()
    )
    logger.warning(f"Rejected autocomplete request {request.method} {request.url.path}: {details}")
    return _error_response(details or "Invalid request")


# Global Exception Handler
@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    """
    Catches any unhandled exception and returns the standard 500 envelope.
    Runs outside the middleware stack, so CORS headers are attached here.
    """
    correlation_id = (
        request.headers.get("X-Correlation-Id")
        or request.headers.get("X-Correlation-ID")
        or correlation_id_var.get()
    )
    logger.critical(
        f"Unhandled exception for request {request.method} {request.url}",
        exc_info=exc,
        extra={"correlation_id": correlation_id},
    )
    response = _error_response(str(exc) or exc.__class__.__name__)
    if correlation_id != "<not-set>":
        response.headers["X-Correlation-ID"] = correlation_id
    return response


# Readiness depends on the catalog database.
health_router = create_health_router("db")
app.include_router(health_router)

app.include_router(autocomplete.router)
