# This file builds the FastAPI application and registers all API routers.
# It exists so startup behavior, middleware, and error handling are configured in one place.
# The app adds request IDs, timing headers, Prometheus metrics, and optional request logging.
# Keeping bootstrap logic centralized makes deployment and testing more predictable.

from __future__ import annotations

import logging
import time
import uuid

from fastapi import FastAPI, Request, Response
from fastapi.middleware.cors import CORSMiddleware
from prometheus_client import CONTENT_TYPE_LATEST, Counter, Gauge, Histogram, generate_latest
from starlette.middleware.base import RequestResponseEndpoint

from bloomwatch.api.api_config import get_api_config
from bloomwatch.api.error_handlers import register_error_handlers
from bloomwatch.api.routers.accounts import router as accounts_router
from bloomwatch.api.routers.climate import router as climate_router
from bloomwatch.api.routers.dashboard import router as dashboard_router
from bloomwatch.api.routers.geo import router as geo_router
from bloomwatch.api.routers.health import router as health_router
from bloomwatch.api.routers.insights import router as insights_router
from bloomwatch.api.routers.map import router as map_router
from bloomwatch.api.routers.regions import router as regions_router
from bloomwatch.common.logging import configure_logging
from bloomwatch.common.settings import get_settings

logger = logging.getLogger("bloomwatch.api.requests")

API_HTTP_REQUESTS_TOTAL = Counter(
    "api_http_requests_total",
    "Total number of HTTP requests processed by the API.",
    ["method", "path", "status_code"],
)
API_HTTP_REQUEST_DURATION_SECONDS = Histogram(
    "api_http_request_duration_seconds",
    "API request duration in seconds.",
    ["method", "path"],
    buckets=(0.005, 0.01, 0.025, 0.05, 0.1, 0.25, 0.5, 1, 2.5, 5, 10, 30, 60),
)
API_HTTP_INFLIGHT_REQUESTS = Gauge(
    "api_http_inflight_requests",
    "Number of API requests currently being processed.",
    ["method", "path"],
)


def create_app() -> FastAPI:
    """Create configured FastAPI application instance."""

    configure_logging()
    config = get_api_config()

    app = FastAPI(
        title=config.api_name,
        description=(
            "Versioned API for vegetation and climate series from NASA POWER, generative bloom "
            "predictions and analyses, and per-user activity history."
        ),
        version=config.app_version,
        openapi_tags=[
            {"name": "health", "description": "Service liveness, readiness, and version metadata."},
            {"name": "geo", "description": "Country, state, and city catalogs."},
            {"name": "regions", "description": "Seed bloom regions."},
            {"name": "climate", "description": "Climate and vegetation series with summaries."},
            {"name": "map", "description": "Per-city analysis and bloom prediction."},
            {"name": "insights", "description": "Bloom analysis from a vegetation series."},
            {"name": "dashboard", "description": "Batch bloom predictions."},
            {"name": "accounts", "description": "Sign-up, login, history, and contact."},
        ],
    )

    if config.allowed_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=config.allowed_origins,
            allow_credentials=True,
            allow_methods=["*"],
            allow_headers=["*"],
        )

    @app.middleware("http")
    async def request_context_middleware(
        request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        method_label = request.method
        path_label = request.url.path
        started = time.perf_counter()
        status_code = 500
        API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).inc()
        try:
            response: Response = await call_next(request)
            status_code = response.status_code
            duration_ms = (time.perf_counter() - started) * 1000.0

            response.headers["x-request-id"] = request_id
            response.headers["x-response-time-ms"] = f"{duration_ms:.2f}"

            if config.enable_request_logging:
                logger.info(
                    "%s %s -> %s in %.2f ms [%s]",
                    request.method,
                    request.url.path,
                    response.status_code,
                    duration_ms,
                    request_id,
                )

            return response
        finally:
            duration_s = time.perf_counter() - started
            API_HTTP_REQUESTS_TOTAL.labels(
                method=method_label,
                path=path_label,
                status_code=str(status_code),
            ).inc()
            API_HTTP_REQUEST_DURATION_SECONDS.labels(
                method=method_label,
                path=path_label,
            ).observe(duration_s)
            API_HTTP_INFLIGHT_REQUESTS.labels(method=method_label, path=path_label).dec()

    @app.get("/metrics", include_in_schema=False)
    def metrics() -> Response:
        return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)

    @app.on_event("startup")
    def startup_checks() -> None:
        try:
            settings = get_settings()
        except RuntimeError as exc:
            logger.error("Settings could not be loaded: %s", exc)
            app.state.llm_configured_at_startup = False
            return
        app.state.llm_configured_at_startup = bool(settings.GEMINI_API_KEY)
        if not settings.GEMINI_API_KEY:
            logger.warning("GEMINI_API_KEY is not set; prediction endpoints will return 503.")

    register_error_handlers(app)

    app.include_router(health_router)
    app.include_router(geo_router, prefix=config.api_version_path)
    app.include_router(regions_router, prefix=config.api_version_path)
    app.include_router(climate_router, prefix=config.api_version_path)
    app.include_router(map_router, prefix=config.api_version_path)
    app.include_router(insights_router, prefix=config.api_version_path)
    app.include_router(dashboard_router, prefix=config.api_version_path)
    app.include_router(accounts_router, prefix=config.api_version_path)

    return app


app = create_app()
