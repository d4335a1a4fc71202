# This file defines runtime configuration for the BloomWatch dashboard.
# It exists so API location, timeouts, and cache policies can be tuned through environment variables.
# Keeping these values centralized avoids hard-coded behavior scattered across the app.

from __future__ import annotations

import os
from dataclasses import dataclass

from dotenv import load_dotenv


@dataclass(frozen=True)
class DashboardConfig:
    api_base_url: str
    request_timeout_seconds: int
    prediction_timeout_seconds: int
    catalog_cache_ttl_seconds: int
    series_cache_ttl_seconds: int
    max_compare_cities: int


def load_dashboard_config(*, load_env: bool = True) -> DashboardConfig:
    if load_env:
        load_dotenv()

    api_base_url = os.getenv("DASHBOARD_API_BASE_URL")
    if not api_base_url:
        api_host = os.getenv("API_HOST", "localhost")
        api_port = os.getenv("API_PORT", "8000")
        api_base_url = f"http://{api_host}:{api_port}/api/v1"

    return DashboardConfig(
        api_base_url=api_base_url.rstrip("/"),
        request_timeout_seconds=int(os.getenv("DASHBOARD_REQUEST_TIMEOUT_SECONDS", "30")),
        prediction_timeout_seconds=int(os.getenv("DASHBOARD_PREDICTION_TIMEOUT_SECONDS", "180")),
        catalog_cache_ttl_seconds=int(os.getenv("DASHBOARD_CATALOG_CACHE_TTL_SECONDS", "3600")),
        series_cache_ttl_seconds=int(os.getenv("DASHBOARD_SERIES_CACHE_TTL_SECONDS", "900")),
        max_compare_cities=int(os.getenv("DASHBOARD_MAX_COMPARE_CITIES", "4")),
    )
