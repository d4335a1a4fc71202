# This file defines response schemas for health, readiness, and version endpoints.
# Readiness reports which upstream integrations have credentials configured.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel


class HealthResponse(BaseModel):
    api_version: str
    schema_version: str
    request_id: str
    status: str
    environment: str
    service_name: str
    timestamp: datetime


class ReadinessResponse(BaseModel):
    api_version: str
    schema_version: str
    request_id: str
    llm_configured: bool
    nasa_api_key_configured: bool
    remote_geo_configured: bool
    accounts_configured: bool
    missing_settings: list[str]
    ready: bool
    timestamp: datetime


class VersionResponse(BaseModel):
    api_version: str
    schema_version: str
    request_id: str
    api_version_path: str
    app_version: str
    git_commit: str | None = None
    project: str
    version: str
    timestamp: datetime
