# This file defines liveness, readiness, and version endpoints for API operations.
# It exists so orchestration and monitoring systems can verify service health quickly.
# Readiness reports which upstream credentials are configured; only the model key is required.
# Version details here help clients track API and schema compatibility over time.

from __future__ import annotations

import subprocess
from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.dependencies import get_config
from bloomwatch.api.schema_versions import build_version_fields
from bloomwatch.api.schemas.health_schemas import HealthResponse, ReadinessResponse, VersionResponse
from bloomwatch.common.settings import Settings, get_settings

router = APIRouter(tags=["health"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
SettingsDep = Annotated[Settings, Depends(get_settings)]


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


def _git_commit() -> str | None:
    try:
        completed = subprocess.run(
            ["git", "rev-parse", "--short", "HEAD"],
            check=True,
            capture_output=True,
            text=True,
        )
    except (OSError, subprocess.CalledProcessError):
        return None
    return completed.stdout.strip() or None


@router.get("/health", response_model=HealthResponse)
def health(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        **build_version_fields(
            api_version_path=config.api_version_path,
            schema_version=config.schema_version,
        ),
        "request_id": request.state.request_id,
        "status": "ok",
        "environment": config.environment,
        "service_name": config.api_name,
        "timestamp": _utc_now(),
    }


@router.get("/ready", response_model=ReadinessResponse)
def ready(
    request: Request,
    config: ConfigDep,
    settings: SettingsDep,
) -> dict[str, object]:
    llm_configured = bool(settings.GEMINI_API_KEY)
    optional = {
        "GEMINI_API_KEY": settings.GEMINI_API_KEY,
        "NASA_API_KEY": settings.usable_nasa_api_key(),
        "CSC_API_KEY": settings.CSC_API_KEY,
        "FIREBASE_API_KEY": settings.FIREBASE_API_KEY,
        "FIREBASE_PROJECT_ID": settings.FIREBASE_PROJECT_ID,
    }

    return {
        **build_version_fields(
            api_version_path=config.api_version_path,
            schema_version=config.schema_version,
        ),
        "request_id": request.state.request_id,
        "llm_configured": llm_configured,
        "nasa_api_key_configured": settings.usable_nasa_api_key() is not None,
        "remote_geo_configured": bool(settings.CSC_API_KEY),
        "accounts_configured": bool(settings.FIREBASE_API_KEY and settings.FIREBASE_PROJECT_ID),
        "missing_settings": sorted(name for name, value in optional.items() if not value),
        "ready": llm_configured,
        "timestamp": _utc_now(),
    }


@router.get("/version", response_model=VersionResponse)
def version(
    request: Request,
    config: ConfigDep,
) -> dict[str, object]:
    return {
        **build_version_fields(
            api_version_path=config.api_version_path,
            schema_version=config.schema_version,
        ),
        "request_id": request.state.request_id,
        "api_version_path": config.api_version_path,
        "app_version": config.app_version,
        "git_commit": _git_commit(),
        "project": config.api_name,
        "version": config.app_version,
        "timestamp": _utc_now(),
    }
