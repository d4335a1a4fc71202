# This file defines climate, vegetation, and chart-summary endpoints.
# It exists so the Climate tab can load NASA POWER series for any point and ask for a summary.
# An empty vegetation series is reported as 404 so clients can show a no-data message.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from bloomwatch.accounts.identity_client import AuthenticatedUser
from bloomwatch.ai.schemas import ChartSummaryInput
from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.dependencies import get_climate_service, get_config, get_optional_user
from bloomwatch.api.response_envelope import build_object_envelope
from bloomwatch.api.schemas.climate_schemas import (
    ChartSummaryRequest,
    ChartSummaryResponseV1,
    ClimateSeriesResponseV1,
    LocationWindowRequest,
    VegetationSeriesResponseV1,
)
from bloomwatch.api.services.climate_service import ClimateService

router = APIRouter(prefix="/climate", tags=["climate"])
ClimateServiceDep = Annotated[ClimateService, Depends(get_climate_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
OptionalUserDep = Annotated[AuthenticatedUser | None, Depends(get_optional_user)]


@router.post("/data", response_model=ClimateSeriesResponseV1)
def climate_data(
    request: Request,
    body: LocationWindowRequest,
    service: ClimateServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    points = service.climate_data(
        lat=body.lat, lon=body.lon, start_date=body.start_date, end_date=body.end_date
    )
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=points,
    )


@router.post("/vegetation", response_model=VegetationSeriesResponseV1)
def vegetation_data(
    request: Request,
    body: LocationWindowRequest,
    service: ClimateServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    points = service.vegetation_data(
        lat=body.lat, lon=body.lon, start_date=body.start_date, end_date=body.end_date
    )
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=points,
    )


@router.post("/summary", response_model=ChartSummaryResponseV1)
def chart_summary(
    request: Request,
    body: ChartSummaryRequest,
    service: ClimateServiceDep,
    config: ConfigDep,
    user: OptionalUserDep,
) -> dict[str, object]:
    summary = service.summarize(
        ChartSummaryInput(
            location_name=body.location_name,
            climate_data=body.climate_data,
            vegetation_data=body.vegetation_data,
        ),
        user=user,
    )
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=summary,
    )
