# This file defines map endpoints for per-city analysis and bloom prediction.
# A city prediction without a known bloom date assumes April 1 of the current year.
# Both endpoints record history for signed-in users.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from bloomwatch.accounts.identity_client import AuthenticatedUser
from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.dependencies import get_config, get_optional_user, get_prediction_service
from bloomwatch.api.response_envelope import build_object_envelope
from bloomwatch.api.schemas.prediction_schemas import (
    CityAnalysisRequest,
    CityAnalysisResponseV1,
    CityPredictionRequest,
    PredictionResponseV1,
)
from bloomwatch.api.services.prediction_service import PredictionService

router = APIRouter(prefix="/map", tags=["map"])
PredictionServiceDep = Annotated[PredictionService, Depends(get_prediction_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
OptionalUserDep = Annotated[AuthenticatedUser | None, Depends(get_optional_user)]


@router.post("/city/analysis", response_model=CityAnalysisResponseV1)
def city_analysis(
    request: Request,
    body: CityAnalysisRequest,
    service: PredictionServiceDep,
    config: ConfigDep,
    user: OptionalUserDep,
) -> dict[str, object]:
    analysis = service.city_analysis(
        city=body.city,
        lat=body.lat,
        lon=body.lon,
        start_date=body.start_date,
        end_date=body.end_date,
        user=user,
    )
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=analysis,
    )


@router.post("/city/prediction", response_model=PredictionResponseV1)
def city_prediction(
    request: Request,
    body: CityPredictionRequest,
    service: PredictionServiceDep,
    config: ConfigDep,
    user: OptionalUserDep,
) -> dict[str, object]:
    result = service.city_prediction(
        city=body.city,
        lat=body.lat,
        lon=body.lon,
        latest_bloom=body.latest_bloom,
        user=user,
    )
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=result,
    )
