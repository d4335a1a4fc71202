# This file defines the bloom analysis endpoint behind the Insights tab.
# The client sends the vegetation series it already charted, so no NASA POWER call is made here.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from bloomwatch.accounts.identity_client import AuthenticatedUser
from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.dependencies import get_config, get_optional_user, get_prediction_service
from bloomwatch.api.response_envelope import build_object_envelope
from bloomwatch.api.schemas.prediction_schemas import InsightsAnalysisRequest, PredictionResponseV1
from bloomwatch.api.services.prediction_service import PredictionService

router = APIRouter(prefix="/insights", tags=["insights"])
PredictionServiceDep = Annotated[PredictionService, Depends(get_prediction_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
OptionalUserDep = Annotated[AuthenticatedUser | None, Depends(get_optional_user)]


@router.post("/analysis", response_model=PredictionResponseV1)
def bloom_analysis(
    request: Request,
    body: InsightsAnalysisRequest,
    service: PredictionServiceDep,
    config: ConfigDep,
    user: OptionalUserDep,
) -> dict[str, object]:
    result = service.insights_analysis(
        city=body.city,
        state=body.state,
        country=body.country,
        vegetation_data=body.vegetation_data,
        user=user,
    )
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=result,
    )
