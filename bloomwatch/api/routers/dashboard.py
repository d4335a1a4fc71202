# This file defines the batch prediction endpoint for the dashboard display list.
# Results come back in request order, one per region, and a failed region never fails the batch.
# Regions without a known bloom date assume January 1 of the current year.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from bloomwatch.accounts.identity_client import AuthenticatedUser
from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.dependencies import get_config, get_optional_user, get_prediction_service
from bloomwatch.api.response_envelope import build_object_envelope
from bloomwatch.api.schemas.prediction_schemas import (
    BatchPredictionRequest,
    BatchPredictionResponseV1,
)
from bloomwatch.api.services.prediction_service import PredictionService

router = APIRouter(prefix="/dashboard", tags=["dashboard"])
PredictionServiceDep = Annotated[PredictionService, Depends(get_prediction_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
OptionalUserDep = Annotated[AuthenticatedUser | None, Depends(get_optional_user)]


@router.post("/predictions", response_model=BatchPredictionResponseV1)
def batch_predictions(
    request: Request,
    body: BatchPredictionRequest,
    service: PredictionServiceDep,
    config: ConfigDep,
    user: OptionalUserDep,
) -> dict[str, object]:
    results = service.batch_predictions(
        [(region.name, region.lat, region.lon, region.latest_bloom) for region in body.regions],
        user=user,
    )
    failed = [region.name for region, result in zip(body.regions, results) if not result.success]
    warnings = [f"Prediction failed for: {', '.join(failed)}"] if failed else None
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=results,
        warnings=warnings,
    )
