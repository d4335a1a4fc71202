# This file defines the seed region endpoint used by the map and dashboard.

from __future__ import annotations

from dataclasses import asdict
from typing import Annotated

from fastapi import APIRouter, Depends, Request

from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.dependencies import get_config
from bloomwatch.api.response_envelope import build_object_envelope
from bloomwatch.api.schemas.region_schemas import RegionListResponseV1
from bloomwatch.reference.regions import REGIONS

router = APIRouter(tags=["regions"])
ConfigDep = Annotated[ApiConfig, Depends(get_config)]


@router.get("/regions", response_model=RegionListResponseV1)
def list_regions(request: Request, config: ConfigDep) -> dict[str, object]:
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=[asdict(region) for region in REGIONS],
    )
