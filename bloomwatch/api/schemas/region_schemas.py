# This file defines the schema for seed bloom regions.

from __future__ import annotations

from pydantic import BaseModel

from bloomwatch.api.schemas.common import EnvelopeFields
from bloomwatch.sources.models import VegetationReading


class RegionV1(BaseModel):
    name: str
    lat: float
    lon: float
    ndvi: list[VegetationReading]
    latest_bloom: str
    predicted_next_bloom: str | None = None


class RegionListResponseV1(EnvelopeFields):
    data: list[RegionV1]
