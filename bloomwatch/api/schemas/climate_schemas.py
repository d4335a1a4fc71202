# This file defines request and response schemas for climate, vegetation, and summary endpoints.
# Dates are optional; the NASA POWER client fills default windows when they are omitted.

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from bloomwatch.ai.schemas import ChartSummary
from bloomwatch.api.schemas.common import Coordinates, EnvelopeFields
from bloomwatch.sources.models import ClimateDataPoint, VegetationDataPoint


class LocationWindowRequest(Coordinates):
    start_date: date | None = None
    end_date: date | None = None


class ChartSummaryRequest(BaseModel):
    location_name: str = Field(min_length=1)
    climate_data: list[ClimateDataPoint]
    vegetation_data: list[VegetationDataPoint]


class ClimateSeriesResponseV1(EnvelopeFields):
    data: list[ClimateDataPoint]


class VegetationSeriesResponseV1(EnvelopeFields):
    data: list[VegetationDataPoint]


class ChartSummaryResponseV1(EnvelopeFields):
    data: ChartSummary
