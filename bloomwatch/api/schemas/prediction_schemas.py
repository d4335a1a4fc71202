# This file defines schemas for map, insights, and dashboard prediction endpoints.
# Prediction payloads reuse the model-output contract so clients see exactly what the model returned.

from __future__ import annotations

from datetime import date

from pydantic import BaseModel, Field

from bloomwatch.ai.schemas import PredictionResult, SinglePredictionResult
from bloomwatch.api.schemas.common import Coordinates, EnvelopeFields
from bloomwatch.sources.models import ClimateDataPoint, VegetationDataPoint


class CityAnalysisRequest(Coordinates):
    city: str = Field(min_length=1)
    start_date: date | None = None
    end_date: date | None = None


class CityPredictionRequest(Coordinates):
    city: str = Field(min_length=1)
    latest_bloom: str | None = None


class InsightsAnalysisRequest(BaseModel):
    city: str = Field(min_length=1)
    state: str | None = None
    country: str | None = None
    vegetation_data: list[VegetationDataPoint] = Field(min_length=1)


class DashboardRegionRequest(Coordinates):
    name: str = Field(min_length=1)
    latest_bloom: str | None = None


class BatchPredictionRequest(BaseModel):
    regions: list[DashboardRegionRequest]


class CityAnalysisV1(BaseModel):
    location_name: str
    climate_data: list[ClimateDataPoint]
    vegetation_data: list[VegetationDataPoint]


class CityAnalysisResponseV1(EnvelopeFields):
    data: CityAnalysisV1


class PredictionResponseV1(EnvelopeFields):
    data: PredictionResult


class BatchPredictionResponseV1(EnvelopeFields):
    data: list[SinglePredictionResult]
