# This file defines the inputs and outputs of the generative-model flows.
# The output models double as the JSON contract the model is asked to answer with.
# Validation is shape-only: the model's text is never checked for botanical accuracy.

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, field_validator

from bloomwatch.sources.models import ClimateDataPoint, VegetationDataPoint, VegetationReading


def _join_text(value: Any) -> Any:
    if isinstance(value, list):
        return ", ".join(str(item) for item in value)
    return value


class PredictionInput(BaseModel):
    region_name: str
    lat: float
    lon: float
    ndvi_data: list[VegetationReading]
    latest_bloom_date: str
    climate_data: list[ClimateDataPoint] = Field(default_factory=list)


class PredictionResult(BaseModel):
    predicted_next_bloom_date: str | None = None
    potential_species: str
    prediction_justification: str
    ecological_significance: str
    human_impact: str
    ndvi_data: list[VegetationReading] | None = None

    @field_validator(
        "potential_species",
        "prediction_justification",
        "ecological_significance",
        "human_impact",
        mode="before",
    )
    @classmethod
    def join_lists(cls, value: Any) -> Any:
        return _join_text(value)


class BloomAnalysisInput(BaseModel):
    location_name: str
    vegetation_data: list[VegetationDataPoint]


class ChartSummaryInput(BaseModel):
    location_name: str
    climate_data: list[ClimateDataPoint]
    vegetation_data: list[VegetationDataPoint]


class ChartSummary(BaseModel):
    summary: str


class BatchRegion(BaseModel):
    name: str
    lat: float
    lon: float
    latest_bloom: str


class SinglePredictionResult(BaseModel):
    success: bool
    data: PredictionResult | None = None
    error: str | None = None

    @classmethod
    def ok(cls, data: PredictionResult) -> SinglePredictionResult:
        return cls(success=True, data=data)

    @classmethod
    def failed(cls, error: str) -> SinglePredictionResult:
        return cls(success=False, error=error)
