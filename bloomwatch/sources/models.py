"""Time-series records produced by the NASA POWER client."""

from __future__ import annotations

from pydantic import BaseModel


class ClimateDataPoint(BaseModel):
    month: str
    temperature: float
    rainfall: float


class VegetationDataPoint(BaseModel):
    month: str
    value: float
    date: str


class VegetationReading(BaseModel):
    """Month/value pair without the sort date, as stored on seed regions."""

    month: str
    value: float
