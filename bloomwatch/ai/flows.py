# This file combines NASA POWER data with prompt templates to produce bloom insights.
# It exists so the API services call one object per request instead of wiring clients themselves.
# The batch flow fans regions out to a bounded thread pool and returns results in input order.
# A single region failing is reported in its own result and never fails the batch.

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

from bloomwatch.ai.llm_client import GeminiClient
from bloomwatch.ai.prompts import (
    render_bloom_analysis_prompt,
    render_chart_summary_prompt,
    render_prediction_prompt,
)
from bloomwatch.ai.schemas import (
    BatchRegion,
    BloomAnalysisInput,
    ChartSummary,
    ChartSummaryInput,
    PredictionInput,
    PredictionResult,
    SinglePredictionResult,
)
from bloomwatch.sources.models import ClimateDataPoint, VegetationDataPoint, VegetationReading
from bloomwatch.sources.power_client import PowerClient

logger = logging.getLogger(__name__)


class NoVegetationDataError(LookupError):
    """Raised when NASA POWER has no insolation values for a location."""


def as_readings(points: list[VegetationDataPoint]) -> list[VegetationReading]:
    return [VegetationReading(month=point.month, value=point.value) for point in points]


class BloomFlows:
    """Prediction, analysis and summary flows over one POWER client and one model client."""

    def __init__(
        self,
        *,
        power_client: PowerClient,
        llm_client: GeminiClient,
        max_workers: int = 4,
    ) -> None:
        self.power_client = power_client
        self.llm_client = llm_client
        self.max_workers = max(1, max_workers)

    def predict_next_bloom_date(self, payload: PredictionInput) -> PredictionResult:
        result = self.llm_client.generate(render_prediction_prompt(payload), PredictionResult)
        if result.ndvi_data is None:
            result.ndvi_data = list(payload.ndvi_data)
        return result

    def get_bloom_analysis(self, payload: BloomAnalysisInput) -> PredictionResult:
        result = self.llm_client.generate(render_bloom_analysis_prompt(payload), PredictionResult)
        if result.ndvi_data is None:
            result.ndvi_data = as_readings(payload.vegetation_data)
        return result

    def summarize_chart_data(self, payload: ChartSummaryInput) -> ChartSummary:
        return self.llm_client.generate(render_chart_summary_prompt(payload), ChartSummary)

    def fetch_location_series(
        self,
        *,
        lat: float,
        lon: float,
        start_date: str | None = None,
        end_date: str | None = None,
    ) -> tuple[list[VegetationDataPoint], list[ClimateDataPoint]]:
        """Fetch vegetation and climate series for one point concurrently."""

        with ThreadPoolExecutor(max_workers=2) as pool:
            vegetation_future = pool.submit(
                self.power_client.get_vegetation_data,
                lat=lat,
                lon=lon,
                start_date=start_date,
                end_date=end_date,
            )
            climate_future = pool.submit(
                self.power_client.get_climate_data,
                lat=lat,
                lon=lon,
                start_date=start_date,
                end_date=end_date,
            )
            return vegetation_future.result(), climate_future.result()

    def predict_for_location(
        self,
        *,
        name: str,
        lat: float,
        lon: float,
        latest_bloom: str,
    ) -> PredictionResult:
        vegetation, climate = self.fetch_location_series(lat=lat, lon=lon)
        if not vegetation:
            raise NoVegetationDataError("No vegetation data found.")

        return self.predict_next_bloom_date(
            PredictionInput(
                region_name=name,
                lat=lat,
                lon=lon,
                ndvi_data=as_readings(vegetation),
                latest_bloom_date=latest_bloom,
                climate_data=climate,
            )
        )

    def process_region(self, region: BatchRegion) -> SinglePredictionResult:
        try:
            result = self.predict_for_location(
                name=region.name,
                lat=region.lat,
                lon=region.lon,
                latest_bloom=region.latest_bloom,
            )
        except Exception as exc:
            logger.error("Failed to process region %s: %s", region.name, exc)
            return SinglePredictionResult.failed(str(exc) or "An unknown error occurred")
        return SinglePredictionResult.ok(result)

    def get_batch_predictions(self, regions: list[BatchRegion]) -> list[SinglePredictionResult]:
        if not regions:
            return []
        workers = min(self.max_workers, len(regions))
        with ThreadPoolExecutor(max_workers=workers) as pool:
            return list(pool.map(self.process_region, regions))
