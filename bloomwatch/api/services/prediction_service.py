# This file implements bloom prediction and analysis services for map, insights, and dashboard.
# It exists so default bloom dates, batch limits, and history logging are decided in one place.
# Batch predictions are fanned out by the flows layer and logged one success at a time.
# History is only written when a signed-in user made the request.

from __future__ import annotations

import logging
from collections.abc import Callable
from datetime import date

from bloomwatch.accounts.history import HistoryEvent, HistoryStore
from bloomwatch.accounts.identity_client import AuthenticatedUser
from bloomwatch.ai.flows import BloomFlows, NoVegetationDataError
from bloomwatch.ai.schemas import (
    BatchRegion,
    BloomAnalysisInput,
    PredictionResult,
    SinglePredictionResult,
)
from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.error_handlers import APIError
from bloomwatch.api.services.climate_service import NO_VEGETATION_MESSAGE, check_window
from bloomwatch.sources.models import VegetationDataPoint

logger = logging.getLogger(__name__)

MAP_DEFAULT_BLOOM_MONTH_DAY = "04-01"
DASHBOARD_DEFAULT_BLOOM_MONTH_DAY = "01-01"


def default_latest_bloom(today: date, month_day: str) -> str:
    return f"{today.year}-{month_day}"


class PredictionService:
    """Prediction, analysis, and batch flows with history side effects."""

    def __init__(
        self,
        *,
        config: ApiConfig,
        flows: BloomFlows,
        history: HistoryStore,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.config = config
        self.flows = flows
        self.history = history
        self.clock = clock

    def city_analysis(
        self,
        *,
        city: str,
        lat: float,
        lon: float,
        start_date: date | None,
        end_date: date | None,
        user: AuthenticatedUser | None,
    ) -> dict[str, object]:
        check_window(start_date, end_date, today=self.clock())
        vegetation, climate = self.flows.fetch_location_series(
            lat=lat,
            lon=lon,
            start_date=start_date.isoformat() if start_date else None,
            end_date=end_date.isoformat() if end_date else None,
        )
        if not vegetation:
            raise APIError(
                status_code=404,
                error_code="NO_VEGETATION_DATA",
                message="No vegetation data was found for this location.",
            )

        self.history.log_event(user, HistoryEvent(type="ANALYSIS", region_name=city))
        return {
            "location_name": city,
            "climate_data": climate,
            "vegetation_data": vegetation,
        }

    def city_prediction(
        self,
        *,
        city: str,
        lat: float,
        lon: float,
        latest_bloom: str | None,
        user: AuthenticatedUser | None,
    ) -> PredictionResult:
        bloom = latest_bloom or default_latest_bloom(self.clock(), MAP_DEFAULT_BLOOM_MONTH_DAY)
        try:
            result = self.flows.predict_for_location(
                name=city, lat=lat, lon=lon, latest_bloom=bloom
            )
        except NoVegetationDataError as exc:
            raise APIError(
                status_code=404,
                error_code="NO_VEGETATION_DATA",
                message=str(exc),
            ) from exc

        self.history.log_event(
            user,
            HistoryEvent(
                type="PREDICTION",
                region_name=city,
                predicted_date=result.predicted_next_bloom_date,
            ),
        )
        return result

    def insights_analysis(
        self,
        *,
        city: str,
        state: str | None,
        country: str | None,
        vegetation_data: list[VegetationDataPoint],
        user: AuthenticatedUser | None,
    ) -> PredictionResult:
        if not vegetation_data:
            raise APIError(
                status_code=400,
                error_code="NO_VEGETATION_DATA",
                message=NO_VEGETATION_MESSAGE,
            )

        result = self.flows.get_bloom_analysis(
            BloomAnalysisInput(location_name=city, vegetation_data=vegetation_data)
        )
        self.history.log_event(
            user,
            HistoryEvent(
                type="PREDICTION",
                region_name=city,
                city=city,
                state=state,
                country=country,
                predicted_date=result.predicted_next_bloom_date,
                prediction=result,
            ),
        )
        return result

    def batch_predictions(
        self,
        regions: list[tuple[str, float, float, str | None]],
        *,
        user: AuthenticatedUser | None,
    ) -> list[SinglePredictionResult]:
        if len(regions) > self.config.max_batch_size:
            raise APIError(
                status_code=400,
                error_code="BATCH_TOO_LARGE",
                message=f"At most {self.config.max_batch_size} regions can be predicted at once.",
                details={"requested": len(regions)},
            )

        fallback = default_latest_bloom(self.clock(), DASHBOARD_DEFAULT_BLOOM_MONTH_DAY)
        batch = [
            BatchRegion(name=name, lat=lat, lon=lon, latest_bloom=latest_bloom or fallback)
            for name, lat, lon, latest_bloom in regions
        ]
        results = self.flows.get_batch_predictions(batch)

        for region, outcome in zip(batch, results):
            if outcome.success and outcome.data is not None:
                self.history.log_event(
                    user,
                    HistoryEvent(
                        type="PREDICTION",
                        region_name=region.name,
                        predicted_date=outcome.data.predicted_next_bloom_date,
                    ),
                )
        failures = sum(1 for outcome in results if not outcome.success)
        if failures:
            logger.info("Batch prediction finished with %d of %d failures", failures, len(results))
        return results
