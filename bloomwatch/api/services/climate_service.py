# This file implements climate, vegetation, and chart-summary services.
# It exists so route handlers only deal with HTTP while NASA POWER and model calls live here.
# Summaries are recorded in the caller's history when a signed-in user asked for them.

from __future__ import annotations

from collections.abc import Callable
from datetime import date

from bloomwatch.accounts.history import HistoryEvent, HistoryStore
from bloomwatch.accounts.identity_client import AuthenticatedUser
from bloomwatch.ai.flows import BloomFlows
from bloomwatch.ai.schemas import ChartSummary, ChartSummaryInput
from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.error_handlers import APIError
from bloomwatch.sources.models import ClimateDataPoint, VegetationDataPoint
from bloomwatch.sources.power_client import PowerClient

NO_VEGETATION_MESSAGE = (
    "No vegetation data was found for the requested time period. The location may be over "
    "a large body of water or have other data availability issues."
)


def check_window(start_date: date | None, end_date: date | None, *, today: date) -> None:
    # Omitted end date is today, as in resolve_window.
    end = end_date or today
    if start_date and start_date > end:
        raise APIError(
            status_code=400,
            error_code="INVALID_DATE_RANGE",
            message="start_date must be on or before end_date (today when omitted).",
            details={"start_date": start_date.isoformat(), "end_date": end.isoformat()},
        )


class ClimateService:
    """NASA POWER series and model summaries for one location."""

    def __init__(
        self,
        *,
        config: ApiConfig,
        power_client: PowerClient,
        flows: BloomFlows,
        history: HistoryStore,
        clock: Callable[[], date] = date.today,
    ) -> None:
        self.config = config
        self.power_client = power_client
        self.flows = flows
        self.history = history
        self.clock = clock

    def climate_data(
        self,
        *,
        lat: float,
        lon: float,
        start_date: date | None,
        end_date: date | None,
    ) -> list[ClimateDataPoint]:
        check_window(start_date, end_date, today=self.clock())
        return self.power_client.get_climate_data(
            lat=lat, lon=lon, start_date=start_date, end_date=end_date
        )

    def vegetation_data(
        self,
        *,
        lat: float,
        lon: float,
        start_date: date | None,
        end_date: date | None,
    ) -> list[VegetationDataPoint]:
        check_window(start_date, end_date, today=self.clock())
        points = self.power_client.get_vegetation_data(
            lat=lat, lon=lon, start_date=start_date, end_date=end_date
        )

        if not points:
            raise APIError(
                status_code=404,
                error_code="NO_VEGETATION_DATA",
                message=NO_VEGETATION_MESSAGE,
            )
        return points

    def summarize(
        self,
        payload: ChartSummaryInput,
        *,
        user: AuthenticatedUser | None,
    ) -> ChartSummary:
        summary = self.flows.summarize_chart_data(payload)
        self.history.log_event(
            user,
            HistoryEvent(
                type="CLIMATE_SUMMARY",
                region_name=payload.location_name,
                summary=summary.summary,
            ),
        )
        return summary
