# This file provides shared helpers and fakes for API endpoint tests.
# It exists so tests can override upstream clients without touching NASA POWER, Gemini, or Firebase.
# The helpers build consistent config objects and scoped TestClient contexts.

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager
from datetime import date
from typing import Any

from fastapi.testclient import TestClient

from bloomwatch.accounts.history import HistoryEvent
from bloomwatch.accounts.identity_client import AuthenticatedUser
from bloomwatch.ai.schemas import (
    BatchRegion,
    BloomAnalysisInput,
    ChartSummary,
    ChartSummaryInput,
    PredictionResult,
    SinglePredictionResult,
)
from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.app import app
from bloomwatch.api.dependencies import (
    get_account_service,
    get_climate_service,
    get_config,
    get_geo_service,
    get_optional_user,
    get_prediction_service,
)
from bloomwatch.api.services.climate_service import ClimateService
from bloomwatch.api.services.prediction_service import PredictionService
from bloomwatch.sources.models import ClimateDataPoint, VegetationDataPoint, VegetationReading

TEST_USER = AuthenticatedUser(
    uid="user-1", email="ada@example.com", display_name="Ada", id_token="token-1"
)


def build_test_config(**overrides: Any) -> ApiConfig:
    """Create deterministic API config for tests."""

    values: dict[str, Any] = {
        "api_name": "Test BloomWatch API",
        "api_version_path": "/api/v1",
        "schema_version": "1.0.0",
        "host": "0.0.0.0",
        "port": 8000,
        "environment": "test",
        "request_timeout_seconds": 5,
        "llm_timeout_seconds": 5,
        "batch_max_workers": 2,
        "max_batch_size": 3,
        "history_limit": 20,
        "enable_request_logging": False,
        "allowed_origins": [],
        "app_version": "0.1.0",
    }
    values.update(overrides)
    return ApiConfig(**values)


def sample_climate() -> list[ClimateDataPoint]:
    return [
        ClimateDataPoint(month="Jan 2024", temperature=4.5, rainfall=2.1),
        ClimateDataPoint(month="Feb 2024", temperature=6.0, rainfall=1.8),
    ]


def sample_vegetation() -> list[VegetationDataPoint]:
    return [
        VegetationDataPoint(month="Jan 2024", value=2.4, date="2024-01-01"),
        VegetationDataPoint(month="Feb 2024", value=3.1, date="2024-02-01"),
    ]


def sample_prediction(date_text: str | None = "2025-04-02") -> PredictionResult:
    return PredictionResult(
        predicted_next_bloom_date=date_text,
        potential_species="Cherry blossom",
        prediction_justification="Insolation rises steadily through March.",
        ecological_significance="Early pollinator forage.",
        human_impact="Peak tourism season.",
        ndvi_data=[VegetationReading(month="Jan 2024", value=2.4)],
    )


class FakeHistoryStore:
    def __init__(self, events: list[HistoryEvent] | None = None) -> None:
        self.logged: list[tuple[AuthenticatedUser | None, HistoryEvent]] = []
        self.events = events or []
        self.recent_calls: list[tuple[str, int]] = []

    def log_event(self, user: AuthenticatedUser | None, event: HistoryEvent) -> bool:
        if user is None:
            return False
        self.logged.append((user, event))
        return True

    def recent_events(self, user: AuthenticatedUser, limit: int = 20) -> list[HistoryEvent]:
        self.recent_calls.append((user.uid, limit))
        return self.events[:limit]


class FakePowerClient:
    def __init__(
        self,
        *,
        climate: list[ClimateDataPoint] | None = None,
        vegetation: list[VegetationDataPoint] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.climate = sample_climate() if climate is None else climate
        self.vegetation = sample_vegetation() if vegetation is None else vegetation
        self.error = error
        self.calls: list[tuple[str, dict[str, Any]]] = []

    def get_climate_data(self, **kwargs: Any) -> list[ClimateDataPoint]:
        self.calls.append(("climate", kwargs))
        if self.error is not None:
            raise self.error
        return list(self.climate)

    def get_vegetation_data(self, **kwargs: Any) -> list[VegetationDataPoint]:
        self.calls.append(("vegetation", kwargs))
        if self.error is not None:
            raise self.error
        return list(self.vegetation)


class FakeFlows:
    """Stands in for BloomFlows with canned results and recorded inputs."""

    def __init__(
        self,
        *,
        prediction: PredictionResult | None = None,
        error: Exception | None = None,
        failing_regions: set[str] | None = None,
        vegetation: list[VegetationDataPoint] | None = None,
    ) -> None:
        self.prediction = prediction or sample_prediction()
        self.vegetation = sample_vegetation() if vegetation is None else vegetation
        self.error = error
        self.failing_regions = failing_regions or set()
        self.predict_calls: list[dict[str, Any]] = []
        self.analysis_inputs: list[BloomAnalysisInput] = []
        self.summary_inputs: list[ChartSummaryInput] = []
        self.batches: list[list[BatchRegion]] = []

    def fetch_location_series(
        self, **kwargs: Any
    ) -> tuple[list[VegetationDataPoint], list[ClimateDataPoint]]:
        if self.error is not None:
            raise self.error
        return list(self.vegetation), sample_climate()

    def predict_for_location(self, **kwargs: Any) -> PredictionResult:
        self.predict_calls.append(kwargs)
        if self.error is not None:
            raise self.error
        return self.prediction

    def get_bloom_analysis(self, payload: BloomAnalysisInput) -> PredictionResult:
        self.analysis_inputs.append(payload)
        if self.error is not None:
            raise self.error
        return self.prediction

    def summarize_chart_data(self, payload: ChartSummaryInput) -> ChartSummary:
        self.summary_inputs.append(payload)
        if self.error is not None:
            raise self.error
        return ChartSummary(summary=f"Mild winter in {payload.location_name}.")

    def get_batch_predictions(self, regions: list[BatchRegion]) -> list[SinglePredictionResult]:
        self.batches.append(list(regions))
        return [
            SinglePredictionResult.failed("No vegetation data found.")
            if region.name in self.failing_regions
            else SinglePredictionResult.ok(self.prediction)
            for region in regions
        ]


def build_climate_service(
    *,
    config: ApiConfig | None = None,
    power_client: FakePowerClient | None = None,
    flows: FakeFlows | None = None,
    history: FakeHistoryStore | None = None,
    today: date = date(2025, 6, 15),
) -> ClimateService:
    return ClimateService(
        config=config or build_test_config(),
        power_client=power_client or FakePowerClient(),  # type: ignore[arg-type]
        flows=flows or FakeFlows(),  # type: ignore[arg-type]
        history=history or FakeHistoryStore(),  # type: ignore[arg-type]
        clock=lambda: today,
    )


def build_prediction_service(
    *,
    config: ApiConfig | None = None,
    flows: FakeFlows | None = None,
    history: FakeHistoryStore | None = None,
    today: date = date(2025, 6, 15),
) -> PredictionService:
    return PredictionService(
        config=config or build_test_config(),
        flows=flows or FakeFlows(),  # type: ignore[arg-type]
        history=history or FakeHistoryStore(),  # type: ignore[arg-type]
        clock=lambda: today,
    )


@contextmanager
def api_test_client(
    *,
    config: ApiConfig | None = None,
    geo_service: Any | None = None,
    climate_service: Any | None = None,
    prediction_service: Any | None = None,
    account_service: Any | None = None,
    user: AuthenticatedUser | None = None,
) -> Iterator[TestClient]:
    """Yield a TestClient with scoped dependency overrides."""

    resolved_config = config or build_test_config()

    app.dependency_overrides[get_config] = lambda: resolved_config
    app.dependency_overrides[get_optional_user] = lambda: user
    if geo_service is not None:
        app.dependency_overrides[get_geo_service] = lambda: geo_service
    if climate_service is not None:
        app.dependency_overrides[get_climate_service] = lambda: climate_service
    if prediction_service is not None:
        app.dependency_overrides[get_prediction_service] = lambda: prediction_service
    if account_service is not None:
        app.dependency_overrides[get_account_service] = lambda: account_service

    try:
        with TestClient(app) as client:
            yield client
    finally:
        app.dependency_overrides.clear()
