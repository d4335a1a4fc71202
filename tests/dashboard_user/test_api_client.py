# This test file validates the dashboard API client behavior against expected envelope patterns.
# It exists so request building, envelope parsing, and error handling stay stable as endpoints evolve.
# The tests focus on success payload extraction and clear failure modes.

from __future__ import annotations

from datetime import date
from typing import Any

import pytest
import requests

from bloomwatch.dashboard_user.api_client import (
    ApiRequestError,
    ApiUnavailableError,
    BloomWatchApiClient,
)

BASE_URL = "http://localhost:8000/api/v1"


class _FakeResponse:
    def __init__(self, *, status_code: int, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = {} if payload is None else payload

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _FakeSession:
    def __init__(
        self, responses: list[_FakeResponse] | None = None, raise_error: Exception | None = None
    ) -> None:
        self.responses = responses or []
        self.raise_error = raise_error
        self.calls: list[dict[str, Any]] = []

    def get(
        self,
        url: str,
        params: dict[str, Any] | None,
        headers: dict[str, str],
        timeout: int,
    ) -> _FakeResponse:
        self.calls.append(
            {"method": "GET", "url": url, "params": params, "headers": headers, "timeout": timeout}
        )
        return self._next()

    def post(
        self,
        url: str,
        json: dict[str, Any],
        headers: dict[str, str],
        timeout: int,
    ) -> _FakeResponse:
        self.calls.append(
            {"method": "POST", "url": url, "json": json, "headers": headers, "timeout": timeout}
        )
        return self._next()

    def _next(self) -> _FakeResponse:
        if self.raise_error is not None:
            raise self.raise_error
        return self.responses.pop(0)


def _client(session: _FakeSession) -> BloomWatchApiClient:
    return BloomWatchApiClient(
        base_url=f"{BASE_URL}/",
        timeout_seconds=10,
        prediction_timeout_seconds=90,
        session=session,  # type: ignore[arg-type]
    )


def test_list_states_returns_rows_and_warnings() -> None:
    session = _FakeSession(
        [
            _FakeResponse(
                status_code=200,
                payload={"data": [], "warnings": ["No state data available for France."]},
            )
        ]
    )

    rows, warnings = _client(session).list_states("France")

    assert rows == []
    assert warnings == ["No state data available for France."]
    assert session.calls[0]["url"] == f"{BASE_URL}/geo/countries/France/states"


def test_city_options_sends_exclusions() -> None:
    session = _FakeSession([_FakeResponse(status_code=200, payload={"data": [{"label": "x"}]})])

    options = _client(session).city_options(["Tokyo City-35.6895"])

    assert options == [{"label": "x"}]
    assert session.calls[0]["params"] == {"exclude": ["Tokyo City-35.6895"]}


def test_location_sends_city_only_when_chosen() -> None:
    point = {"name": "Bangalore", "lat": 12.9716, "lon": 77.5946}
    session = _FakeSession(
        [
            _FakeResponse(status_code=200, payload={"data": point}),
            _FakeResponse(status_code=200, payload={"data": point}),
        ]
    )
    client = _client(session)

    assert client.location("India", "Karnataka") == point
    client.location("India", "Karnataka", "Bangalore")

    assert session.calls[0]["url"] == f"{BASE_URL}/geo/countries/India/states/Karnataka/location"
    assert session.calls[0]["params"] is None
    assert session.calls[1]["params"] == {"city": "Bangalore"}


def test_climate_data_serializes_window() -> None:
    session = _FakeSession([_FakeResponse(status_code=200, payload={"data": []})])

    _client(session).climate_data(
        lat=1.5, lon=2.5, start_date=date(2024, 1, 1), end_date=date(2024, 12, 31)
    )

    call = session.calls[0]
    assert call["url"] == f"{BASE_URL}/climate/data"
    assert call["json"] == {
        "lat": 1.5,
        "lon": 2.5,
        "start_date": "2024-01-01",
        "end_date": "2024-12-31",
    }
    assert call["timeout"] == 10


def test_batch_predictions_use_long_timeout_and_bearer_token() -> None:
    results = [{"success": True, "data": {"predicted_next_bloom_date": "2026-03-20"}}]
    session = _FakeSession([_FakeResponse(status_code=200, payload={"data": results})])

    returned = _client(session).batch_predictions(
        [{"name": "Kyoto", "lat": 35.0, "lon": 135.7}], id_token="token-1"
    )

    assert returned == results
    call = session.calls[0]
    assert call["timeout"] == 90
    assert call["headers"] == {"Authorization": "Bearer token-1"}
    assert call["json"] == {"regions": [{"name": "Kyoto", "lat": 35.0, "lon": 135.7}]}


def test_city_prediction_omits_missing_latest_bloom() -> None:
    session = _FakeSession(
        [_FakeResponse(status_code=200, payload={"data": {"human_impact": "x"}})]
    )

    _client(session).city_prediction(city="Tokyo", lat=35.6, lon=139.6)

    assert session.calls[0]["json"] == {"city": "Tokyo", "lat": 35.6, "lon": 139.6}
    assert session.calls[0]["headers"] == {}


def test_summarize_returns_text() -> None:
    session = _FakeSession(
        [_FakeResponse(status_code=200, payload={"data": {"summary": "Dry summer."}})]
    )

    summary = _client(session).summarize(
        location_name="Tokyo", climate_data=[], vegetation_data=[]
    )

    assert summary == "Dry summer."


def test_history_requires_token_header() -> None:
    session = _FakeSession([_FakeResponse(status_code=200, payload={"data": [{"id": "evt-1"}]})])

    events = _client(session).history(id_token="token-1")

    assert events == [{"id": "evt-1"}]
    assert session.calls[0]["headers"] == {"Authorization": "Bearer token-1"}


def test_client_error_carries_server_code_and_message() -> None:
    session = _FakeSession(
        [
            _FakeResponse(
                status_code=409,
                payload={
                    "error_code": "EMAIL_EXISTS",
                    "message": "An account with this email already exists.",
                },
            )
        ]
    )

    with pytest.raises(ApiRequestError) as exc_info:
        _client(session).sign_up(display_name="Ada", email="ada@example.com", password="secret1")

    assert exc_info.value.status_code == 409
    assert exc_info.value.error_code == "EMAIL_EXISTS"
    assert str(exc_info.value) == "An account with this email already exists."


def test_not_found_without_body_uses_generic_message() -> None:
    session = _FakeSession([_FakeResponse(status_code=404, payload=ValueError("no json"))])

    with pytest.raises(ApiRequestError, match="status 404"):
        _client(session).vegetation_data(lat=0.0, lon=-30.0)


def test_server_error_raises_unavailable() -> None:
    session = _FakeSession(
        [_FakeResponse(status_code=502, payload={"message": "NASA POWER returned HTTP 500."})]
    )

    with pytest.raises(ApiUnavailableError, match="NASA POWER"):
        _client(session).climate_data(lat=1.0, lon=2.0)


def test_request_exception_raises_unavailable() -> None:
    session = _FakeSession(raise_error=requests.ConnectionError("network down"))

    with pytest.raises(ApiUnavailableError):
        _client(session).list_countries()


def test_non_object_payload_raises_unavailable() -> None:
    session = _FakeSession([_FakeResponse(status_code=200, payload=["not", "an", "envelope"])])

    with pytest.raises(ApiUnavailableError, match="Unexpected payload"):
        _client(session).list_regions()
