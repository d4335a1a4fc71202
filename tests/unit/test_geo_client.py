"""
Unit tests for the CountryStateCity client.
It asserts expected behavior and guards against regressions in the corresponding component.
"""

from __future__ import annotations

from typing import Any

import pytest
import requests

from bloomwatch.sources.geo_client import CountryStateCityClient, GeoApiError


class _FakeResponse:
    def __init__(self, *, status_code: int = 200, payload: Any = None) -> None:
        self.status_code = status_code
        self._payload = payload

    def json(self) -> Any:
        if isinstance(self._payload, Exception):
            raise self._payload
        return self._payload


class _FakeSession:
    def __init__(
        self, response: _FakeResponse | None = None, raise_error: Exception | None = None
    ) -> None:
        self.response = response
        self.raise_error = raise_error
        self.calls: list[tuple[str, dict[str, str], int]] = []

    def get(self, url: str, headers: dict[str, str], timeout: int) -> _FakeResponse:
        self.calls.append((url, headers, timeout))
        if self.raise_error is not None:
            raise self.raise_error
        assert self.response is not None
        return self.response


def _client(session: _FakeSession) -> CountryStateCityClient:
    return CountryStateCityClient(
        api_key="csc-key",
        base_url="https://csc.test/v1/",
        session=session,  # type: ignore[arg-type]
    )


def test_fetch_countries_parses_string_coordinates() -> None:
    payload = [
        {"id": 101, "name": "India", "iso2": "IN", "latitude": "20.00", "longitude": "77.00"},
        {"id": 1, "name": "Nowhere", "iso2": "NW", "latitude": "", "longitude": None},
    ]
    session = _FakeSession(_FakeResponse(payload=payload))

    countries = _client(session).fetch_countries()

    assert countries[0].latitude == 20.0
    assert countries[1].latitude is None
    url, headers, _ = session.calls[0]
    assert url == "https://csc.test/v1/countries"
    assert headers == {"X-CSCAPI-KEY": "csc-key"}


def test_fetch_states_sorted_by_name() -> None:
    payload = [
        {"id": 2, "name": "Kerala", "iso2": "KL"},
        {"id": 1, "name": "Assam", "iso2": "AS"},
    ]
    session = _FakeSession(_FakeResponse(payload=payload))

    states = _client(session).fetch_states("IN")

    assert [state.name for state in states] == ["Assam", "Kerala"]
    assert states[0].country_code == "IN"
    assert session.calls[0][0] == "https://csc.test/v1/countries/IN/states"


def test_fetch_cities_defaults_codes_from_path() -> None:
    payload = [{"id": 9, "name": "Kochi", "latitude": "9.93", "longitude": "76.26"}]
    session = _FakeSession(_FakeResponse(payload=payload))

    cities = _client(session).fetch_cities("IN", "KL")

    assert (cities[0].state_code, cities[0].country_code) == ("KL", "IN")
    assert cities[0].longitude == 76.26


def test_http_error_raises_with_friendly_message() -> None:
    session = _FakeSession(_FakeResponse(status_code=401, payload={"error": "Unauthorized"}))

    with pytest.raises(GeoApiError, match="Failed to fetch states for country IN"):
        _client(session).fetch_states("IN")


def test_transport_error_raises() -> None:
    session = _FakeSession(raise_error=requests.Timeout("slow"))

    with pytest.raises(GeoApiError, match="Failed to fetch countries"):
        _client(session).fetch_countries()


def test_non_list_payload_raises() -> None:
    session = _FakeSession(_FakeResponse(payload={"error": "nope"}))

    with pytest.raises(GeoApiError):
        _client(session).fetch_countries()
