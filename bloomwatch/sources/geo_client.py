"""
CountryStateCity REST client.
It backs the optional remote geography lookups with the same country/state/city shape
as the static catalog, parsing the string coordinates the service returns.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final

import requests

logger = logging.getLogger(__name__)

CSC_API_URL: Final[str] = "https://api.countrystatecity.in/v1"


class GeoApiError(RuntimeError):
    """Raised when the CountryStateCity catalog cannot be read."""


@dataclass(frozen=True)
class RemoteCountry:
    id: int
    name: str
    iso2: str
    latitude: float | None
    longitude: float | None


@dataclass(frozen=True)
class RemoteState:
    id: int
    name: str
    iso2: str
    country_code: str
    latitude: float | None
    longitude: float | None


@dataclass(frozen=True)
class RemoteCity:
    id: int
    name: str
    state_code: str
    country_code: str
    latitude: float | None
    longitude: float | None


def _to_float(value: Any) -> float | None:
    if value is None or value == "":
        return None
    try:
        return float(value)
    except (TypeError, ValueError):
        return None


class CountryStateCityClient:
    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str = CSC_API_URL,
        timeout_seconds: int = 15,
        session: requests.Session | None = None,
    ) -> None:
        if not api_key:
            logger.warning("CountryStateCity API key is not set; remote lookups will fail.")
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def fetch_countries(self) -> list[RemoteCountry]:
        rows = self._request_list("/countries", failure="Failed to fetch countries from the API.")
        return [
            RemoteCountry(
                id=int(row.get("id", 0)),
                name=str(row.get("name", "")),
                iso2=str(row.get("iso2", "")),
                latitude=_to_float(row.get("latitude")),
                longitude=_to_float(row.get("longitude")),
            )
            for row in rows
        ]

    def fetch_states(self, country_iso2: str) -> list[RemoteState]:
        rows = self._request_list(
            f"/countries/{country_iso2}/states",
            failure=f"Failed to fetch states for country {country_iso2}.",
        )
        states = [
            RemoteState(
                id=int(row.get("id", 0)),
                name=str(row.get("name", "")),
                iso2=str(row.get("iso2", "")),
                country_code=str(row.get("country_code", country_iso2)),
                latitude=_to_float(row.get("latitude")),
                longitude=_to_float(row.get("longitude")),
            )
            for row in rows
        ]
        return sorted(states, key=lambda state: state.name)

    def fetch_cities(self, country_iso2: str, state_iso2: str) -> list[RemoteCity]:
        rows = self._request_list(
            f"/countries/{country_iso2}/states/{state_iso2}/cities",
            failure=f"Failed to fetch cities for state {state_iso2}.",
        )
        cities = [
            RemoteCity(
                id=int(row.get("id", 0)),
                name=str(row.get("name", "")),
                state_code=str(row.get("state_code", state_iso2)),
                country_code=str(row.get("country_code", country_iso2)),
                latitude=_to_float(row.get("latitude")),
                longitude=_to_float(row.get("longitude")),
            )
            for row in rows
        ]
        return sorted(cities, key=lambda city: city.name)

    def _request_list(self, path: str, *, failure: str) -> list[dict[str, Any]]:
        url = f"{self.base_url}{path}"
        headers = {"X-CSCAPI-KEY": self.api_key or ""}
        try:
            response = self.session.get(url, headers=headers, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            logger.error("CountryStateCity request failed for %s: %s", url, exc)
            raise GeoApiError(failure) from exc

        if response.status_code >= 400:
            logger.error("CountryStateCity returned %s for %s", response.status_code, url)
            raise GeoApiError(failure)

        try:
            payload = response.json()
        except ValueError as exc:
            raise GeoApiError(failure) from exc

        if not isinstance(payload, list):
            raise GeoApiError(failure)
        return [row for row in payload if isinstance(row, dict)]
