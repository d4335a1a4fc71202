# This file implements geography lookups for the country/state/city pickers.
# The static catalog answers every request that does not say "remote".
# Remote lookups go to CountryStateCity and return whatever that service knows.

from __future__ import annotations

from typing import Any

from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.error_handlers import APIError
from bloomwatch.reference.geodata import (
    Country,
    State,
    all_countries,
    city_options,
    find_city,
    find_country,
    find_state,
    representative_location,
)
from bloomwatch.sources.geo_client import CountryStateCityClient


class GeoService:
    """Static catalog queries plus the optional remote passthrough."""

    def __init__(self, *, config: ApiConfig, client: CountryStateCityClient) -> None:
        self.config = config
        self.client = client

    def list_countries(self) -> list[dict[str, Any]]:
        return [
            {
                "name": country.name,
                "lat": country.lat,
                "lon": country.lon,
                "state_count": len(country.states),
            }
            for country in all_countries()
        ]

    def list_states(self, country_name: str) -> dict[str, Any]:
        country = self._country(country_name)
        rows = [
            {
                "name": state.name,
                "lat": state.lat,
                "lon": state.lon,
                "city_count": len(state.cities),
            }
            for state in country.states
        ]
        warnings = None
        if not rows:
            warnings = [f"No state data available for {country.name}."]
        return {"rows": rows, "warnings": warnings}

    def list_cities(self, country_name: str, state_name: str) -> list[dict[str, Any]]:
        state = self._state(self._country(country_name), state_name)
        return [{"name": city.name, "lat": city.lat, "lon": city.lon} for city in state.cities]

    def list_city_options(self, exclude: list[str]) -> list[dict[str, Any]]:
        return [
            {
                "label": option.label,
                "value": option.value,
                "city": option.city.name,
                "state": option.state.name,
                "country": option.country.name,
                "lat": option.city.lat,
                "lon": option.city.lon,
            }
            for option in city_options(frozenset(exclude))
        ]

    def location(
        self, country_name: str, state_name: str, city_name: str | None = None
    ) -> dict[str, Any]:
        """The named city, or the first city of the state when no city is given."""

        state = self._state(self._country(country_name), state_name)
        city = None
        if city_name:
            city = find_city(state, city_name)
            if city is None:
                raise APIError(
                    status_code=404,
                    error_code="CITY_NOT_FOUND",
                    message=f"Unknown city for {state.name}: {city_name}",
                )
        point = representative_location(state, city)
        if point is None:
            raise APIError(
                status_code=404,
                error_code="NO_CITIES",
                message=f"No city data available for {state.name}.",
            )
        return {"name": point.name, "lat": point.lat, "lon": point.lon}

    def remote_countries(self) -> list[dict[str, Any]]:
        return [vars(country) for country in self.client.fetch_countries()]

    def remote_states(self, country_iso2: str) -> list[dict[str, Any]]:
        return [vars(state) for state in self.client.fetch_states(country_iso2)]

    def remote_cities(self, country_iso2: str, state_iso2: str) -> list[dict[str, Any]]:
        return [vars(city) for city in self.client.fetch_cities(country_iso2, state_iso2)]

    @staticmethod
    def _country(name: str) -> Country:
        country = find_country(name)
        if country is None:
            raise APIError(
                status_code=404,
                error_code="COUNTRY_NOT_FOUND",
                message=f"Unknown country: {name}",
            )
        return country

    @staticmethod
    def _state(country: Country, name: str) -> State:
        state = find_state(country, name)
        if state is None:
            raise APIError(
                status_code=404,
                error_code="STATE_NOT_FOUND",
                message=f"Unknown state for {country.name}: {name}",
            )
        return state
