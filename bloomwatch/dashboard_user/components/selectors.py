# This file renders the cascading country, state, and city pickers.
# It exists so the Climate and Insights tabs share one selection behavior.
# Changing a level clears the levels below it and any results computed for the old selection.
# A country without state data shows an informational message instead of empty pickers.
# The point to analyze comes from the API location route: the city, else the state's first city.

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from typing import Any

import streamlit as st

from bloomwatch.dashboard_user.ui_text import NO_STATES


@dataclass(frozen=True)
class LocationSelection:
    country: dict[str, Any] | None
    state: dict[str, Any] | None
    city: dict[str, Any] | None
    # Chosen city, else the first city of the chosen state, as resolved by the API.
    point: dict[str, Any] | None = None


def _reset(keys: list[str], result_keys: list[str]) -> Callable[[], None]:
    def callback() -> None:
        for key in keys + result_keys:
            st.session_state.pop(key, None)

    return callback


def render_location_selector(
    *,
    prefix: str,
    countries: list[dict[str, Any]],
    load_states: Callable[[str], tuple[list[dict[str, Any]], list[str]]],
    load_cities: Callable[[str, str], list[dict[str, Any]]],
    load_location: Callable[[str, str, str | None], dict[str, Any] | None],
    result_keys: list[str],
) -> LocationSelection:
    country_key = f"{prefix}_country"
    state_key = f"{prefix}_state"
    city_key = f"{prefix}_city"

    col1, col2, col3 = st.columns(3)
    country_names = [country["name"] for country in countries]
    country_name = col1.selectbox(
        "Country",
        country_names,
        index=None,
        placeholder="Select a country",
        key=country_key,
        on_change=_reset([state_key, city_key], result_keys),
    )
    if not country_name:
        return LocationSelection(country=None, state=None, city=None)
    country = next(item for item in countries if item["name"] == country_name)

    states, warnings = load_states(country_name)
    if not states:
        for warning in warnings or [NO_STATES]:
            st.info(warning)
        return LocationSelection(country=country, state=None, city=None)

    state_name = col2.selectbox(
        "State / Province",
        [state["name"] for state in states],
        index=None,
        placeholder="Select a state",
        key=state_key,
        on_change=_reset([city_key], result_keys),
    )
    if not state_name:
        return LocationSelection(country=country, state=None, city=None)
    state = next(item for item in states if item["name"] == state_name)

    cities = load_cities(country_name, state_name)
    city_name = col3.selectbox(
        "City",
        [city["name"] for city in cities],
        index=None,
        placeholder="Select a city",
        key=city_key,
        on_change=_reset([], result_keys),
    )
    city = next((item for item in cities if item["name"] == city_name), None)
    point = load_location(country_name, state_name, city_name)
    return LocationSelection(country=country, state=state, city=city, point=point)
