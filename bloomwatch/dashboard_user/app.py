# This file is the Streamlit entrypoint for the BloomWatch dashboard.
# It exists to wire the API client, cached catalog loaders, and one page renderer per tab.
# Catalog and series calls are cached so switching tabs does not refetch NASA POWER data.
# The app keeps working when the API is down by showing one clear message instead of failing.

from __future__ import annotations

from typing import Any

import streamlit as st

from bloomwatch.dashboard_user.api_client import (
    ApiRequestError,
    ApiUnavailableError,
    BloomWatchApiClient,
)
from bloomwatch.dashboard_user.auth_state import current_id_token
from bloomwatch.dashboard_user.dashboard_config import load_dashboard_config
from bloomwatch.dashboard_user.page_views import (
    about,
    account,
    climate,
    contact,
    dashboard,
    history,
    insights,
    map_view,
)
from bloomwatch.dashboard_user.ui_text import API_UNAVAILABLE, APP_SUBTITLE, APP_TITLE


@st.cache_resource
def get_api_client() -> BloomWatchApiClient:
    config = load_dashboard_config()
    return BloomWatchApiClient(
        base_url=config.api_base_url,
        timeout_seconds=config.request_timeout_seconds,
        prediction_timeout_seconds=config.prediction_timeout_seconds,
    )


def main() -> None:
    st.set_page_config(page_title=APP_TITLE, page_icon="🌸", layout="wide")

    config = load_dashboard_config()
    client = get_api_client()

    @st.cache_data(ttl=config.catalog_cache_ttl_seconds)
    def load_countries() -> list[dict[str, Any]]:
        return client.list_countries()

    @st.cache_data(ttl=config.catalog_cache_ttl_seconds)
    def load_states(country: str) -> tuple[list[dict[str, Any]], list[str]]:
        return client.list_states(country)

    @st.cache_data(ttl=config.catalog_cache_ttl_seconds)
    def load_cities(country: str, state: str) -> list[dict[str, Any]]:
        return client.list_cities(country, state)

    @st.cache_data(ttl=config.catalog_cache_ttl_seconds)
    def load_location(country: str, state: str, city: str | None = None) -> dict[str, Any] | None:
        try:
            return client.location(country, state, city)
        except ApiRequestError as exc:
            if exc.error_code == "NO_CITIES":
                return None
            raise

    @st.cache_data(ttl=config.catalog_cache_ttl_seconds)
    def load_city_options(exclude: tuple[str, ...] = ()) -> list[dict[str, Any]]:
        return client.city_options(list(exclude))

    @st.cache_data(ttl=config.catalog_cache_ttl_seconds)
    def load_regions() -> list[dict[str, Any]]:
        return client.list_regions()

    @st.cache_data(ttl=config.series_cache_ttl_seconds)
    def load_vegetation(lat: float, lon: float) -> list[dict[str, Any]]:
        try:
            return client.vegetation_data(lat=lat, lon=lon)
        except ApiRequestError as exc:
            if exc.error_code == "NO_VEGETATION_DATA":
                return []
            raise

    @st.cache_data(ttl=config.series_cache_ttl_seconds)
    def load_series(lat: float, lon: float) -> tuple[list[dict[str, Any]], list[dict[str, Any]]]:
        return load_vegetation(lat, lon), client.climate_data(lat=lat, lon=lon)

    st.title(APP_TITLE)
    st.caption(APP_SUBTITLE)

    try:
        countries = load_countries()
        regions = load_regions()
        all_city_options = load_city_options()
    except ApiUnavailableError:
        st.error(API_UNAVAILABLE)
        return

    id_token = current_id_token()

    tabs = st.tabs(
        ["Dashboard", "Map", "Climate", "Insights", "History", "Contact", "Account", "About"]
    )

    with tabs[0]:
        dashboard.render(
            client=client,
            load_city_options=load_city_options,
            id_token=id_token,
        )

    with tabs[1]:
        map_view.render(
            client=client,
            seed_regions=regions,
            city_options=all_city_options,
            load_series=load_series,
            id_token=id_token,
            max_compare_cities=config.max_compare_cities,
        )

    with tabs[2]:
        climate.render(
            client=client,
            countries=countries,
            load_states=load_states,
            load_cities=load_cities,
            load_location=load_location,
            id_token=id_token,
        )

    with tabs[3]:
        insights.render(
            client=client,
            countries=countries,
            load_states=load_states,
            load_cities=load_cities,
            load_location=load_location,
            load_vegetation=load_vegetation,
            id_token=id_token,
        )

    with tabs[4]:
        history.render(client=client, id_token=id_token)

    with tabs[5]:
        contact.render(client=client)

    with tabs[6]:
        account.render(client=client)

    with tabs[7]:
        about.render()


if __name__ == "__main__":
    main()
