# This file renders the Climate tab: cascading location pickers, climate and vegetation charts,
# and a model-written summary of both.
# Changing the country, state, or city clears the charts and summary for the previous place.

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

import streamlit as st

from bloomwatch.dashboard_user.api_client import (
    ApiRequestError,
    ApiUnavailableError,
    BloomWatchApiClient,
)
from bloomwatch.dashboard_user.components.charts import (
    render_climate_chart,
    render_vegetation_chart,
)
from bloomwatch.dashboard_user.components.selectors import render_location_selector
from bloomwatch.dashboard_user.tooltips import TOOLTIPS
from bloomwatch.dashboard_user.ui_text import NO_VEGETATION, SELECT_CITY

RESULT_KEY = "climate_result"
SUMMARY_KEY = "climate_summary"


def _date_range() -> tuple[date | None, date | None]:
    custom = st.checkbox(
        "Custom date range", key="climate_custom_range", help=TOOLTIPS["date_range"]
    )
    if not custom:
        return None, None
    start_col, end_col = st.columns(2)
    start_date = start_col.date_input("Start date", value=None, key="climate_start")
    end_date = end_col.date_input("End date", value=None, key="climate_end")
    return start_date, end_date


def render(
    *,
    client: BloomWatchApiClient,
    countries: list[dict[str, Any]],
    load_states: Callable[[str], tuple[list[dict[str, Any]], list[str]]],
    load_cities: Callable[[str, str], list[dict[str, Any]]],
    load_location: Callable[[str, str, str | None], dict[str, Any] | None],
    id_token: str | None,
) -> None:
    st.header("Climate")

    selection = render_location_selector(
        prefix="climate",
        countries=countries,
        load_states=load_states,
        load_cities=load_cities,
        load_location=load_location,
        result_keys=[RESULT_KEY, SUMMARY_KEY],
    )
    point = selection.point
    if point is None:
        if selection.state is not None or selection.country is None:
            st.info(SELECT_CITY)
        return

    start_date, end_date = _date_range()
    if start_date and end_date and start_date > end_date:
        st.error("Start date must be on or before end date.")
        return

    if st.button(f"Load data for {point['name']}", type="primary"):
        st.session_state.pop(SUMMARY_KEY, None)
        with st.spinner("Fetching NASA POWER data..."):
            try:
                climate = client.climate_data(
                    lat=point["lat"], lon=point["lon"], start_date=start_date, end_date=end_date
                )
                try:
                    vegetation = client.vegetation_data(
                        lat=point["lat"], lon=point["lon"], start_date=start_date, end_date=end_date
                    )
                except ApiRequestError as exc:
                    if exc.error_code != "NO_VEGETATION_DATA":
                        raise
                    vegetation = []
            except (ApiUnavailableError, ApiRequestError) as exc:
                st.error(str(exc))
            else:
                st.session_state[RESULT_KEY] = {
                    "location": point["name"],
                    "climate": climate,
                    "vegetation": vegetation,
                }

    result = st.session_state.get(RESULT_KEY)
    if not result:
        return

    render_climate_chart(result["climate"], help_text=TOOLTIPS["climate_chart"])
    if result["vegetation"]:
        render_vegetation_chart(result["vegetation"], help_text=TOOLTIPS["vegetation_chart"])
    else:
        st.info(NO_VEGETATION)

    if st.button("Summarize", help=TOOLTIPS["summary_button"]):
        with st.spinner("Summarizing..."):
            try:
                st.session_state[SUMMARY_KEY] = client.summarize(
                    location_name=result["location"],
                    climate_data=result["climate"],
                    vegetation_data=result["vegetation"],
                    id_token=id_token,
                )
            except (ApiUnavailableError, ApiRequestError) as exc:
                st.error(str(exc))

    summary = st.session_state.get(SUMMARY_KEY)
    if summary:
        st.success(summary)
