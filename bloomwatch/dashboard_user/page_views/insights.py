# This file renders the Insights tab: a vegetation chart and a model bloom analysis for one city.

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import streamlit as st

from bloomwatch.dashboard_user.api_client import (
    ApiRequestError,
    ApiUnavailableError,
    BloomWatchApiClient,
)
from bloomwatch.dashboard_user.components.charts import render_vegetation_chart
from bloomwatch.dashboard_user.components.prediction_cards import render_prediction_details
from bloomwatch.dashboard_user.components.selectors import render_location_selector
from bloomwatch.dashboard_user.formatting import format_bloom_date
from bloomwatch.dashboard_user.tooltips import TOOLTIPS
from bloomwatch.dashboard_user.ui_text import NO_VEGETATION, SELECT_CITY

ANALYSIS_KEY = "insights_analysis"


def render(
    *,
    client: BloomWatchApiClient,
    countries: list[dict[str, Any]],
    load_states: Callable[[str], tuple[list[dict[str, Any]], list[str]]],
    load_cities: Callable[[str, str], list[dict[str, Any]]],
    load_location: Callable[[str, str, str | None], dict[str, Any] | None],
    load_vegetation: Callable[[float, float], list[dict[str, Any]]],
    id_token: str | None,
) -> None:
    st.header("Insights")

    selection = render_location_selector(
        prefix="insights",
        countries=countries,
        load_states=load_states,
        load_cities=load_cities,
        load_location=load_location,
        result_keys=[ANALYSIS_KEY],
    )
    point = selection.point
    if point is None:
        if selection.state is not None or selection.country is None:
            st.info(SELECT_CITY)
        return

    try:
        vegetation = load_vegetation(point["lat"], point["lon"])
    except (ApiUnavailableError, ApiRequestError) as exc:
        st.error(str(exc))
        return

    if not vegetation:
        st.info(NO_VEGETATION)
        return

    render_vegetation_chart(vegetation, help_text=TOOLTIPS["vegetation_chart"])

    if st.button(f"Analyze blooms in {point['name']}", type="primary"):
        with st.spinner("Asking the model..."):
            try:
                st.session_state[ANALYSIS_KEY] = client.insights_analysis(
                    city=point["name"],
                    state=selection.state["name"] if selection.state else None,
                    country=selection.country["name"] if selection.country else None,
                    vegetation_data=vegetation,
                    id_token=id_token,
                )
            except (ApiUnavailableError, ApiRequestError) as exc:
                st.error(str(exc))

    analysis = st.session_state.get(ANALYSIS_KEY)
    if analysis:
        st.metric(
            "Predicted next bloom",
            format_bloom_date(analysis.get("predicted_next_bloom_date")),
        )
        render_prediction_details(analysis)
