# This file renders the Map tab: seed regions and dashboard cities on a map, plus per-city tools.
# It exists so visitors can inspect one city's series, request a prediction, and compare cities.
# Comparisons use the plain climate and vegetation endpoints so they do not add history entries.

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from typing import Any

import pandas as pd
import streamlit as st

from bloomwatch.dashboard_user.api_client import (
    ApiRequestError,
    ApiUnavailableError,
    BloomWatchApiClient,
)
from bloomwatch.dashboard_user.components.charts import (
    render_climate_chart,
    render_comparison_chart,
    render_vegetation_chart,
)
from bloomwatch.dashboard_user.components.prediction_cards import render_prediction_details
from bloomwatch.dashboard_user.components.tables import render_table
from bloomwatch.dashboard_user.formatting import format_bloom_date
from bloomwatch.dashboard_user.tooltips import TOOLTIPS

SeriesLoader = Callable[[float, float], tuple[list[dict[str, Any]], list[dict[str, Any]]]]


def map_points(
    seed_regions: list[dict[str, Any]], display: tuple[Any, ...]
) -> pd.DataFrame:
    rows = [
        {"name": seed["name"], "lat": seed["lat"], "lon": seed["lon"], "kind": "Seed region"}
        for seed in seed_regions
    ]
    seen = {(row["name"], row["lat"]) for row in rows}
    for region in display:
        if (region.name, region.lat) in seen:
            continue
        rows.append(
            {"name": region.name, "lat": region.lat, "lon": region.lon, "kind": "Selected city"}
        )
    return pd.DataFrame(rows, columns=["name", "lat", "lon", "kind"])


def comparison_frames(
    series_by_city: dict[str, tuple[list[dict[str, Any]], list[dict[str, Any]]]],
) -> tuple[pd.DataFrame, pd.DataFrame, pd.DataFrame]:
    """Long-form climate and vegetation frames plus a per-city summary table."""

    climate_parts: list[pd.DataFrame] = []
    vegetation_parts: list[pd.DataFrame] = []
    for city, (vegetation, climate) in series_by_city.items():
        climate_parts.append(
            pd.DataFrame(climate, columns=["month", "temperature", "rainfall"]).assign(city=city)
        )
        vegetation_parts.append(
            pd.DataFrame(vegetation, columns=["month", "value", "date"]).assign(city=city)
        )

    if not climate_parts:
        return pd.DataFrame(), pd.DataFrame(), pd.DataFrame()
    climate_df = pd.concat(climate_parts, ignore_index=True)
    vegetation_df = pd.concat(vegetation_parts, ignore_index=True)
    if climate_df.empty:
        return climate_df, vegetation_df, pd.DataFrame()

    summary = climate_df.groupby("city", sort=False).agg(
        avg_temperature=("temperature", "mean"),
        total_rainfall=("rainfall", "sum"),
    )
    if not vegetation_df.empty:
        summary = summary.join(
            vegetation_df.groupby("city", sort=False).agg(avg_insolation=("value", "mean"))
        )
    return climate_df, vegetation_df, summary.round(2).reset_index()


def render(
    *,
    client: BloomWatchApiClient,
    seed_regions: list[dict[str, Any]],
    city_options: list[dict[str, Any]],
    load_series: SeriesLoader,
    id_token: str | None,
    max_compare_cities: int,
) -> None:
    st.header("Map")

    display = tuple(st.session_state.get("display_regions", ()))
    st.map(map_points(seed_regions, display), latitude="lat", longitude="lon")

    by_label = {option["label"]: option for option in city_options}
    choice = st.selectbox(
        "City", list(by_label), index=None, placeholder="Search cities", key="map_city_choice"
    )
    if choice:
        option = by_label[choice]
        _render_city_tools(client, option, id_token)

    st.divider()
    st.subheader("Compare cities", help=TOOLTIPS["comparison"])
    chosen = st.multiselect(
        "Cities to compare",
        list(by_label),
        max_selections=max_compare_cities,
        key="map_compare_choice",
    )
    if len(chosen) < 2:
        st.caption("Pick at least two cities to compare.")
        return

    series_by_city: dict[str, tuple[list[dict[str, Any]], list[dict[str, Any]]]] = {}
    for label in chosen:
        option = by_label[label]
        try:
            series_by_city[option["city"]] = load_series(option["lat"], option["lon"])
        except (ApiUnavailableError, ApiRequestError) as exc:
            st.warning(f"{option['city']}: {exc}")

    climate_df, vegetation_df, summary_df = comparison_frames(series_by_city)
    render_table(summary_df, title="Summary", empty_message="No comparison data available.")
    render_comparison_chart(climate_df, value_field="temperature", title="Temperature (°C)")
    render_comparison_chart(vegetation_df, value_field="value", title="Insolation (kWh/m²/day)")


def _render_city_tools(
    client: BloomWatchApiClient, option: dict[str, Any], id_token: str | None
) -> None:
    analysis_key = f"map_analysis_{option['value']}"
    prediction_key = f"map_prediction_{option['value']}"

    analyze, predict = st.columns(2)
    if analyze.button("Analyze city", use_container_width=True):
        with st.spinner("Loading climate and vegetation data..."):
            try:
                st.session_state[analysis_key] = client.city_analysis(
                    city=option["city"], lat=option["lat"], lon=option["lon"], id_token=id_token
                )
            except (ApiUnavailableError, ApiRequestError) as exc:
                st.error(str(exc))

    latest_bloom: date | None = predict.date_input(
        "Last known bloom", value=None, help=TOOLTIPS["latest_bloom"], key="map_latest_bloom"
    )
    if predict.button("Predict bloom", use_container_width=True):
        with st.spinner("Asking the model..."):
            try:
                st.session_state[prediction_key] = client.city_prediction(
                    city=option["city"],
                    lat=option["lat"],
                    lon=option["lon"],
                    latest_bloom=latest_bloom.isoformat() if latest_bloom else None,
                    id_token=id_token,
                )
            except (ApiUnavailableError, ApiRequestError) as exc:
                st.error(str(exc))

    analysis = st.session_state.get(analysis_key)
    if analysis:
        render_climate_chart(analysis.get("climate_data", []), help_text=TOOLTIPS["climate_chart"])
        render_vegetation_chart(
            analysis.get("vegetation_data", []), help_text=TOOLTIPS["vegetation_chart"]
        )

    prediction = st.session_state.get(prediction_key)
    if prediction:
        st.metric(
            "Predicted next bloom",
            format_bloom_date(prediction.get("predicted_next_bloom_date")),
        )
        render_prediction_details(prediction)
