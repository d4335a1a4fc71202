# This file contains reusable chart renderers for climate and vegetation series.
# It exists so chart logic is shared and consistently handles empty datasets.
# The charts use Altair because it integrates cleanly with Streamlit and supports layered visuals.
# Month labels are categorical, so every chart keeps the API's chronological order.

from __future__ import annotations

from typing import Any

import altair as alt
import pandas as pd
import streamlit as st


def climate_frame(points: list[dict[str, Any]]) -> pd.DataFrame:
    return pd.DataFrame(points, columns=["month", "temperature", "rainfall"])


def vegetation_frame(points: list[dict[str, Any]]) -> pd.DataFrame:
    frame = pd.DataFrame(points)
    if frame.empty:
        return pd.DataFrame(columns=["month", "value"])
    return frame[["month", "value"]]


def build_climate_chart(dataframe: pd.DataFrame) -> alt.LayerChart:
    base = alt.Chart(dataframe).encode(x=alt.X("month:N", sort=None, title="Month"))
    rainfall = base.mark_bar(color="#60a5fa", opacity=0.7).encode(
        y=alt.Y("rainfall:Q", title="Rainfall (mm)"),
        tooltip=[
            alt.Tooltip("month:N", title="Month"),
            alt.Tooltip("rainfall:Q", title="Rainfall (mm)", format=".2f"),
        ],
    )
    temperature = base.mark_line(color="#f97316", point=True).encode(
        y=alt.Y("temperature:Q", title="Temperature (°C)"),
        tooltip=[
            alt.Tooltip("month:N", title="Month"),
            alt.Tooltip("temperature:Q", title="Temperature (°C)", format=".1f"),
        ],
    )
    return alt.layer(rainfall, temperature).resolve_scale(y="independent").properties(height=320)


def build_vegetation_chart(dataframe: pd.DataFrame, *, height: int = 280) -> alt.Chart:
    return (
        alt.Chart(dataframe)
        .mark_bar(color="#16a34a")
        .encode(
            x=alt.X("month:N", sort=None, title="Month"),
            y=alt.Y("value:Q", title="Insolation (kWh/m²/day)"),
            tooltip=[
                alt.Tooltip("month:N", title="Month"),
                alt.Tooltip("value:Q", title="Value", format=".2f"),
            ],
        )
        .properties(height=height)
    )


def render_climate_chart(points: list[dict[str, Any]], *, help_text: str) -> None:
    st.subheader("Climate", help=help_text)
    dataframe = climate_frame(points)
    if dataframe.empty:
        st.info("No climate data available for this location and period.")
        return
    st.altair_chart(build_climate_chart(dataframe), use_container_width=True)


def render_vegetation_chart(
    points: list[dict[str, Any]],
    *,
    help_text: str,
    title: str = "Vegetation Activity",
    height: int = 280,
) -> None:
    st.subheader(title, help=help_text)
    dataframe = vegetation_frame(points)
    if dataframe.empty:
        st.info("No vegetation data available for this location and period.")
        return
    st.altair_chart(build_vegetation_chart(dataframe, height=height), use_container_width=True)


def render_comparison_chart(dataframe: pd.DataFrame, *, value_field: str, title: str) -> None:
    """Line per city over the shared month axis."""

    if dataframe.empty:
        st.info("No comparison data available.")
        return
    chart = (
        alt.Chart(dataframe)
        .mark_line(point=True)
        .encode(
            x=alt.X("month:N", sort=None, title="Month"),
            y=alt.Y(f"{value_field}:Q", title=title),
            color=alt.Color("city:N", title="City"),
            tooltip=["city:N", "month:N", alt.Tooltip(f"{value_field}:Q", format=".2f")],
        )
        .properties(height=300)
    )
    st.altair_chart(chart, use_container_width=True)
