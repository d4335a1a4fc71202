# This file renders one dashboard card per region with its prediction or failure.
# It exists so the dashboard and map tabs present model output the same way.
# Failed regions show the error; successful ones get an expander with the full explanation.

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import streamlit as st

from bloomwatch.dashboard_user.components.charts import render_vegetation_chart
from bloomwatch.dashboard_user.formatting import format_bloom_date, format_coordinates
from bloomwatch.dashboard_user.selection import DisplayRegion
from bloomwatch.dashboard_user.tooltips import TOOLTIPS


def render_prediction_details(data: dict[str, Any]) -> None:
    st.markdown(f"**Justification:** {data.get('prediction_justification', '-')}")
    st.markdown(f"**Ecological significance:** {data.get('ecological_significance', '-')}")
    st.markdown(f"**Human impact:** {data.get('human_impact', '-')}")
    st.markdown(f"**Potential species:** {data.get('potential_species', '-')}")
    readings = data.get("ndvi_data") or []
    if readings:
        render_vegetation_chart(
            readings,
            help_text=TOOLTIPS["vegetation_chart"],
            title="Vegetation readings",
            height=200,
        )


def render_region_card(
    region: DisplayRegion,
    result: dict[str, Any] | None,
    *,
    on_remove: Callable[[str], None] | None = None,
) -> None:
    with st.container(border=True):
        header, action = st.columns([5, 1])
        header.markdown(f"### {region.name}")
        header.caption(region.subtitle or format_coordinates(region.lat, region.lon))
        if on_remove is not None:
            action.button(
                "Remove",
                key=f"remove_{region.key}",
                on_click=on_remove,
                args=(region.key,),
            )

        if region.latest_bloom:
            st.caption(f"Last bloom: {format_bloom_date(region.latest_bloom)}")

        if result is None:
            st.caption("No prediction yet.")
            return
        if not result.get("success"):
            st.error(result.get("error") or "Prediction failed.")
            return

        data = result.get("data") or {}
        st.metric("Predicted next bloom", format_bloom_date(data.get("predicted_next_bloom_date")))
        with st.expander("Details"):
            render_prediction_details(data)
