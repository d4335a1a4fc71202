# This file renders the read-only tables on the History and Map tabs.
# Column labels and number formats come from COLUMN_FORMATS so units read the same everywhere.

from __future__ import annotations

import pandas as pd
import streamlit as st

COLUMN_FORMATS: dict[str, tuple[str, str]] = {
    "avg_temperature": ("Avg temperature (°C)", "%.2f"),
    "total_rainfall": ("Total rainfall (mm)", "%.2f"),
    "avg_insolation": ("Avg insolation (kWh/m²/day)", "%.2f"),
}


def column_config(columns: list[str]) -> dict[str, object]:
    return {
        name: st.column_config.NumberColumn(label, format=number_format)
        for name, (label, number_format) in COLUMN_FORMATS.items()
        if name in columns
    }


def render_table(
    dataframe: pd.DataFrame,
    *,
    title: str,
    empty_message: str,
    help_text: str | None = None,
) -> None:
    st.subheader(title, help=help_text)
    if dataframe.empty:
        st.info(empty_message)
        return
    st.dataframe(
        dataframe,
        use_container_width=True,
        hide_index=True,
        column_config=column_config(list(dataframe.columns)),
    )
