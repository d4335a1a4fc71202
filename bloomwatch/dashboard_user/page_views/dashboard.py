# This file renders the Dashboard tab: a display list of regions with bloom predictions.
# It exists so visitors can collect places they care about and see a prediction for each one.
# The city picker hides cities already shown, and removing a card drops its result.
# Newly added regions are predicted right away; the refresh button re-predicts every card.
# Batch results are merged by region key in display order, so a slow batch never resurrects removed cards.

from __future__ import annotations

from collections.abc import Callable
from typing import Any

import streamlit as st

from bloomwatch.dashboard_user.api_client import (
    ApiRequestError,
    ApiUnavailableError,
    BloomWatchApiClient,
)
from bloomwatch.dashboard_user.components.prediction_cards import render_region_card
from bloomwatch.dashboard_user.selection import (
    DisplayRegion,
    add_region,
    batch_payload,
    merge_results,
    pending_regions,
    region_from_option,
    remove_region,
)
from bloomwatch.dashboard_user.tooltips import TOOLTIPS
from bloomwatch.dashboard_user.ui_text import EMPTY_DISPLAY_LIST

DISPLAY_KEY = "display_regions"
RESULTS_KEY = "prediction_results"


def _display() -> tuple[DisplayRegion, ...]:
    return tuple(st.session_state.get(DISPLAY_KEY, ()))


def _results() -> dict[str, dict[str, Any]]:
    return dict(st.session_state.get(RESULTS_KEY, {}))


def _remove(key: str) -> None:
    st.session_state[DISPLAY_KEY] = remove_region(_display(), key)
    results = _results()
    results.pop(key, None)
    st.session_state[RESULTS_KEY] = results


def _predict(
    client: BloomWatchApiClient,
    requested: tuple[DisplayRegion, ...],
    *,
    id_token: str | None,
) -> None:
    with st.spinner(f"Predicting {len(requested)} regions..."):
        try:
            batch = client.batch_predictions(batch_payload(requested), id_token=id_token)
        except (ApiUnavailableError, ApiRequestError) as exc:
            st.error(str(exc))
            return
    st.session_state[RESULTS_KEY] = merge_results(_display(), _results(), requested, batch)


def render(
    *,
    client: BloomWatchApiClient,
    load_city_options: Callable[[tuple[str, ...]], list[dict[str, Any]]],
    id_token: str | None,
) -> None:
    st.header("Dashboard")

    st.session_state.setdefault(DISPLAY_KEY, ())
    st.session_state.setdefault(RESULTS_KEY, {})

    display = _display()
    options = load_city_options(tuple(sorted(region.key for region in display)))
    by_label = {option["label"]: option for option in options}

    picker, add = st.columns([4, 1])
    choice = picker.selectbox(
        "Add a city",
        list(by_label),
        index=None,
        placeholder="Search cities",
        help=TOOLTIPS["city_picker"],
        key="dashboard_city_choice",
    )
    if add.button("Add", disabled=choice is None, use_container_width=True):
        st.session_state[DISPLAY_KEY] = add_region(display, region_from_option(by_label[choice]))
        st.session_state.pop("dashboard_city_choice", None)
        st.rerun()

    if not display:
        st.info(EMPTY_DISPLAY_LIST)
        return

    pending = pending_regions(display, _results())
    if pending:
        _predict(client, pending, id_token=id_token)

    if st.button("Refresh predictions", help=TOOLTIPS["predict_all"], type="primary"):
        _predict(client, display, id_token=id_token)

    results = _results()
    columns = st.columns(2)
    for index, region in enumerate(_display()):
        with columns[index % 2]:
            render_region_card(region, results.get(region.key), on_remove=_remove)
