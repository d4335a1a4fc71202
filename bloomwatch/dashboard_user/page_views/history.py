# This file renders the History tab: the signed-in user's most recent activity.

from __future__ import annotations

from typing import Any

import pandas as pd
import streamlit as st

from bloomwatch.dashboard_user.api_client import (
    ApiRequestError,
    ApiUnavailableError,
    BloomWatchApiClient,
)
from bloomwatch.dashboard_user.components.tables import render_table
from bloomwatch.dashboard_user.formatting import format_event_time, format_event_type
from bloomwatch.dashboard_user.tooltips import TOOLTIPS
from bloomwatch.dashboard_user.ui_text import EMPTY_HISTORY, LOGIN_FOR_HISTORY


def history_frame(events: list[dict[str, Any]]) -> pd.DataFrame:
    rows = []
    for event in events:
        location = ", ".join(
            part for part in (event.get("city"), event.get("state"), event.get("country")) if part
        )
        rows.append(
            {
                "When": format_event_time(event.get("created_at")),
                "Activity": format_event_type(event.get("type")),
                "Region": event.get("region_name") or "-",
                "Location": location or "-",
                "Predicted bloom": event.get("predicted_date") or "-",
                "Summary": event.get("summary") or "",
            }
        )
    return pd.DataFrame(
        rows,
        columns=["When", "Activity", "Region", "Location", "Predicted bloom", "Summary"],
    )


def render(*, client: BloomWatchApiClient, id_token: str | None) -> None:
    st.header("History")
    if not id_token:
        st.info(LOGIN_FOR_HISTORY)
        return

    try:
        events = client.history(id_token=id_token)
    except (ApiUnavailableError, ApiRequestError) as exc:
        st.error(f"Failed to load history: {exc}")
        return

    render_table(
        history_frame(events),
        title="Recent activity",
        empty_message=EMPTY_HISTORY,
        help_text=TOOLTIPS["history"],
    )
