# This test file covers the pandas frames behind the History and Map tabs.
# They are built without Streamlit so column names and aggregates can be checked directly.

from __future__ import annotations

from bloomwatch.dashboard_user.components.tables import column_config
from bloomwatch.dashboard_user.formatting import (
    format_bloom_date,
    format_coordinates,
    format_event_time,
)
from bloomwatch.dashboard_user.page_views.history import history_frame
from bloomwatch.dashboard_user.page_views.map_view import comparison_frames, map_points
from bloomwatch.dashboard_user.selection import DisplayRegion


def test_history_frame_formats_rows() -> None:
    frame = history_frame(
        [
            {
                "type": "PREDICTION",
                "region_name": "Bangalore",
                "city": "Bangalore",
                "state": "Karnataka",
                "country": "India",
                "predicted_date": "2026-02-15",
                "created_at": "2025-06-01T08:30:00Z",
            },
            {"type": "CLIMATE_SUMMARY", "region_name": "Tokyo", "summary": "Humid summer."},
        ]
    )

    assert list(frame["Activity"]) == ["Prediction", "Climate summary"]
    assert frame.loc[0, "Location"] == "Bangalore, Karnataka, India"
    assert frame.loc[0, "When"] == "2025-06-01 08:30"
    assert frame.loc[1, "Predicted bloom"] == "-"
    assert frame.loc[1, "Summary"] == "Humid summer."


def test_history_frame_empty_keeps_columns() -> None:
    frame = history_frame([])

    assert frame.empty
    assert "Predicted bloom" in frame.columns


def test_map_points_skip_selected_duplicates_of_seeds() -> None:
    seeds = [{"name": "Furano, Hokkaido", "lat": 43.3420, "lon": 142.3832}]
    display = (
        DisplayRegion(key="a", name="Furano, Hokkaido", lat=43.3420, lon=142.3832),
        DisplayRegion(key="b", name="Sapporo", lat=43.0618, lon=141.3545),
    )

    frame = map_points(seeds, display)

    assert list(frame["kind"]) == ["Seed region", "Selected city"]
    assert list(frame["name"]) == ["Furano, Hokkaido", "Sapporo"]


def test_comparison_frames_summarize_each_city() -> None:
    series = {
        "Tokyo": (
            [{"month": "Jan 2024", "value": 2.0, "date": "2024-01-01"}],
            [
                {"month": "Jan 2024", "temperature": 5.0, "rainfall": 1.0},
                {"month": "Feb 2024", "temperature": 7.0, "rainfall": 2.0},
            ],
        ),
        "Delhi": (
            [{"month": "Jan 2024", "value": 4.0, "date": "2024-01-01"}],
            [{"month": "Jan 2024", "temperature": 14.0, "rainfall": 0.5}],
        ),
    }

    climate, vegetation, summary = comparison_frames(series)

    assert len(climate) == 3
    assert set(vegetation["city"]) == {"Tokyo", "Delhi"}
    tokyo = summary[summary["city"] == "Tokyo"].iloc[0]
    assert tokyo["avg_temperature"] == 6.0
    assert tokyo["total_rainfall"] == 3.0
    assert tokyo["avg_insolation"] == 2.0


def test_comparison_frames_empty_input() -> None:
    climate, vegetation, summary = comparison_frames({})

    assert climate.empty and vegetation.empty and summary.empty


def test_formatting_helpers() -> None:
    assert format_coordinates(38.8853, -77.0386) == "38.89°N, 77.04°W"
    assert format_coordinates(None, 1.0) == "-"
    assert format_bloom_date("2025-03-28") == "Mar 28, 2025"
    assert format_bloom_date(None) == "Unknown"
    assert format_bloom_date("spring") == "spring"
    assert format_event_time(None) == "-"


def test_comparison_columns_get_unit_labels() -> None:
    config = column_config(["city", "avg_temperature", "total_rainfall"])

    assert set(config) == {"avg_temperature", "total_rainfall"}
