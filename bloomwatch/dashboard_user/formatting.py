# This file collects small formatting helpers used across dashboard pages.
# The functions return simple strings that Streamlit can display directly.

from __future__ import annotations

from datetime import datetime


def format_coordinates(lat: float | None, lon: float | None) -> str:
    if lat is None or lon is None:
        return "-"
    lat_hemisphere = "N" if lat >= 0 else "S"
    lon_hemisphere = "E" if lon >= 0 else "W"
    return f"{abs(lat):.2f}°{lat_hemisphere}, {abs(lon):.2f}°{lon_hemisphere}"


def format_bloom_date(value: str | None) -> str:
    if not value:
        return "Unknown"
    try:
        return datetime.fromisoformat(value).strftime("%b %d, %Y")
    except ValueError:
        return value


def format_event_time(value: str | datetime | None) -> str:
    if value is None:
        return "-"
    if isinstance(value, str):
        try:
            value = datetime.fromisoformat(value.replace("Z", "+00:00"))
        except ValueError:
            return value
    return value.strftime("%Y-%m-%d %H:%M")


def format_event_type(value: str | None) -> str:
    labels = {
        "PREDICTION": "Prediction",
        "ANALYSIS": "Analysis",
        "CLIMATE_SUMMARY": "Climate summary",
    }
    return labels.get(value or "", value or "-")
