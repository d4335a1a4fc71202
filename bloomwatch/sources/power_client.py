"""
NASA POWER monthly point client.
It fetches temperature/precipitation and all-sky insolation series for a coordinate and
reshapes the `YYYYMM`-keyed payload into ordered month records for charts and prompts.
Insolation stands in for vegetation activity because POWER does not expose NDVI.
"""

from __future__ import annotations

import logging
from collections.abc import Iterator
from datetime import date
from typing import Any, Final

import requests

from bloomwatch.sources.models import ClimateDataPoint, VegetationDataPoint

logger = logging.getLogger(__name__)

POWER_MONTHLY_POINT_URL: Final[str] = "https://power.larc.nasa.gov/api/temporal/monthly/point"
POWER_COMMUNITY: Final[str] = "RE"
CLIMATE_PARAMETERS: Final[tuple[str, ...]] = ("T2M", "PRECTOTCORR")
VEGETATION_PARAMETER: Final[str] = "ALLSKY_SFC_SW_DWN"
NO_DATA_MESSAGE: Final[str] = "No data was found for the requested time period"
MONTH_NAMES: Final[tuple[str, ...]] = (
    "Jan",
    "Feb",
    "Mar",
    "Apr",
    "May",
    "Jun",
    "Jul",
    "Aug",
    "Sep",
    "Oct",
    "Nov",
    "Dec",
)
CLIMATE_DEFAULT_YEARS_BACK: Final[int] = 1
VEGETATION_DEFAULT_YEARS_BACK: Final[int] = 2
# POWER marks missing values with -999
FILL_VALUE_THRESHOLD: Final[float] = -99.0


class PowerApiError(RuntimeError):
    """Raised when NASA POWER cannot be reached or returns an unusable payload."""


def parse_date(value: date | str | None) -> date | None:
    if value is None or isinstance(value, date):
        return value
    text = value.strip()
    if not text:
        return None
    try:
        return date.fromisoformat(text[:10])
    except ValueError as exc:
        raise ValueError(f"Invalid date {value!r}, expected YYYY-MM-DD.") from exc


def subtract_years(day: date, years: int) -> date:
    try:
        return day.replace(year=day.year - years)
    except ValueError:
        # 29 February in a non-leap target year
        return day.replace(year=day.year - years, day=28)


def resolve_window(
    start_date: date | str | None,
    end_date: date | str | None,
    *,
    default_years_back: int,
    today: date | None = None,
) -> tuple[date, date]:
    """Return the (start, end) window, defaulting to `default_years_back` years before end."""

    end = parse_date(end_date) or today or date.today()
    start = parse_date(start_date) or subtract_years(end, default_years_back)
    if start > end:
        raise ValueError("start_date must be less than or equal to end_date.")
    return start, end


def month_label(year: int, month: int) -> str:
    return f"{MONTH_NAMES[month - 1]} {year}"


def iter_months(start: date, end: date) -> Iterator[tuple[int, int]]:
    """Yield (year, month) for every month touched by the inclusive window."""

    year, month = start.year, start.month
    while (year, month) <= (end.year, end.month):
        yield year, month
        month += 1
        if month > 12:
            year, month = year + 1, 1


def parse_month_key(key: str) -> tuple[int, int] | None:
    """Split a `YYYYMM` key; annual means (`YYYY13`) and malformed keys return None."""

    if len(key) != 6 or not key.isdigit() or key.endswith("13"):
        return None
    year, month = int(key[:4]), int(key[4:6])
    if not 1 <= month <= 12:
        return None
    return year, month


def build_climate_points(
    temperature: dict[str, Any],
    rainfall: dict[str, Any],
    *,
    start: date,
    end: date,
) -> list[ClimateDataPoint]:
    rows: list[tuple[int, int, float, float]] = []
    for key, temp_value in temperature.items():
        parsed = parse_month_key(key)
        if parsed is None:
            continue
        year, month = parsed
        if not start <= date(year, month, 1) <= end:
            continue
        rows.append((year, month, float(temp_value), float(rainfall.get(key, 0.0))))

    rows.sort(key=lambda row: (row[0], row[1]))
    return [
        ClimateDataPoint(month=month_label(year, month), temperature=temp, rainfall=rain)
        for year, month, temp, rain in rows
    ]


def build_vegetation_points(
    insolation: dict[str, Any],
    *,
    start: date,
    end: date,
) -> list[VegetationDataPoint]:
    values: dict[tuple[int, int], float] = {}
    for key, raw_value in insolation.items():
        parsed = parse_month_key(key)
        if parsed is None:
            continue
        value = float(raw_value)
        values[parsed] = value if value > FILL_VALUE_THRESHOLD else 0.0

    return [
        VegetationDataPoint(
            month=month_label(year, month),
            value=values.get((year, month), 0.0),
            date=date(year, month, 1).isoformat(),
        )
        for year, month in iter_months(start, end)
    ]


class PowerClient:
    def __init__(
        self,
        *,
        base_url: str = POWER_MONTHLY_POINT_URL,
        api_key: str | None = None,
        timeout_seconds: int = 30,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url
        self.api_key = api_key
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def get_climate_data(
        self,
        *,
        lat: float,
        lon: float,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[ClimateDataPoint]:
        start, end = resolve_window(
            start_date, end_date, default_years_back=CLIMATE_DEFAULT_YEARS_BACK
        )
        payload = self._fetch(
            parameters=",".join(CLIMATE_PARAMETERS),
            lat=lat,
            lon=lon,
            start=start,
            end=end,
            label="climate",
        )

        if payload.get("error"):
            raise PowerApiError(f"NASA POWER API Error: {payload['error']}")

        parameter_block = (payload.get("properties") or {}).get("parameter")
        if not parameter_block:
            raise PowerApiError("Unexpected response format from NASA POWER API.")

        temperature = parameter_block.get("T2M")
        rainfall = parameter_block.get("PRECTOTCORR")
        if not temperature or not rainfall:
            raise PowerApiError(
                "Climate data (T2M or PRECTOTCORR) not found in NASA POWER API response."
            )

        points = build_climate_points(temperature, rainfall, start=start, end=end)
        logger.debug("Fetched %d climate months for (%s, %s)", len(points), lat, lon)
        return points

    def get_vegetation_data(
        self,
        *,
        lat: float,
        lon: float,
        start_date: date | str | None = None,
        end_date: date | str | None = None,
    ) -> list[VegetationDataPoint]:
        start, end = resolve_window(
            start_date, end_date, default_years_back=VEGETATION_DEFAULT_YEARS_BACK
        )
        payload = self._fetch(
            parameters=VEGETATION_PARAMETER,
            lat=lat,
            lon=lon,
            start=start,
            end=end,
            label="insolation",
        )

        api_message = str((payload.get("header") or {}).get("api_message") or "")
        if NO_DATA_MESSAGE in api_message:
            logger.info("NASA POWER has no insolation data for (%s, %s)", lat, lon)
            return []

        messages = payload.get("messages") or []
        if payload.get("error") or (messages and not payload.get("properties")):
            error_message = payload.get("error") or ", ".join(str(item) for item in messages)
            raise PowerApiError(f"NASA POWER API Error for Insolation data: {error_message}")

        parameter_block = (payload.get("properties") or {}).get("parameter") or {}
        insolation = parameter_block.get(VEGETATION_PARAMETER)
        if not insolation:
            raise PowerApiError("Insolation data not found in NASA POWER API response.")

        return build_vegetation_points(insolation, start=start, end=end)

    def _fetch(
        self,
        *,
        parameters: str,
        lat: float,
        lon: float,
        start: date,
        end: date,
        label: str,
    ) -> dict[str, Any]:
        params: dict[str, Any] = {
            "parameters": parameters,
            "community": POWER_COMMUNITY,
            "longitude": lon,
            "latitude": lat,
            "start": f"{start.year:04d}",
            "end": f"{end.year:04d}",
            "format": "JSON",
        }
        if self.api_key:
            params["api_key"] = self.api_key

        try:
            response = self.session.get(self.base_url, params=params, timeout=self.timeout_seconds)
        except requests.RequestException as exc:
            logger.error("NASA POWER %s request failed: %s", label, exc)
            raise PowerApiError(f"NASA POWER API request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            raise PowerApiError(
                f"NASA POWER API request failed with status {response.status_code}: "
                f"{response.text[:300]}"
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise PowerApiError("NASA POWER API did not return valid JSON.") from exc

        if not isinstance(payload, dict):
            raise PowerApiError("Unexpected response format from NASA POWER API.")
        return payload
