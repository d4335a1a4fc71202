# This file holds the dashboard's display-list logic as plain functions over immutable values.
# It exists so adding, removing, and merging prediction results can be tested without Streamlit.
# Results are keyed by region key; merging keeps display order and drops regions no longer shown.

from __future__ import annotations

from dataclasses import dataclass
from typing import Any


@dataclass(frozen=True)
class DisplayRegion:
    key: str
    name: str
    lat: float
    lon: float
    latest_bloom: str | None = None
    subtitle: str | None = None


def region_key(name: str, lat: float) -> str:
    return f"{name}-{lat}"


def region_from_option(option: dict[str, Any]) -> DisplayRegion:
    return DisplayRegion(
        key=str(option["value"]),
        name=str(option["city"]),
        lat=float(option["lat"]),
        lon=float(option["lon"]),
        subtitle=f"{option['state']}, {option['country']}",
    )


def add_region(
    display: tuple[DisplayRegion, ...], region: DisplayRegion
) -> tuple[DisplayRegion, ...]:
    if any(item.key == region.key for item in display):
        return display
    return (*display, region)


def remove_region(display: tuple[DisplayRegion, ...], key: str) -> tuple[DisplayRegion, ...]:
    return tuple(item for item in display if item.key != key)


def batch_payload(regions: tuple[DisplayRegion, ...]) -> list[dict[str, Any]]:
    payload: list[dict[str, Any]] = []
    for region in regions:
        item: dict[str, Any] = {"name": region.name, "lat": region.lat, "lon": region.lon}
        if region.latest_bloom:
            item["latest_bloom"] = region.latest_bloom
        payload.append(item)
    return payload


def pending_regions(
    display: tuple[DisplayRegion, ...], results: dict[str, dict[str, Any]]
) -> tuple[DisplayRegion, ...]:
    return tuple(region for region in display if region.key not in results)


def merge_results(
    display: tuple[DisplayRegion, ...],
    previous: dict[str, dict[str, Any]],
    requested: tuple[DisplayRegion, ...],
    batch: list[dict[str, Any]],
) -> dict[str, dict[str, Any]]:
    """Combine earlier results with a new batch, ordered like the display list.

    The batch is positional: `batch[i]` is the result for `requested[i]`. Regions the
    user removed while the batch was running are dropped.
    """

    incoming = {region.key: result for region, result in zip(requested, batch)}
    merged: dict[str, dict[str, Any]] = {}
    for region in display:
        if region.key in incoming:
            merged[region.key] = incoming[region.key]
        elif region.key in previous:
            merged[region.key] = previous[region.key]
    return merged
