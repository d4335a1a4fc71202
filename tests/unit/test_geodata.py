"""
Unit tests for the static geography catalog and seed regions.
It asserts expected behavior and guards against regressions in the corresponding component.
"""

from __future__ import annotations

from bloomwatch.reference.geodata import (
    all_countries,
    city_options,
    find_city,
    find_country,
    find_state,
    location_key,
    representative_location,
)
from bloomwatch.reference.regions import REGIONS, find_region


def test_countries_are_sorted_and_unique() -> None:
    names = [country.name for country in all_countries()]

    assert names == sorted(names, key=str.casefold)
    assert len(names) == len(set(names))


def test_lookups_ignore_case_and_whitespace() -> None:
    country = find_country("  india ")
    assert country is not None
    state = find_state(country, "KARNATAKA")
    assert state is not None
    city = find_city(state, "mysore")
    assert city is not None
    assert city.name == "Mysore"


def test_country_without_states_has_no_cities() -> None:
    country = find_country("France")

    assert country is not None
    assert country.states == ()


def test_unknown_names_return_none() -> None:
    india = find_country("India")
    assert india is not None

    assert find_country("Atlantis") is None
    assert find_state(india, "Atlantis") is None


def test_representative_location_prefers_city_then_first_city() -> None:
    country = find_country("United States")
    assert country is not None
    california = find_state(country, "California")
    assert california is not None

    assert representative_location(california, None) == california.cities[0]
    assert representative_location(california, california.cities[2]) == california.cities[2]
    assert representative_location(None, None) is None


def test_state_without_cities_has_no_representative_location() -> None:
    japan = find_country("Japan")
    assert japan is not None
    empty_state = next(state for state in japan.states if not state.cities)

    assert representative_location(empty_state, None) is None


def test_city_options_are_labelled_and_excludable() -> None:
    options = city_options()
    labels = [option.label for option in options]

    assert "New Delhi, Delhi, India" in labels
    assert labels == sorted(labels)

    delhi = next(option for option in options if option.city.name == "New Delhi")
    assert delhi.value == location_key("New Delhi", 28.6139)

    remaining = city_options(frozenset({delhi.value}))
    assert len(remaining) == len(options) - 1


def test_seed_regions_have_monthly_ndvi_and_bloom_dates() -> None:
    assert len(REGIONS) == 6
    for region in REGIONS:
        assert [reading.month for reading in region.ndvi][:3] == ["Jan", "Feb", "Mar"]
        assert len(region.ndvi) == 12
        assert len(region.latest_bloom) == 10


def test_find_region_by_name() -> None:
    region = find_region("washington d.c. tidal basin")

    assert region is not None
    assert region.latest_bloom == "2025-03-28"
    assert find_region("Nowhere") is None
