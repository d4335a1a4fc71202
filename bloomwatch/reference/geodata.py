"""
Static geographic catalog used by the selection widgets.
Detailed countries carry states and cities; the remaining countries are listed without
states so the pickers still offer global coverage.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from functools import lru_cache
from typing import Any


@dataclass(frozen=True)
class City:
    name: str
    lat: float
    lon: float


@dataclass(frozen=True)
class State:
    name: str
    lat: float
    lon: float
    cities: tuple[City, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class Country:
    name: str
    lat: float
    lon: float
    states: tuple[State, ...] = field(default_factory=tuple)


@dataclass(frozen=True)
class CityOption:
    label: str
    value: str
    city: City
    state: State
    country: Country


_DETAILED_COUNTRIES: list[dict[str, Any]] = [
    {
        "name": "United States",
        "lat": 37.0902,
        "lon": -95.7129,
        "states": [
            {
                "name": "California",
                "lat": 36.7783,
                "lon": -119.4179,
                "cities": [
                    {"name": "Los Angeles", "lat": 34.0522, "lon": -118.2437},
                    {"name": "San Francisco", "lat": 37.7749, "lon": -122.4194},
                    {"name": "San Diego", "lat": 32.7157, "lon": -117.1611},
                    {"name": "Sacramento", "lat": 38.5816, "lon": -121.4944},
                ],
            },
            {
                "name": "New York",
                "lat": 43.2994,
                "lon": -74.2179,
                "cities": [
                    {"name": "New York City", "lat": 40.7128, "lon": -74.006},
                    {"name": "Buffalo", "lat": 42.8864, "lon": -78.8784},
                    {"name": "Rochester", "lat": 43.1566, "lon": -77.6088},
                ],
            },
            {
                "name": "Texas",
                "lat": 31.9686,
                "lon": -99.9018,
                "cities": [
                    {"name": "Houston", "lat": 29.7604, "lon": -95.3698},
                    {"name": "Dallas", "lat": 32.7767, "lon": -96.7970},
                    {"name": "Austin", "lat": 30.2672, "lon": -97.7431},
                ],
            },
            {
                "name": "Florida",
                "lat": 27.6648,
                "lon": -81.5158,
                "cities": [
                    {"name": "Miami", "lat": 25.7617, "lon": -80.1918},
                    {"name": "Orlando", "lat": 28.5383, "lon": -81.3792},
                    {"name": "Tampa", "lat": 27.9506, "lon": -82.4572},
                ],
            },
        ],
    },
    {
        "name": "India",
        "lat": 20.5937,
        "lon": 78.9629,
        "states": [
            {
                "name": "Delhi",
                "lat": 28.7041,
                "lon": 77.1025,
                "cities": [{"name": "New Delhi", "lat": 28.6139, "lon": 77.209}],
            },
            {
                "name": "Karnataka",
                "lat": 15.3173,
                "lon": 75.7139,
                "cities": [
                    {"name": "Bangalore", "lat": 12.9716, "lon": 77.5946},
                    {"name": "Mysore", "lat": 12.2958, "lon": 76.6394}
                ],
            },
            {
                "name": "Maharashtra",
                "lat": 19.7515,
                "lon": 75.7139,
                "cities": [
                    {"name": "Mumbai", "lat": 19.0760, "lon": 72.8777},
                    {"name": "Pune", "lat": 18.5204, "lon": 73.8567},
                ],
            },
            {
                "name": "Tamil Nadu",
                "lat": 11.1271,
                "lon": 78.6569,
                "cities": [
                    {"name": "Chennai", "lat": 13.0827, "lon": 80.2707},
                    {"name": "Coimbatore", "lat": 11.0168, "lon": 76.9558},
                ],
            },
        ],
    },
    {
        "name": "Germany",
        "lat": 51.1657,
        "lon": 10.4515,
        "states": [
            {"name": "Berlin", "lat": 52.5200, "lon": 13.4050, "cities": [{"name": "Berlin", "lat": 52.5200, "lon": 13.4050}]},
            {"name": "Bavaria", "lat": 48.7904, "lon": 11.4979, "cities": [{"name": "Munich", "lat": 48.1351, "lon": 11.5820}]},
            {"name": "Hamburg", "lat": 53.5511, "lon": 9.9937, "cities": [{"name": "Hamburg", "lat": 53.5511, "lon": 9.9937}]},
            {"name": "Hesse", "lat": 50.6521, "lon": 9.1624, "cities": [{"name": "Frankfurt", "lat": 50.1109, "lon": 8.6821}]},
        ],
    },
    {
        "name": "Brazil",
        "lat": -14.2350,
        "lon": -51.9253,
        "states": [
            {"name": "São Paulo", "lat": -23.5505, "lon": -46.6333, "cities": [{"name": "São Paulo", "lat": -23.5505, "lon": -46.6333}]},
            {"name": "Rio de Janeiro", "lat": -22.9068, "lon": -43.1729, "cities": [{"name": "Rio de Janeiro", "lat": -22.9068, "lon": -43.1729}]},
            {"name": "Bahia", "lat": -12.9714, "lon": -38.5014, "cities": [{"name": "Salvador", "lat": -12.9714, "lon": -38.5014}]},
            {"name": "Minas Gerais", "lat": -18.5122, "lon": -44.5550, "cities": [{"name": "Belo Horizonte", "lat": -19.9167, "lon": -43.9345}]},
        ],
    },
    {
        "name": "Australia",
        "lat": -25.2744,
        "lon": 133.7751,
        "states": [
            {"name": "New South Wales", "lat": -33.8688, "lon": 151.2093, "cities": [{"name": "Sydney", "lat": -33.8688, "lon": 151.2093}]},
            {"name": "Victoria", "lat": -37.8136, "lon": 144.9631, "cities": [{"name": "Melbourne", "lat": -37.8136, "lon": 144.9631}]},
            {"name": "Queensland", "lat": -27.4698, "lon": 153.0251, "cities": [{"name": "Brisbane", "lat": -27.4698, "lon": 153.0251}]},
            {"name": "Western Australia", "lat": -31.9505, "lon": 115.8605, "cities": [{"name": "Perth", "lat": -31.9505, "lon": 115.8605}]},
        ],
    },
    {
        "name": "Japan",
        "lat": 36.2048,
        "lon": 138.2529,
        "states": [
            {"name": "Tokyo", "lat": 35.6762, "lon": 139.6503, "cities": [{"name": "Tokyo City", "lat": 35.6895, "lon": 139.6917}]},
            {"name": "Kyoto", "lat": 35.0116, "lon": 135.7681, "cities": [{"name": "Kyoto City", "lat": 35.0116, "lon": 135.7681}]},
            {"name": "Hokkaido", "lat": 43.2203, "lon": 142.8635, "cities": [{"name": "Sapporo", "lat": 43.0618, "lon": 141.3545}]},
            {"name": "Aomori", "lat": 40.7369, "lon": 140.9412, "cities": []},
            {"name": "Iwate", "lat": 39.584, "lon": 141.3534, "cities": []},
            {"name": "Miyagi", "lat": 38.3375, "lon": 140.924, "cities": []},
            {"name": "Akita", "lat": 39.6984, "lon": 140.4688, "cities": []},
            {"name": "Yamagata", "lat": 38.4116, "lon": 140.1333, "cities": []},
        ],
    },
    {
        "name": "Afghanistan",
        "lat": 33.93911,
        "lon": 67.709953,
        "states": [
            {"name": "Badakhshan", "lat": 36.7347725, "lon": 70.8119953, "cities": []},
            {"name": "Badghis", "lat": 35.1671339, "lon": 63.7695384, "cities": []},
            {"name": "Baghlan", "lat": 36.1789026, "lon": 68.7453165, "cities": []},
            {"name": "Balkh", "lat": 36.7550603, "lon": 66.8975372, "cities": []},
            {"name": "Bamyan", "lat": 34.8166667, "lon": 67.8166667, "cities": []},
            {"name": "Daykundi", "lat": 33.6666667, "lon": 66.0, "cities": []},
            {"name": "Farah", "lat": 32.5, "lon": 62.5, "cities": []},
            {"name": "Faryab", "lat": 36.0, "lon": 65.0, "cities": []},
            {"name": "Ghazni", "lat": 33.5, "lon": 68.0, "cities": []},
            {"name": "Ghor", "lat": 34.5, "lon": 65.0, "cities": []},
            {"name": "Helmand", "lat": 31.5, "lon": 64.0, "cities": []},
            {"name": "Herat", "lat": 34.5, "lon": 62.0, "cities": []},
            {"name": "Jowzjan", "lat": 36.75, "lon": 66.0, "cities": []},
            {"name": "Kabul", "lat": 34.5, "lon": 69.0, "cities": []},
            {"name": "Kandahar", "lat": 31.0, "lon": 65.5, "cities": []},
            {"name": "Kapisa", "lat": 35.0, "lon": 69.5, "cities": []},
            {"name": "Khost", "lat": 33.3333333, "lon": 69.9166667, "cities": []},
            {"name": "Kunar", "lat": 35.0, "lon": 71.0, "cities": []},
            {"name": "Kunduz", "lat": 36.75, "lon": 68.75, "cities": []},
            {"name": "Laghman", "lat": 34.6666667, "lon": 70.0, "cities": []},
            {"name": "Logar", "lat": 34.0, "lon": 69.0, "cities": []},
            {"name": "Nangarhar", "lat": 34.25, "lon": 70.5, "cities": []},
            {"name": "Nimruz", "lat": 31.0, "lon": 62.0, "cities": []},
            {"name": "Nuristan", "lat": 35.5, "lon": 70.5, "cities": []},
            {"name": "Paktia", "lat": 33.5, "lon": 69.5, "cities": []},
            {"name": "Paktika", "lat": 32.5, "lon": 68.5, "cities": []},
            {"name": "Panjshir", "lat": 35.5, "lon": 69.75, "cities": []},
            {"name": "Parwan", "lat": 35.0, "lon": 69.0, "cities": []},
            {"name": "Samangan", "lat": 36.0, "lon": 67.75, "cities": []},
            {"name": "Sar-e Pol", "lat": 35.5, "lon": 66.0, "cities": []},
            {"name": "Takhar", "lat": 36.75, "lon": 69.75, "cities": []},
            {"name": "Urozgan", "lat": 32.75, "lon": 66.0, "cities": []},
            {"name": "Zabul", "lat": 32.0, "lon": 67.0, "cities": []},
        ],
    },
]

_COUNTRIES_WITHOUT_STATES: list[tuple[str, float, float]] = [
    ("Albania", 41.1533, 20.1683),
    ("Algeria", 28.0339, 1.6596),
    ("Andorra", 42.5063, 1.5218),
    ("Angola", -11.2027, 17.8739),
    ("Antigua and Barbuda", 17.0608, -61.7964),
    ("Argentina", -38.4161, -63.6167),
    ("Armenia", 40.0691, 45.0382),
    ("Austria", 47.5162, 14.5501),
    ("Azerbaijan", 40.1431, 47.5769),
    ("Bahamas", 25.0343, -77.3963),
    ("Bahrain", 26.0667, 50.5577),
    ("Bangladesh", 23.6850, 90.3563),
    ("Barbados", 13.1939, -59.5432),
    ("Belarus", 53.7098, 27.9534),
    ("Belgium", 50.8333, 4.0),
    ("Belize", 17.1899, -88.4976),
    ("Benin", 9.3077, 2.3158),
    ("Bhutan", 27.5142, 90.4336),
    ("Bolivia", -16.2902, -63.5887),
    ("Bosnia and Herzegovina", 43.9159, 17.6791),
    ("Botswana", -22.3285, 24.6849),
    ("Brunei", 4.5353, 114.7277),
    ("Bulgaria", 42.7339, 25.4858),
    ("Burkina Faso", 12.2383, -1.5616),
    ("Burundi", -3.3731, 29.9189),
    ("Cambodia", 12.5657, 104.9910),
    ("Cameroon", 7.3697, 12.3547),
    ("Canada", 56.1304, -106.3468),
    ("Cape Verde", 16.5388, -23.0418),
    ("Central African Republic", 6.6111, 20.9394),
    ("Chad", 15.4542, 18.7322),
    ("Chile", -35.6751, -71.5430),
    ("China", 35.8617, 104.1954),
    ("Colombia", 4.5709, -74.2973),
    ("Comoros", -11.8750, 43.8722),
    ("Congo", -4.0383, 21.7587),
    ("Costa Rica", 9.7489, -83.7534),
    ("Croatia", 45.1, 15.2),
    ("Cuba", 21.5218, -77.7812),
    ("Cyprus", 35.1264, 33.4299),
    ("Czech Republic", 49.8175, 15.4730),
    ("Denmark", 56.2639, 9.5018),
    ("Djibouti", 11.8251, 42.5903),
    ("Dominica", 15.4150, -61.3710),
    ("Dominican Republic", 18.7357, -70.1627),
    ("Ecuador", -1.8312, -78.1834),
    ("Egypt", 26.8206, 30.8025),
    ("El Salvador", 13.7942, -88.8965),
    ("Equatorial Guinea", 1.6508, 10.2679),
    ("Eritrea", 15.1794, 39.7823),
    ("Estonia", 58.5953, 25.0136),
    ("Eswatini", -26.5225, 31.4659),
    ("Ethiopia", 9.1450, 40.4897),
    ("Fiji", -17.7134, 178.0650),
    ("Finland", 61.9241, 25.7482),
    ("France", 46.2276, 2.2137),
]


def _build_country(raw: dict[str, Any]) -> Country:
    states = tuple(
        State(
            name=state["name"],
            lat=float(state["lat"]),
            lon=float(state["lon"]),
            cities=tuple(
                City(name=city["name"], lat=float(city["lat"]), lon=float(city["lon"]))
                for city in state.get("cities", [])
            ),
        )
        for state in raw.get("states", [])
    )
    return Country(name=raw["name"], lat=float(raw["lat"]), lon=float(raw["lon"]), states=states)


@lru_cache(maxsize=1)
def all_countries() -> tuple[Country, ...]:
    """Detailed countries merged with the state-less list, sorted by name."""

    merged: dict[str, Country] = {}
    for raw in _DETAILED_COUNTRIES:
        country = _build_country(raw)
        merged[country.name] = country
    for name, lat, lon in _COUNTRIES_WITHOUT_STATES:
        merged.setdefault(name, Country(name=name, lat=lat, lon=lon))
    return tuple(sorted(merged.values(), key=lambda country: country.name.casefold()))


def find_country(name: str) -> Country | None:
    wanted = name.strip().casefold()
    return next((c for c in all_countries() if c.name.casefold() == wanted), None)


def find_state(country: Country, name: str) -> State | None:
    wanted = name.strip().casefold()
    return next((s for s in country.states if s.name.casefold() == wanted), None)


def find_city(state: State, name: str) -> City | None:
    wanted = name.strip().casefold()
    return next((c for c in state.cities if c.name.casefold() == wanted), None)


def representative_location(state: State | None, city: City | None) -> City | None:
    """The chosen city, else the first city of the chosen state."""

    if city is not None:
        return city
    if state is not None and state.cities:
        return state.cities[0]
    return None


def location_key(name: str, lat: float) -> str:
    """Identity used to de-duplicate places across the dashboard display list."""

    return f"{name}-{lat}"


def city_options(exclude_keys: set[str] | frozenset[str] = frozenset()) -> list[CityOption]:
    options: list[CityOption] = []
    for country in all_countries():
        for state in country.states:
            for city in state.cities:
                key = location_key(city.name, city.lat)
                if key in exclude_keys:
                    continue
                options.append(
                    CityOption(
                        label=f"{city.name}, {state.name}, {country.name}",
                        value=key,
                        city=city,
                        state=state,
                        country=country,
                    )
                )
    return sorted(options, key=lambda option: option.label)
