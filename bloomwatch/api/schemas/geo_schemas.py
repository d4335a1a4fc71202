# This file defines schemas for the static geography catalog and the remote passthrough.
# Static entries carry coordinates and child counts so pickers can render without extra calls.

from __future__ import annotations

from pydantic import BaseModel

from bloomwatch.api.schemas.common import EnvelopeFields


class CountryV1(BaseModel):
    name: str
    lat: float
    lon: float
    state_count: int


class StateV1(BaseModel):
    name: str
    lat: float
    lon: float
    city_count: int


class CityV1(BaseModel):
    name: str
    lat: float
    lon: float


class CityOptionV1(BaseModel):
    label: str
    value: str
    city: str
    state: str
    country: str
    lat: float
    lon: float


class RemoteCountryV1(BaseModel):
    id: int
    name: str
    iso2: str
    latitude: float | None = None
    longitude: float | None = None


class RemoteStateV1(BaseModel):
    id: int
    name: str
    iso2: str
    country_code: str
    latitude: float | None = None
    longitude: float | None = None


class RemoteCityV1(BaseModel):
    id: int
    name: str
    state_code: str
    country_code: str
    latitude: float | None = None
    longitude: float | None = None


class CountryListResponseV1(EnvelopeFields):
    data: list[CountryV1]


class StateListResponseV1(EnvelopeFields):
    data: list[StateV1]


class CityListResponseV1(EnvelopeFields):
    data: list[CityV1]


class CityOptionListResponseV1(EnvelopeFields):
    data: list[CityOptionV1]


class RemoteCountryListResponseV1(EnvelopeFields):
    data: list[RemoteCountryV1]


class RemoteStateListResponseV1(EnvelopeFields):
    data: list[RemoteStateV1]


class RemoteCityListResponseV1(EnvelopeFields):
    data: list[RemoteCityV1]


class LocationResponseV1(EnvelopeFields):
    data: CityV1
