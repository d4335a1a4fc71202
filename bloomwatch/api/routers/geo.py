# This file defines geography endpoints for country, state, and city pickers.
# Static catalog routes never leave the process; `/geo/remote` routes call CountryStateCity.
# A country without state data returns an empty list with an informational warning.
# `/location` resolves a picker selection to one point: the city, else the state's first city.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Request

from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.dependencies import get_config, get_geo_service
from bloomwatch.api.response_envelope import build_object_envelope
from bloomwatch.api.schemas.geo_schemas import (
    CityListResponseV1,
    CityOptionListResponseV1,
    CountryListResponseV1,
    LocationResponseV1,
    RemoteCityListResponseV1,
    RemoteCountryListResponseV1,
    RemoteStateListResponseV1,
    StateListResponseV1,
)
from bloomwatch.api.services.geo_service import GeoService

router = APIRouter(prefix="/geo", tags=["geo"])
GeoServiceDep = Annotated[GeoService, Depends(get_geo_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]


def _envelope(
    request: Request,
    config: ApiConfig,
    data: object,
    warnings: list[str] | None = None,
) -> dict[str, object]:
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=data,
        warnings=warnings,
    )


@router.get("/countries", response_model=CountryListResponseV1)
def list_countries(
    request: Request, service: GeoServiceDep, config: ConfigDep
) -> dict[str, object]:
    return _envelope(request, config, service.list_countries())


@router.get("/countries/{country}/states", response_model=StateListResponseV1)
def list_states(
    request: Request, service: GeoServiceDep, config: ConfigDep, country: str
) -> dict[str, object]:
    result = service.list_states(country)
    return _envelope(request, config, result["rows"], result["warnings"])


@router.get("/countries/{country}/states/{state}/cities", response_model=CityListResponseV1)
def list_cities(
    request: Request, service: GeoServiceDep, config: ConfigDep, country: str, state: str
) -> dict[str, object]:
    return _envelope(request, config, service.list_cities(country, state))


@router.get("/countries/{country}/states/{state}/location", response_model=LocationResponseV1)
def representative_location(
    request: Request,
    service: GeoServiceDep,
    config: ConfigDep,
    country: str,
    state: str,
    city: str | None = Query(default=None),
) -> dict[str, object]:
    return _envelope(request, config, service.location(country, state, city))


@router.get("/city-options", response_model=CityOptionListResponseV1)
def list_city_options(
    request: Request,
    service: GeoServiceDep,
    config: ConfigDep,
    exclude: list[str] | None = Query(default=None),
) -> dict[str, object]:
    return _envelope(request, config, service.list_city_options(exclude or []))


@router.get("/remote/countries", response_model=RemoteCountryListResponseV1)
def remote_countries(
    request: Request, service: GeoServiceDep, config: ConfigDep
) -> dict[str, object]:
    return _envelope(request, config, service.remote_countries())


@router.get("/remote/countries/{country_iso2}/states", response_model=RemoteStateListResponseV1)
def remote_states(
    request: Request, service: GeoServiceDep, config: ConfigDep, country_iso2: str
) -> dict[str, object]:
    return _envelope(request, config, service.remote_states(country_iso2))


@router.get(
    "/remote/countries/{country_iso2}/states/{state_iso2}/cities",
    response_model=RemoteCityListResponseV1,
)
def remote_cities(
    request: Request,
    service: GeoServiceDep,
    config: ConfigDep,
    country_iso2: str,
    state_iso2: str,
) -> dict[str, object]:
    return _envelope(request, config, service.remote_cities(country_iso2, state_iso2))
