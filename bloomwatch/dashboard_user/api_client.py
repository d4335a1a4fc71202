# This file implements the HTTP client the Streamlit dashboard uses to talk to the BloomWatch API.
# It exists so pages call named methods instead of building URLs and parsing envelopes themselves.
# Transport failures and 5xx responses raise ApiUnavailableError; 4xx responses raise ApiRequestError
# carrying the server's error code and message so forms can show it.

from __future__ import annotations

from datetime import date
from typing import Any

import requests


class ApiUnavailableError(RuntimeError):
    """Raised when the API cannot be reached or responds with server errors."""


class ApiRequestError(ValueError):
    """Raised when the API rejects a request (4xx)."""

    def __init__(self, message: str, *, status_code: int, error_code: str | None = None) -> None:
        self.status_code = status_code
        self.error_code = error_code
        super().__init__(message)


class BloomWatchApiClient:
    def __init__(
        self,
        *,
        base_url: str,
        timeout_seconds: int = 30,
        prediction_timeout_seconds: int = 180,
        session: requests.Session | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.prediction_timeout_seconds = prediction_timeout_seconds
        self.session = session or requests.Session()

    def list_countries(self) -> list[dict[str, Any]]:
        return list(self._get("/geo/countries").get("data", []))

    def list_states(self, country: str) -> tuple[list[dict[str, Any]], list[str]]:
        payload = self._get(f"/geo/countries/{country}/states")
        return list(payload.get("data", [])), list(payload.get("warnings") or [])

    def list_cities(self, country: str, state: str) -> list[dict[str, Any]]:
        payload = self._get(f"/geo/countries/{country}/states/{state}/cities")
        return list(payload.get("data", []))

    def location(self, country: str, state: str, city: str | None = None) -> dict[str, Any]:
        params = {"city": city} if city else None
        payload = self._get(f"/geo/countries/{country}/states/{state}/location", params=params)
        return dict(payload.get("data") or {})

    def city_options(self, exclude: list[str] | None = None) -> list[dict[str, Any]]:
        params = {"exclude": list(exclude)} if exclude else None
        return list(self._get("/geo/city-options", params=params).get("data", []))

    def list_regions(self) -> list[dict[str, Any]]:
        return list(self._get("/regions").get("data", []))

    def climate_data(
        self,
        *,
        lat: float,
        lon: float,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[dict[str, Any]]:
        body = _window_body(lat, lon, start_date, end_date)
        return list(self._post("/climate/data", body).get("data", []))

    def vegetation_data(
        self,
        *,
        lat: float,
        lon: float,
        start_date: date | None = None,
        end_date: date | None = None,
    ) -> list[dict[str, Any]]:
        body = _window_body(lat, lon, start_date, end_date)
        return list(self._post("/climate/vegetation", body).get("data", []))

    def summarize(
        self,
        *,
        location_name: str,
        climate_data: list[dict[str, Any]],
        vegetation_data: list[dict[str, Any]],
        id_token: str | None = None,
    ) -> str:
        payload = self._post(
            "/climate/summary",
            {
                "location_name": location_name,
                "climate_data": climate_data,
                "vegetation_data": vegetation_data,
            },
            id_token=id_token,
            timeout=self.prediction_timeout_seconds,
        )
        return str((payload.get("data") or {}).get("summary", ""))

    def city_analysis(
        self,
        *,
        city: str,
        lat: float,
        lon: float,
        id_token: str | None = None,
    ) -> dict[str, Any]:
        payload = self._post(
            "/map/city/analysis",
            {"city": city, "lat": lat, "lon": lon},
            id_token=id_token,
        )
        return dict(payload.get("data") or {})

    def city_prediction(
        self,
        *,
        city: str,
        lat: float,
        lon: float,
        latest_bloom: str | None = None,
        id_token: str | None = None,
    ) -> dict[str, Any]:
        body: dict[str, Any] = {"city": city, "lat": lat, "lon": lon}
        if latest_bloom:
            body["latest_bloom"] = latest_bloom
        payload = self._post(
            "/map/city/prediction",
            body,
            id_token=id_token,
            timeout=self.prediction_timeout_seconds,
        )
        return dict(payload.get("data") or {})

    def insights_analysis(
        self,
        *,
        city: str,
        state: str | None,
        country: str | None,
        vegetation_data: list[dict[str, Any]],
        id_token: str | None = None,
    ) -> dict[str, Any]:
        payload = self._post(
            "/insights/analysis",
            {
                "city": city,
                "state": state,
                "country": country,
                "vegetation_data": vegetation_data,
            },
            id_token=id_token,
            timeout=self.prediction_timeout_seconds,
        )
        return dict(payload.get("data") or {})

    def batch_predictions(
        self,
        regions: list[dict[str, Any]],
        *,
        id_token: str | None = None,
    ) -> list[dict[str, Any]]:
        payload = self._post(
            "/dashboard/predictions",
            {"regions": regions},
            id_token=id_token,
            timeout=self.prediction_timeout_seconds,
        )
        return list(payload.get("data", []))

    def sign_up(self, *, display_name: str, email: str, password: str) -> dict[str, Any]:
        payload = self._post(
            "/auth/signup",
            {"display_name": display_name, "email": email, "password": password},
        )
        return dict(payload.get("data") or {})

    def log_in(self, *, email: str, password: str) -> dict[str, Any]:
        payload = self._post("/auth/login", {"email": email, "password": password})
        return dict(payload.get("data") or {})

    def history(self, *, id_token: str) -> list[dict[str, Any]]:
        return list(self._get("/history", id_token=id_token).get("data", []))

    def contact(self, *, name: str, email: str, message: str) -> str:
        payload = self._post("/contact", {"name": name, "email": email, "message": message})
        return str((payload.get("data") or {}).get("message", ""))

    def _get(
        self,
        path: str,
        *,
        params: dict[str, Any] | None = None,
        id_token: str | None = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.get(
                url,
                params=params,
                headers=_auth_headers(id_token),
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise ApiUnavailableError(f"API request failed for {url}: {exc}") from exc
        return self._parse(response, url)

    def _post(
        self,
        path: str,
        body: dict[str, Any],
        *,
        id_token: str | None = None,
        timeout: int | None = None,
    ) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        try:
            response = self.session.post(
                url,
                json=body,
                headers=_auth_headers(id_token),
                timeout=timeout or self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise ApiUnavailableError(f"API request failed for {url}: {exc}") from exc
        return self._parse(response, url)

    @staticmethod
    def _parse(response: requests.Response, url: str) -> dict[str, Any]:
        if response.status_code >= 500:
            raise ApiUnavailableError(
                _error_message(response)
                or f"API request failed with status {response.status_code} for {url}"
            )
        if response.status_code >= 400:
            raise ApiRequestError(
                _error_message(response)
                or f"API request was rejected with status {response.status_code} for {url}",
                status_code=response.status_code,
                error_code=_error_code(response),
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise ApiUnavailableError(f"API did not return valid JSON for {url}") from exc

        if not isinstance(payload, dict):
            raise ApiUnavailableError(f"Unexpected payload shape from {url}")
        return payload


def _window_body(
    lat: float, lon: float, start_date: date | None, end_date: date | None
) -> dict[str, Any]:
    body: dict[str, Any] = {"lat": lat, "lon": lon}
    if start_date:
        body["start_date"] = start_date.isoformat()
    if end_date:
        body["end_date"] = end_date.isoformat()
    return body


def _auth_headers(id_token: str | None) -> dict[str, str]:
    return {"Authorization": f"Bearer {id_token}"} if id_token else {}


def _error_payload(response: requests.Response) -> dict[str, Any]:
    try:
        payload = response.json()
    except ValueError:
        return {}
    return payload if isinstance(payload, dict) else {}


def _error_message(response: requests.Response) -> str | None:
    message = _error_payload(response).get("message")
    return str(message) if message else None


def _error_code(response: requests.Response) -> str | None:
    code = _error_payload(response).get("error_code")
    return str(code) if code else None
