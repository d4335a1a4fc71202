# This file defines consistent API error payloads and exception handlers.
# It exists so every endpoint returns the same error shape with request trace fields.
# Upstream client failures (NASA POWER, Gemini, CountryStateCity, Firebase) are translated here.
# Centralized error handling prevents stack traces from leaking in production responses.

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any

from fastapi import FastAPI, HTTPException, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from bloomwatch.accounts.firestore_client import FirestoreError
from bloomwatch.accounts.identity_client import IdentityError
from bloomwatch.ai.llm_client import LlmConfigurationError, LlmError
from bloomwatch.sources.geo_client import GeoApiError
from bloomwatch.sources.power_client import PowerApiError

logger = logging.getLogger(__name__)

_IDENTITY_STATUS: dict[str, tuple[int, str]] = {
    "EMAIL_EXISTS": (409, "EMAIL_EXISTS"),
    "EMAIL_NOT_FOUND": (401, "INVALID_CREDENTIALS"),
    "INVALID_PASSWORD": (401, "INVALID_CREDENTIALS"),
    "INVALID_LOGIN_CREDENTIALS": (401, "INVALID_CREDENTIALS"),
    "INVALID_ID_TOKEN": (401, "UNAUTHORIZED"),
    "USER_DISABLED": (403, "USER_DISABLED"),
    "TOO_MANY_ATTEMPTS_TRY_LATER": (429, "TOO_MANY_ATTEMPTS"),
    "NOT_CONFIGURED": (503, "AUTH_NOT_CONFIGURED"),
    "UNAVAILABLE": (502, "UPSTREAM_ERROR"),
}


class APIError(Exception):
    """Domain error type with structured API details."""

    def __init__(
        self,
        *,
        status_code: int,
        error_code: str,
        message: str,
        details: Any | None = None,
    ) -> None:
        self.status_code = status_code
        self.error_code = error_code
        self.message = message
        self.details = details
        super().__init__(message)


def upstream_api_error(exc: Exception) -> APIError:
    """Translate an upstream client exception into an API error."""

    if isinstance(exc, LlmConfigurationError):
        return APIError(status_code=503, error_code="LLM_NOT_CONFIGURED", message=str(exc))
    if isinstance(exc, IdentityError):
        status_code, error_code = _IDENTITY_STATUS.get(exc.code, (400, "AUTH_ERROR"))
        return APIError(status_code=status_code, error_code=error_code, message=exc.message)
    if isinstance(exc, (PowerApiError, GeoApiError, LlmError, FirestoreError)):
        return APIError(
            status_code=502,
            error_code="UPSTREAM_ERROR",
            message=str(exc),
            details={"source": type(exc).__name__},
        )
    return APIError(
        status_code=500,
        error_code="INTERNAL_SERVER_ERROR",
        message="The server encountered an unexpected error.",
    )


def _request_id(request: Request) -> str:
    return str(getattr(request.state, "request_id", "unknown"))


def _error_body(
    *, request: Request, error_code: str, message: str, details: Any | None = None
) -> dict[str, Any]:
    return {
        "error_code": error_code,
        "message": message,
        "details": details,
        "request_id": _request_id(request),
        "timestamp": datetime.now(tz=UTC).isoformat(),
    }


def _api_error_response(request: Request, exc: APIError) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content=_error_body(
            request=request,
            error_code=exc.error_code,
            message=exc.message,
            details=exc.details,
        ),
    )


def register_error_handlers(app: FastAPI) -> None:
    """Register global exception handlers."""

    @app.exception_handler(APIError)
    async def api_error_handler(request: Request, exc: APIError) -> JSONResponse:
        return _api_error_response(request, exc)

    async def upstream_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.warning("Upstream failure on %s: %s", request.url.path, exc)
        return _api_error_response(request, upstream_api_error(exc))

    for error_type in (PowerApiError, GeoApiError, LlmError, IdentityError, FirestoreError):
        app.add_exception_handler(error_type, upstream_error_handler)

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(
        request: Request, exc: RequestValidationError
    ) -> JSONResponse:
        return JSONResponse(
            status_code=422,
            content=_error_body(
                request=request,
                error_code="VALIDATION_ERROR",
                message="Invalid request parameters.",
                details=jsonable_errors(exc.errors()),
            ),
        )

    @app.exception_handler(HTTPException)
    async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=_error_body(
                request=request,
                error_code="HTTP_ERROR",
                message=str(exc.detail),
            ),
        )

    @app.exception_handler(Exception)
    async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception("Unhandled error on %s", request.url.path, exc_info=exc)
        return JSONResponse(
            status_code=500,
            content=_error_body(
                request=request,
                error_code="INTERNAL_SERVER_ERROR",
                message="The server encountered an unexpected error.",
            ),
        )


def jsonable_errors(errors: Any) -> list[dict[str, Any]]:
    # Validator errors carry the raised exception in `ctx`, which JSON cannot encode.
    cleaned: list[dict[str, Any]] = []
    for error in errors:
        item = dict(error)
        if "ctx" in item:
            item["ctx"] = {key: str(value) for key, value in item["ctx"].items()}
        cleaned.append(item)
    return cleaned
