# This file provides dependency factories for FastAPI routes.
# It exists so upstream clients and services are created once and shared through dependency injection.
# The setup keeps routers thin and makes endpoint tests easy to override.
# The bearer-token dependencies resolve the signed-in user used for history logging.

from __future__ import annotations

import logging
from functools import lru_cache
from typing import Annotated

from fastapi import Depends, Header

from bloomwatch.accounts.firestore_client import FirestoreClient
from bloomwatch.accounts.history import HistoryStore
from bloomwatch.accounts.identity_client import AuthenticatedUser, IdentityClient, IdentityError
from bloomwatch.ai.flows import BloomFlows
from bloomwatch.ai.llm_client import GeminiClient
from bloomwatch.api.api_config import ApiConfig, get_api_config
from bloomwatch.api.error_handlers import APIError
from bloomwatch.api.services.account_service import AccountService
from bloomwatch.api.services.climate_service import ClimateService
from bloomwatch.api.services.geo_service import GeoService
from bloomwatch.api.services.prediction_service import PredictionService
from bloomwatch.common.settings import get_settings
from bloomwatch.sources.geo_client import CountryStateCityClient
from bloomwatch.sources.power_client import PowerClient

logger = logging.getLogger(__name__)


@lru_cache(maxsize=1)
def get_power_client() -> PowerClient:
    config = get_api_config()
    settings = get_settings()
    return PowerClient(
        api_key=settings.usable_nasa_api_key(),
        timeout_seconds=config.request_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_llm_client() -> GeminiClient:
    config = get_api_config()
    settings = get_settings()
    return GeminiClient(
        api_key=settings.GEMINI_API_KEY,
        model=settings.GEMINI_MODEL,
        timeout_seconds=config.llm_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_geo_client() -> CountryStateCityClient:
    config = get_api_config()
    return CountryStateCityClient(
        api_key=get_settings().CSC_API_KEY,
        timeout_seconds=config.request_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_identity_client() -> IdentityClient:
    config = get_api_config()
    return IdentityClient(
        api_key=get_settings().FIREBASE_API_KEY,
        timeout_seconds=config.request_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_firestore_client() -> FirestoreClient:
    config = get_api_config()
    settings = get_settings()
    return FirestoreClient(
        project_id=settings.FIREBASE_PROJECT_ID,
        api_key=settings.FIREBASE_API_KEY,
        timeout_seconds=config.request_timeout_seconds,
    )


@lru_cache(maxsize=1)
def get_history_store() -> HistoryStore:
    return HistoryStore(get_firestore_client())


@lru_cache(maxsize=1)
def get_bloom_flows() -> BloomFlows:
    config = get_api_config()
    return BloomFlows(
        power_client=get_power_client(),
        llm_client=get_llm_client(),
        max_workers=config.batch_max_workers,
    )


@lru_cache(maxsize=1)
def get_geo_service() -> GeoService:
    return GeoService(config=get_api_config(), client=get_geo_client())


@lru_cache(maxsize=1)
def get_climate_service() -> ClimateService:
    return ClimateService(
        config=get_api_config(),
        power_client=get_power_client(),
        flows=get_bloom_flows(),
        history=get_history_store(),
    )


@lru_cache(maxsize=1)
def get_prediction_service() -> PredictionService:
    return PredictionService(
        config=get_api_config(),
        flows=get_bloom_flows(),
        history=get_history_store(),
    )


@lru_cache(maxsize=1)
def get_account_service() -> AccountService:
    return AccountService(
        config=get_api_config(),
        identity=get_identity_client(),
        firestore=get_firestore_client(),
        history=get_history_store(),
    )


def get_config() -> ApiConfig:
    return get_api_config()


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


def get_optional_user(
    identity: Annotated[IdentityClient, Depends(get_identity_client)],
    authorization: Annotated[str | None, Header()] = None,
) -> AuthenticatedUser | None:
    """Signed-in user for history logging; anonymous requests and bad tokens yield None."""

    token = _bearer_token(authorization)
    if token is None:
        return None
    try:
        return identity.lookup(token)
    except IdentityError as exc:
        logger.info("Ignoring bearer token that did not resolve to a user: %s", exc.code)
        return None


def get_current_user(
    user: Annotated[AuthenticatedUser | None, Depends(get_optional_user)],
) -> AuthenticatedUser:
    if user is None:
        raise APIError(
            status_code=401,
            error_code="UNAUTHORIZED",
            message="Please log in to see your activity history.",
        )
    return user
