# This file defines sign-up, login, activity history, and contact endpoints.
# Sign-up creates the Firebase account and then the Firestore profile document.
# History requires a bearer token; contact messages do not.

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Request

from bloomwatch.accounts.identity_client import AuthenticatedUser
from bloomwatch.api.api_config import ApiConfig
from bloomwatch.api.dependencies import get_account_service, get_config, get_current_user
from bloomwatch.api.response_envelope import build_object_envelope
from bloomwatch.api.schemas.account_schemas import (
    AccountResponseV1,
    ContactRequest,
    ContactResponseV1,
    HistoryResponseV1,
    LoginRequest,
    SignupRequest,
)
from bloomwatch.api.services.account_service import AccountService

router = APIRouter(tags=["accounts"])
AccountServiceDep = Annotated[AccountService, Depends(get_account_service)]
ConfigDep = Annotated[ApiConfig, Depends(get_config)]
CurrentUserDep = Annotated[AuthenticatedUser, Depends(get_current_user)]


def _account(user: AuthenticatedUser) -> dict[str, object]:
    return {
        "uid": user.uid,
        "email": user.email,
        "display_name": user.display_name,
        "id_token": user.id_token,
    }


@router.post("/auth/signup", response_model=AccountResponseV1, status_code=201)
def sign_up(
    request: Request,
    body: SignupRequest,
    service: AccountServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    user = service.sign_up(
        email=body.email, password=body.password, display_name=body.display_name
    )
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=_account(user),
    )


@router.post("/auth/login", response_model=AccountResponseV1)
def log_in(
    request: Request,
    body: LoginRequest,
    service: AccountServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    user = service.log_in(email=body.email, password=body.password)
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=_account(user),
    )


@router.get("/history", response_model=HistoryResponseV1)
def recent_history(
    request: Request,
    service: AccountServiceDep,
    config: ConfigDep,
    user: CurrentUserDep,
) -> dict[str, object]:
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=service.recent_history(user),
    )


@router.post("/contact", response_model=ContactResponseV1, status_code=201)
def contact(
    request: Request,
    body: ContactRequest,
    service: AccountServiceDep,
    config: ConfigDep,
) -> dict[str, object]:
    receipt = service.contact(name=body.name, email=body.email, message=body.message)
    return build_object_envelope(
        api_version_path=config.api_version_path,
        schema_version=config.schema_version,
        request_id=request.state.request_id,
        data=receipt,
    )
