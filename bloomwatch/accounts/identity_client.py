"""
Firebase Identity Toolkit REST client for email/password accounts.
Error codes returned by the service are mapped to short messages the forms can show.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Final

import requests

logger = logging.getLogger(__name__)

IDENTITY_API_URL: Final[str] = "https://identitytoolkit.googleapis.com/v1"

ERROR_MESSAGES: Final[dict[str, str]] = {
    "EMAIL_EXISTS": "An account with this email already exists.",
    "EMAIL_NOT_FOUND": "Invalid email or password.",
    "INVALID_PASSWORD": "Invalid email or password.",
    "INVALID_LOGIN_CREDENTIALS": "Invalid email or password.",
    "USER_DISABLED": "This account has been disabled.",
    "WEAK_PASSWORD": "Password should be at least 6 characters.",
    "INVALID_EMAIL": "Please enter a valid email.",
    "INVALID_ID_TOKEN": "Your session has expired. Please log in again.",
    "TOO_MANY_ATTEMPTS_TRY_LATER": "Too many attempts. Please try again later.",
}


class IdentityError(RuntimeError):
    def __init__(self, code: str, message: str) -> None:
        self.code = code
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class AuthenticatedUser:
    uid: str
    email: str
    display_name: str | None
    id_token: str | None = None


def error_code(payload: Any) -> str:
    """Extract `EMAIL_EXISTS` from messages like `EMAIL_EXISTS` or `WEAK_PASSWORD : ...`."""

    if not isinstance(payload, dict):
        return "UNKNOWN"
    message = str((payload.get("error") or {}).get("message") or "UNKNOWN")
    return message.split(":", 1)[0].strip() or "UNKNOWN"


class IdentityClient:
    def __init__(
        self,
        *,
        api_key: str | None,
        base_url: str = IDENTITY_API_URL,
        timeout_seconds: int = 15,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    def sign_up(self, *, email: str, password: str, display_name: str) -> AuthenticatedUser:
        created = self._post(
            "accounts:signUp",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        id_token = str(created.get("idToken", ""))
        updated = self._post(
            "accounts:update",
            {"idToken": id_token, "displayName": display_name, "returnSecureToken": True},
        )
        return AuthenticatedUser(
            uid=str(created.get("localId", "")),
            email=str(created.get("email", email)),
            display_name=str(updated.get("displayName") or display_name),
            id_token=str(updated.get("idToken") or id_token),
        )

    def sign_in(self, *, email: str, password: str) -> AuthenticatedUser:
        payload = self._post(
            "accounts:signInWithPassword",
            {"email": email, "password": password, "returnSecureToken": True},
        )
        return AuthenticatedUser(
            uid=str(payload.get("localId", "")),
            email=str(payload.get("email", email)),
            display_name=payload.get("displayName") or None,
            id_token=str(payload.get("idToken", "")),
        )

    def lookup(self, id_token: str) -> AuthenticatedUser:
        payload = self._post("accounts:lookup", {"idToken": id_token})
        users = payload.get("users") or []
        if not users:
            raise IdentityError("INVALID_ID_TOKEN", ERROR_MESSAGES["INVALID_ID_TOKEN"])
        user = users[0]
        return AuthenticatedUser(
            uid=str(user.get("localId", "")),
            email=str(user.get("email", "")),
            display_name=user.get("displayName") or None,
            id_token=id_token,
        )

    def _post(self, endpoint: str, body: dict[str, Any]) -> dict[str, Any]:
        if not self.api_key:
            raise IdentityError("NOT_CONFIGURED", "Authentication is not configured.")

        url = f"{self.base_url}/{endpoint}"
        try:
            response = self.session.post(
                url, params={"key": self.api_key}, json=body, timeout=self.timeout_seconds
            )
        except requests.RequestException as exc:
            logger.error("Identity request to %s failed: %s", endpoint, exc)
            raise IdentityError("UNAVAILABLE", "Authentication service is unavailable.") from exc

        try:
            payload = response.json()
        except ValueError:
            payload = None

        if response.status_code >= 400:
            code = error_code(payload)
            logger.info("Identity %s rejected with %s", endpoint, code)
            raise IdentityError(code, ERROR_MESSAGES.get(code, "Authentication failed."))

        if not isinstance(payload, dict):
            raise IdentityError(
                "UNAVAILABLE", "Authentication service returned an invalid response."
            )
        return payload
