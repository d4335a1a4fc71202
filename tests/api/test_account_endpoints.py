# This file tests sign-up, login, activity history, and contact endpoints.
# Firebase is replaced by small in-memory fakes so error mapping and profile writes can be asserted.

from __future__ import annotations

from datetime import UTC, datetime
from typing import Any

from bloomwatch.accounts.history import HistoryEvent
from bloomwatch.accounts.identity_client import AuthenticatedUser, IdentityError
from bloomwatch.api.services.account_service import CONTACT_THANKS, AccountService
from tests.api.support import TEST_USER, FakeHistoryStore, api_test_client, build_test_config


class FakeIdentity:
    def __init__(self, *, error: IdentityError | None = None) -> None:
        self.error = error
        self.sign_ups: list[dict[str, str]] = []

    def sign_up(self, *, email: str, password: str, display_name: str) -> AuthenticatedUser:
        if self.error is not None:
            raise self.error
        self.sign_ups.append({"email": email, "display_name": display_name})
        return AuthenticatedUser(
            uid="new-user", email=email, display_name=display_name, id_token="fresh-token"
        )

    def sign_in(self, *, email: str, password: str) -> AuthenticatedUser:
        if self.error is not None:
            raise self.error
        return AuthenticatedUser(uid="user-1", email=email, display_name="Ada", id_token="token-1")


class FakeFirestore:
    def __init__(self) -> None:
        self.writes: list[tuple[str, str, dict[str, Any], str | None]] = []

    def set_document(
        self, path: str, document: dict[str, Any], *, id_token: str | None = None
    ) -> dict[str, Any]:
        self.writes.append(("set", path, dict(document), id_token))
        return dict(document)

    def create_document(
        self, path: str, document: dict[str, Any], *, id_token: str | None = None
    ) -> dict[str, Any]:
        self.writes.append(("create", path, dict(document), id_token))
        return dict(document)


def _service(
    *,
    identity: FakeIdentity | None = None,
    firestore: FakeFirestore | None = None,
    history: FakeHistoryStore | None = None,
) -> AccountService:
    return AccountService(
        config=build_test_config(history_limit=5),
        identity=identity or FakeIdentity(),  # type: ignore[arg-type]
        firestore=firestore or FakeFirestore(),  # type: ignore[arg-type]
        history=history or FakeHistoryStore(),  # type: ignore[arg-type]
    )


def test_signup_creates_account_and_profile() -> None:
    firestore = FakeFirestore()
    service = _service(firestore=firestore)
    body = {"display_name": "Grace", "email": "grace@example.com", "password": "secret1"}
    with api_test_client(account_service=service) as client:
        response = client.post("/api/v1/auth/signup", json=body)

    assert response.status_code == 201
    assert response.json()["data"] == {
        "uid": "new-user",
        "email": "grace@example.com",
        "display_name": "Grace",
        "id_token": "fresh-token",
    }
    kind, path, document, id_token = firestore.writes[0]
    assert (kind, path, id_token) == ("set", "users/new-user", "fresh-token")
    assert document["displayName"] == "Grace"
    assert isinstance(document["createdAt"], datetime)


def test_signup_with_existing_email_is_conflict() -> None:
    identity = FakeIdentity(
        error=IdentityError("EMAIL_EXISTS", "An account with this email already exists.")
    )
    firestore = FakeFirestore()
    body = {"display_name": "Grace", "email": "grace@example.com", "password": "secret1"}
    service = _service(identity=identity, firestore=firestore)
    with api_test_client(account_service=service) as client:
        response = client.post("/api/v1/auth/signup", json=body)

    assert response.status_code == 409
    assert response.json()["message"] == "An account with this email already exists."
    assert firestore.writes == []


def test_signup_rejects_short_password_before_calling_identity() -> None:
    identity = FakeIdentity()
    body = {"display_name": "Grace", "email": "grace@example.com", "password": "abc"}
    with api_test_client(account_service=_service(identity=identity)) as client:
        response = client.post("/api/v1/auth/signup", json=body)

    assert response.status_code == 422
    assert response.json()["error_code"] == "VALIDATION_ERROR"
    assert identity.sign_ups == []


def test_signup_rejects_padded_one_letter_name_before_calling_identity() -> None:
    identity = FakeIdentity()
    firestore = FakeFirestore()
    body = {"display_name": " a ", "email": "grace@example.com", "password": "secret1"}
    service = _service(identity=identity, firestore=firestore)
    with api_test_client(account_service=service) as client:
        response = client.post("/api/v1/auth/signup", json=body)

    assert response.status_code == 422
    assert response.json()["details"][0]["loc"][-1] == "display_name"
    assert identity.sign_ups == []
    assert firestore.writes == []


def test_signup_strips_display_name() -> None:
    identity = FakeIdentity()
    firestore = FakeFirestore()
    body = {"display_name": "  Grace  ", "email": "grace@example.com", "password": "secret1"}
    service = _service(identity=identity, firestore=firestore)
    with api_test_client(account_service=service) as client:
        response = client.post("/api/v1/auth/signup", json=body)

    assert response.status_code == 201
    assert identity.sign_ups[0]["display_name"] == "Grace"
    assert firestore.writes[0][2]["displayName"] == "Grace"


def test_login_returns_token() -> None:
    body = {"email": "ada@example.com", "password": "secret1"}
    with api_test_client(account_service=_service()) as client:
        response = client.post("/api/v1/auth/login", json=body)

    assert response.status_code == 200
    assert response.json()["data"]["id_token"] == "token-1"


def test_login_with_bad_credentials_is_401() -> None:
    identity = FakeIdentity(
        error=IdentityError("INVALID_LOGIN_CREDENTIALS", "Invalid email or password.")
    )
    body = {"email": "ada@example.com", "password": "wrong-one"}
    with api_test_client(account_service=_service(identity=identity)) as client:
        response = client.post("/api/v1/auth/login", json=body)

    assert response.status_code == 401
    payload = response.json()
    assert payload["error_code"] == "INVALID_CREDENTIALS"
    assert payload["message"] == "Invalid email or password."


def test_login_when_auth_is_not_configured_is_503() -> None:
    identity = FakeIdentity(
        error=IdentityError("NOT_CONFIGURED", "Authentication is not configured.")
    )
    body = {"email": "ada@example.com", "password": "secret1"}
    with api_test_client(account_service=_service(identity=identity)) as client:
        response = client.post("/api/v1/auth/login", json=body)

    assert response.status_code == 503
    assert response.json()["error_code"] == "AUTH_NOT_CONFIGURED"


def test_history_requires_signed_in_user() -> None:
    with api_test_client(account_service=_service()) as client:
        response = client.get("/api/v1/history")

    assert response.status_code == 401
    assert response.json()["error_code"] == "UNAUTHORIZED"


def test_history_lists_recent_events_with_configured_limit() -> None:
    history = FakeHistoryStore(
        events=[
            HistoryEvent(
                id="evt-1",
                type="PREDICTION",
                region_name="Tokyo",
                predicted_date="2025-03-27",
                created_at=datetime(2025, 3, 1, 9, 30, tzinfo=UTC),
            ),
            HistoryEvent(
                id="evt-2",
                type="CLIMATE_SUMMARY",
                region_name="Lisse",
                summary="Wet spring.",
                created_at=datetime(2025, 2, 1, 9, 30, tzinfo=UTC),
            ),
        ]
    )
    with api_test_client(account_service=_service(history=history), user=TEST_USER) as client:
        response = client.get("/api/v1/history")

    assert response.status_code == 200
    rows = response.json()["data"]
    assert [row["id"] for row in rows] == ["evt-1", "evt-2"]
    assert rows[0]["predicted_date"] == "2025-03-27"
    assert history.recent_calls == [("user-1", 5)]


def test_contact_stores_message_and_thanks_sender() -> None:
    firestore = FakeFirestore()
    body = {"name": "Grace", "email": "grace@example.com", "message": "Love the bloom map!"}
    with api_test_client(account_service=_service(firestore=firestore)) as client:
        response = client.post("/api/v1/contact", json=body)

    assert response.status_code == 201
    assert response.json()["data"]["message"] == CONTACT_THANKS
    kind, path, document, id_token = firestore.writes[0]
    assert (kind, path, id_token) == ("create", "contact_messages", None)
    assert document["message"] == "Love the bloom map!"
    assert "sentAt" in document


def test_contact_rejects_invalid_email_and_short_message() -> None:
    firestore = FakeFirestore()
    body = {"name": "Grace", "email": "not-an-email", "message": "short"}
    with api_test_client(account_service=_service(firestore=firestore)) as client:
        response = client.post("/api/v1/contact", json=body)

    assert response.status_code == 422
    fields = {error["loc"][-1] for error in response.json()["details"]}
    assert fields == {"email", "message"}
    assert firestore.writes == []


def test_contact_rejects_whitespace_padded_message() -> None:
    firestore = FakeFirestore()
    body = {"name": "Grace", "email": "grace@example.com", "message": "     hi there     "}
    with api_test_client(account_service=_service(firestore=firestore)) as client:
        response = client.post("/api/v1/contact", json=body)

    assert response.status_code == 422
    assert response.json()["details"][0]["loc"][-1] == "message"
    assert firestore.writes == []
