"""
Minimal Cloud Firestore REST client.
Documents are plain dicts on the Python side; this module converts them to and from
Firestore's typed value encoding.
"""

from __future__ import annotations

import logging
import re
from collections.abc import Mapping
from datetime import UTC, datetime
from typing import Any, Final

import requests

logger = logging.getLogger(__name__)

FIRESTORE_API_URL: Final[str] = "https://firestore.googleapis.com/v1"

_FRACTION_RE = re.compile(r"\.(\d{6})\d+")


class FirestoreError(RuntimeError):
    """Raised when a Firestore read or write fails."""


def encode_value(value: Any) -> dict[str, Any]:
    if value is None:
        return {"nullValue": None}
    if isinstance(value, bool):
        return {"booleanValue": value}
    if isinstance(value, int):
        return {"integerValue": str(value)}
    if isinstance(value, float):
        return {"doubleValue": value}
    if isinstance(value, str):
        return {"stringValue": value}
    if isinstance(value, datetime):
        stamp = value if value.tzinfo else value.replace(tzinfo=UTC)
        return {"timestampValue": stamp.astimezone(UTC).isoformat().replace("+00:00", "Z")}
    if isinstance(value, Mapping):
        return {"mapValue": {"fields": encode_fields(value)}}
    if isinstance(value, (list, tuple)):
        return {"arrayValue": {"values": [encode_value(item) for item in value]}}
    raise TypeError(f"Unsupported Firestore value type: {type(value).__name__}")


def encode_fields(document: Mapping[str, Any]) -> dict[str, Any]:
    return {str(key): encode_value(value) for key, value in document.items()}


def parse_timestamp(text: str) -> datetime:
    # Firestore returns nanosecond precision; datetime keeps microseconds.
    normalized = _FRACTION_RE.sub(r".\1", text).replace("Z", "+00:00")
    return datetime.fromisoformat(normalized)


def decode_value(value: Mapping[str, Any]) -> Any:
    if "nullValue" in value:
        return None
    if "booleanValue" in value:
        return bool(value["booleanValue"])
    if "integerValue" in value:
        return int(value["integerValue"])
    if "doubleValue" in value:
        return float(value["doubleValue"])
    if "stringValue" in value:
        return str(value["stringValue"])
    if "timestampValue" in value:
        return parse_timestamp(str(value["timestampValue"]))
    if "mapValue" in value:
        return decode_fields((value["mapValue"] or {}).get("fields") or {})
    if "arrayValue" in value:
        return [decode_value(item) for item in (value["arrayValue"] or {}).get("values") or []]
    raise ValueError(f"Unsupported Firestore value: {sorted(value)}")


def decode_fields(fields: Mapping[str, Any]) -> dict[str, Any]:
    return {key: decode_value(raw) for key, raw in fields.items()}


class FirestoreClient:
    def __init__(
        self,
        *,
        project_id: str | None,
        api_key: str | None = None,
        base_url: str = FIRESTORE_API_URL,
        timeout_seconds: int = 15,
        session: requests.Session | None = None,
    ) -> None:
        self.project_id = project_id
        self.api_key = api_key
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    @property
    def documents_root(self) -> str:
        if not self.project_id:
            raise FirestoreError("FIREBASE_PROJECT_ID is not configured.")
        return f"{self.base_url}/projects/{self.project_id}/databases/(default)/documents"

    def create_document(
        self,
        collection_path: str,
        document: Mapping[str, Any],
        *,
        id_token: str | None = None,
    ) -> dict[str, Any]:
        url = f"{self.documents_root}/{collection_path.strip('/')}"
        payload = self._send(
            "POST", url, json={"fields": encode_fields(document)}, id_token=id_token
        )
        return self._document(payload)

    def set_document(
        self,
        document_path: str,
        document: Mapping[str, Any],
        *,
        id_token: str | None = None,
    ) -> dict[str, Any]:
        url = f"{self.documents_root}/{document_path.strip('/')}"
        payload = self._send(
            "PATCH", url, json={"fields": encode_fields(document)}, id_token=id_token
        )
        return self._document(payload)

    def run_query(
        self,
        parent_path: str,
        *,
        collection_id: str,
        order_by: str,
        descending: bool = True,
        limit: int = 20,
        id_token: str | None = None,
    ) -> list[dict[str, Any]]:
        parent = self.documents_root
        if parent_path:
            parent = f"{parent}/{parent_path.strip('/')}"
        body = {
            "structuredQuery": {
                "from": [{"collectionId": collection_id}],
                "orderBy": [
                    {
                        "field": {"fieldPath": order_by},
                        "direction": "DESCENDING" if descending else "ASCENDING",
                    }
                ],
                "limit": limit,
            }
        }
        payload = self._send("POST", f"{parent}:runQuery", json=body, id_token=id_token)
        if not isinstance(payload, list):
            raise FirestoreError("Unexpected Firestore query response.")
        return [self._document(row["document"]) for row in payload if row.get("document")]

    @staticmethod
    def _document(payload: Any) -> dict[str, Any]:
        if not isinstance(payload, dict):
            raise FirestoreError("Unexpected Firestore document response.")
        document = decode_fields(payload.get("fields") or {})
        name = str(payload.get("name", ""))
        document["id"] = name.rsplit("/", 1)[-1] if name else None
        return document

    def _send(
        self,
        method: str,
        url: str,
        *,
        json: dict[str, Any],
        id_token: str | None,
    ) -> Any:
        headers: dict[str, str] = {}
        if id_token:
            headers["Authorization"] = f"Bearer {id_token}"
        params = {"key": self.api_key} if self.api_key else None

        try:
            response = self.session.request(
                method,
                url,
                params=params,
                json=json,
                headers=headers,
                timeout=self.timeout_seconds,
            )
        except requests.RequestException as exc:
            raise FirestoreError(f"Firestore request failed: {exc}") from exc

        if response.status_code >= 400:
            logger.error("Firestore %s %s returned %s", method, url, response.status_code)
            raise FirestoreError(f"Firestore request failed with status {response.status_code}.")

        try:
            return response.json()
        except ValueError as exc:
            raise FirestoreError("Firestore did not return valid JSON.") from exc
