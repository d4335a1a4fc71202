"""
Per-user activity history stored under `users/<uid>/history`.
Logging is best effort: a failed write is reported in the logs and otherwise ignored.
"""

from __future__ import annotations

import logging
from datetime import UTC, datetime
from typing import Any, Literal

from pydantic import BaseModel, Field, ValidationError

from bloomwatch.accounts.firestore_client import FirestoreClient, FirestoreError
from bloomwatch.accounts.identity_client import AuthenticatedUser
from bloomwatch.ai.schemas import PredictionResult

logger = logging.getLogger(__name__)

HistoryEventType = Literal["PREDICTION", "ANALYSIS", "CLIMATE_SUMMARY"]

HISTORY_COLLECTION = "history"


class HistoryEvent(BaseModel):
    id: str | None = None
    type: HistoryEventType
    region_name: str
    city: str | None = None
    state: str | None = None
    country: str | None = None
    predicted_date: str | None = None
    prediction: PredictionResult | None = None
    summary: str | None = None
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    def to_document(self) -> dict[str, Any]:
        document: dict[str, Any] = {
            "type": self.type,
            "regionName": self.region_name,
            "createdAt": self.created_at,
        }
        optional = {
            "city": self.city,
            "state": self.state,
            "country": self.country,
            "predictedDate": self.predicted_date,
            "summary": self.summary,
            "prediction": self.prediction.model_dump(mode="json") if self.prediction else None,
        }
        document.update({key: value for key, value in optional.items() if value is not None})
        return document

    @classmethod
    def from_document(cls, document: dict[str, Any]) -> HistoryEvent:
        return cls(
            id=document.get("id"),
            type=document["type"],
            region_name=document.get("regionName", ""),
            city=document.get("city"),
            state=document.get("state"),
            country=document.get("country"),
            predicted_date=document.get("predictedDate"),
            prediction=document.get("prediction"),
            summary=document.get("summary"),
            created_at=document.get("createdAt") or datetime.now(UTC),
        )


def history_path(user: AuthenticatedUser) -> str:
    return f"users/{user.uid}/{HISTORY_COLLECTION}"


class HistoryStore:
    def __init__(self, firestore: FirestoreClient) -> None:
        self.firestore = firestore

    def log_event(self, user: AuthenticatedUser | None, event: HistoryEvent) -> bool:
        if user is None:
            return False
        try:
            self.firestore.create_document(
                history_path(user), event.to_document(), id_token=user.id_token
            )
        except (FirestoreError, TypeError) as exc:
            logger.warning(
                "Could not record %s history for user %s: %s", event.type, user.uid, exc
            )
            return False
        return True

    def recent_events(self, user: AuthenticatedUser, limit: int = 20) -> list[HistoryEvent]:
        documents = self.firestore.run_query(
            f"users/{user.uid}",
            collection_id=HISTORY_COLLECTION,
            order_by="createdAt",
            descending=True,
            limit=limit,
            id_token=user.id_token,
        )
        events: list[HistoryEvent] = []
        for document in documents:
            try:
                events.append(HistoryEvent.from_document(document))
            except (KeyError, ValidationError) as exc:
                logger.warning(
                    "Skipping unreadable history entry %s for user %s: %s",
                    document.get("id"),
                    user.uid,
                    exc,
                )
        return events
