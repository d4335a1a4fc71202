"""
User profile and contact-form records.
Both are validated before anything is written.
"""

from __future__ import annotations

import logging
import re
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field, field_validator

from bloomwatch.accounts.firestore_client import FirestoreClient

logger = logging.getLogger(__name__)

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

USERS_COLLECTION = "users"
CONTACT_COLLECTION = "contact_messages"


def validate_email(value: str) -> str:
    cleaned = value.strip()
    if not EMAIL_PATTERN.match(cleaned):
        raise ValueError("Please enter a valid email.")
    return cleaned


def validate_name(value: str) -> str:
    cleaned = value.strip()
    if len(cleaned) < 2:
        raise ValueError("Name must be at least 2 characters.")
    return cleaned


def validate_message(value: str) -> str:
    cleaned = value.strip()
    if len(cleaned) < 10:
        raise ValueError("Message must be at least 10 characters.")
    return cleaned


class UserProfile(BaseModel):
    uid: str = Field(min_length=1)
    email: str
    display_name: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return validate_email(value)

    @field_validator("display_name")
    @classmethod
    def _display_name(cls, value: str) -> str:
        return validate_name(value)

    def to_document(self) -> dict[str, Any]:
        return {
            "uid": self.uid,
            "email": self.email,
            "displayName": self.display_name,
            "createdAt": self.created_at,
        }


class ContactMessage(BaseModel):
    name: str
    email: str
    message: str
    sent_at: datetime = Field(default_factory=lambda: datetime.now(UTC))

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return validate_name(value)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return validate_email(value)

    @field_validator("message")
    @classmethod
    def _message(cls, value: str) -> str:
        return validate_message(value)

    def to_document(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "email": self.email,
            "message": self.message,
            "sentAt": self.sent_at,
        }


def create_user_profile(
    firestore: FirestoreClient,
    *,
    uid: str,
    email: str,
    display_name: str,
    id_token: str | None = None,
) -> UserProfile:
    profile = UserProfile(uid=uid, email=email, display_name=display_name)
    firestore.set_document(
        f"{USERS_COLLECTION}/{profile.uid}", profile.to_document(), id_token=id_token
    )
    logger.info("Created profile for user %s", profile.uid)
    return profile


def submit_contact_message(
    firestore: FirestoreClient,
    *,
    name: str,
    email: str,
    message: str,
) -> ContactMessage:
    contact = ContactMessage(name=name, email=email, message=message)
    firestore.create_document(CONTACT_COLLECTION, contact.to_document())
    logger.info("Stored contact message from %s", contact.email)
    return contact
