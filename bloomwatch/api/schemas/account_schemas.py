# This file defines schemas for sign-up, login, history, and contact endpoints.
# Field rules match the profile and contact records so bad input fails before any upstream call.

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, Field, field_validator

from bloomwatch.accounts.history import HistoryEvent
from bloomwatch.accounts.records import validate_email, validate_message, validate_name
from bloomwatch.api.schemas.common import EnvelopeFields


class SignupRequest(BaseModel):
    display_name: str
    email: str
    password: str = Field(min_length=6)

    @field_validator("display_name")
    @classmethod
    def _display_name(cls, value: str) -> str:
        return validate_name(value)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return validate_email(value)


class LoginRequest(BaseModel):
    email: str
    password: str = Field(min_length=1)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return validate_email(value)


class ContactRequest(BaseModel):
    name: str
    email: str
    message: str

    @field_validator("name")
    @classmethod
    def _name(cls, value: str) -> str:
        return validate_name(value)

    @field_validator("message")
    @classmethod
    def _message(cls, value: str) -> str:
        return validate_message(value)

    @field_validator("email")
    @classmethod
    def _email(cls, value: str) -> str:
        return validate_email(value)


class AccountV1(BaseModel):
    uid: str
    email: str
    display_name: str | None = None
    id_token: str | None = None


class ContactReceiptV1(BaseModel):
    message: str
    sent_at: datetime


class AccountResponseV1(EnvelopeFields):
    data: AccountV1


class HistoryResponseV1(EnvelopeFields):
    data: list[HistoryEvent]


class ContactResponseV1(EnvelopeFields):
    data: ContactReceiptV1
