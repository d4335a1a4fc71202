# This file mirrors the server's form rules so the dashboard can flag mistakes before submitting.
# Each function returns a mapping of field name to message; an empty mapping means the form is valid.

from __future__ import annotations

import re

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")


def _email_error(email: str) -> str | None:
    if not EMAIL_PATTERN.match(email.strip()):
        return "Please enter a valid email."
    return None


def validate_contact_form(*, name: str, email: str, message: str) -> dict[str, str]:
    errors: dict[str, str] = {}
    if len(name.strip()) < 2:
        errors["name"] = "Name must be at least 2 characters."
    email_error = _email_error(email)
    if email_error:
        errors["email"] = email_error
    if len(message.strip()) < 10:
        errors["message"] = "Message must be at least 10 characters."
    return errors


def validate_signup_form(*, display_name: str, email: str, password: str) -> dict[str, str]:
    errors: dict[str, str] = {}
    if len(display_name.strip()) < 2:
        errors["display_name"] = "Name must be at least 2 characters."
    email_error = _email_error(email)
    if email_error:
        errors["email"] = email_error
    if len(password) < 6:
        errors["password"] = "Password should be at least 6 characters."
    return errors


def validate_login_form(*, email: str, password: str) -> dict[str, str]:
    errors: dict[str, str] = {}
    email_error = _email_error(email)
    if email_error:
        errors["email"] = email_error
    if not password:
        errors["password"] = "Password is required."
    return errors
