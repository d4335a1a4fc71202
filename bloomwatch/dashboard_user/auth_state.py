# This file keeps the signed-in account in Streamlit session state.
# Pages read the ID token from here to attach it to API calls that record history.

from __future__ import annotations

from typing import Any

import streamlit as st

AUTH_SESSION_KEY = "auth_user"


def current_user() -> dict[str, Any] | None:
    user = st.session_state.get(AUTH_SESSION_KEY)
    return dict(user) if user else None


def current_id_token() -> str | None:
    user = current_user()
    return str(user["id_token"]) if user and user.get("id_token") else None


def sign_in(account: dict[str, Any]) -> None:
    st.session_state[AUTH_SESSION_KEY] = dict(account)


def sign_out() -> None:
    st.session_state.pop(AUTH_SESSION_KEY, None)
