# This file renders the Account tab: login and sign-up forms, or the signed-in profile.

from __future__ import annotations

import streamlit as st

from bloomwatch.dashboard_user.api_client import (
    ApiRequestError,
    ApiUnavailableError,
    BloomWatchApiClient,
)
from bloomwatch.dashboard_user.auth_state import current_user, sign_in, sign_out
from bloomwatch.dashboard_user.validation import validate_login_form, validate_signup_form


def _show_errors(errors: dict[str, str]) -> bool:
    for error in errors.values():
        st.error(error)
    return bool(errors)


def render(*, client: BloomWatchApiClient) -> None:
    st.header("Account")

    user = current_user()
    if user:
        st.write(f"Signed in as **{user.get('display_name') or user['email']}** ({user['email']}).")
        st.button("Log out", on_click=sign_out)
        return

    login_col, signup_col = st.columns(2)

    with login_col, st.form("login_form"):
        st.subheader("Log in")
        email = st.text_input("Email", key="login_email")
        password = st.text_input("Password", type="password", key="login_password")
        if st.form_submit_button("Log in"):
            if not _show_errors(validate_login_form(email=email, password=password)):
                try:
                    sign_in(client.log_in(email=email, password=password))
                except (ApiUnavailableError, ApiRequestError) as exc:
                    st.error(str(exc))
                else:
                    st.rerun()

    with signup_col, st.form("signup_form"):
        st.subheader("Sign up")
        display_name = st.text_input("Name", key="signup_name")
        new_email = st.text_input("Email", key="signup_email")
        new_password = st.text_input("Password", type="password", key="signup_password")
        if st.form_submit_button("Create account"):
            errors = validate_signup_form(
                display_name=display_name, email=new_email, password=new_password
            )
            if not _show_errors(errors):
                try:
                    sign_in(
                        client.sign_up(
                            display_name=display_name, email=new_email, password=new_password
                        )
                    )
                except (ApiUnavailableError, ApiRequestError) as exc:
                    st.error(str(exc))
                else:
                    st.rerun()
