# This file renders the Contact tab form.
# Fields are checked locally with the same rules the API applies before anything is sent.

from __future__ import annotations

import streamlit as st

from bloomwatch.dashboard_user.api_client import (
    ApiRequestError,
    ApiUnavailableError,
    BloomWatchApiClient,
)
from bloomwatch.dashboard_user.validation import validate_contact_form


def render(*, client: BloomWatchApiClient) -> None:
    st.header("Contact")
    st.write("Questions, ideas, or data issues? Send us a note.")

    with st.form("contact_form", clear_on_submit=False):
        name = st.text_input("Name")
        email = st.text_input("Email")
        message = st.text_area("Message", height=160)
        submitted = st.form_submit_button("Send message")

    if not submitted:
        return

    errors = validate_contact_form(name=name, email=email, message=message)
    if errors:
        for error in errors.values():
            st.error(error)
        return

    try:
        confirmation = client.contact(name=name, email=email, message=message)
    except (ApiUnavailableError, ApiRequestError) as exc:
        st.error(f"An unexpected error occurred. Please try again later. ({exc})")
        return
    st.success(confirmation)
