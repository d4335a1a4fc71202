# This file renders the About tab.

from __future__ import annotations

import streamlit as st

from bloomwatch.dashboard_user.ui_text import ABOUT_MARKDOWN


def render() -> None:
    st.header("About BloomWatch")
    st.markdown(ABOUT_MARKDOWN)
