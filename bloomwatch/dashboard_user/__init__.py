# This package contains the Streamlit dashboard for bloom tracking and prediction.
# It exists so visitors can explore vegetation, climate, and model insights for places they pick.
# The modules separate the API client, UI components, and page rendering to keep maintenance straightforward.

__all__ = ["app"]
