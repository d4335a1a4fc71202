# This file stores copy blocks for headings, section descriptions, and empty-state messages.
# It exists so wording stays consistent across the dashboard pages.

from __future__ import annotations

APP_TITLE = "BloomWatch"
APP_SUBTITLE = (
    "Track vegetation activity from NASA POWER data and get AI-generated bloom predictions "
    "for places around the world."
)

API_UNAVAILABLE = "The BloomWatch API is unavailable right now. Please try again shortly."
NO_VEGETATION = (
    "No vegetation data was found for the requested time period. The location may be over a "
    "large body of water or have other data availability issues."
)
NO_STATES = "No state data available for this country. Pick another country to drill down."
SELECT_CITY = "Select a city to load its climate and vegetation data."
EMPTY_DISPLAY_LIST = "No regions on the dashboard yet. Add a city above to get started."
LOGIN_FOR_HISTORY = "Please log in on the Account tab to see your activity history."
EMPTY_HISTORY = "Your activity history will appear here as you use the app."

ABOUT_MARKDOWN = """
BloomWatch combines monthly climate and insolation data from the
[NASA POWER](https://power.larc.nasa.gov/) project with a hosted generative model to
describe and predict flowering seasons.

**How it works**

- Climate series use 2-meter air temperature (`T2M`) and corrected precipitation
  (`PRECTOTCORR`).
- Vegetation activity is approximated by all-sky surface shortwave irradiance
  (`ALLSKY_SFC_SW_DWN`), a proxy for the energy available to plants.
- Predictions are free-text model output. They are meant for exploration, not as
  a scientific forecast.

**Data sources**

- NASA POWER monthly point API
- CountryStateCity geography catalog
- Google Gemini generative model
"""
