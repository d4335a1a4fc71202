# This file defines tooltip text for charts, cards, and form fields.
# A single dictionary keeps explanations consistent between pages and tests.

from __future__ import annotations

TOOLTIPS: dict[str, str] = {
    "city_picker": "Search for a city to add it to the dashboard. Cities already shown are hidden.",
    "predict_all": "Ask the model again for the next bloom date of every region on the dashboard.",
    "vegetation_chart": "Monthly all-sky surface insolation (kWh/m²/day), used as a proxy for vegetation activity.",
    "climate_chart": "Bars show monthly rainfall; the line shows mean air temperature at 2 meters.",
    "summary_button": "Ask the model for a short plain-language summary of these charts.",
    "date_range": "Leave empty to use the default window: last year for climate, last two years for vegetation.",
    "latest_bloom": "The most recent bloom date you know of. The prediction uses it as an anchor.",
    "comparison": "Compare average climate and vegetation across several cities.",
    "history": "Your 20 most recent predictions, analyses, and summaries.",
}
