# This package groups reusable Streamlit components used by multiple dashboard pages.
# Sharing these helpers keeps pickers, charts, and prediction cards consistent across tabs.

__all__ = ["charts", "prediction_cards", "selectors", "tables"]
