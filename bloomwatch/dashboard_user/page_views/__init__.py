# This package holds the top-level page renderers, one per dashboard tab.
# Keeping pages separate makes it easier to extend without turning app.py into a monolith.

__all__ = [
    "about",
    "account",
    "climate",
    "contact",
    "dashboard",
    "history",
    "insights",
    "map_view",
]
