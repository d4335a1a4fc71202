"""
Application settings loaded from environment variables.
It centralizes cross-cutting concerns like settings, logging, and the secrets used by external clients.
Keeping these helpers isolated reduces duplication and keeps domain modules focused on their own calls.
"""

from __future__ import annotations

import os
from functools import lru_cache
from typing import Final

from dotenv import load_dotenv
from pydantic import BaseModel, ConfigDict, ValidationError

REQUIRED_ENV_VARS: Final[tuple[str, ...]] = (
    "PROJECT_NAME",
    "ENV",
    "LOG_LEVEL",
    "API_HOST",
    "API_PORT",
)

NASA_API_KEY_PLACEHOLDER: Final[str] = "YOUR_NASA_API_KEY_HERE"


class Settings(BaseModel):
    """Typed runtime configuration."""

    model_config = ConfigDict(extra="ignore")

    PROJECT_NAME: str
    ENV: str
    LOG_LEVEL: str
    API_HOST: str
    API_PORT: int
    NASA_API_KEY: str | None = None
    GEMINI_API_KEY: str | None = None
    GEMINI_MODEL: str = "gemini-2.5-flash"
    CSC_API_KEY: str | None = None
    FIREBASE_API_KEY: str | None = None
    FIREBASE_PROJECT_ID: str | None = None

    def usable_nasa_api_key(self) -> str | None:
        """Return the NASA key only when it looks like a real key."""

        key = (self.NASA_API_KEY or "").strip()
        if not key or key == NASA_API_KEY_PLACEHOLDER or len(key) <= 5:
            return None
        return key


def load_settings(*, load_env: bool = True) -> Settings:
    """Load and validate environment settings from `.env` and process environment."""

    if load_env:
        load_dotenv()

    missing = [key for key in REQUIRED_ENV_VARS if not os.getenv(key)]
    if missing:
        missing_values = ", ".join(sorted(missing))
        raise RuntimeError(
            f"Missing required environment variables: {missing_values}. "
            "Populate these values in `.env` before starting the application."
        )

    values = {key: value for key, value in os.environ.items() if value != ""}
    try:
        return Settings.model_validate(values)
    except ValidationError as exc:
        raise RuntimeError(f"Invalid environment configuration: {exc}") from exc


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    """Cached accessor for application settings."""

    return load_settings()
