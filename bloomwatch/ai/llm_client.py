"""
Gemini `generateContent` REST client.
Requests JSON output, strips markdown fences the model sometimes adds, and validates the
decoded object against the caller's pydantic model.
"""

from __future__ import annotations

import json
import logging
import re
from typing import Any, Final, TypeVar

import requests
from pydantic import BaseModel, ValidationError

logger = logging.getLogger(__name__)

GEMINI_API_URL: Final[str] = "https://generativelanguage.googleapis.com/v1beta/models"
DEFAULT_MODEL: Final[str] = "gemini-2.5-flash"

_FENCE_RE = re.compile(r"^```(?:json)?\s*(.*?)\s*```$", re.DOTALL)

ModelT = TypeVar("ModelT", bound=BaseModel)


class LlmError(RuntimeError):
    """Base class for generative-model failures."""


class LlmConfigurationError(LlmError):
    """Raised when no API key is configured."""


class LlmUnavailableError(LlmError):
    """Raised on transport failures and non-2xx responses."""


class LlmResponseError(LlmError):
    """Raised when the model answer is missing, not JSON, or the wrong shape."""


def strip_code_fence(text: str) -> str:
    cleaned = text.strip()
    match = _FENCE_RE.match(cleaned)
    return match.group(1) if match else cleaned


def extract_text(payload: dict[str, Any]) -> str:
    candidates = payload.get("candidates") or []
    if not candidates:
        feedback = payload.get("promptFeedback") or {}
        reason = feedback.get("blockReason")
        if reason:
            raise LlmResponseError(f"The model declined the prompt: {reason}")
        raise LlmResponseError("The model returned no candidates.")

    parts = ((candidates[0] or {}).get("content") or {}).get("parts") or []
    text = "".join(str(part.get("text", "")) for part in parts if isinstance(part, dict))
    if not text.strip():
        raise LlmResponseError("The model returned an empty answer.")
    return text


class GeminiClient:
    def __init__(
        self,
        *,
        api_key: str | None,
        model: str = DEFAULT_MODEL,
        base_url: str = GEMINI_API_URL,
        timeout_seconds: int = 60,
        session: requests.Session | None = None,
    ) -> None:
        self.api_key = api_key
        self.model = model
        self.base_url = base_url.rstrip("/")
        self.timeout_seconds = timeout_seconds
        self.session = session or requests.Session()

    @property
    def endpoint(self) -> str:
        return f"{self.base_url}/{self.model}:generateContent"

    def generate(self, prompt: str, output_model: type[ModelT]) -> ModelT:
        if not self.api_key:
            raise LlmConfigurationError("GEMINI_API_KEY is not configured.")

        body = {
            "contents": [{"parts": [{"text": prompt}]}],
            "generationConfig": {"responseMimeType": "application/json"},
        }
        headers = {"Content-Type": "application/json", "x-goog-api-key": self.api_key}

        try:
            response = self.session.post(
                self.endpoint, json=body, headers=headers, timeout=self.timeout_seconds
            )
        except requests.RequestException as exc:
            logger.error("Gemini request failed: %s", exc)
            raise LlmUnavailableError(f"Generative model request failed: {exc}") from exc

        if not 200 <= response.status_code < 300:
            logger.error("Gemini returned HTTP %s: %s", response.status_code, response.text[:300])
            raise LlmUnavailableError(
                f"Generative model request failed with status {response.status_code}."
            )

        try:
            payload = response.json()
        except ValueError as exc:
            raise LlmUnavailableError("Generative model did not return valid JSON.") from exc

        text = extract_text(payload)
        try:
            decoded = json.loads(strip_code_fence(text))
        except json.JSONDecodeError as exc:
            raise LlmResponseError("The model answer was not valid JSON.") from exc

        try:
            return output_model.model_validate(decoded)
        except ValidationError as exc:
            logger.warning("Model answer failed %s validation: %s", output_model.__name__, exc)
            raise LlmResponseError(
                f"The model answer did not match the {output_model.__name__} schema."
            ) from exc
