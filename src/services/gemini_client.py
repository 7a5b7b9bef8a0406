# src/services/gemini_client.py

"""Thin async client for the Gemini ``generateContent`` REST endpoint."""

import logging
import re
from typing import Any

import httpx

from src.config.settings import Settings

logger = logging.getLogger("price_aggregator.gemini")


class GeminiError(Exception):
    """Raised when a Gemini call fails or returns an unexpected shape."""


def _redact_key(text: str) -> str:
    """Hide ``key=...`` query values so API keys never reach the logs."""
    return re.sub(r"(key=)([^&\s]+)", r"\1REDACTED", text)


class GeminiClient:
    """Holds the API key, model name and a shared ``httpx`` client.

    Built once per process.  ``generate`` makes exactly one request;
    retry policy is the caller's concern.
    """

    def __init__(
        self,
        api_key: str | None = None,
        model: str | None = None,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.api_key = (
            api_key if api_key is not None else Settings.GEMINI_API_KEY
        ).strip()
        self.model = (model or Settings.GEMINI_MODEL).strip()
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout or Settings.LLM_TIMEOUT
        )

    @property
    def configured(self) -> bool:
        return bool(self.api_key)

    def _endpoint(self) -> str:
        name = (
            self.model
            if self.model.startswith("models/")
            else f"models/{self.model}"
        )
        return f"{Settings.GEMINI_API_BASE}/{name}:generateContent"

    async def generate(self, prompt: str) -> str:
        """Send *prompt* and return the first candidate's text.

        Raises:
            GeminiError: no API key, transport failure, non-2xx status,
                or a response without candidate text.
        """
        if not self.configured:
            raise GeminiError("GEMINI_API_KEY is not set")

        payload: dict[str, Any] = {
            "contents": [
                {"role": "user", "parts": [{"text": prompt}]}
            ],
            "generationConfig": {"temperature": 0.1},
        }
        try:
            resp = await self._client.post(
                self._endpoint(),
                params={"key": self.api_key},
                json=payload,
            )
        except httpx.HTTPError as exc:
            raise GeminiError(
                _redact_key(f"Gemini transport error: {exc}")
            ) from exc

        if resp.status_code >= 400:
            raise GeminiError(
                f"Gemini request failed: HTTP {resp.status_code} "
                f"{_redact_key(resp.text)[:500]}"
            )

        try:
            data: dict[str, Any] = resp.json()
            text: str = data["candidates"][0]["content"]["parts"][0][
                "text"
            ]
        except (ValueError, KeyError, IndexError, TypeError) as exc:
            raise GeminiError(
                f"Unexpected Gemini response shape: {resp.text[:500]}"
            ) from exc

        logger.debug("Gemini response: %s", text)
        return text

    async def aclose(self) -> None:
        await self._client.aclose()
