"""
Generative model client used by the AI-delegated extraction path.

The client is passed into the extractor explicitly so tests can swap in a
fake with the same `generate_text` coroutine.
"""
from __future__ import annotations

from typing import Any, Protocol, Sequence

from google import genai
from structlog import get_logger

from invoice_extractor.core.settings import AppSettings

logger = get_logger(__name__)


class TextModel(Protocol):
    async def generate_text(self, contents: Sequence[Any]) -> str:  # pragma: no cover - interface
        ...


class GeminiModel:
    """Thin async wrapper over the google-genai client."""

    def __init__(self, api_key: str | None, model_name: str) -> None:
        self.api_key = api_key
        self.model_name = model_name
        self._client: genai.Client | None = None

    @classmethod
    def from_settings(cls, settings: AppSettings) -> "GeminiModel":
        return cls(api_key=settings.gemini_api_key, model_name=settings.gemini_model)

    @property
    def client(self) -> genai.Client:
        # Created on first use so the app starts without a credential
        if self._client is None:
            if not self.api_key:
                raise ValueError("Gemini API key is not configured")
            self._client = genai.Client(api_key=self.api_key)
            logger.info("gemini_client_created", model=self.model_name)
        return self._client

    async def generate_text(self, contents: Sequence[Any]) -> str:
        response = await self.client.aio.models.generate_content(model=self.model_name, contents=list(contents))
        return response.text or ""
