"""Gemini completion client used by the AI endpoints."""

import asyncio
import logging
from functools import lru_cache
from typing import Optional

import httpx
from google import genai
from google.genai import errors, types

from interview_prep.config import GEMINI_API_KEY, GEMINI_MODEL, LLM_TEMPERATURE

logger = logging.getLogger(__name__)


class LLMNotConfiguredError(RuntimeError):
    pass


class LLMBusyError(RuntimeError):
    """Provider answered 429/503 (rate limit, quota or overload)."""


class LLMTimeoutError(RuntimeError):
    pass


class CompletionClient:
    """Sends a prompt to Gemini and returns the raw completion text.

    The SDK call blocks, so ``complete`` runs it in a worker thread to keep
    the event loop free. No retries: provider failures go straight back to
    the caller.
    """

    def __init__(
        self,
        api_key: str,
        model: str = GEMINI_MODEL,
        temperature: float = LLM_TEMPERATURE,
    ):
        self.api_key = api_key
        self.model = model
        self.temperature = temperature
        self._client: Optional[genai.Client] = None

    @property
    def is_configured(self) -> bool:
        return bool(self.api_key)

    def _get_client(self) -> genai.Client:
        if self._client is None:
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    def complete_sync(self, prompt: str) -> str:
        response = self._get_client().models.generate_content(
            model=self.model,
            contents=prompt,
            config=types.GenerateContentConfig(
                temperature=self.temperature,
                response_mime_type="application/json",
            ),
        )
        return response.text or ""

    async def complete(self, prompt: str) -> str:
        if not self.is_configured:
            raise LLMNotConfiguredError("LLM API key is not configured")

        logger.info("Requesting completion from %s (%d chars)", self.model, len(prompt))
        try:
            return await asyncio.to_thread(self.complete_sync, prompt)
        except errors.APIError as e:
            if e.code in (429, 503):
                raise LLMBusyError(
                    "Server is currently busy due to high demand. Please try again in a few moments."
                ) from e
            raise
        except httpx.TimeoutException as e:
            raise LLMTimeoutError("Request timed out. Please try again.") from e


@lru_cache
def get_completion_client() -> CompletionClient:
    return CompletionClient(api_key=GEMINI_API_KEY)
