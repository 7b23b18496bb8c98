"""
Gemini text-completion client.

One call per recipe: a system instruction plus a user prompt in, a text blob
out. The SDK is synchronous, so the call runs in a worker thread and is
bounded by `settings.gemini_timeout`. Failures are not retried here.
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

from google import genai
from google.genai import types

from app.config import settings
from app.utils.exceptions import UpstreamTimeout, UpstreamUnavailable

logger = logging.getLogger(__name__)


def get_response_text(response: Any) -> str:
    """
    Text of a google-genai response.

    Tries `response.text` first, then the parts of the first candidate.
    """
    try:
        text = getattr(response, "text", None)
        if isinstance(text, str) and text.strip():
            return text
    except ValueError:
        # Older SDKs raise when the candidate was blocked.
        pass

    candidates = getattr(response, "candidates", None) or []
    if candidates:
        content = getattr(candidates[0], "content", None)
        for part in getattr(content, "parts", None) or []:
            part_text = getattr(part, "text", None)
            if isinstance(part_text, str) and part_text.strip():
                return part_text

    return ""


class GeminiService:
    """Service for interacting with the Gemini API."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        model: Optional[str] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.api_key = api_key if api_key is not None else settings.gemini_api_key
        self.model = model or settings.gemini_model
        self.timeout = timeout if timeout is not None else settings.gemini_timeout
        self._client: Optional[genai.Client] = None

    @property
    def client(self) -> genai.Client:
        """Get or create Gemini client (lazy initialization)."""
        if self._client is None:
            if not self.api_key:
                raise UpstreamUnavailable("GEMINI_API_KEY is not configured")
            self._client = genai.Client(api_key=self.api_key)
        return self._client

    async def complete(self, system_instructions: str, user_instructions: str) -> str:
        """
        Run one completion.

        Returns:
            Raw response text (possibly empty; parsing is the caller's job)

        Raises:
            UpstreamTimeout: If the call exceeds the configured timeout
            UpstreamUnavailable: If the call itself fails
        """
        client = self.client

        def _sync_call() -> Any:
            return client.models.generate_content(
                model=self.model,
                contents=user_instructions,
                config=types.GenerateContentConfig(
                    system_instruction=system_instructions,
                    response_mime_type="application/json",
                    temperature=settings.gemini_temperature,
                    max_output_tokens=settings.gemini_max_tokens,
                ),
            )

        logger.info("Calling Gemini", extra={"model": self.model, "prompt_chars": len(user_instructions)})
        try:
            response = await asyncio.wait_for(asyncio.to_thread(_sync_call), timeout=self.timeout)
        except asyncio.TimeoutError as e:
            logger.error("Gemini call timed out after %ss", self.timeout)
            raise UpstreamTimeout(self.timeout) from e
        except Exception as e:
            logger.error("Gemini call failed: %s", str(e), exc_info=True)
            raise UpstreamUnavailable(f"Failed to generate recipe: {str(e)}") from e

        text = get_response_text(response)
        if not text:
            candidates = getattr(response, "candidates", None) or []
            finish_reason = getattr(candidates[0], "finish_reason", None) if candidates else None
            logger.warning("Gemini returned empty text", extra={"finish_reason": str(finish_reason)})
        else:
            logger.debug("Gemini raw response:\n%s", text)
        return text
