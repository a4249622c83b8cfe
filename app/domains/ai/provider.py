"""Completion providers for the AI assistant."""

import asyncio
import logging
from typing import Optional, Protocol

import google.generativeai as genai

from app.core.config import settings
from app.exceptions.ai import (
    AIConfigurationError,
    AIServiceError,
    AIServiceUnavailableError,
    classify_provider_error,
)

logger = logging.getLogger(__name__)

SYSTEM_PROMPT = "You are a helpful assistant in a messaging app. Be concise and friendly."


class CompletionProvider(Protocol):
    """Anything that turns a single prompt into a single reply."""

    async def complete(self, prompt: str) -> str: ...


class GeminiCompletionProvider:
    """Completion provider backed by Google Gemini.

    Each call is a single attempt. Any failure, including a timeout, surfaces
    as ``AIServiceUnavailableError`` so the caller decides whether to retry.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        model_name: Optional[str] = None,
        timeout: Optional[float] = None,
    ):
        api_key = api_key or settings.gemini_api_key
        if not api_key:
            raise AIConfigurationError("Gemini API key not configured")

        self.model_name = model_name or settings.gemini_model
        self.timeout = timeout or settings.ai_request_timeout

        genai.configure(api_key=api_key)
        self.model = genai.GenerativeModel(
            model_name=self.model_name,
            system_instruction=SYSTEM_PROMPT,
            generation_config=genai.types.GenerationConfig(
                candidate_count=1,
                max_output_tokens=settings.gemini_max_tokens,
                temperature=settings.gemini_temperature,
            ),
        )
        logger.info("Gemini provider initialized with model %s", self.model_name)

    async def complete(self, prompt: str) -> str:
        try:
            return await asyncio.wait_for(self._generate(prompt), timeout=self.timeout)
        except AIServiceError:
            raise
        except Exception as e:
            reason = classify_provider_error(e)
            logger.error("Gemini request failed (%s): %s", reason, e)
            raise AIServiceUnavailableError(details={"reason": reason}) from e

    async def _generate(self, prompt: str) -> str:
        # The Gemini SDK call is blocking
        loop = asyncio.get_running_loop()
        response = await loop.run_in_executor(None, lambda: self.model.generate_content(prompt))

        if not response or not response.candidates:
            logger.error("Gemini response has no candidates - content may be blocked")
            raise AIServiceUnavailableError(details={"reason": "content_filtered"})

        text = (response.text or "").strip()
        if not text:
            raise AIServiceUnavailableError(details={"reason": "empty_response"})
        return text


_provider: Optional[CompletionProvider] = None


def get_completion_provider() -> CompletionProvider:
    """FastAPI dependency returning the process-wide completion provider."""
    global _provider
    if _provider is None:
        _provider = GeminiCompletionProvider()
    return _provider
