"""Text-generation client - one prompt in, one text response out.

Wraps the provider call with the rate-limit backoff, a per-attempt timeout
and error classification, and records each call with the observer.
"""

from __future__ import annotations

import asyncio
import logging
import time
from typing import Optional

from .config import AnalysisConfig
from .errors import (
    AnalysisError,
    InvalidInputError,
    MissingCredentialError,
    UpstreamError,
    classify_upstream_error,
)
from .observability import AnalysisObserver
from .providers import TextProvider, create_provider
from .retry import retry_with_backoff
from .types import RawModelResponse, is_non_empty_text

logger = logging.getLogger(__name__)


class TextGenerationClient:
    """Calls the configured Gemini model with backoff on rate limits."""

    def __init__(
        self,
        config: AnalysisConfig,
        provider: Optional[TextProvider] = None,
        observer: Optional[AnalysisObserver] = None,
    ):
        self.config = config
        self.observer = observer or AnalysisObserver()
        self._provider = provider

    @property
    def provider(self) -> TextProvider:
        if self._provider is None:
            self._provider = create_provider(self.config)
        return self._provider

    async def generate(self, prompt: str) -> str:
        """Send *prompt* and return the response text."""
        response = await self.complete(prompt)
        return response.text

    async def complete(self, prompt: str) -> RawModelResponse:
        """Send *prompt* and return the response text with its duration.

        Raises:
            InvalidInputError: prompt is empty or not a string
            MissingCredentialError: no API key configured
            RateLimitedError: still rate limited after all retries
            AuthenticationFailedError, InvalidRequestError, UpstreamError:
                terminal upstream failures, including timeouts
        """
        if not is_non_empty_text(prompt):
            raise InvalidInputError("Prompt must be a non-empty string")

        if not self.config.has_api_key:
            raise MissingCredentialError("GEMINI_API_KEY not configured in environment variables")

        start_time = time.perf_counter()
        try:
            text = await retry_with_backoff(
                self._call_once,
                self.config.retry,
                prompt,
                on_retry=self.observer.log_retry,
            )
        except AnalysisError as e:
            self.observer.log_error(
                e.kind.value,
                e.message,
                context={
                    "model": self.config.model,
                    "prompt_length": len(prompt),
                    "duration_ms": (time.perf_counter() - start_time) * 1000,
                },
            )
            raise

        duration_ms = (time.perf_counter() - start_time) * 1000
        self.observer.log_request(self.config.model, len(prompt), len(text), duration_ms)
        return RawModelResponse(text=text, duration_ms=duration_ms)

    async def _call_once(self, prompt: str) -> str:
        try:
            text = await asyncio.wait_for(self.provider.generate(prompt), timeout=self.config.timeout)
        except asyncio.TimeoutError as e:
            raise UpstreamError(
                f"Gemini API error: request timed out after {self.config.timeout:g}s",
                {"timeout_seconds": self.config.timeout},
            ) from e
        except AnalysisError:
            raise
        except Exception as e:
            raise classify_upstream_error(e) from e
        return text or ""
