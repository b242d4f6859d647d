"""Provider factory."""

from __future__ import annotations

from typing import TYPE_CHECKING

from .base import TextProvider
from .gemini import GeminiProvider

if TYPE_CHECKING:
    from ..config import AnalysisConfig


def create_provider(config: "AnalysisConfig") -> TextProvider:
    """Create the Gemini provider for *config*.

    The caller checks that an API key is configured before calling this.
    """
    return GeminiProvider(
        api_key=config.api_key,
        model=config.model,
        temperature=config.temperature,
        max_tokens=config.max_tokens,
    )


__all__ = [
    "GeminiProvider",
    "TextProvider",
    "create_provider",
]
