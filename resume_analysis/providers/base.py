"""Provider protocol definition."""

from __future__ import annotations

from typing import Protocol


class TextProvider(Protocol):
    """Protocol for upstream text-generation providers.

    Implementations send one prompt and return the model's text. Upstream
    failures are raised as the SDK's own exceptions; classification happens
    in the client.
    """

    model: str

    async def generate(self, prompt: str) -> str: ...
