"""Gemini provider implementation."""

from __future__ import annotations

import asyncio
from typing import List, Optional

from google import genai
from google.genai import types


class GeminiProvider:
    """Google Gemini provider using google-genai SDK."""

    def __init__(
        self,
        api_key: str,
        model: str,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
    ) -> None:
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.client = genai.Client(api_key=api_key)

    async def generate(self, prompt: str) -> str:
        # generate_content is synchronous; run it off the event loop
        response = await asyncio.to_thread(
            self.client.models.generate_content,
            model=self.model,
            contents=prompt,
            config=self._generation_config(),
        )
        return self._from_gemini_response(response)

    def _generation_config(self) -> Optional[types.GenerateContentConfig]:
        if self.temperature is None and self.max_tokens is None:
            return None
        return types.GenerateContentConfig(
            temperature=self.temperature,
            max_output_tokens=self.max_tokens,
        )

    def _from_gemini_response(self, response) -> str:
        if not response.candidates:
            return ""

        candidate = response.candidates[0]
        parts = candidate.content.parts if candidate.content else []
        text_parts: List[str] = [part.text for part in parts or [] if part.text]
        return "".join(text_parts).strip()
