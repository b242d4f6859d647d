"""Global pytest fixtures for deterministic test environment."""

from __future__ import annotations

import pytest


@pytest.fixture(autouse=True)
def _isolate_runtime_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Clear local Gemini env that can leak into tests on developer machines."""
    for key in (
        "GEMINI_API_KEY",
        "GEMINI_MODEL",
        "GEMINI_MAX_RETRIES",
        "GEMINI_RETRY_DELAY",
        "GEMINI_TIMEOUT",
    ):
        monkeypatch.delenv(key, raising=False)
