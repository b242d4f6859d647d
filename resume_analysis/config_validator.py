"""Configuration validator for analysis startup checks."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List

from .config import resolve_api_key


class Severity(Enum):
    ERROR = "error"
    WARNING = "warning"


@dataclass
class ConfigError:
    """A single configuration issue."""
    field: str
    message: str
    severity: Severity


def _is_number(value: Any) -> bool:
    return isinstance(value, (int, float)) and not isinstance(value, bool)


def validate_config(raw_config: Dict[str, Any]) -> List[ConfigError]:
    """Validate raw configuration and return a list of issues.

    Args:
        raw_config: Raw config dict from YAML

    Returns:
        List of ConfigError (empty = valid)
    """
    errors: List[ConfigError] = []

    # --- API Key ---
    api_key = resolve_api_key(raw_config.get("api_key", "") or "")
    if not api_key:
        errors.append(ConfigError(
            field="api_key",
            message="GEMINI_API_KEY not set. Set the env var or add api_key to config/config.local.yaml",
            severity=Severity.ERROR,
        ))

    # --- Model ---
    model = raw_config.get("model", "")
    if not model or not isinstance(model, str):
        errors.append(ConfigError(
            field="model",
            message="model must be a non-empty string",
            severity=Severity.ERROR,
        ))

    # --- Temperature ---
    temperature = raw_config.get("temperature")
    if temperature is not None and (not _is_number(temperature) or temperature < 0 or temperature > 2):
        errors.append(ConfigError(
            field="temperature",
            message=f"temperature must be a number between 0 and 2, got {temperature}",
            severity=Severity.ERROR,
        ))

    # --- Max tokens ---
    max_tokens = raw_config.get("max_tokens")
    if max_tokens is not None and (not isinstance(max_tokens, int) or isinstance(max_tokens, bool) or max_tokens <= 0):
        errors.append(ConfigError(
            field="max_tokens",
            message=f"max_tokens must be a positive integer, got {max_tokens}",
            severity=Severity.ERROR,
        ))

    # --- Timeout ---
    timeout = raw_config.get("timeout", 30.0)
    if not _is_number(timeout) or timeout <= 0:
        errors.append(ConfigError(
            field="timeout",
            message=f"timeout must be a positive number of seconds, got {timeout}",
            severity=Severity.ERROR,
        ))
    elif timeout > 120:
        errors.append(ConfigError(
            field="timeout",
            message=f"timeout of {timeout}s is unusually long for a single request",
            severity=Severity.WARNING,
        ))

    # --- Retry policy ---
    retry = raw_config.get("retry", {}) or {}
    if not isinstance(retry, dict):
        errors.append(ConfigError(
            field="retry",
            message="retry must be a mapping",
            severity=Severity.ERROR,
        ))
        return errors

    max_attempts = retry.get("max_attempts", 3)
    if not isinstance(max_attempts, int) or isinstance(max_attempts, bool) or max_attempts < 0:
        errors.append(ConfigError(
            field="retry.max_attempts",
            message=f"retry.max_attempts must be a non-negative integer, got {max_attempts!r}",
            severity=Severity.ERROR,
        ))

    for key in ("base_delay", "max_delay"):
        value = retry.get(key)
        if value is not None and (not _is_number(value) or value < 0):
            errors.append(ConfigError(
                field=f"retry.{key}",
                message=f"retry.{key} must be a non-negative number of seconds, got {value!r}",
                severity=Severity.ERROR,
            ))

    exponential_base = retry.get("exponential_base")
    if exponential_base is not None and (not _is_number(exponential_base) or exponential_base < 1):
        errors.append(ConfigError(
            field="retry.exponential_base",
            message=f"retry.exponential_base must be at least 1, got {exponential_base!r}",
            severity=Severity.ERROR,
        ))

    return errors


def has_errors(issues: List[ConfigError]) -> bool:
    """Check if any issues are errors (not just warnings)."""
    return any(e.severity == Severity.ERROR for e in issues)
