"""Configuration for the Gemini-backed analysis layer.

Settings come from YAML (``config/config.yaml`` overlaid by
``config/config.local.yaml``) or from ``GEMINI_*`` environment variables.
The resulting :class:`AnalysisConfig` is immutable and safe to share between
concurrent calls.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from .retry import RetryConfig

DEFAULT_MODEL = "gemini-2.0-flash"
DEFAULT_TIMEOUT = 30.0
API_KEY_ENV = "GEMINI_API_KEY"


@dataclass(frozen=True)
class AnalysisConfig:
    """Configuration for the text-generation client and analysis operations."""
    api_key: str = ""
    model: str = DEFAULT_MODEL
    retry: RetryConfig = field(default_factory=RetryConfig)
    timeout: float = DEFAULT_TIMEOUT  # seconds, per upstream attempt
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None

    @property
    def has_api_key(self) -> bool:
        return bool(self.api_key)

    @classmethod
    def from_mapping(cls, data: Mapping[str, Any]) -> "AnalysisConfig":
        """Build a config from a raw mapping such as a parsed YAML file."""
        retry_data = data.get("retry") or {}
        defaults = RetryConfig()
        retry = RetryConfig(
            max_attempts=int(retry_data.get("max_attempts", defaults.max_attempts)),
            base_delay=float(retry_data.get("base_delay", defaults.base_delay)),
            max_delay=float(retry_data.get("max_delay", defaults.max_delay)),
            exponential_base=float(retry_data.get("exponential_base", defaults.exponential_base)),
        )
        temperature = data.get("temperature")
        max_tokens = data.get("max_tokens")
        return cls(
            api_key=resolve_api_key(data.get("api_key", "") or ""),
            model=data.get("model") or DEFAULT_MODEL,
            retry=retry,
            timeout=float(data.get("timeout", DEFAULT_TIMEOUT)),
            temperature=float(temperature) if temperature is not None else None,
            max_tokens=int(max_tokens) if max_tokens is not None else None,
        )

    @classmethod
    def from_env(cls) -> "AnalysisConfig":
        """Build a config from GEMINI_* environment variables."""
        data: Dict[str, Any] = {"api_key": os.environ.get(API_KEY_ENV, "")}
        if os.environ.get("GEMINI_MODEL"):
            data["model"] = os.environ["GEMINI_MODEL"]
        if os.environ.get("GEMINI_TIMEOUT"):
            data["timeout"] = os.environ["GEMINI_TIMEOUT"]

        retry: Dict[str, Any] = {}
        if os.environ.get("GEMINI_MAX_RETRIES"):
            retry["max_attempts"] = os.environ["GEMINI_MAX_RETRIES"]
        if os.environ.get("GEMINI_RETRY_DELAY"):
            retry["base_delay"] = os.environ["GEMINI_RETRY_DELAY"]
        data["retry"] = retry
        return cls.from_mapping(data)


def resolve_api_key(config_api_key: str) -> str:
    """Return the Gemini key to use, or "" when none can be found.

    ``GEMINI_API_KEY`` in the environment beats the configured value. A
    configured ``${NAME}`` placeholder is looked up in the environment.
    """
    from_env = os.environ.get(API_KEY_ENV, "")
    if from_env or not config_api_key:
        return from_env

    if config_api_key.startswith("${"):
        if not config_api_key.endswith("}"):
            return ""
        return os.environ.get(config_api_key[2:-1], "")

    return config_api_key


_PACKAGE_ROOT = Path(__file__).resolve().parents[1]
LOCAL_CONFIG_NAME = "config.local.yaml"
BASE_CONFIG_NAME = "config.yaml"


def _find_config_file(candidate: Path) -> Path:
    if candidate.exists() or candidate.is_absolute():
        return candidate
    in_package_root = _PACKAGE_ROOT / candidate
    return in_package_root if in_package_root.exists() else candidate


def _read_yaml_mapping(path: Path) -> Dict[str, Any]:
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Config file must be a mapping: {path}")
    return data


def _merge_overlay(base: Dict[str, Any], overlay: Dict[str, Any]) -> Dict[str, Any]:
    merged = dict(base)
    for key, value in overlay.items():
        if isinstance(merged.get(key), dict) and isinstance(value, dict):
            merged[key] = _merge_overlay(merged[key], value)
        else:
            merged[key] = value
    return merged


def load_raw_config(config_path: str = f"config/{LOCAL_CONFIG_NAME}") -> Dict[str, Any]:
    """Read the analysis settings from YAML.

    A path named ``config.local.yaml`` is an overlay: its sibling
    ``config.yaml`` is read first and the local values are merged over it,
    nested mappings key by key. Relative paths that do not exist from the
    working directory are looked up under the package root.

    Raises:
        FileNotFoundError: neither file yields any settings
        ValueError: a file does not hold a YAML mapping
    """
    requested = Path(config_path)
    data = _read_yaml_mapping(_find_config_file(requested))

    if requested.name == LOCAL_CONFIG_NAME:
        base = _read_yaml_mapping(_find_config_file(requested.with_name(BASE_CONFIG_NAME)))
        data = _merge_overlay(base, data)

    if not data:
        raise FileNotFoundError(f"No analysis settings found at {config_path}")
    return data


def load_config(config_path: str = f"config/{LOCAL_CONFIG_NAME}") -> AnalysisConfig:
    """Load analysis configuration from YAML file."""
    return AnalysisConfig.from_mapping(load_raw_config(config_path))
