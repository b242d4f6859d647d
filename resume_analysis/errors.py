"""Error taxonomy for analysis calls and upstream failure classification."""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Optional


class ErrorKind(str, Enum):
    INVALID_INPUT = "invalid_input"
    MISSING_CREDENTIAL = "missing_credential"
    RATE_LIMITED = "rate_limited"
    AUTHENTICATION_FAILED = "authentication_failed"
    INVALID_REQUEST = "invalid_request"
    UNKNOWN = "unknown"


class AnalysisError(Exception):
    """Base error with a classified kind and an HTTP status hint for callers."""

    kind: ErrorKind = ErrorKind.UNKNOWN
    status_code: int = 500

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> Dict[str, Any]:
        return {
            "error": {
                "code": self.kind.value.upper(),
                "message": self.message,
                "details": self.details,
            }
        }


class InvalidInputError(AnalysisError):
    kind = ErrorKind.INVALID_INPUT
    status_code = 400


class MissingCredentialError(AnalysisError):
    kind = ErrorKind.MISSING_CREDENTIAL
    status_code = 500


class RateLimitedError(AnalysisError):
    kind = ErrorKind.RATE_LIMITED
    status_code = 429


class AuthenticationFailedError(AnalysisError):
    kind = ErrorKind.AUTHENTICATION_FAILED
    status_code = 401


class InvalidRequestError(AnalysisError):
    kind = ErrorKind.INVALID_REQUEST
    status_code = 400


class UpstreamError(AnalysisError):
    """Unclassified upstream failure, including timeouts."""

    kind = ErrorKind.UNKNOWN
    status_code = 500


_RATE_LIMIT_SIGNALS = {429, "429", "RESOURCE_EXHAUSTED", "RATE_LIMIT_EXCEEDED"}
_AUTH_SIGNALS = {401, 403, "401", "403", "UNAUTHENTICATED", "PERMISSION_DENIED", "AUTHENTICATION_FAILED"}
_INVALID_REQUEST_SIGNALS = {400, "400", "INVALID_ARGUMENT", "INVALID_REQUEST"}


def _signals(error: BaseException) -> set:
    # google-genai APIError carries an int `code` and a string `status`
    found = set()
    for attr in ("code", "status", "status_code"):
        value = getattr(error, attr, None)
        if isinstance(value, str):
            found.add(value.strip().upper())
        elif isinstance(value, int) and not isinstance(value, bool):
            found.add(value)
    return found


def _upstream_message(error: BaseException) -> str:
    message = getattr(error, "message", None)
    if isinstance(message, str) and message:
        return message
    return str(error) or type(error).__name__


def is_rate_limit_error(error: BaseException) -> bool:
    """Return True if *error* is an explicit rate-limit signal from upstream."""
    if isinstance(error, RateLimitedError):
        return True
    if isinstance(error, AnalysisError):
        return False
    return bool(_signals(error) & _RATE_LIMIT_SIGNALS)


def classify_upstream_error(error: BaseException) -> AnalysisError:
    """Map an upstream exception to the closed error taxonomy.

    Already-classified errors are returned as they are.
    """
    if isinstance(error, AnalysisError):
        return error

    signals = _signals(error)
    message = _upstream_message(error)
    details = {"upstream_type": type(error).__name__}

    if signals & _RATE_LIMIT_SIGNALS:
        return RateLimitedError("API rate limit exceeded. Please try again later.", details)

    if signals & _AUTH_SIGNALS or "api key not valid" in message.lower():
        return AuthenticationFailedError("Gemini API authentication failed. Check your API key.", details)

    if signals & _INVALID_REQUEST_SIGNALS:
        return InvalidRequestError(f"Invalid request to Gemini API: {message}", details)

    return UpstreamError(f"Gemini API error: {message}", details)
