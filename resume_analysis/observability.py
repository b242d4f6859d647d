"""Observability for analysis calls - logging and lightweight metrics."""

from __future__ import annotations

import logging
from collections import deque
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Deque, Dict, Optional


@dataclass
class AnalysisEvent:
    """A single event recorded while talking to the upstream model."""

    timestamp: datetime
    event_type: str  # "llm_request", "retry", "parse_failure", "error"
    data: Dict[str, Any]
    duration_ms: Optional[float] = None


class AnalysisObserver:
    """
    Observability layer for analysis calls.

    Collects events and logs them so retries, slow calls and unparseable
    responses can be traced after the fact.
    """

    def __init__(self, verbose: bool = False, max_events: int = 1000):
        # oldest events are dropped once max_events is reached
        self.events: Deque[AnalysisEvent] = deque(maxlen=max_events)
        self.logger = logging.getLogger("resume_analysis")
        self.verbose = verbose
        self._setup_logging()

    def _setup_logging(self):
        """Configure logging format and handlers."""
        if not self.logger.handlers:
            handler = logging.StreamHandler()
            formatter = logging.Formatter(
                "%(asctime)s - %(name)s - %(levelname)s - %(message)s", datefmt="%Y-%m-%d %H:%M:%S"
            )
            handler.setFormatter(formatter)
            self.logger.addHandler(handler)
        if self.verbose:
            self.logger.setLevel(logging.INFO)
        elif self.logger.level == logging.NOTSET:
            # leave a level the host application already chose
            self.logger.setLevel(logging.WARNING)

    def log_request(self, model: str, prompt_length: int, response_length: int, duration_ms: float):
        """
        Log a successful text-generation request.

        Args:
            model: Model name (e.g., "gemini-2.0-flash")
            prompt_length: Prompt size in characters
            response_length: Response size in characters
            duration_ms: Wall-clock duration including retries
        """
        event = AnalysisEvent(
            timestamp=datetime.now(),
            event_type="llm_request",
            data={
                "model": model,
                "prompt_length": prompt_length,
                "response_length": response_length,
            },
            duration_ms=duration_ms,
        )
        self.events.append(event)

        self.logger.info(
            f"Gemini request | model={model} | prompt={prompt_length} chars | "
            f"response={response_length} chars | {duration_ms:.2f}ms"
        )

    def log_retry(self, attempt: int, delay: float, error: BaseException):
        """Record a rate-limit retry before the backoff wait."""
        event = AnalysisEvent(
            timestamp=datetime.now(),
            event_type="retry",
            data={"attempt": attempt, "delay_seconds": delay, "error": str(error)},
        )
        self.events.append(event)

        self.logger.info(f"Retry {attempt} scheduled in {delay:.2f}s")

    def log_parse_failure(self, operation: str, response_length: int):
        """Record a response that held no usable JSON; a default result is returned instead."""
        event = AnalysisEvent(
            timestamp=datetime.now(),
            event_type="parse_failure",
            data={"operation": operation, "response_length": response_length},
        )
        self.events.append(event)

        self.logger.warning(f"Could not extract JSON from {operation} response, using default result")

    def log_error(
        self,
        error_type: str,
        message: str,
        context: Optional[Dict[str, Any]] = None,
    ):
        """
        Log an error event.

        Args:
            error_type: Classified error kind (e.g., "rate_limited")
            message: Error message
            context: Additional context about the error
        """
        event = AnalysisEvent(
            timestamp=datetime.now(),
            event_type="error",
            data={"error_type": error_type, "message": message, "context": context or {}},
        )
        self.events.append(event)

        self.logger.error(f"Gemini API error ({error_type}): {message}")

    def get_stats(self) -> Dict[str, Any]:
        """
        Get aggregated statistics for the recorded events.

        Returns:
            Dictionary with request, retry, parse failure and error counts
        """
        requests = [e for e in self.events if e.event_type == "llm_request"]
        total_duration = sum(e.duration_ms or 0 for e in requests)

        return {
            "event_count": len(self.events),
            "llm_requests": len(requests),
            "retries": sum(1 for e in self.events if e.event_type == "retry"),
            "parse_failures": sum(1 for e in self.events if e.event_type == "parse_failure"),
            "errors": sum(1 for e in self.events if e.event_type == "error"),
            "total_duration_ms": total_duration,
            "avg_duration_ms": total_duration / len(requests) if requests else 0.0,
        }

    def clear(self):
        """Clear all recorded events."""
        self.events.clear()
