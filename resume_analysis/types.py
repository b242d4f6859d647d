"""Transient request/response value objects for analysis calls."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Optional

from .errors import InvalidInputError


class OperationKind(str, Enum):
    RESUME = "resume"
    JOB = "job"
    COMPARE = "compare"
    SUGGEST = "suggest"
    DETAILED_COMPARE = "detailedCompare"


# Kinds whose prompt needs both documents
_NEEDS_REFERENCE = {OperationKind.COMPARE, OperationKind.DETAILED_COMPARE}

_LABELS = {
    OperationKind.RESUME: "Resume content",
    OperationKind.JOB: "Job content",
}


def is_non_empty_text(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


@dataclass
class AnalysisRequest:
    """One analysis call: the subject document, an optional reference, and the kind."""
    subject_text: str
    kind: OperationKind
    reference_text: Optional[str] = None

    def validate(self) -> None:
        """Raise InvalidInputError if the texts do not fit the operation kind."""
        label = _LABELS.get(self.kind, "Resume content")
        if not is_non_empty_text(self.subject_text):
            raise InvalidInputError(f"{label} must be a non-empty string")

        if self.kind in _NEEDS_REFERENCE:
            if not is_non_empty_text(self.reference_text):
                raise InvalidInputError("Job content must be a non-empty string")
        elif self.reference_text is not None and not isinstance(self.reference_text, str):
            raise InvalidInputError("Job content must be a string when provided")

    @property
    def has_reference(self) -> bool:
        return is_non_empty_text(self.reference_text)


@dataclass
class RawModelResponse:
    """Text returned by the upstream model and how long the call took."""
    text: str
    duration_ms: float


@dataclass(frozen=True)
class ExtractedJson:
    ok: bool
    value: Optional[Dict[str, Any]] = None


UNPARSEABLE = ExtractedJson(ok=False)
