"""Result schemas and the normalizer that makes model output trustworthy.

Every result shape is a pydantic model built on :class:`LenientModel`. Its
wrap validator is the single normalization rule: a field value that fails
validation is replaced by that field's declared default. The annotated field
types below supply the per-field coercions (clamping, enum casefolding, list
filtering), so a normalized result always has every field populated with a
value of the declared type.
"""

from __future__ import annotations

import math
from functools import partial
from typing import Annotated, Any, Dict, List, Literal, Optional, Union

from pydantic import (
    BaseModel,
    BeforeValidator,
    ConfigDict,
    Field,
    StringConstraints,
    ValidationError,
    ValidationInfo,
    ValidatorFunctionWrapHandler,
    field_validator,
    model_validator,
)
from pydantic.alias_generators import to_camel

from .types import OperationKind

# ---------------------------------------------------------------------------
# Field coercions
# ---------------------------------------------------------------------------


def _to_number(value: Any) -> Union[int, float]:
    if isinstance(value, bool):
        raise ValueError("booleans are not numbers")
    if isinstance(value, str):
        value = float(value.strip().rstrip("%").strip())
    if not isinstance(value, (int, float)):
        raise ValueError(f"not a number: {value!r}")
    if isinstance(value, float):
        # ints of any size are finite; only floats can be nan or inf
        if not math.isfinite(value):
            raise ValueError(f"not a finite number: {value!r}")
        if value.is_integer():
            return int(value)
    return value


def _clamp(value: Any, low: float, high: Optional[float]) -> Union[int, float]:
    number = _to_number(value)
    if number < low:
        return int(low) if float(low).is_integer() else low
    if high is not None and number > high:
        return int(high) if float(high).is_integer() else high
    return number


def _optional_number(value: Any) -> Optional[Union[int, float]]:
    if value is None:
        return None
    return _clamp(value, 0, None)


def _casefold(value: Any) -> Any:
    return value.strip().lower() if isinstance(value, str) else value


def _string_items(value: Any) -> List[str]:
    if not isinstance(value, list):
        raise ValueError("expected a list")
    return [item for item in value if isinstance(item, str) and item.strip()]


def _mapping_items(value: Any) -> List[Dict[str, Any]]:
    if not isinstance(value, list):
        raise ValueError("expected a list")
    return [item for item in value if isinstance(item, dict)]


def bounded(low: float, high: Optional[float] = None) -> Any:
    return Annotated[Union[int, float], BeforeValidator(partial(_clamp, low=low, high=high))]


Score = bounded(0, 100)
Rating = bounded(0, 10)
Years = bounded(0)
OptionalYears = Annotated[Optional[Union[int, float]], BeforeValidator(_optional_number)]
Text = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
StringList = Annotated[List[str], BeforeValidator(_string_items)]

MatchLevel = Annotated[Literal["poor", "fair", "good", "excellent"], BeforeValidator(_casefold)]
DetailedMatchLevel = Annotated[
    Literal["poor", "fair", "good", "excellent", "perfect"], BeforeValidator(_casefold)
]
Priority = Annotated[Literal["high", "medium", "low"], BeforeValidator(_casefold)]
Category = Annotated[
    Literal["skills", "experience", "keywords", "formatting", "structure"], BeforeValidator(_casefold)
]
ExperienceLevel = Annotated[Literal["junior", "mid", "senior", "lead"], BeforeValidator(_casefold)]
JobType = Annotated[Literal["full-time", "part-time", "contract", "remote"], BeforeValidator(_casefold)]


def records(model: type) -> Any:
    return Annotated[List[model], BeforeValidator(_mapping_items)]


class LenientModel(BaseModel):
    """Base model that never rejects input; invalid fields fall back to defaults."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True, extra="ignore")

    @model_validator(mode="before")
    @classmethod
    def _coerce_mapping(cls, data: Any) -> Any:
        if isinstance(data, BaseModel):
            return data
        return data if isinstance(data, dict) else {}

    @field_validator("*", mode="wrap")
    @classmethod
    def _fallback_to_default(
        cls, value: Any, handler: ValidatorFunctionWrapHandler, info: ValidationInfo
    ) -> Any:
        try:
            return handler(value)
        except ValidationError:
            return cls.model_fields[info.field_name].get_default(call_default_factory=True)

    def to_dict(self) -> Dict[str, Any]:
        """Dump with the camelCase keys the model was asked to emit."""
        return self.model_dump(by_alias=True)


# ---------------------------------------------------------------------------
# Resume analysis
# ---------------------------------------------------------------------------


class ExperienceEntry(LenientModel):
    title: Text = "Unknown"
    company: Text = "Unknown"
    duration: Text = "Not specified"
    description: Text = "No details available"


class EducationEntry(LenientModel):
    degree: Text = "Unknown"
    field: Text = "Not specified"
    school: Text = "Unknown"


ExperienceList = records(ExperienceEntry)
EducationList = records(EducationEntry)


class ResumeProfile(LenientModel):
    summary: Text = "No summary available"
    skills: StringList = Field(default_factory=list)
    experience: ExperienceList = Field(default_factory=list)
    education: EducationList = Field(default_factory=list)
    certifications: StringList = Field(default_factory=list)
    years_of_experience: Years = 0
    top_skills: StringList = Field(default_factory=list)


# ---------------------------------------------------------------------------
# Job analysis
# ---------------------------------------------------------------------------


class JobProfile(LenientModel):
    title: Text = "Unknown"
    experience_level: ExperienceLevel = "mid"
    required_skills: StringList = Field(default_factory=list)
    preferred_skills: StringList = Field(default_factory=list)
    responsibilities: StringList = Field(default_factory=list)
    years_experience_required: Years = 0
    qualifications: StringList = Field(default_factory=list)
    salary_range: Optional[Text] = None
    job_type: JobType = "full-time"
    summary: Text = "No summary available"


# ---------------------------------------------------------------------------
# Resume-to-job comparison
# ---------------------------------------------------------------------------


class MatchSummary(LenientModel):
    overall_match_score: Score = 0
    match_percentage: Text = "0%"
    match_level: MatchLevel = "fair"
    matching_skills: StringList = Field(default_factory=list)
    missing_skills: StringList = Field(default_factory=list)
    strength_areas: StringList = Field(default_factory=list)
    improvement_areas: StringList = Field(default_factory=list)
    experience_fit: Text = "No details available"
    top_recommendations: StringList = Field(default_factory=list)
    salary_expectation_fit: Text = "Unknown"
    summary: Text = "No summary available"


# ---------------------------------------------------------------------------
# Improvement suggestions
# ---------------------------------------------------------------------------


class Suggestion(LenientModel):
    area: Text = "General"
    suggestion: Text = ""
    impact: Priority = "medium"


SuggestionList = records(Suggestion)


class ImprovementPlan(LenientModel):
    overall_rating: Rating = 0
    strengths: StringList = Field(default_factory=list)
    weaknesses: StringList = Field(default_factory=list)
    suggestions: SuggestionList = Field(default_factory=list)
    priority_improvements: StringList = Field(default_factory=list)
    estimated_impact_on_matcher: Text = "Unknown"


# ---------------------------------------------------------------------------
# Detailed comparison
# ---------------------------------------------------------------------------


class SkillsMatch(LenientModel):
    matched: StringList = Field(default_factory=list)
    missing: StringList = Field(default_factory=list)
    percentage: Score = 0


class ExperienceMatch(LenientModel):
    score: Score = 0
    years_required_by_job: OptionalYears = None
    years_in_resume: OptionalYears = None
    details: Text = "No details available"


class EducationMatch(LenientModel):
    score: Score = 0
    required: Text = "Not specified"
    has_in_resume: Text = "Not specified"
    details: Text = "No details available"


class KeywordMatch(LenientModel):
    matched: StringList = Field(default_factory=list)
    missing: StringList = Field(default_factory=list)
    percentage: Score = 0


class Recommendation(LenientModel):
    category: Category = "skills"
    priority: Priority = "medium"
    suggestion: Text = ""


RecommendationList = records(Recommendation)


class OptimizedSections(LenientModel):
    summary: Text = ""
    skills: StringList = Field(default_factory=list)
    keywords: StringList = Field(default_factory=list)


class DetailedComparison(LenientModel):
    match_score: Score = 0
    match_percentage: Text = "0%"
    match_level: DetailedMatchLevel = "fair"
    summary: Text = "Unable to generate summary"
    skills_match: SkillsMatch = Field(default_factory=SkillsMatch)
    experience_match: ExperienceMatch = Field(default_factory=ExperienceMatch)
    education_match: EducationMatch = Field(default_factory=EducationMatch)
    keyword_match: KeywordMatch = Field(default_factory=KeywordMatch)
    strengths: StringList = Field(default_factory=list)
    weaknesses: StringList = Field(default_factory=list)
    recommendations: RecommendationList = Field(default_factory=list)
    optimized_sections: OptimizedSections = Field(default_factory=OptimizedSections)


NormalizedResult = Union[ResumeProfile, JobProfile, MatchSummary, ImprovementPlan, DetailedComparison]

RESULT_MODELS: Dict[OperationKind, type] = {
    OperationKind.RESUME: ResumeProfile,
    OperationKind.JOB: JobProfile,
    OperationKind.COMPARE: MatchSummary,
    OperationKind.SUGGEST: ImprovementPlan,
    OperationKind.DETAILED_COMPARE: DetailedComparison,
}

# ---------------------------------------------------------------------------
# Canonical fallbacks for unparseable model output
# ---------------------------------------------------------------------------

DEFAULT_RESUME_PROFILE = ResumeProfile(summary="Unable to parse resume")

DEFAULT_JOB_PROFILE = JobProfile(summary="Unable to parse job")

DEFAULT_MATCH_SUMMARY = MatchSummary(
    match_level="poor",
    experience_fit="Unable to parse",
    summary="Unable to parse comparison",
)

DEFAULT_IMPROVEMENT_PLAN = ImprovementPlan()

DEFAULT_DETAILED_COMPARISON = DetailedComparison(
    match_level="poor",
    summary="Unable to perform comparison. Please try again.",
    experience_match=ExperienceMatch(details="Unable to assess"),
    education_match=EducationMatch(required="Unknown", has_in_resume="Unknown", details="Unable to assess"),
)

_FALLBACKS: Dict[OperationKind, LenientModel] = {
    OperationKind.RESUME: DEFAULT_RESUME_PROFILE,
    OperationKind.JOB: DEFAULT_JOB_PROFILE,
    OperationKind.COMPARE: DEFAULT_MATCH_SUMMARY,
    OperationKind.SUGGEST: DEFAULT_IMPROVEMENT_PLAN,
    OperationKind.DETAILED_COMPARE: DEFAULT_DETAILED_COMPARISON,
}


def normalize(raw: Any, kind: OperationKind) -> NormalizedResult:
    """Turn untrusted parsed JSON into the fully populated result for *kind*."""
    model = RESULT_MODELS[OperationKind(kind)]
    return model.model_validate(raw)


def default_result(kind: OperationKind) -> NormalizedResult:
    """Return a fresh copy of the canonical fallback for *kind*."""
    return _FALLBACKS[OperationKind(kind)].model_copy(deep=True)
