"""Resume Analysis - Gemini-backed resume and job analysis with validated results."""

__version__ = "0.1.0"

from .analyzer import IntegrationStatus, ResumeAnalyzer
from .client import TextGenerationClient
from .config import AnalysisConfig, load_config, load_raw_config
from .errors import (
    AnalysisError,
    AuthenticationFailedError,
    ErrorKind,
    InvalidInputError,
    InvalidRequestError,
    MissingCredentialError,
    RateLimitedError,
    UpstreamError,
)
from .extraction import extract_json
from .retry import RetryConfig, retry_with_backoff
from .schemas import (
    DEFAULT_DETAILED_COMPARISON,
    DetailedComparison,
    ImprovementPlan,
    JobProfile,
    MatchSummary,
    ResumeProfile,
    default_result,
    normalize,
)
from .types import AnalysisRequest, ExtractedJson, OperationKind, RawModelResponse

__all__ = [
    "AnalysisConfig",
    "AnalysisError",
    "AnalysisRequest",
    "AuthenticationFailedError",
    "DEFAULT_DETAILED_COMPARISON",
    "DetailedComparison",
    "ErrorKind",
    "ExtractedJson",
    "ImprovementPlan",
    "IntegrationStatus",
    "InvalidInputError",
    "InvalidRequestError",
    "JobProfile",
    "MatchSummary",
    "MissingCredentialError",
    "OperationKind",
    "RateLimitedError",
    "RawModelResponse",
    "ResumeAnalyzer",
    "ResumeProfile",
    "RetryConfig",
    "TextGenerationClient",
    "UpstreamError",
    "default_result",
    "extract_json",
    "load_config",
    "load_raw_config",
    "normalize",
    "retry_with_backoff",
]
