"""Analysis operations: resume, job, comparison, suggestions, detailed comparison.

Each operation is one request/response cycle:
build prompt -> call the model (retrying rate limits) -> extract JSON ->
normalize. Unparseable output yields the canonical default result for the
operation; transport and configuration failures propagate to the caller.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional

from .client import TextGenerationClient
from .config import AnalysisConfig
from .extraction import extract_json
from .observability import AnalysisObserver
from .prompts import build_prompt
from .schemas import (
    DetailedComparison,
    ImprovementPlan,
    JobProfile,
    MatchSummary,
    NormalizedResult,
    ResumeProfile,
    default_result,
    normalize,
)
from .types import AnalysisRequest, OperationKind

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class IntegrationStatus:
    """Snapshot of how the analysis layer is configured."""
    api_key_configured: bool
    model: str
    max_retries: int
    retry_delay: float
    timeout: float

    @property
    def active(self) -> bool:
        return self.api_key_configured


class ResumeAnalyzer:
    """Runs the analysis operations against the configured model."""

    def __init__(
        self,
        config: AnalysisConfig,
        client: Optional[TextGenerationClient] = None,
        observer: Optional[AnalysisObserver] = None,
    ):
        self.config = config
        self.observer = observer or (client.observer if client else AnalysisObserver())
        self.client = client or TextGenerationClient(config, observer=self.observer)

    async def analyze_resume(self, resume_text: str) -> ResumeProfile:
        """Extract summary, skills, experience and education from a resume."""
        return await self.run(AnalysisRequest(resume_text, OperationKind.RESUME))

    async def analyze_job(self, job_text: str) -> JobProfile:
        """Extract title, level, skills and responsibilities from a job posting."""
        return await self.run(AnalysisRequest(job_text, OperationKind.JOB))

    async def compare(self, resume_text: str, job_text: str) -> MatchSummary:
        """Coarse resume-to-job match summary."""
        return await self.run(AnalysisRequest(resume_text, OperationKind.COMPARE, job_text))

    async def suggest_improvements(self, resume_text: str, job_text: Optional[str] = None) -> ImprovementPlan:
        """Improvement suggestions, tailored to *job_text* when one is given."""
        return await self.run(AnalysisRequest(resume_text, OperationKind.SUGGEST, job_text or None))

    async def detailed_comparison(self, resume_text: str, job_text: str) -> DetailedComparison:
        """Sub-scored comparison with categorized recommendations and rewritten sections.

        Returns ``DEFAULT_DETAILED_COMPARISON`` (as a copy) when the response
        holds no parseable JSON.
        """
        return await self.run(AnalysisRequest(resume_text, OperationKind.DETAILED_COMPARE, job_text))

    async def run(self, request: AnalysisRequest) -> NormalizedResult:
        """Run one analysis request through the full pipeline."""
        request.validate()
        kind = OperationKind(request.kind)

        logger.info(f"Running {kind.value} analysis")
        response = await self.client.complete(build_prompt(request))

        extracted = extract_json(response.text)
        if not extracted.ok:
            self.observer.log_parse_failure(kind.value, len(response.text))
            return default_result(kind)

        return normalize(extracted.value, kind)

    async def generate(self, prompt: str) -> str:
        """Send a free-form prompt and return the raw response text."""
        return await self.client.generate(prompt)

    def status(self) -> IntegrationStatus:
        return IntegrationStatus(
            api_key_configured=self.config.has_api_key,
            model=self.config.model,
            max_retries=self.config.retry.max_attempts,
            retry_delay=self.config.retry.base_delay,
            timeout=self.config.timeout,
        )
