"""End-to-end tests for the analysis operations with a fake provider."""

import json

import pytest

from resume_analysis.analyzer import IntegrationStatus, ResumeAnalyzer
from resume_analysis.client import TextGenerationClient
from resume_analysis.config import AnalysisConfig
from resume_analysis.errors import InvalidInputError, MissingCredentialError
from resume_analysis.observability import AnalysisObserver
from resume_analysis.retry import RetryConfig
from resume_analysis.schemas import (
    DEFAULT_DETAILED_COMPARISON,
    DetailedComparison,
    ImprovementPlan,
    JobProfile,
    MatchSummary,
    ResumeProfile,
)

RESUME = "Jane Doe - Senior Engineer. 8 years of Python, AWS and Postgres."
JOB = "Staff Engineer. 7+ years Python, AWS, Kubernetes. BS in Computer Science."


class FakeProvider:
    model = "gemini-test"

    def __init__(self, *responses):
        self.responses = list(responses)
        self.prompts = []

    async def generate(self, prompt):
        self.prompts.append(prompt)
        return self.responses.pop(0)


def make_analyzer(*responses, api_key="test-key"):
    config = AnalysisConfig(api_key=api_key, retry=RetryConfig(base_delay=0.0, max_delay=0.0))
    provider = FakeProvider(*responses)
    observer = AnalysisObserver()
    client = TextGenerationClient(config, provider=provider, observer=observer)
    return ResumeAnalyzer(config, client=client), provider


class TestValidation:
    @pytest.mark.asyncio
    async def test_empty_resume_never_calls_model(self):
        analyzer, provider = make_analyzer()

        with pytest.raises(InvalidInputError, match="Resume content must be a non-empty string"):
            await analyzer.analyze_resume("")

        assert provider.prompts == []

    @pytest.mark.asyncio
    async def test_blank_job_never_calls_model(self):
        analyzer, provider = make_analyzer()

        with pytest.raises(InvalidInputError, match="Job content must be a non-empty string"):
            await analyzer.detailed_comparison(RESUME, "   ")

        assert provider.prompts == []

    @pytest.mark.asyncio
    async def test_missing_api_key(self):
        analyzer, provider = make_analyzer(api_key="")

        with pytest.raises(MissingCredentialError):
            await analyzer.compare(RESUME, JOB)

        assert provider.prompts == []


class TestDetailedComparison:
    @pytest.mark.asyncio
    async def test_well_formed_response_passes_through(self):
        payload = {
            "matchScore": 87,
            "matchPercentage": "87%",
            "matchLevel": "excellent",
            "summary": "Strong fit for the role.",
            "skillsMatch": {"matched": ["Python", "AWS"], "missing": ["Kubernetes"], "percentage": 80},
            "experienceMatch": {"score": 90, "yearsRequiredByJob": 7, "yearsInResume": 8, "details": "Exceeds"},
            "educationMatch": {"score": 70, "required": "BS CS", "hasInResume": "Not stated", "details": "Unclear"},
            "keywordMatch": {"matched": ["Python"], "missing": ["Kubernetes"], "percentage": 60},
            "strengths": ["Deep Python experience"],
            "weaknesses": ["No Kubernetes"],
            "recommendations": [
                {"category": "skills", "priority": "high", "suggestion": "Add Kubernetes experience"}
            ],
            "optimizedSections": {
                "summary": "Senior Python engineer with AWS depth.",
                "skills": ["Python", "AWS"],
                "keywords": ["Kubernetes"],
            },
        }
        analyzer, provider = make_analyzer(json.dumps(payload))

        result = await analyzer.detailed_comparison(RESUME, JOB)

        assert isinstance(result, DetailedComparison)
        assert result.match_score == 87
        assert result.recommendations[0].to_dict() == {
            "category": "skills",
            "priority": "high",
            "suggestion": "Add Kubernetes experience",
        }
        assert result.to_dict() == payload
        assert RESUME in provider.prompts[0]
        assert JOB in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_prose_without_json_returns_default(self):
        analyzer, _ = make_analyzer("I'm sorry, I can't help with that.")

        result = await analyzer.detailed_comparison(RESUME, JOB)

        assert result == DEFAULT_DETAILED_COMPARISON
        assert result is not DEFAULT_DETAILED_COMPARISON
        assert analyzer.observer.get_stats()["parse_failures"] == 1

    @pytest.mark.asyncio
    async def test_fenced_json_with_out_of_range_values(self):
        text = (
            "Here you go:\n```json\n"
            '{"matchScore": 150, "matchLevel": "Amazing", "skillsMatch": "n/a", '
            '"recommendations": [{"category": "skills", "priority": "urgent", "suggestion": "Add AWS"}]}'
            "\n```"
        )
        analyzer, _ = make_analyzer(text)

        result = await analyzer.detailed_comparison(RESUME, JOB)

        assert result.match_score == 100
        assert result.match_level == "fair"
        assert result.skills_match.percentage == 0
        assert result.recommendations[0].priority == "medium"
        assert result.summary == "Unable to generate summary"

    @pytest.mark.asyncio
    async def test_numeric_extremes_stay_in_bounds(self):
        text = (
            '{"matchScore": 1' + "0" * 400 + ", "
            '"matchLevel": "PERFECT", '
            '"skillsMatch": {"percentage": -Infinity}, '
            '"experienceMatch": {"score": NaN, "yearsRequiredByJob": Infinity, "yearsInResume": 9' + "9" * 400 + "}, "
            '"keywordMatch": {"percentage": Infinity}, '
            '"recommendations": [{"category": 1e999, "priority": -1e999, "suggestion": "Add AWS"}]}'
        )
        analyzer, _ = make_analyzer(text)

        result = await analyzer.detailed_comparison(RESUME, JOB)

        assert result.match_score == 100
        assert result.match_level == "perfect"
        assert result.skills_match.percentage == 0
        assert result.experience_match.score == 0
        assert result.experience_match.years_required_by_job is None
        assert result.experience_match.years_in_resume == int("9" * 401)
        assert result.keyword_match.percentage == 0
        assert result.recommendations[0].category == "skills"
        assert result.recommendations[0].priority == "medium"

    @pytest.mark.asyncio
    async def test_deeply_nested_response_returns_default(self):
        analyzer, _ = make_analyzer('{"matchScore": ' + "[" * 100000 + "]" * 100000 + "}")

        result = await analyzer.detailed_comparison(RESUME, JOB)

        assert result == DEFAULT_DETAILED_COMPARISON
        assert analyzer.observer.get_stats()["parse_failures"] == 1


class TestOtherOperations:
    @pytest.mark.asyncio
    async def test_analyze_resume(self):
        analyzer, provider = make_analyzer(
            '{"summary": "Backend engineer", "skills": ["Python"], "yearsOfExperience": 8}'
        )

        result = await analyzer.analyze_resume(RESUME)

        assert isinstance(result, ResumeProfile)
        assert result.summary == "Backend engineer"
        assert result.years_of_experience == 8
        assert "RESUME:" in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_analyze_job(self):
        analyzer, provider = make_analyzer('{"title": "Staff Engineer", "experienceLevel": "Lead"}')

        result = await analyzer.analyze_job(JOB)

        assert isinstance(result, JobProfile)
        assert result.title == "Staff Engineer"
        assert result.experience_level == "lead"
        assert "JOB POSTING:" in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_compare(self):
        analyzer, _ = make_analyzer('{"overallMatchScore": 72, "matchLevel": "good"}')

        result = await analyzer.compare(RESUME, JOB)

        assert isinstance(result, MatchSummary)
        assert result.overall_match_score == 72
        assert result.match_level == "good"

    @pytest.mark.asyncio
    async def test_unparseable_resume_uses_resume_default(self):
        analyzer, _ = make_analyzer("no json here")

        result = await analyzer.analyze_resume(RESUME)

        assert result.summary == "Unable to parse resume"

    @pytest.mark.asyncio
    async def test_suggest_without_job(self):
        analyzer, provider = make_analyzer('{"overallRating": 7}')

        result = await analyzer.suggest_improvements(RESUME)

        assert isinstance(result, ImprovementPlan)
        assert result.overall_rating == 7
        assert "JOB DESCRIPTION:" not in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_suggest_with_job(self):
        analyzer, provider = make_analyzer('{"overallRating": 6}')

        await analyzer.suggest_improvements(RESUME, JOB)

        assert "JOB DESCRIPTION:" in provider.prompts[0]
        assert "Provide suggestions tailored to this job description." in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_suggest_empty_job_treated_as_absent(self):
        analyzer, provider = make_analyzer("{}")

        await analyzer.suggest_improvements(RESUME, "")

        assert "JOB DESCRIPTION:" not in provider.prompts[0]

    @pytest.mark.asyncio
    async def test_generate_passthrough(self):
        analyzer, provider = make_analyzer("raw text")

        assert await analyzer.generate("Say hi") == "raw text"
        assert provider.prompts == ["Say hi"]


class TestStatus:
    def test_status_reflects_config(self):
        config = AnalysisConfig(
            api_key="k", model="gemini-test", retry=RetryConfig(max_attempts=5, base_delay=2.0), timeout=10.0
        )

        status = ResumeAnalyzer(config).status()

        assert status == IntegrationStatus(
            api_key_configured=True, model="gemini-test", max_retries=5, retry_delay=2.0, timeout=10.0
        )
        assert status.active is True

    def test_status_without_key(self):
        assert ResumeAnalyzer(AnalysisConfig()).status().active is False
