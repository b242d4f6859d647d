"""Prompt templates for the analysis operations.

Caller text is embedded verbatim. Each prompt ends with the JSON shape the
model must return; the keys match the aliases of the result models in
:mod:`resume_analysis.schemas`.
"""

from __future__ import annotations

from typing import Optional

from .types import AnalysisRequest, OperationKind

RESUME_ANALYSIS_SCHEMA = """{
  "summary": "Brief professional summary",
  "skills": ["skill1", "skill2", ...],
  "experience": [
    {
      "title": "Job Title",
      "company": "Company Name",
      "duration": "Duration description",
      "description": "Brief description of role"
    }
  ],
  "education": [
    {
      "degree": "Degree Type",
      "field": "Field of Study",
      "school": "School Name"
    }
  ],
  "certifications": ["cert1", "cert2", ...],
  "yearsOfExperience": number,
  "topSkills": ["top1", "top2", "top3", "top4", "top5"]
}"""

JOB_ANALYSIS_SCHEMA = """{
  "title": "Job Title",
  "experienceLevel": "junior|mid|senior|lead",
  "requiredSkills": ["skill1", "skill2", ...],
  "preferredSkills": ["skill1", "skill2", ...],
  "responsibilities": ["responsibility1", "responsibility2", ...],
  "yearsExperienceRequired": number,
  "qualifications": ["qualification1", "qualification2", ...],
  "salaryRange": "salary description or null",
  "jobType": "full-time|part-time|contract|remote",
  "summary": "Brief job summary"
}"""

COMPARISON_SCHEMA = """{
  "overallMatchScore": number between 0-100,
  "matchPercentage": "XX%",
  "matchLevel": "poor|fair|good|excellent",
  "matchingSkills": ["skill1", "skill2", ...],
  "missingSkills": ["skill1", "skill2", ...],
  "strengthAreas": ["area1", "area2", ...],
  "improvementAreas": ["area1", "area2", ...],
  "experienceFit": "description of experience fit",
  "topRecommendations": ["recommendation1", "recommendation2", ...],
  "salaryExpectationFit": "likely fit or concern",
  "summary": "Brief overall summary of fit"
}"""

IMPROVEMENT_SCHEMA = """{
  "overallRating": number between 1-10,
  "strengths": ["strength1", "strength2", ...],
  "weaknesses": ["weakness1", "weakness2", ...],
  "suggestions": [
    {
      "area": "Area to improve",
      "suggestion": "Specific suggestion",
      "impact": "high|medium|low"
    }
  ],
  "priorityImprovements": ["improvement1", "improvement2", ...],
  "estimatedImpactOnMatcher": "Estimated percentage increase in match score"
}"""

DETAILED_COMPARISON_SCHEMA = """{
  "matchScore": number between 0 and 100,
  "matchPercentage": "XX%",
  "matchLevel": "poor|fair|good|excellent|perfect",
  "summary": "1-2 sentence overall fit assessment",
  "skillsMatch": {
    "matched": ["skill1 that candidate has that job needs", "skill2"],
    "missing": ["critical skill missing", "desired skill missing"],
    "percentage": number between 0-100
  },
  "experienceMatch": {
    "score": number 0-100,
    "yearsRequiredByJob": number if stated,
    "yearsInResume": number estimated,
    "details": "Brief assessment of experience fit"
  },
  "educationMatch": {
    "score": number 0-100,
    "required": "what job requires",
    "hasInResume": "what resume shows",
    "details": "Brief assessment"
  },
  "keywordMatch": {
    "matched": ["keyword1", "keyword2"],
    "missing": ["missing keyword1", "missing keyword2"],
    "percentage": number 0-100
  },
  "strengths": [
    "Strength 1 - how candidate is well-suited",
    "Strength 2 - alignment with role"
  ],
  "weaknesses": [
    "Weakness 1 - gap or concern",
    "Weakness 2 - missing qualification"
  ],
  "recommendations": [
    {
      "category": "skills|experience|keywords|formatting|structure",
      "priority": "high|medium|low",
      "suggestion": "Specific, actionable recommendation"
    }
  ],
  "optimizedSections": {
    "summary": "Suggested professional summary tailored to job",
    "skills": ["skill1", "skill2", "skill3", "skill4", "skill5"],
    "keywords": ["keyword1", "keyword2", "keyword3"]
  }
}"""

_JSON_ONLY = "Please extract and return ONLY valid JSON (no markdown, no code blocks) with this structure:"


def build_resume_analysis_prompt(resume_text: str) -> str:
    return (
        "Analyze the following resume and extract key information. Return as JSON.\n\n"
        f"RESUME:\n{resume_text}\n\n"
        f"{_JSON_ONLY}\n{RESUME_ANALYSIS_SCHEMA}"
    )


def build_job_analysis_prompt(job_text: str) -> str:
    return (
        "Analyze the following job posting and extract key information. Return as JSON.\n\n"
        f"JOB POSTING:\n{job_text}\n\n"
        f"{_JSON_ONLY}\n{JOB_ANALYSIS_SCHEMA}"
    )


def build_comparison_prompt(resume_text: str, job_text: str) -> str:
    return (
        "Compare the following resume to a job description and provide a detailed match analysis. "
        "Return as JSON.\n\n"
        f"RESUME:\n{resume_text}\n\n"
        f"JOB DESCRIPTION:\n{job_text}\n\n"
        "Please analyze and return ONLY valid JSON (no markdown, no code blocks) with this structure:\n"
        f"{COMPARISON_SCHEMA}"
    )


def build_improvement_prompt(resume_text: str, job_text: Optional[str] = None) -> str:
    """Build the improvement prompt; the job block is included only when *job_text* is given."""
    prompt = (
        "Review the following resume and provide specific suggestions for improvement. Return as JSON.\n\n"
        f"RESUME:\n{resume_text}"
    )

    if job_text:
        prompt += (
            f"\n\nJOB DESCRIPTION:\n{job_text}\n\n"
            "Provide suggestions tailored to this job description."
        )

    prompt += (
        "\n\nPlease provide ONLY valid JSON (no markdown, no code blocks) with this structure:\n"
        f"{IMPROVEMENT_SCHEMA}"
    )
    return prompt


def build_detailed_comparison_prompt(resume_text: str, job_text: str) -> str:
    return (
        "You are an expert resume reviewer and ATS (Applicant Tracking System) specialist. "
        "Analyze the following resume against the job description and provide a detailed technical "
        "comparison. Return ONLY valid JSON (no markdown, no code blocks) with NO newlines between "
        "key-value pairs.\n\n"
        f"RESUME:\n{resume_text}\n\n"
        f"JOB DESCRIPTION:\n{job_text}\n\n"
        "Return ONLY this JSON structure (no markdown, no explanation):\n"
        f"{DETAILED_COMPARISON_SCHEMA}"
    )


def build_prompt(request: AnalysisRequest) -> str:
    """Build the prompt for *request* according to its operation kind."""
    kind = OperationKind(request.kind)
    if kind == OperationKind.RESUME:
        return build_resume_analysis_prompt(request.subject_text)
    if kind == OperationKind.JOB:
        return build_job_analysis_prompt(request.subject_text)
    if kind == OperationKind.COMPARE:
        return build_comparison_prompt(request.subject_text, request.reference_text)
    if kind == OperationKind.SUGGEST:
        return build_improvement_prompt(request.subject_text, request.reference_text)
    return build_detailed_comparison_prompt(request.subject_text, request.reference_text)
