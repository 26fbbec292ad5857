"""Shared test fixtures."""

from __future__ import annotations

import copy
from unittest.mock import AsyncMock

import pytest

from verified_resume.clients.llm_client import LLMClient, LLMResponse
from verified_resume.models.resume import TailoredResume

MODELS = ("model-primary", "model-fallback")


@pytest.fixture
def sample_resume_text() -> str:
    return """Jane Doe
jane@example.com | linkedin.com/in/janedoe

Experience
Marketing Analyst, Acme Corp (2020 - Present)
- Increased quarterly revenue by 15% through campaign optimization
- Built weekly performance dashboards in Tableau for the sales team
- Worked on the customer segmentation project

Projects
Churn Model - predicted customer churn with logistic regression in Python

Education
B.S. Economics, State University, 2019
"""


@pytest.fixture
def sample_jd_text() -> str:
    return """Senior Marketing Analyst at Globex

Requirements:
- 3+ years of marketing analytics experience
- Tableau or Looker dashboards
- Experience leading a team
- SQL and Python
"""


@pytest.fixture
def sample_generation_json() -> dict:
    return {
        "tailoredResumeJson": {
            "basics": {
                "name": "Jane Doe",
                "email": "jane@example.com",
                "phone": None,
                "links": {"linkedIn": "linkedin.com/in/janedoe", "github": None},
            },
            "summary": "Marketing analyst focused on revenue growth and reporting.",
            "skills": ["Tableau", "Python"],
            "experience": [
                {
                    "title": "Marketing Analyst",
                    "company": "Acme Corp",
                    "startDate": "2020",
                    "endDate": "Present",
                    "location": None,
                    "bullets": [
                        {
                            "text": "Increased quarterly revenue by 15%",
                            "evidenceSnippet": "Increased quarterly revenue by 15% through campaign optimization",
                        },
                        {
                            "text": "Led a team of 12 engineers",
                            "evidenceSnippet": None,
                        },
                    ],
                }
            ],
            "projects": [
                {
                    "name": "Churn Model",
                    "url": "github.com/janedoe/churn",
                    "bullets": [
                        {
                            "text": "Predicted customer churn with logistic regression in Python",
                            "evidenceSnippet": "predicted customer churn with logistic regression in Python",
                        }
                    ],
                }
            ],
            "education": [
                {"degree": "B.S. Economics", "school": "State University", "graduationDate": "2019"}
            ],
            "tailoringNotes": {
                "keywordsTargeted": ["Tableau", "marketing analytics"],
                "jobRequirementsMatched": ["Tableau or Looker dashboards"],
                "jobRequirementsNotMatched": ["SQL"],
            },
        },
        "coverLetterText": None,
        "claimMap": [
            {
                "bulletText": "Increased quarterly revenue by 15%",
                "evidenceSnippet": "Increased quarterly revenue by 15% through campaign optimization",
                "section": "experience",
                "index": 0,
            }
        ],
        "suggestedAdditions": [
            {
                "requirement": "SQL",
                "reason": "The posting asks for SQL and the resume never mentions it",
                "suggestedText": None,
            }
        ],
    }


@pytest.fixture
def sample_verification_json() -> dict:
    return {
        "verifications": [
            {
                "bulletId": "summary_0",
                "bulletText": "Marketing analyst focused on revenue growth and reporting.",
                "status": "SUPPORTED",
                "reason": "Role and focus are stated",
                "evidence": "Marketing Analyst, Acme Corp",
                "suggestedFix": None,
            },
            {
                "bulletId": "experience_0_0",
                "bulletText": "Increased quarterly revenue by 15%",
                "status": "SUPPORTED",
                "reason": "Metric appears verbatim",
                "evidence": "Increased quarterly revenue by 15% through campaign optimization",
            },
            {
                "bulletId": "experience_0_1",
                "bulletText": "Led a team of 12 engineers",
                "status": "UNSUPPORTED",
                "reason": "No team leadership is mentioned",
                "evidence": "none",
                "suggestedFix": "Built weekly performance dashboards in Tableau for the sales team",
            },
            {
                "bulletId": "projects_0_0",
                "bulletText": "Predicted customer churn with logistic regression in Python",
                "status": "SUPPORTED",
                "reason": "Project is described",
                "evidence": "predicted customer churn with logistic regression in Python",
            },
        ]
    }


@pytest.fixture
def sample_tailored_resume(sample_generation_json) -> TailoredResume:
    data = copy.deepcopy(sample_generation_json["tailoredResumeJson"])
    data["basics"].pop("phone")
    data["basics"]["links"].pop("github")
    data["experience"][0].pop("location")
    data["experience"][0]["bullets"][1].pop("evidenceSnippet")
    return TailoredResume.model_validate(data)


@pytest.fixture
def make_reply():
    """Build a ``generate_json`` return value: (parsed data, answering response)."""

    def _make(data, model: str = MODELS[0], input_tokens: int = 100, output_tokens: int = 50):
        response = LLMResponse(
            text="{}", input_tokens=input_tokens, output_tokens=output_tokens, model=model
        )
        return data, response

    return _make


@pytest.fixture
def mock_llm_client(make_reply) -> LLMClient:
    """Create a mock LLM client."""
    client = AsyncMock(spec=LLMClient)
    client.generate = AsyncMock(
        return_value=LLMResponse(text="{}", input_tokens=100, output_tokens=50, model=MODELS[0])
    )
    client.generate_json = AsyncMock(return_value=make_reply({}))
    return client
