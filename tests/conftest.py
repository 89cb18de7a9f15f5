"""Shared pytest fixtures: a job-search output type and a mock model-call function."""

from dataclasses import dataclass, field
from typing import Any, Callable, Optional

import pytest
from google.genai import types

MOCK_JOB_JSON = """{
    "skills": ["Go", "Kubernetes", "JSON-Mock"],
    "company": ["MockCorp"],
    "industry": "Testing",
    "location": "Test Bay, CA",
    "job_title": "Mock Data Engineer",
    "yearsof_experience_to": 7,
    "yearsof_experience_from": 3
}"""


@dataclass
class JobSearchOutput:
    skills: list[str] = field(default_factory=list, metadata={"description": "A list of technical skills."})
    company: list[str] = field(default_factory=list)
    industry: str = ""
    location: str = ""
    job_title: str = field(default="", metadata={"description": "The primary job title."})
    years_to: int = field(default=0, metadata={"json": "yearsof_experience_to"})
    years_from: int = field(default=0, metadata={"json": "yearsof_experience_from"})


def make_response(*texts: str) -> types.GenerateContentResponse:
    """Build a one-candidate response whose parts carry the given texts."""
    return types.GenerateContentResponse(
        candidates=[
            types.Candidate(
                content=types.Content(role="model", parts=[types.Part(text=t) for t in texts]),
                finish_reason=types.FinishReason.STOP,
            )
        ]
    )


class RecordingModel:
    """Model-call function that records its arguments and returns a canned reply."""

    def __init__(self, response: Optional[types.GenerateContentResponse] = None, error: Optional[Exception] = None):
        self.response = response if response is not None else make_response(MOCK_JOB_JSON)
        self.error = error
        self.calls: list[dict[str, Any]] = []

    def __call__(self, context, model, contents, config):
        self.calls.append({"context": context, "model": model, "contents": contents, "config": config})
        if self.error is not None:
            raise self.error
        return self.response

    @property
    def last_parts(self) -> list[types.Part]:
        return self.calls[-1]["contents"][0].parts

    @property
    def last_texts(self) -> list[str]:
        return [p.text for p in self.last_parts if p.text is not None]


@pytest.fixture
def job_output_type() -> type:
    return JobSearchOutput


@pytest.fixture
def response_factory() -> Callable[..., types.GenerateContentResponse]:
    return make_response


@pytest.fixture
def recording_model() -> RecordingModel:
    return RecordingModel()


@pytest.fixture
def model_factory() -> Callable[..., RecordingModel]:
    return RecordingModel
