"""Shared fixtures: fake AI services, a temporary repository and a filled-in document."""

from typing import List, Optional

import pytest

from vita.contexts.assist.service import (
    ImprovementRequest,
    ImprovementResponse,
    TextImprovementService,
)
from vita.contexts.editing.blocks import BlockType
from vita.contexts.editing.session import EditingSession
from vita.contexts.persistence.adapter import YamlDocumentRepository
from vita.contexts.templating.registries import LayoutRegistry
from vita.utils.llm import LLMProvider, LLMResponse


class FakeAssistService(TextImprovementService):
    """Records requests and answers with canned text (or raises `error`)."""

    def __init__(
        self,
        improved_text: str = "Improved text.",
        skills_csv: str = "Python, Go",
        error: Optional[Exception] = None,
    ):
        self.improved_text = improved_text
        self.skills_csv = skills_csv
        self.error = error
        self.requests: List[ImprovementRequest] = []

    def improve(self, request: ImprovementRequest) -> ImprovementResponse:
        self.requests.append(request)
        if self.error is not None:
            raise self.error
        if request.block_type is BlockType.SKILLS:
            return ImprovementResponse(suggested_skills_csv=self.skills_csv)
        return ImprovementResponse(improved_text=self.improved_text)


class FakeProvider(LLMProvider):
    """LLM provider returning a fixed reply without network access."""

    _provider_prefix = "fake"

    def __init__(self, reply: str = "Rewritten.", error: Optional[Exception] = None):
        self.reply = reply
        self.error = error
        self.calls = []
        self.update_model("test-model")

    def _call_api(self, system_prompt, user_prompt, max_tokens, temperature) -> LLMResponse:
        self.calls.append(
            {
                "system": system_prompt,
                "user": user_prompt,
                "max_tokens": max_tokens,
                "temperature": temperature,
            }
        )
        if self.error is not None:
            raise self.error
        return LLMResponse(content=self.reply, model=self.model, input_tokens=12, output_tokens=7)


def fill_sample_document(session: EditingSession) -> EditingSession:
    """Put realistic content into every block of a fresh session."""
    session.editor("summary").set_text("Backend engineer with eight years of experience.")

    skills = session.editor("skills")
    for skill in ("Python", "SQL", "Kubernetes"):
        skills.add_skill(skill)

    session.editor("experience").add_item(
        jobTitle="Staff Engineer",
        company="Acme",
        location="Remote",
        startDate="2021-06",
        current=True,
        description="Led the platform team.",
    )
    session.editor("education").add_item(
        degree="BSc Computer Science",
        institution="State University",
        location="Austin, TX",
        startDate="2012-09",
        endDate="2016-05",
        gpa="3.8",
    )
    session.editor("project").add_item(
        title="Resume Builder",
        technologies="Python, Pillow",
        startDate="2023-01",
        endDate="2023-04",
        link="https://example.com/vita",
        description="Block-based resume editor.",
    )
    session.editor("certification").add_item(
        name="AWS Solutions Architect",
        issuer="Amazon",
        date="2021-06",
        expirationDate="2024-06",
        credentialID="ABC-123",
        credentialURL="https://example.com/verify",
    )
    return session


@pytest.fixture
def fake_assist():
    return FakeAssistService()


@pytest.fixture
def repository(tmp_path):
    return YamlDocumentRepository(tmp_path / "documents")


@pytest.fixture
def classic_layout(monkeypatch):
    """Classic layout with the placeholder header (no user profile)."""
    monkeypatch.setattr("vita.contexts.templating.registries.PROFILE_PATH", None)
    return LayoutRegistry(profile_path=None).get_layout("classic")


@pytest.fixture
def sample_session(repository, fake_assist):
    session = EditingSession.new("Senior Engineer Resume", repository=repository, assist=fake_assist)
    return fill_sample_document(session)


@pytest.fixture
def make_assist():
    """Factory for FakeAssistService with custom replies or errors."""
    return FakeAssistService


@pytest.fixture
def make_provider():
    """Factory for FakeProvider with a custom reply or error."""
    return FakeProvider


@pytest.fixture
def fill_document():
    return fill_sample_document
