"""Unit tests for the LLM-backed improvement service and prompt construction."""

import pytest

from vita.contexts.assist.prompts import DEFAULT_SYSTEM_PROMPT, SYSTEM_PROMPTS, build_prompts
from vita.contexts.assist.service import ImprovementRequest, LLMImprovementService
from vita.contexts.editing.blocks import BlockType
from vita.contexts.editing.exceptions import ServiceError


class TestBuildPrompts:
    @pytest.mark.unit
    def test_summary_prompt_with_target_role(self):
        system, user = build_prompts(BlockType.SUMMARY, "I build APIs.", target_role="Data Engineer")
        assert system.startswith(SYSTEM_PROMPTS[BlockType.SUMMARY])
        assert system.endswith("Tailor it for a Data Engineer position.")
        assert user == "Original content:\nI build APIs.\n\nImproved version:"

    @pytest.mark.unit
    def test_types_without_specific_prompt_use_default(self):
        system, _ = build_prompts(BlockType.PROJECT, "A CLI tool.")
        assert system == DEFAULT_SYSTEM_PROMPT

    @pytest.mark.unit
    def test_skills_prompt_asks_for_csv(self):
        _, user = build_prompts(BlockType.SKILLS, "Python, SQL", job_description="Need Spark.")
        assert user.startswith("Current skills: Python, SQL")
        assert "Job description:\nNeed Spark." in user
        assert user.endswith("Suggested improved skills (return as a comma-separated list):")


class TestLLMImprovementService:
    @pytest.mark.unit
    def test_text_request_returns_stripped_improved_text(self, make_provider):
        provider = make_provider(reply="  Sharper summary.  \n")
        service = LLMImprovementService(provider=provider)

        response = service.improve(ImprovementRequest(BlockType.SUMMARY, "Old summary."))

        assert response.improved_text == "Sharper summary."
        assert response.suggested_skills_csv is None
        assert provider.calls[0]["max_tokens"] == 500
        assert provider.calls[0]["temperature"] == 0.7

    @pytest.mark.unit
    def test_skills_request_fills_csv(self, make_provider):
        service = LLMImprovementService(provider=make_provider(reply="Python, Go"))
        response = service.improve(ImprovementRequest(BlockType.SKILLS, "Python"))
        assert response.suggested_skills_csv == "Python, Go"
        assert response.improved_text is None

    @pytest.mark.unit
    def test_provider_exception_becomes_service_error(self, make_provider):
        service = LLMImprovementService(provider=make_provider(error=ConnectionError("reset")))
        with pytest.raises(ServiceError) as excinfo:
            service.improve(ImprovementRequest(BlockType.EXPERIENCE, "Did things."))
        assert isinstance(excinfo.value.original_error, ConnectionError)

    @pytest.mark.unit
    def test_single_attempt_on_failure(self, make_provider):
        provider = make_provider(error=TimeoutError("slow"))
        service = LLMImprovementService(provider=provider)
        with pytest.raises(ServiceError):
            service.improve(ImprovementRequest(BlockType.SUMMARY, "x"))
        assert len(provider.calls) == 1

    @pytest.mark.unit
    def test_empty_reply_is_an_error(self, make_provider):
        service = LLMImprovementService(provider=make_provider(reply="   "))
        with pytest.raises(ServiceError, match="empty"):
            service.improve(ImprovementRequest(BlockType.SUMMARY, "x"))

    @pytest.mark.unit
    def test_unconfigured_provider_is_a_service_error(self, monkeypatch):
        monkeypatch.setenv("LLM_PROVIDER", "nonexistent")
        service = LLMImprovementService()
        with pytest.raises(ServiceError, match="not configured"):
            service.improve(ImprovementRequest(BlockType.SUMMARY, "x"))
