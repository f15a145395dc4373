"""
AI Text-Transformation Service

Client side of the "improve this section" feature. The service is treated as
fallible and non-idempotent: the same request may return different text, and
any failure is reported as a ServiceError without retrying.
"""

import time
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Optional

from vita.contexts.assist.logger import _log_error, log_request, log_response
from vita.contexts.assist.prompts import build_prompts
from vita.contexts.editing.blocks import BlockType, parse_block_type
from vita.contexts.editing.exceptions import ServiceError
from vita.utils.llm import LLMProvider, get_provider


@dataclass(frozen=True)
class ImprovementRequest:
    """
    A rewrite request for one block (or one item's description).

    Attributes:
        block_type: Block the text belongs to
        source_text: Current text (comma-joined skills for the skills block)
        target_role: Optional role to tailor the text for
        job_description: Optional job description (used by skills suggestions)
    """

    block_type: BlockType
    source_text: str
    target_role: Optional[str] = None
    job_description: Optional[str] = None


@dataclass(frozen=True)
class ImprovementResponse:
    """Either improved_text (text blocks) or suggested_skills_csv (skills block)."""

    improved_text: Optional[str] = None
    suggested_skills_csv: Optional[str] = None


class TextImprovementService(ABC):
    """Interface the section editors depend on."""

    @abstractmethod
    def improve(self, request: ImprovementRequest) -> ImprovementResponse:
        """
        Rewrite text for a block.

        Raises:
            ServiceError: If the service is unreachable or returns nothing usable
        """


class LLMImprovementService(TextImprovementService):
    """
    TextImprovementService backed by an LLM provider.

    The provider is created lazily on the first request, so a missing API key
    surfaces as a ServiceError on use rather than at construction.

    Args:
        provider: LLM provider (default: get_provider() from LLM_PROVIDER env var)
        max_tokens: Response token limit
        temperature: Sampling temperature
    """

    def __init__(
        self,
        provider: Optional[LLMProvider] = None,
        max_tokens: int = 500,
        temperature: float = 0.7,
    ):
        self._provider = provider
        self.max_tokens = max_tokens
        self.temperature = temperature

    @property
    def provider(self) -> LLMProvider:
        if self._provider is None:
            try:
                self._provider = get_provider()
            except (ImportError, ValueError) as e:
                raise ServiceError("AI provider is not configured", original_error=e) from e
        return self._provider

    def improve(self, request: ImprovementRequest) -> ImprovementResponse:
        block_type = parse_block_type(request.block_type)
        system_prompt, user_prompt = build_prompts(
            block_type,
            request.source_text,
            target_role=request.target_role,
            job_description=request.job_description,
        )

        provider = self.provider
        log_request(provider.name, block_type.value, len(request.source_text), request.target_role)
        start_time = time.time()

        try:
            response = provider.generate(
                system_prompt,
                user_prompt,
                max_tokens=self.max_tokens,
                temperature=self.temperature,
            )
        except Exception as e:
            # SDK and transport errors differ per provider; all of them mean "try again later"
            _log_error(f"{provider.name} request failed: {type(e).__name__}")
            raise ServiceError(f"AI processing error ({provider.name})", original_error=e) from e

        log_response(block_type.value, response, time.time() - start_time)

        text = (response.content or "").strip()
        if not text:
            raise ServiceError(f"AI returned an empty {block_type.value} rewrite")

        if block_type is BlockType.SKILLS:
            return ImprovementResponse(suggested_skills_csv=text)
        return ImprovementResponse(improved_text=text)
