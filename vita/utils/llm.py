"""
LLM provider abstraction.

Provides a provider-agnostic interface for single-shot LLM API calls. Calls are
never retried here: a failed request surfaces to the caller, which decides
whether the user should try again.
"""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass

from dotenv import load_dotenv

load_dotenv()

DEFAULT_MAX_TOKENS = 500
DEFAULT_TEMPERATURE = 0.7


@dataclass
class LLMResponse:
    """Response from an LLM provider."""

    content: str
    model: str
    input_tokens: int
    output_tokens: int


class LLMProvider(ABC):
    """
    Abstract base for LLM providers.

    Subclasses must:
    - Set _provider_prefix class attribute (e.g., "anthropic", "openai")
    - Implement _call_api() for the actual API call
    - Call update_model(model) in __init__ to set model and name
    """

    _provider_prefix: str

    name: str
    model: str

    def update_model(self, model: str):
        """Update the model and refresh the provider name."""
        self.model = model
        self.name = f"{self._provider_prefix}/{model}"

    @abstractmethod
    def _call_api(
        self, system_prompt: str, user_prompt: str, max_tokens: int, temperature: float
    ) -> LLMResponse:
        """Make a single API call. Implemented by subclasses."""
        pass

    def generate(
        self,
        system_prompt: str,
        user_prompt: str,
        max_tokens: int = DEFAULT_MAX_TOKENS,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> LLMResponse:
        """Generate a response from the LLM (one attempt)."""
        return self._call_api(system_prompt, user_prompt, max_tokens, temperature)


class AnthropicProvider(LLMProvider):
    """Anthropic Claude provider."""

    _provider_prefix = "anthropic"

    def __init__(self, model: str = "claude-sonnet-4-20250514"):
        # Lazy import - anthropic SDK is heavy, only load if this provider is used
        import anthropic

        api_key = os.getenv("ANTHROPIC_API_KEY")
        if not api_key:
            raise ValueError("ANTHROPIC_API_KEY environment variable not set")

        self.client = anthropic.Anthropic(api_key=api_key)
        self.update_model(model)

    def _call_api(
        self, system_prompt: str, user_prompt: str, max_tokens: int, temperature: float
    ) -> LLMResponse:
        response = self.client.messages.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            system=system_prompt,
            messages=[{"role": "user", "content": user_prompt}],
        )
        return LLMResponse(
            content=response.content[0].text,
            model=self.model,
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )


class OpenAIProvider(LLMProvider):
    """OpenAI GPT provider."""

    _provider_prefix = "openai"

    def __init__(self, model: str = "gpt-4o-mini"):
        # Lazy import - openai SDK is heavy, only load if this provider is used
        import openai

        api_key = os.getenv("OPENAI_API_KEY")
        if not api_key:
            raise ValueError("OPENAI_API_KEY environment variable not set")

        self.client = openai.OpenAI(api_key=api_key)
        self.update_model(model)

    def _call_api(
        self, system_prompt: str, user_prompt: str, max_tokens: int, temperature: float
    ) -> LLMResponse:
        response = self.client.chat.completions.create(
            model=self.model,
            max_tokens=max_tokens,
            temperature=temperature,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": user_prompt},
            ],
        )
        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=self.model,
            input_tokens=response.usage.prompt_tokens,
            output_tokens=response.usage.completion_tokens,
        )


def get_provider(provider_name: str = None, model: str = None) -> LLMProvider:
    """
    Get an LLM provider instance.

    Args:
        provider_name: "anthropic" or "openai" (default: from LLM_PROVIDER env var)
        model: Model name (default: provider-specific default, or LLM_MODEL env var)

    Returns:
        LLMProvider instance
    """
    if provider_name is None:
        provider_name = os.getenv("LLM_PROVIDER", "openai").lower()
    if model is None:
        model = os.getenv("LLM_MODEL")

    if provider_name == "anthropic":
        return AnthropicProvider(model=model) if model else AnthropicProvider()
    elif provider_name == "openai":
        return OpenAIProvider(model=model) if model else OpenAIProvider()
    else:
        raise ValueError(f"Unknown provider: {provider_name}. Use 'anthropic' or 'openai'")
