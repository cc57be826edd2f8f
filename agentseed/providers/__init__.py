"""LLM providers."""

from __future__ import annotations

from typing import TYPE_CHECKING

from agentseed.exceptions import ConfigError
from agentseed.providers.base import LLMProvider, LLMRequest, LLMResponse, TokenUsage
from agentseed.providers.litellm_provider import MODEL_PREFIXES, LiteLLMProvider
from agentseed.providers.retry import with_retry
from agentseed.providers.usage import UsageTracker

if TYPE_CHECKING:
    from agentseed.config.schema import AgentseedConfig


def create_provider(config: AgentseedConfig) -> LLMProvider:
    if config.provider not in MODEL_PREFIXES:
        raise ConfigError(f"Unknown provider: {config.provider}")
    if not config.model:
        raise ConfigError(f"No model configured for provider {config.provider}")
    api_base = config.ollama_url if config.provider == "ollama" else None
    return LiteLLMProvider(config.provider, config.model, api_key=config.api_key, api_base=api_base)


__all__ = [
    "LLMProvider",
    "LLMRequest",
    "LLMResponse",
    "LiteLLMProvider",
    "TokenUsage",
    "UsageTracker",
    "create_provider",
    "with_retry",
]
