"""Thin async wrapper around litellm.acompletion() for all supported providers."""

from __future__ import annotations

import time
from typing import Any

import litellm
import structlog

from agentseed.exceptions import ProviderError
from agentseed.providers.base import LLMProvider, LLMRequest, LLMResponse, TokenUsage

log = structlog.get_logger("agentseed.providers")

# agentseed provider name -> litellm model prefix
MODEL_PREFIXES: dict[str, str] = {
    "claude": "anthropic",
    "openai": "openai",
    "ollama": "ollama",
}

# Providers that cannot run without an API key
_KEY_REQUIRED: dict[str, str] = {
    "claude": "ANTHROPIC_API_KEY",
    "openai": "OPENAI_API_KEY",
}


class LiteLLMProvider(LLMProvider):
    """Routes a request to Anthropic, OpenAI or a local Ollama server via litellm.

    Usage::

        provider = LiteLLMProvider("claude", "claude-sonnet-4-5-20250929", api_key="sk-...")
        resp = await provider.generate(LLMRequest(prompt="..."))
    """

    def __init__(
        self,
        provider: str,
        model: str,
        api_key: str | None = None,
        api_base: str | None = None,
    ) -> None:
        super().__init__(model, api_key)
        if provider not in MODEL_PREFIXES:
            raise ProviderError(f"Unknown provider: {provider}", provider)
        self._provider = provider
        self.api_base = api_base

    @property
    def name(self) -> str:
        return self._provider

    @property
    def litellm_model(self) -> str:
        return f"{MODEL_PREFIXES[self._provider]}/{self.model}"

    async def generate(self, request: LLMRequest) -> LLMResponse:
        env_var = _KEY_REQUIRED.get(self._provider)
        if env_var and not self.api_key:
            raise ProviderError(
                f"No API key for {self._provider}. Set {env_var} or add apiKey to .agentseedrc",
                self._provider,
            )

        messages: list[dict[str, Any]] = []
        if request.system_prompt:
            messages.append({"role": "system", "content": request.system_prompt})
        messages.append({"role": "user", "content": request.prompt})

        kwargs: dict[str, Any] = {
            "model": self.litellm_model,
            "messages": messages,
            "temperature": request.temperature,
            "max_tokens": request.max_tokens,
        }
        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.api_base:
            kwargs["api_base"] = self.api_base

        t0 = time.monotonic()
        try:
            raw = await litellm.acompletion(**kwargs)
        except Exception as exc:
            message = f"{self._provider} API error: {exc}"
            if self._provider == "ollama":
                message += f". Is Ollama running at {self.api_base}?"
            raise ProviderError(message, self._provider) from exc
        latency_ms = int((time.monotonic() - t0) * 1000)

        content = raw.choices[0].message.content or ""
        usage = getattr(raw, "usage", None)
        log.debug("provider.completion", model=self.litellm_model, latency_ms=latency_ms)

        return LLMResponse(
            content=content,
            usage=TokenUsage(
                input_tokens=getattr(usage, "prompt_tokens", 0) or 0,
                output_tokens=getattr(usage, "completion_tokens", 0) or 0,
            ),
        )
