"""Provider interface shared by every LLM backend."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass


@dataclass(frozen=True)
class LLMRequest:
    prompt: str
    system_prompt: str | None = None
    max_tokens: int = 4096
    temperature: float = 0.3


@dataclass(frozen=True)
class TokenUsage:
    input_tokens: int = 0
    output_tokens: int = 0


@dataclass(frozen=True)
class LLMResponse:
    """Standardised response from a single LLM call."""

    content: str = ""
    usage: TokenUsage | None = None


class LLMProvider(ABC):
    def __init__(self, model: str, api_key: str | None = None) -> None:
        self.model = model
        self.api_key = api_key

    @property
    @abstractmethod
    def name(self) -> str: ...

    @abstractmethod
    async def generate(self, request: LLMRequest) -> LLMResponse: ...
