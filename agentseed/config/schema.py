"""Configuration schema for .agentseedrc files."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

Provider = Literal["claude", "openai", "ollama"]

DEFAULT_IGNORE: list[str] = [
    "node_modules",
    ".git",
    "dist",
    "build",
    "coverage",
    "__pycache__",
    ".next",
    ".nuxt",
    "vendor",
    "target",
    ".venv",
    "venv",
]

DEFAULT_MODELS: dict[str, str] = {
    "claude": "claude-sonnet-4-5-20250929",
    "openai": "gpt-4o",
    "ollama": "llama3",
}


class _CamelModel(BaseModel):
    """Accepts both snake_case and camelCase keys (``maxFiles`` / ``max_files``)."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


class SectionsConfig(_CamelModel):
    project_context: bool = True
    stack: bool = True
    commands: bool = True
    conventions: bool = True
    architecture: bool = True
    boundaries: bool = True


class AgentseedConfig(_CamelModel):
    provider: Provider = "claude"
    model: str | None = None
    api_key: str | None = None
    ollama_url: str = "http://localhost:11434"
    no_llm: bool = False
    max_files: int = Field(default=15, gt=0)
    max_token_budget: int = Field(default=65536, gt=0)
    sections: SectionsConfig = Field(default_factory=SectionsConfig)
    ignore: list[str] = Field(default_factory=lambda: list(DEFAULT_IGNORE))
