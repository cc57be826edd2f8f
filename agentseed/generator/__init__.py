"""Document generation: prompts, LLM call and per-format rendering."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from agentseed.analyzer.models import AnalysisResult
from agentseed.generator.format_renderer import render_for_format
from agentseed.generator.formats import FORMAT_CHOICES, FORMATS, resolve_formats
from agentseed.generator.markdown_renderer import render_core_content
from agentseed.generator.prompt_builder import (
    SYSTEM_PROMPT,
    build_root_prompt,
    build_subfolder_prompt,
)
from agentseed.generator.subfolder_differ import compute_subfolder_delta
from agentseed.providers import LLMRequest, TokenUsage, create_provider, with_retry

if TYPE_CHECKING:
    from agentseed.config.schema import AgentseedConfig

log = structlog.get_logger("agentseed.generator")

MAX_TOKENS = 4096
TEMPERATURE = 0.3


@dataclass(frozen=True)
class SubfolderContext:
    root_analysis: AnalysisResult
    subfolder_path: str


@dataclass(frozen=True)
class GenerateResult:
    core_content: str
    formatted: str
    usage: TokenUsage | None = None


async def generate(
    root: Path | str,
    analysis: AnalysisResult,
    config: AgentseedConfig,
    fmt: str,
    subfolder_ctx: SubfolderContext | None = None,
) -> GenerateResult:
    """Generate core content through the configured LLM, then render it for *fmt*."""
    provider = create_provider(config)

    if subfolder_ctx is not None:
        root_content = render_core_content(subfolder_ctx.root_analysis)
        prompt = build_subfolder_prompt(analysis, root_content, subfolder_ctx.subfolder_path)
    else:
        prompt = build_root_prompt(analysis)

    log.debug("generator.prompt", provider=provider.name, model=config.model, chars=len(prompt))
    request = LLMRequest(
        prompt=prompt,
        system_prompt=SYSTEM_PROMPT,
        max_tokens=MAX_TOKENS,
        temperature=TEMPERATURE,
    )
    response = await with_retry(lambda: provider.generate(request))

    if response.usage is not None:
        log.debug(
            "generator.usage",
            input_tokens=response.usage.input_tokens,
            output_tokens=response.usage.output_tokens,
        )

    subfolder_path = subfolder_ctx.subfolder_path if subfolder_ctx else None
    formatted = render_for_format(fmt, analysis, response.content, subfolder_path)
    return GenerateResult(core_content=response.content, formatted=formatted, usage=response.usage)


def generate_static(analysis: AnalysisResult, fmt: str, subfolder_path: str | None = None) -> str:
    """Render *fmt* from static analysis only, without an LLM call."""
    core = render_core_content(analysis, None, subfolder_path)
    return render_for_format(fmt, analysis, core, subfolder_path)


__all__ = [
    "FORMATS",
    "FORMAT_CHOICES",
    "GenerateResult",
    "SYSTEM_PROMPT",
    "SubfolderContext",
    "build_root_prompt",
    "build_subfolder_prompt",
    "compute_subfolder_delta",
    "generate",
    "generate_static",
    "render_core_content",
    "render_for_format",
    "resolve_formats",
]
