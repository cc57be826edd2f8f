"""Repository analyzer — concurrent fan-out of the five detectors over one root."""

from __future__ import annotations

import asyncio
from pathlib import Path
from typing import TYPE_CHECKING

import structlog

from agentseed.analyzer.command_extractor import extract_commands
from agentseed.analyzer.file_sampler import sample_files
from agentseed.analyzer.fs import dir_exists
from agentseed.analyzer.framework_detector import detect_frameworks
from agentseed.analyzer.language_detector import detect_languages
from agentseed.analyzer.models import (
    AnalysisResult,
    CommandInfo,
    DirectoryEntry,
    FrameworkInfo,
    LanguageInfo,
    PatternInfo,
    SampledFile,
    StructureInfo,
)
from agentseed.analyzer.pattern_detector import detect_patterns
from agentseed.analyzer.structure_mapper import map_structure
from agentseed.exceptions import AnalysisError

if TYPE_CHECKING:
    from agentseed.config.schema import AgentseedConfig

log = structlog.get_logger("agentseed.analyzer")


async def analyze(root: Path | str, config: AgentseedConfig) -> AnalysisResult:
    """Analyze *root* and return a fully-formed :class:`AnalysisResult`.

    The detectors share no mutable state; each runs in a worker thread and
    the results are joined before the result is built. Files are sampled for
    the LLM prompt only when LLM enhancement is enabled.
    """
    root = Path(root)
    if not dir_exists(root):
        raise AnalysisError(f"Not a directory: {root}")

    ignore = list(config.ignore)
    log.debug("analyzer.start", root=str(root))

    languages, frameworks, commands, structure, patterns = await asyncio.gather(
        asyncio.to_thread(detect_languages, root, ignore),
        asyncio.to_thread(detect_frameworks, root),
        asyncio.to_thread(extract_commands, root),
        asyncio.to_thread(map_structure, root, ignore),
        asyncio.to_thread(detect_patterns, root, ignore),
    )

    sampled: list[SampledFile] = []
    if not config.no_llm:
        sampled = await asyncio.to_thread(
            sample_files, root, ignore, config.max_files, config.max_token_budget
        )
        log.debug("analyzer.sampled", count=len(sampled))

    log.debug(
        "analyzer.done",
        root=str(root),
        languages=len(languages),
        frameworks=len(frameworks),
        commands=len(commands),
    )
    return AnalysisResult(
        languages=tuple(languages),
        frameworks=tuple(frameworks),
        commands=tuple(commands),
        structure=structure,
        patterns=patterns,
        sampled_files=tuple(sampled),
    )


__all__ = [
    "AnalysisResult",
    "CommandInfo",
    "DirectoryEntry",
    "FrameworkInfo",
    "LanguageInfo",
    "PatternInfo",
    "SampledFile",
    "StructureInfo",
    "analyze",
]
