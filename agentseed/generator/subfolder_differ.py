"""Reduce a subfolder analysis to what differs from the root analysis."""

from __future__ import annotations

from dataclasses import replace

from agentseed.analyzer.models import AnalysisResult

DOMINANT_LANGUAGE_PERCENT = 50


def compute_subfolder_delta(root: AnalysisResult, subfolder: AnalysisResult) -> AnalysisResult:
    """Keep languages new to the root (or dominant here), plus frameworks and commands the root lacks.

    When no language survives the filter the subfolder's full language list
    is kept. Structure, patterns and samples always come from the subfolder.
    """
    root_langs = {lang.name for lang in root.languages}
    root_frameworks = {fw.name for fw in root.frameworks}
    root_commands = {cmd.command for cmd in root.commands}

    languages = tuple(
        lang
        for lang in subfolder.languages
        if lang.name not in root_langs or lang.percentage > DOMINANT_LANGUAGE_PERCENT
    )
    return replace(
        subfolder,
        languages=languages or subfolder.languages,
        frameworks=tuple(fw for fw in subfolder.frameworks if fw.name not in root_frameworks),
        commands=tuple(cmd for cmd in subfolder.commands if cmd.command not in root_commands),
    )
