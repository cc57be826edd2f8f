"""Wrap core content in each tool's conventions."""

from __future__ import annotations

from agentseed.analyzer.models import AnalysisResult
from agentseed.utils.git import FileMeta, build_meta_tag

_QUICK_REFERENCE_LIMIT = 8


def render_for_format(
    fmt: str,
    analysis: AnalysisResult,
    core_content: str,
    subfolder_path: str | None = None,
    meta: FileMeta | None = None,
) -> str:
    """Render *core_content* for *fmt*, appending a staleness tag when *meta* is given."""
    renderer = _RENDERERS.get(fmt)
    if renderer is None:
        raise ValueError(f"Unknown format: {fmt}")
    output = renderer(core_content, analysis, subfolder_path)

    if meta is not None:
        output = output.rstrip() + "\n\n" + build_meta_tag(meta) + "\n"
    return output


def _render_agents(content: str, analysis: AnalysisResult, subfolder_path: str | None) -> str:
    lines: list[str] = []
    if subfolder_path:
        lines += [
            f"> Scoped context for `{subfolder_path}`. See root AGENTS.md for general project info.",
            "",
        ]
    lines += [content.strip(), ""]
    return "\n".join(lines)


def _render_claude(content: str, analysis: AnalysisResult, subfolder_path: str | None) -> str:
    lines: list[str] = []
    if subfolder_path:
        lines += [f"> Context for `{subfolder_path}`. See root CLAUDE.md for general rules.", ""]
    lines += [content.strip(), ""]

    if analysis.commands and "## Commands" not in content:
        lines += ["## Quick Reference Commands", "", "```bash"]
        lines += [f"{cmd.command}  # {cmd.name}" for cmd in analysis.commands[:_QUICK_REFERENCE_LIMIT]]
        lines += ["```", ""]
    return "\n".join(lines)


def _render_cursor(content: str, analysis: AnalysisResult, subfolder_path: str | None) -> str:
    lines = ["# Project Rules", "", content.strip(), ""]
    if analysis.frameworks and "## Stack" not in content and "## Tech" not in content:
        tech = ", ".join(f.name for f in analysis.frameworks)
        lines += ["## Tech Stack Context", "", f"This project uses: {tech}", ""]
    return "\n".join(lines)


def _render_copilot(content: str, analysis: AnalysisResult, subfolder_path: str | None) -> str:
    return "\n".join(
        [
            "<!-- GitHub Copilot Custom Instructions -->",
            "<!-- See: https://docs.github.com/copilot/customizing-copilot -->",
            "",
            content.strip(),
            "",
        ]
    )


def _render_windsurf(content: str, analysis: AnalysisResult, subfolder_path: str | None) -> str:
    return content.strip() + "\n"


_RENDERERS = {
    "agents": _render_agents,
    "claude": _render_claude,
    "cursor": _render_cursor,
    "copilot": _render_copilot,
    "windsurf": _render_windsurf,
}
