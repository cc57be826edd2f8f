"""Output formats and where each one is written."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

OutputFormat = Literal["agents", "claude", "cursor", "copilot", "windsurf", "all"]
ConcreteFormat = Literal["agents", "claude", "cursor", "copilot", "windsurf"]


@dataclass(frozen=True)
class FormatConfig:
    name: str
    output_path: str
    description: str


FORMATS: dict[str, FormatConfig] = {
    "agents": FormatConfig(
        "AGENTS.md",
        "AGENTS.md",
        "Universal format (GitHub Copilot, Codex, Gemini CLI, Cursor, 20+ tools)",
    ),
    "claude": FormatConfig("CLAUDE.md", "CLAUDE.md", "Claude Code"),
    "cursor": FormatConfig(".cursorrules", ".cursorrules", "Cursor IDE"),
    "copilot": FormatConfig(
        "copilot-instructions.md", ".github/copilot-instructions.md", "GitHub Copilot"
    ),
    "windsurf": FormatConfig(".windsurfrules", ".windsurfrules", "Windsurf / Codeium"),
}

FORMAT_CHOICES: list[str] = [*FORMATS, "all"]


def resolve_formats(fmt: str) -> list[str]:
    """Expand ``all`` into every concrete format; reject unknown names."""
    if fmt == "all":
        return list(FORMATS)
    if fmt not in FORMATS:
        raise ValueError(f"Unknown format: {fmt}")
    return [fmt]
