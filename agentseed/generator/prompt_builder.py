"""Prompts sent to the LLM for root and subfolder documents."""

from __future__ import annotations

from agentseed.analyzer.models import AnalysisResult

SYSTEM_PROMPT = (
    "You are an expert at analyzing codebases and generating clear, concise documentation "
    "for AI coding agents. Focus on practical, actionable information."
)

ROOT_PREAMBLE = """\
You are generating an AGENTS.md file for a code repository. This file helps AI coding agents \
understand the project.

Based on the analysis and code samples below, generate the content for each section. Be concise \
and practical - focus on what an AI agent needs to know to work effectively in this codebase.
"""

ROOT_INSTRUCTIONS = """\
## Instructions

Generate EXACTLY these 6 sections in markdown. Each section should be practical and actionable \
for an AI coding agent:

1. **Project Context** - What this project is (2-3 sentences max)
2. **Stack** - List of languages, frameworks, and key libraries with versions if detectable
3. **Commands** - Copy-pasteable commands for build, run, test, lint. Use the exact commands \
from analysis.
4. **Conventions** - Naming conventions, file structure patterns, import style, any coding standards
5. **Architecture** - What lives where, key directories and their purposes, how components connect
6. **Boundaries** - Rules as three sub-lists:
   - **Always**: Things to always do (e.g., "run tests before committing")
   - **Ask first**: Things that need human approval (e.g., "adding new dependencies")
   - **Never**: Things to never do (e.g., "commit secrets or .env files")

Output ONLY the markdown content. Do NOT wrap in code blocks. Start directly with the first \
section heading."""

SUBFOLDER_INSTRUCTIONS = """\
## Instructions

Generate markdown with ONLY the sections that differ from the root AGENTS.md. Possible sections:
1. Project Context - only if this subfolder has a distinctly different purpose
2. Stack - only if it uses additional/different tech
3. Commands - only if subfolder has its own commands
4. Conventions - only if conventions differ from root
5. Architecture - describe what lives in this subfolder specifically
6. Boundaries - only if there are additional rules for this subfolder

Start with a one-line note: "This directory contains [purpose]. See root AGENTS.md for general \
project info."

Output ONLY the markdown content. Do NOT wrap in code blocks."""


def build_root_prompt(analysis: AnalysisResult) -> str:
    structure = analysis.structure
    patterns = analysis.patterns
    parts = [ROOT_PREAMBLE, "## Repository Analysis", ""]

    parts.append("### Languages")
    parts += [f"- {lang.name}: {lang.percentage}% ({lang.file_count} files)" for lang in analysis.languages]
    parts += ["", "### Frameworks & Libraries"]
    parts += [
        f"- {fw.name} ({fw.category}, confidence: {fw.confidence:g})" for fw in analysis.frameworks
    ]
    parts += ["", "### Available Commands"]
    parts += [f"- `{cmd.command}` ({cmd.name}, from {cmd.source})" for cmd in analysis.commands]
    parts += [
        "",
        "### Project Structure",
        f"- Total files: {structure.total_files}",
        f"- Total directories: {structure.total_dirs}",
        f"- Entry points: {', '.join(structure.entry_points)}",
        "",
        "### Detected Patterns",
        f"- Naming convention: {patterns.naming_convention}",
        f"- File organization: {patterns.file_organization}",
        f"- Monorepo: {str(patterns.has_monorepo).lower()}",
        f"- Config files: {', '.join(patterns.config_files)}",
        f"- CI files: {', '.join(patterns.ci_files)}",
        "",
    ]
    parts += _code_samples(analysis)
    parts.append(ROOT_INSTRUCTIONS)
    return "\n".join(parts)


def build_subfolder_prompt(analysis: AnalysisResult, root_markdown: str, subfolder_path: str) -> str:
    patterns = analysis.patterns
    parts = [
        f"You are generating a subfolder AGENTS.md file for the {subfolder_path} directory "
        "in a larger repository.",
        "",
        "This file should ONLY include sections that DIFFER from the root AGENTS.md. "
        "If a section is identical to root, omit it entirely.",
        "",
        "## Root AGENTS.md",
        root_markdown,
        "",
        f"## Subfolder Analysis ({subfolder_path})",
        "",
        "### Languages",
    ]
    parts += [f"- {lang.name}: {lang.percentage}% ({lang.file_count} files)" for lang in analysis.languages]
    parts += ["", "### Frameworks & Libraries"]
    parts += [f"- {fw.name} ({fw.category})" for fw in analysis.frameworks]
    parts += ["", "### Available Commands"]
    parts += [f"- `{cmd.command}` ({cmd.name})" for cmd in analysis.commands]
    parts += [
        "",
        "### Patterns",
        f"- Naming: {patterns.naming_convention}",
        f"- Organization: {patterns.file_organization}",
        "",
    ]
    parts += _code_samples(analysis)
    parts.append(SUBFOLDER_INSTRUCTIONS)
    return "\n".join(parts)


def _code_samples(analysis: AnalysisResult) -> list[str]:
    if not analysis.sampled_files:
        return []
    parts = ["### Code Samples"]
    for sample in analysis.sampled_files:
        parts += [f"#### {sample.path} ({sample.priority})", "```", sample.content, "```", ""]
    return parts
