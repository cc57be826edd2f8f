"""Rules deciding whether a directory deserves its own agent-context file."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from agentseed.analyzer.fs import file_exists

# Manifests marking a sub-project
CONFIG_INDICATORS: list[str] = [
    "package.json",
    "Cargo.toml",
    "go.mod",
    "pyproject.toml",
    "setup.py",
    "Gemfile",
    "composer.json",
    "pom.xml",
    "build.gradle",
    "deno.json",
    "deno.jsonc",
]

# Compared lower-cased, so ".R" counts as ".r"
SOURCE_EXTENSIONS = frozenset(
    {
        # web
        ".ts", ".tsx", ".js", ".jsx", ".mjs", ".cjs", ".vue", ".svelte",
        # systems
        ".c", ".cpp", ".cc", ".h", ".hpp", ".rs", ".go", ".zig",
        # jvm
        ".java", ".kt", ".scala", ".clj", ".cljs",
        # scripting
        ".py", ".rb", ".php", ".pl", ".pm", ".lua", ".r",
        # mobile
        ".swift", ".dart",
        # functional
        ".ex", ".exs", ".erl", ".hs", ".ml", ".mli",
        # .net
        ".cs", ".fs",
        # shell / data
        ".sh", ".bash", ".sql",
    }
)

MIN_SOURCE_FILES = 5

# Never sub-projects, whatever they contain
NON_CODE_DIRS = frozenset(
    {
        "docs", "doc", "documentation",
        "examples", "example", "demos", "demo", "samples", "sample",
        "test", "tests", "testing", "__tests__", "spec", "specs",
        "benchmarks", "benchmark", "benches",
        "static", "assets", "public", "media",
        "fixtures", "scripts", "docker", "vendor",
    }
)


@dataclass(frozen=True)
class SubfolderCandidate:
    relative_path: str
    reason: str


def should_have_agents_md(root: Path, dir_path: Path) -> SubfolderCandidate | None:
    """Return a candidate for *dir_path* if it qualifies, else None.

    A directory qualifies when none of its path components is a non-code
    directory and it either carries its own manifest or holds at least
    MIN_SOURCE_FILES source files as direct children.
    """
    relative_path = dir_path.relative_to(root).as_posix()

    if any(part.lower() in NON_CODE_DIRS for part in PurePosixPath(relative_path).parts):
        return None

    for config in CONFIG_INDICATORS:
        if file_exists(dir_path / config):
            return SubfolderCandidate(relative_path, f"Has own {config}")

    source_count = count_source_files(dir_path)
    if source_count >= MIN_SOURCE_FILES:
        return SubfolderCandidate(relative_path, f"{source_count} source files")

    return None


def count_source_files(dir_path: Path) -> int:
    """Count direct-child files whose extension is a source extension."""
    count = 0
    try:
        with os.scandir(dir_path) as it:
            for entry in it:
                if not entry.is_file():
                    continue
                if os.path.splitext(entry.name)[1].lower() in SOURCE_EXTENSIONS:
                    count += 1
    except OSError:
        return 0
    return count
