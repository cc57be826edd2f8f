"""Language detection by file extension share."""

from __future__ import annotations

import math
from collections import Counter
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from agentseed.analyzer.fs import walk_tree
from agentseed.analyzer.models import LanguageInfo

# Language detection by file extension (lower-cased before lookup)
EXTENSION_TO_LANGUAGE: dict[str, str] = {
    ".ts": "TypeScript",
    ".tsx": "TypeScript",
    ".js": "JavaScript",
    ".jsx": "JavaScript",
    ".mjs": "JavaScript",
    ".cjs": "JavaScript",
    ".py": "Python",
    ".rs": "Rust",
    ".go": "Go",
    ".java": "Java",
    ".kt": "Kotlin",
    ".rb": "Ruby",
    ".php": "PHP",
    ".cs": "C#",
    ".cpp": "C++",
    ".cc": "C++",
    ".hpp": "C++",
    ".c": "C",
    ".h": "C",  # Ambiguous, could be C or C++
    ".swift": "Swift",
    ".scala": "Scala",
    ".ex": "Elixir",
    ".exs": "Elixir",
    ".erl": "Erlang",
    ".hs": "Haskell",
    ".lua": "Lua",
    ".r": "R",
    ".dart": "Dart",
    ".vue": "Vue",
    ".svelte": "Svelte",
    ".astro": "Astro",
    ".sql": "SQL",
    ".hql": "HiveQL",
    ".ddl": "SQL",
    ".dml": "SQL",
    ".plsql": "PL/SQL",
    ".pgsql": "PL/pgSQL",
    ".sh": "Shell",
    ".bash": "Shell",
    ".zsh": "Shell",
    ".css": "CSS",
    ".scss": "SCSS",
    ".less": "Less",
    ".html": "HTML",
    ".yml": "YAML",
    ".yaml": "YAML",
    ".toml": "TOML",
    ".tf": "Terraform",
    ".tfvars": "Terraform",
    ".ipynb": "Jupyter Notebook",
}


def detect_languages(root: Path, ignore: Iterable[str] = ()) -> list[LanguageInfo]:
    """Count classified files per language and compute integer percentages.

    Unclassified extensions are excluded from the denominator. Percentages are
    rounded independently, so they need not sum to 100.
    """
    files, _ = walk_tree(root, ignore)
    return summarize_languages(files)


def summarize_languages(files: Iterable[str]) -> list[LanguageInfo]:
    counts: Counter[str] = Counter()
    for f in files:
        lang = EXTENSION_TO_LANGUAGE.get(PurePosixPath(f).suffix.lower())
        if lang:
            counts[lang] += 1

    total = sum(counts.values())
    if total == 0:
        return []

    languages = [
        LanguageInfo(name=name, file_count=count, percentage=_round_half_up(count * 100 / total))
        for name, count in counts.items()
    ]
    # sorted() is stable: ties keep first-counted order
    return sorted(languages, key=lambda lang: lang.percentage, reverse=True)


def _round_half_up(value: float) -> int:
    return math.floor(value + 0.5)
