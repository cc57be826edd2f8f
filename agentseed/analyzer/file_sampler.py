"""File sampling — pick representative files to include in the LLM prompt."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path, PurePosixPath

import structlog

from agentseed.analyzer.fs import glob_paths, read_text
from agentseed.analyzer.models import SamplePriority, SampledFile

log = structlog.get_logger("agentseed.analyzer")

_SRC_EXTS = ("ts", "tsx", "js", "jsx", "py", "go", "rs", "java", "rb")
_TEST_EXTS = ("ts", "tsx", "js", "jsx", "py")


def _expand(pattern: str, exts: Iterable[str]) -> list[str]:
    return [f"{pattern}.{ext}" for ext in exts]


# Sampling order: all entry patterns first, then config, source, test.
PRIORITY_PATTERNS: dict[SamplePriority, list[str]] = {
    "entry": [
        *_expand("src/index", ("ts", "tsx", "js", "jsx")),
        *_expand("src/main", ("ts", "tsx", "js", "jsx")),
        *_expand("src/app", ("ts", "tsx", "js", "jsx")),
        *_expand("src/cli", ("ts", "tsx", "js", "jsx")),
        *_expand("index", ("ts", "tsx", "js", "jsx")),
        *_expand("main", ("ts", "tsx", "js", "jsx", "py", "go", "rs")),
        *_expand("app", ("ts", "tsx", "js", "jsx", "py")),
        *_expand("server", ("ts", "js")),
        "manage.py",
        "cmd/main.go",
    ],
    "config": [
        "package.json",
        "tsconfig.json",
        "pyproject.toml",
        "Cargo.toml",
        "go.mod",
        "Makefile",
        "Dockerfile",
        "docker-compose.yml",
        ".env.example",
        "dbt_project.yml",
        "profiles.yml",
        "airflow.cfg",
        "alembic.ini",
    ],
    "source": [
        *_expand("src/**/*", _SRC_EXTS),
        *_expand("lib/**/*", _SRC_EXTS),
        *_expand("app/**/*", ("ts", "tsx", "js", "jsx", "py", "rb")),
        "models/**/*.sql",
        "dags/**/*.py",
        "sql/**/*.sql",
        "queries/**/*.sql",
        "macros/**/*.sql",
        "staging/**/*.sql",
        "marts/**/*.sql",
        *_expand("transforms/**/*", ("sql", "py")),
        *_expand("pipelines/**/*", ("py", "yml", "yaml")),
        *_expand("etl/**/*", ("py", "sql")),
    ],
    "test": [
        *_expand("tests/**/*", _TEST_EXTS),
        *_expand("test/**/*", _TEST_EXTS),
        *_expand("**/*.test", ("ts", "tsx", "js", "jsx")),
        *_expand("**/*.spec", ("ts", "tsx", "js", "jsx")),
        *_expand("**/*_test", ("go", "py")),
    ],
}

MAX_FILE_BYTES = 32768

BINARY_EXTENSIONS = frozenset(
    {
        ".png", ".jpg", ".jpeg", ".gif", ".ico", ".svg",
        ".woff", ".woff2", ".ttf", ".eot",
        ".zip", ".tar", ".gz", ".bz2",
        ".pdf", ".doc", ".docx",
        ".exe", ".dll", ".so", ".dylib",
        ".lock", ".lockb",
    }
)


def sample_files(
    root: Path,
    ignore: Iterable[str],
    max_files: int,
    max_budget: int,
) -> list[SampledFile]:
    """Collect up to *max_files* files whose combined size stays within *max_budget* bytes.

    Files larger than 32 KiB, binary-looking files and unreadable files are
    skipped; a file that would overflow the budget is skipped but later,
    smaller files may still fit.
    """
    ignore = list(ignore)
    sampled: list[SampledFile] = []
    seen: set[str] = set()
    total_size = 0

    for priority, patterns in PRIORITY_PATTERNS.items():
        for pattern in patterns:
            for rel in glob_paths(root, pattern, ignore):
                if len(sampled) >= max_files or total_size >= max_budget:
                    return sampled
                if rel in seen or _is_binary(rel):
                    continue

                path = root / rel
                try:
                    if path.stat().st_size > MAX_FILE_BYTES:
                        continue
                    content = read_text(path)
                except OSError:
                    log.debug("sampler.unreadable", path=rel)
                    continue

                size = len(content.encode("utf-8"))
                if total_size + size > max_budget:
                    continue

                seen.add(rel)
                total_size += size
                sampled.append(SampledFile(path=rel, content=content, priority=priority, size_bytes=size))

    return sampled


def _is_binary(rel: str) -> bool:
    return PurePosixPath(rel).suffix.lower() in BINARY_EXTENSIONS
