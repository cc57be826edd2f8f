"""Subfolder qualification — find directories that get their own context file."""

from __future__ import annotations

import os
from collections.abc import Iterable
from pathlib import Path

import structlog

from agentseed.scanner.heuristics import SubfolderCandidate, should_have_agents_md

log = structlog.get_logger("agentseed.scanner")

SCAN_IGNORE = frozenset(
    {
        "node_modules",
        ".git",
        "dist",
        "build",
        "coverage",
        "__pycache__",
        "vendor",
        "target",
    }
)


def detect_subfolders(root: Path | str) -> list[SubfolderCandidate]:
    """Walk every directory under *root* and return the deduplicated candidates."""
    root = Path(root)
    candidates: list[SubfolderCandidate] = []

    for dirpath, dirnames, _ in os.walk(root):
        dirnames[:] = sorted(d for d in dirnames if not d.startswith(".") and d not in SCAN_IGNORE)
        for d in dirnames:
            result = should_have_agents_md(root, Path(dirpath) / d)
            if result:
                log.debug("scanner.candidate", path=result.relative_path, reason=result.reason)
                candidates.append(result)

    return deduplicate_candidates(candidates)


def deduplicate_candidates(candidates: Iterable[SubfolderCandidate]) -> list[SubfolderCandidate]:
    """Drop every candidate that has a proper ancestor in the set, keeping order."""
    candidates = list(candidates)
    paths = {c.relative_path for c in candidates}

    def has_ancestor(path: str) -> bool:
        parts = path.split("/")
        return any("/".join(parts[:i]) in paths for i in range(1, len(parts)))

    return [c for c in candidates if not has_ancestor(c.relative_path)]


__all__ = ["SubfolderCandidate", "deduplicate_candidates", "detect_subfolders", "should_have_agents_md"]
