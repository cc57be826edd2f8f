"""Shared pytest fixtures for agentseed tests."""

from __future__ import annotations

from collections.abc import Callable
from pathlib import Path

import pytest

from agentseed.config.schema import AgentseedConfig


def write_tree(root: Path, files: dict[str, str]) -> Path:
    """Create *files* (relative path -> content) under *root*; a trailing "/" makes a directory."""
    for rel, content in files.items():
        path = root / rel
        if rel.endswith("/"):
            path.mkdir(parents=True, exist_ok=True)
            continue
        path.parent.mkdir(parents=True, exist_ok=True)
        path.write_text(content)
    return root


@pytest.fixture
def make_repo(tmp_path: Path) -> Callable[[dict[str, str]], Path]:
    def _make(files: dict[str, str]) -> Path:
        return write_tree(tmp_path, files)

    return _make


@pytest.fixture
def static_config() -> AgentseedConfig:
    return AgentseedConfig(no_llm=True)
