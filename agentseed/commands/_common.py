"""Helpers shared by the init and scan commands."""

from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

import click

from agentseed.analyzer.fs import file_exists, read_text
from agentseed.providers.usage import UsageTracker
from agentseed.utils.git import FileMeta, needs_regeneration


@dataclass(frozen=True)
class CommandOptions:
    format: str = "agents"
    dry_run: bool = False
    output: str | None = None
    provider: str | None = None
    model: str | None = None
    force: bool = False

    @property
    def use_llm(self) -> bool:
        return bool(self.provider)


def make_meta(sha: str | None) -> FileMeta | None:
    if not sha:
        return None
    return FileMeta(sha=sha, timestamp=datetime.now(timezone.utc).isoformat())


def is_fresh(path: Path, sha: str, cwd: Path, relative_path: str | None = None) -> bool:
    """True when *path* exists and was generated at *sha* with no pending changes."""
    if not file_exists(path):
        return False
    return not needs_regeneration(read_text(path), sha, cwd, relative_path)


def write_output(path: Path, content: str) -> None:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(content, encoding="utf-8")


def print_usage(tracker: UsageTracker) -> None:
    summary = tracker.summary()
    if summary:
        click.echo(f"\n{summary}")
