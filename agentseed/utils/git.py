"""Git helpers for staleness tracking of generated files."""

from __future__ import annotations

import json
import re
import subprocess
from dataclasses import asdict, dataclass
from pathlib import Path

import structlog

log = structlog.get_logger("agentseed.git")

META_FORMAT = "agentseed-v1"
_META_RE = re.compile(r"<!-- agentseed:meta (.+?) -->")
_GIT_TIMEOUT = 10


@dataclass(frozen=True)
class FileMeta:
    sha: str
    timestamp: str
    format: str = META_FORMAT


def _git(cwd: Path | str, *args: str) -> str | None:
    """Run a git command in *cwd*; return stripped stdout, or None on failure."""
    try:
        result = subprocess.run(
            ["git", *args],
            capture_output=True,
            text=True,
            cwd=str(cwd),
            timeout=_GIT_TIMEOUT,
        )
    except (subprocess.SubprocessError, OSError) as exc:
        log.debug("git.failed", args=args, error=str(exc))
        return None
    if result.returncode != 0:
        return None
    return result.stdout.strip()


def is_git_repo(cwd: Path | str) -> bool:
    return _git(cwd, "rev-parse", "--git-dir") is not None


def get_head_sha(cwd: Path | str) -> str | None:
    return _git(cwd, "rev-parse", "HEAD") or None


def get_path_sha(cwd: Path | str, relative_path: str) -> str | None:
    """Latest commit touching *relative_path*, falling back to HEAD for untracked paths."""
    return _git(cwd, "log", "-1", "--format=%H", "--", relative_path) or get_head_sha(cwd)


def has_uncommitted_changes(cwd: Path | str, relative_path: str | None = None) -> bool:
    """True when the path has staged or unstaged changes; also True if git fails."""
    args = ["status", "--porcelain"]
    if relative_path:
        args += ["--", relative_path]
    status = _git(cwd, *args)
    if status is None:
        return True
    return bool(status)


def build_meta_tag(meta: FileMeta) -> str:
    return f"<!-- agentseed:meta {json.dumps(asdict(meta), separators=(',', ':'))} -->"


def parse_meta_tag(content: str) -> FileMeta | None:
    match = _META_RE.search(content)
    if not match:
        return None
    try:
        data = json.loads(match.group(1))
        return FileMeta(sha=data["sha"], timestamp=data["timestamp"], format=data.get("format", META_FORMAT))
    except (json.JSONDecodeError, KeyError, TypeError):
        return None


def needs_regeneration(
    existing_content: str | None,
    current_sha: str | None,
    cwd: Path | str,
    relative_path: str | None = None,
) -> bool:
    """Decide whether a generated file is stale.

    Stale when the file is missing, carries no metadata tag, or was generated
    at a different commit. Uncommitted changes only count for subfolders: at
    the root the generated files themselves show up as uncommitted.
    """
    if not existing_content or not current_sha:
        return True
    meta = parse_meta_tag(existing_content)
    if meta is None:
        return True
    if meta.sha != current_sha:
        return True
    if relative_path and has_uncommitted_changes(cwd, relative_path):
        return True
    return False
