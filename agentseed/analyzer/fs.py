"""Filesystem access helpers shared by the detectors.

All paths returned by the walking helpers are POSIX-style and relative to the
scanned root, so results are stable across platforms.
"""

from __future__ import annotations

import fnmatch
import os
from collections.abc import Iterable
from pathlib import Path


def file_exists(path: Path) -> bool:
    try:
        return path.is_file()
    except OSError:
        return False


def dir_exists(path: Path) -> bool:
    try:
        return path.is_dir()
    except OSError:
        return False


def path_exists(root: Path, rel: str) -> bool:
    """Existence check where a trailing ``/`` means "must be a directory"."""
    if rel.endswith("/"):
        return dir_exists(root / rel.rstrip("/"))
    return file_exists(root / rel)


def read_text(path: Path) -> str:
    return path.read_text(encoding="utf-8", errors="replace")


def walk_tree(
    root: Path,
    ignore: Iterable[str] = (),
    *,
    max_file_depth: int | None = None,
    max_dir_depth: int | None = None,
) -> tuple[list[str], list[str]]:
    """Walk *root* and return ``(files, dirs)`` as relative POSIX paths.

    Hidden entries (leading ``.``) and directories named in *ignore* are
    skipped. Depth is the number of path components, so ``a.py`` has depth 1
    and ``src/a.py`` depth 2. Directory paths carry no trailing slash.
    """
    ignored = set(ignore)
    files: list[str] = []
    dirs: list[str] = []
    limit: int | None = None
    if max_file_depth is not None and max_dir_depth is not None:
        limit = max(max_file_depth, max_dir_depth)

    for dirpath, dirnames, filenames in os.walk(root):
        rel_dir = Path(dirpath).relative_to(root)
        depth = 0 if rel_dir == Path(".") else len(rel_dir.parts)

        children = sorted(d for d in dirnames if not d.startswith(".") and d not in ignored)
        for d in children:
            if max_dir_depth is None or depth + 1 <= max_dir_depth:
                dirs.append(_join(rel_dir, d))
        # Only descend where something at the next level could still be reported.
        dirnames[:] = [d for d in children if limit is None or depth + 1 < limit]

        if max_file_depth is not None and depth + 1 > max_file_depth:
            continue
        for f in sorted(filenames):
            if not f.startswith("."):
                files.append(_join(rel_dir, f))

    return files, dirs


def glob_paths(
    root: Path,
    pattern: str,
    ignore: Iterable[str] = (),
) -> list[str]:
    """Glob *pattern* under *root*, returning sorted relative POSIX file paths.

    Matches whose path contains an ignored directory name are dropped.
    Dot-directories are matched when the pattern names them literally
    (e.g. ``.github/workflows/*.yml``). Recursive patterns (``**``) are
    matched against :func:`walk_tree`, so ignored and hidden directories
    are pruned rather than walked.
    """
    if "**" in pattern:
        return _glob_recursive(root, pattern, ignore)

    ignored = set(ignore)
    literal_parts = set(pattern.split("/"))
    hits: list[str] = []
    try:
        candidates = sorted(root.glob(pattern))
    except (OSError, ValueError):
        return []
    for hit in candidates:
        if not file_exists(hit):
            continue
        rel = hit.relative_to(root)
        parents = rel.parts[:-1]
        if any(part in ignored for part in parents):
            continue
        if any(part.startswith(".") and part not in literal_parts for part in parents):
            continue
        hits.append(rel.as_posix())
    return hits


def _glob_recursive(root: Path, pattern: str, ignore: Iterable[str]) -> list[str]:
    ignore = list(ignore)
    parts = pattern.split("/")
    # Walk only below the literal prefix, e.g. "src" for "src/**/*.ts"
    base: list[str] = []
    while parts and not any(ch in parts[0] for ch in "*?["):
        base.append(parts.pop(0))
    start = root.joinpath(*base)
    if any(part in ignore for part in base) or not dir_exists(start):
        return []

    files, _ = walk_tree(start, ignore)
    prefix = "/".join(base)
    return sorted(
        f"{prefix}/{f}" if prefix else f
        for f in files
        if _match_parts(f.split("/"), parts)
    )


def _match_parts(path: list[str], pattern: list[str]) -> bool:
    """Segment-wise glob match where ``**`` spans zero or more segments."""
    if not pattern:
        return not path
    head, rest = pattern[0], pattern[1:]
    if head == "**":
        return any(_match_parts(path[i:], rest) for i in range(len(path) + 1))
    return bool(path) and fnmatch.fnmatchcase(path[0], head) and _match_parts(path[1:], rest)


def _join(rel_dir: Path, name: str) -> str:
    if rel_dir == Path("."):
        return name
    return (rel_dir / name).as_posix()
