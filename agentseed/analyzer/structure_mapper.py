"""Structure mapping — bounded directory tree and entry-point discovery."""

from __future__ import annotations

from collections.abc import Iterable
from pathlib import Path

from agentseed.analyzer.fs import glob_paths, walk_tree
from agentseed.analyzer.models import DirectoryEntry, StructureInfo

# Conventional entry files, ordered by priority
ENTRY_POINT_PATTERNS: list[str] = [
    "src/index.*",
    "src/main.*",
    "src/app.*",
    "src/cli.*",
    "index.*",
    "main.*",
    "app.*",
    "server.*",
    "src/server.*",
    "cmd/main.*",
    "lib/index.*",
    "manage.py",
    "app.py",
    "main.py",
    "dbt_project.yml",
    "airflow.cfg",
    "alembic.ini",
]

# Walk limits (path components)
_MAX_FILE_WALK_DEPTH = 6
_MAX_DIR_WALK_DEPTH = 4
# Tree limits (depth = components - 1)
_TREE_DIR_LIMIT = 50
_TREE_MAX_DIR_DEPTH = 3
_TREE_MAX_FILE_DEPTH = 2


def map_structure(root: Path, ignore: Iterable[str] = ()) -> StructureInfo:
    ignore = list(ignore)
    files, dirs = walk_tree(
        root,
        ignore,
        max_file_depth=_MAX_FILE_WALK_DEPTH,
        max_dir_depth=_MAX_DIR_WALK_DEPTH,
    )

    tree: list[DirectoryEntry] = []
    for d in dirs[:_TREE_DIR_LIMIT]:
        depth = d.count("/")
        if depth <= _TREE_MAX_DIR_DEPTH:
            tree.append(DirectoryEntry(path=f"{d}/", type="directory", depth=depth))
    for f in files:
        depth = f.count("/")
        if depth <= _TREE_MAX_FILE_DEPTH:
            tree.append(DirectoryEntry(path=f, type="file", depth=depth))
    tree.sort(key=lambda e: e.path)

    return StructureInfo(
        total_files=len(files),
        total_dirs=len(dirs),
        tree=tuple(tree),
        entry_points=tuple(find_entry_points(root, ignore)),
    )


def find_entry_points(root: Path, ignore: Iterable[str] = ()) -> list[str]:
    """Match ENTRY_POINT_PATTERNS in priority order; duplicates keep first position."""
    ignore = list(ignore)
    seen: dict[str, None] = {}
    for pattern in ENTRY_POINT_PATTERNS:
        for hit in glob_paths(root, pattern, ignore):
            seen.setdefault(hit)
    return list(seen)
