"""Git helpers for incremental regeneration."""

from agentseed.utils.git import (
    FileMeta,
    build_meta_tag,
    get_head_sha,
    get_path_sha,
    has_uncommitted_changes,
    is_git_repo,
    needs_regeneration,
    parse_meta_tag,
)

__all__ = [
    "FileMeta",
    "build_meta_tag",
    "get_head_sha",
    "get_path_sha",
    "has_uncommitted_changes",
    "is_git_repo",
    "needs_regeneration",
    "parse_meta_tag",
]
