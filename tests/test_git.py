"""Tests for git metadata tags and staleness checks (git calls mocked)."""

from __future__ import annotations

import subprocess
from pathlib import Path
from unittest.mock import patch

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

_RUN = "agentseed.utils.git.subprocess.run"


def _completed(stdout: str = "", returncode: int = 0) -> subprocess.CompletedProcess:
    return subprocess.CompletedProcess(args=["git"], returncode=returncode, stdout=stdout, stderr="")


class TestMetaTag:
    def test_build_and_parse(self):
        meta = FileMeta(sha="abc123def456", timestamp="2025-01-15T10:00:00+00:00")
        tag = build_meta_tag(meta)

        assert tag == (
            '<!-- agentseed:meta {"sha":"abc123def456",'
            '"timestamp":"2025-01-15T10:00:00+00:00","format":"agentseed-v1"} -->'
        )
        assert parse_meta_tag(tag) == meta

    def test_parse_from_full_file(self):
        content = "\n".join(
            [
                "# Project Rules",
                "",
                "## Stack",
                '<!-- agentseed:meta {"sha":"deadbeef","timestamp":"t","format":"agentseed-v1"} -->',
            ]
        )

        assert parse_meta_tag(content).sha == "deadbeef"

    def test_no_tag(self):
        assert parse_meta_tag("# Just markdown") is None

    def test_malformed_json(self):
        assert parse_meta_tag("<!-- agentseed:meta {invalid json} -->") is None

    def test_missing_fields(self):
        assert parse_meta_tag('<!-- agentseed:meta {"sha":"x"} -->') is None


class TestNeedsRegeneration:
    def _content(self, sha: str) -> str:
        return f"# Content\n\n{build_meta_tag(FileMeta(sha=sha, timestamp='t'))}\n"

    def test_missing_content(self, tmp_path: Path):
        assert needs_regeneration(None, "abc", tmp_path)

    def test_missing_sha(self, tmp_path: Path):
        assert needs_regeneration("content", None, tmp_path)

    def test_no_meta(self, tmp_path: Path):
        assert needs_regeneration("# no tag", "abc", tmp_path)

    def test_sha_changed(self, tmp_path: Path):
        assert needs_regeneration(self._content("old"), "new", tmp_path)

    def test_fresh_at_root_ignores_uncommitted(self, tmp_path: Path):
        with patch(_RUN) as run:
            assert not needs_regeneration(self._content("abc"), "abc", tmp_path)
        run.assert_not_called()

    def test_subfolder_with_uncommitted_changes(self, tmp_path: Path):
        with patch(_RUN, return_value=_completed(" M pkg/a.py\n")):
            assert needs_regeneration(self._content("abc"), "abc", tmp_path, "pkg")

    def test_subfolder_clean(self, tmp_path: Path):
        with patch(_RUN, return_value=_completed("")):
            assert not needs_regeneration(self._content("abc"), "abc", tmp_path, "pkg")


class TestGitCommands:
    def test_head_sha(self, tmp_path: Path):
        with patch(_RUN, return_value=_completed("a1b2c3\n")) as run:
            assert get_head_sha(tmp_path) == "a1b2c3"
        assert run.call_args.args[0] == ["git", "rev-parse", "HEAD"]

    def test_head_sha_failure(self, tmp_path: Path):
        with patch(_RUN, return_value=_completed("", returncode=128)):
            assert get_head_sha(tmp_path) is None

    def test_git_not_installed(self, tmp_path: Path):
        with patch(_RUN, side_effect=FileNotFoundError("git")):
            assert not is_git_repo(tmp_path)
            assert has_uncommitted_changes(tmp_path) is True

    def test_path_sha_falls_back_to_head(self, tmp_path: Path):
        with patch(_RUN, side_effect=[_completed(""), _completed("headsha\n")]) as run:
            assert get_path_sha(tmp_path, "pkg") == "headsha"
        assert run.call_args_list[0].args[0] == ["git", "log", "-1", "--format=%H", "--", "pkg"]

    def test_path_sha(self, tmp_path: Path):
        with patch(_RUN, return_value=_completed("pathsha\n")):
            assert get_path_sha(tmp_path, "pkg") == "pathsha"

    def test_uncommitted_changes_scoped_to_path(self, tmp_path: Path):
        with patch(_RUN, return_value=_completed("")) as run:
            assert has_uncommitted_changes(tmp_path, "pkg") is False
        assert run.call_args.args[0] == ["git", "status", "--porcelain", "--", "pkg"]
