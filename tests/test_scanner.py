"""Tests for subfolder qualification."""

from __future__ import annotations

from pathlib import Path

from agentseed.scanner import deduplicate_candidates, detect_subfolders
from agentseed.scanner.heuristics import (
    SubfolderCandidate,
    count_source_files,
    should_have_agents_md,
)


def _five_py(prefix: str) -> dict[str, str]:
    return {f"{prefix}/mod{i}.py": "" for i in range(5)}


class TestShouldHaveAgentsMd:
    def test_own_manifest(self, make_repo):
        root = make_repo({"services/api/pyproject.toml": ""})
        result = should_have_agents_md(root, root / "services" / "api")

        assert result == SubfolderCandidate("services/api", "Has own pyproject.toml")

    def test_manifest_precedence_follows_list(self, make_repo):
        root = make_repo({"web/go.mod": "", "web/package.json": "{}"})

        assert should_have_agents_md(root, root / "web").reason == "Has own package.json"

    def test_source_file_threshold(self, make_repo):
        root = make_repo(_five_py("core"))

        assert should_have_agents_md(root, root / "core") == SubfolderCandidate("core", "5 source files")

    def test_four_source_files_not_enough(self, make_repo):
        root = make_repo({f"core/m{i}.py": "" for i in range(4)} | {"core/README.md": ""})

        assert should_have_agents_md(root, root / "core") is None

    def test_non_code_component_rejects(self, make_repo):
        root = make_repo(_five_py("tests/unit") | {"tests/unit/package.json": "{}"})

        assert should_have_agents_md(root, root / "tests" / "unit") is None

    def test_non_code_match_is_case_insensitive(self, make_repo):
        root = make_repo(_five_py("Docs"))

        assert should_have_agents_md(root, root / "Docs") is None

    def test_nested_files_do_not_count(self, make_repo):
        root = make_repo(_five_py("lib/inner"))

        assert count_source_files(root / "lib") == 0
        assert should_have_agents_md(root, root / "lib") is None

    def test_mixed_source_extensions(self, make_repo):
        root = make_repo(
            {"x/a.go": "", "x/b.rs": "", "x/c.SQL": "", "x/d.sh": "", "x/e.vue": "", "x/f.txt": ""}
        )

        assert count_source_files(root / "x") == 5


class TestDetectSubfolders:
    def test_nested_candidates_deduplicated(self, make_repo):
        root = make_repo(
            {
                "packages/ui/package.json": "{}",
                **_five_py("packages/ui/src"),
            }
        )
        result = detect_subfolders(root)

        assert [c.relative_path for c in result] == ["packages/ui"]

    def test_test_directories_never_candidates(self, make_repo):
        root = make_repo({**_five_py("tests/unit"), "tests/unit/package.json": "{}"})

        assert detect_subfolders(root) == []

    def test_ignored_and_hidden_dirs_pruned(self, make_repo):
        root = make_repo(
            {
                "node_modules/pkg/package.json": "{}",
                ".cache/tool/package.json": "{}",
                "build/out/package.json": "{}",
                "apps/web/package.json": "{}",
            }
        )

        assert [c.relative_path for c in detect_subfolders(root)] == ["apps/web"]

    def test_root_itself_not_a_candidate(self, make_repo):
        root = make_repo({"package.json": "{}", **_five_py(".")})

        assert detect_subfolders(root) == []

    def test_siblings_all_kept(self, make_repo):
        root = make_repo(
            {
                "services/api/go.mod": "",
                "services/worker/Cargo.toml": "",
                **_five_py("services/shared"),
            }
        )
        paths = {c.relative_path for c in detect_subfolders(root)}

        assert paths == {"services/api", "services/worker", "services/shared"}

    def test_empty(self, tmp_path: Path):
        assert detect_subfolders(tmp_path) == []


class TestDeduplicate:
    def test_drops_descendants_only(self):
        candidates = [
            SubfolderCandidate("a", "r"),
            SubfolderCandidate("a/b", "r"),
            SubfolderCandidate("a/b/c", "r"),
            SubfolderCandidate("ab", "r"),
            SubfolderCandidate("x/y", "r"),
        ]

        assert [c.relative_path for c in deduplicate_candidates(candidates)] == ["a", "ab", "x/y"]

    def test_no_survivor_has_ancestor_in_set(self):
        candidates = [SubfolderCandidate(p, "r") for p in ["p/q", "p", "p/q/r", "z"]]
        kept = deduplicate_candidates(candidates)
        paths = {c.relative_path for c in kept}

        for c in kept:
            parts = c.relative_path.split("/")
            assert not any("/".join(parts[:i]) in paths for i in range(1, len(parts)))
