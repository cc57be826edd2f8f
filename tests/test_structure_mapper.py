"""Tests for structure mapping and entry-point discovery."""

from __future__ import annotations

from pathlib import Path

from agentseed.analyzer.structure_mapper import find_entry_points, map_structure


class TestMapStructure:
    def test_counts_and_tree(self, make_repo):
        root = make_repo(
            {
                "package.json": "{}",
                "src/index.ts": "",
                "src/lib/util.ts": "",
                "src/lib/deep/more/file.ts": "",
            }
        )
        info = map_structure(root)

        assert info.total_files == 4
        assert info.total_dirs == 4
        paths = [e.path for e in info.tree]
        assert paths == sorted(paths)
        assert "src/" in paths
        assert "src/lib/deep/" in paths
        assert "src/lib/util.ts" in paths
        # depth 4 file is counted but not in the tree
        assert "src/lib/deep/more/file.ts" not in paths

    def test_tree_depths(self, make_repo):
        root = make_repo({"a/b/c/d/e.txt": "", "top.txt": ""})
        info = map_structure(root)
        by_path = {e.path: e for e in info.tree}

        assert by_path["a/"].depth == 0
        assert by_path["a/b/c/d/"].depth == 3
        assert by_path["top.txt"].type == "file"

    def test_walk_depth_limits(self, make_repo):
        root = make_repo({"1/2/3/4/5/6/7/deep.txt": "", "1/2/3/4/5/six.txt": ""})
        info = map_structure(root)

        # files to depth 6, directories to depth 4
        assert info.total_files == 1
        assert info.total_dirs == 4

    def test_ignored_dirs_pruned(self, make_repo):
        root = make_repo({"node_modules/x/index.js": "", "main.py": ""})
        info = map_structure(root, ["node_modules"])

        assert info.total_files == 1
        assert info.total_dirs == 0

    def test_empty(self, tmp_path: Path):
        info = map_structure(tmp_path)

        assert info.total_files == 0
        assert info.tree == ()
        assert info.entry_points == ()


class TestEntryPoints:
    def test_priority_order_and_dedup(self, make_repo):
        root = make_repo(
            {
                "manage.py": "",
                "main.py": "",
                "src/index.ts": "",
                "app.py": "",
                "alembic.ini": "",
            }
        )

        assert find_entry_points(root) == [
            "src/index.ts",
            "main.py",
            "app.py",
            "manage.py",
            "alembic.ini",
        ]

    def test_cmd_main_go(self, make_repo):
        root = make_repo({"cmd/main.go": "package main"})

        assert find_entry_points(root) == ["cmd/main.go"]
