"""Tests for language detection."""

from __future__ import annotations

from pathlib import Path

from agentseed.analyzer.language_detector import detect_languages, summarize_languages


class TestDetectLanguages:
    def test_typescript_majority(self, make_repo):
        root = make_repo(
            {
                "src/index.ts": "",
                "src/app.ts": "",
                "src/view.tsx": "",
                "scripts/build.js": "",
            }
        )
        langs = detect_languages(root)

        assert [lang.name for lang in langs] == ["TypeScript", "JavaScript"]
        assert langs[0].file_count == 3
        assert langs[0].percentage == 75
        assert langs[1].percentage == 25

    def test_unclassified_files_excluded_from_denominator(self, make_repo):
        root = make_repo({"main.py": "", "README.md": "", "LICENSE": "", "data.bin": ""})
        langs = detect_languages(root)

        assert len(langs) == 1
        assert langs[0].name == "Python"
        assert langs[0].percentage == 100

    def test_empty_directory(self, tmp_path: Path):
        assert detect_languages(tmp_path) == []

    def test_ignored_and_hidden_dirs_skipped(self, make_repo):
        root = make_repo(
            {
                "app.py": "",
                "node_modules/lib/index.js": "",
                ".venv/lib/site.py": "",
                "dist/bundle.js": "",
            }
        )
        langs = detect_languages(root, ["node_modules", "dist"])

        assert [(lang.name, lang.file_count) for lang in langs] == [("Python", 1)]

    def test_extension_case_insensitive(self, make_repo):
        root = make_repo({"analysis.R": "", "model.r": ""})
        langs = detect_languages(root)

        assert langs[0].name == "R"
        assert langs[0].file_count == 2


class TestSummarizeLanguages:
    def test_percentages_rounded_independently(self):
        langs = summarize_languages(["a.py", "b.go", "c.rs"])

        # 33.33 each, rounded independently
        assert [lang.percentage for lang in langs] == [33, 33, 33]
        assert sum(lang.percentage for lang in langs) == 99

    def test_half_rounds_up(self):
        files = ["a.py"] + [f"f{i}.go" for i in range(7)]
        langs = {lang.name: lang.percentage for lang in summarize_languages(files)}

        # 1/8 = 12.5%, 7/8 = 87.5%
        assert langs == {"Go": 88, "Python": 13}

    def test_sorted_descending_and_sums_near_100(self):
        files = ["a.ts", "b.ts", "c.ts", "d.py", "e.py", "f.sql", "g.sh"]
        langs = summarize_languages(files)

        percentages = [lang.percentage for lang in langs]
        assert percentages == sorted(percentages, reverse=True)
        assert abs(sum(percentages) - 100) <= len(langs)

    def test_ties_keep_first_counted_order(self):
        langs = summarize_languages(["a.go", "b.py"])

        assert [lang.name for lang in langs] == ["Go", "Python"]
