"""Pattern detection — naming convention, file organization, monorepo, config/CI files."""

from __future__ import annotations

import re
from collections.abc import Iterable
from pathlib import Path, PurePosixPath

from agentseed.analyzer.fs import dir_exists, file_exists, glob_paths, walk_tree
from agentseed.analyzer.models import NamingConvention, PatternInfo

CONFIG_FILES: list[str] = [
    "tsconfig.json", "jsconfig.json",
    ".eslintrc", ".eslintrc.js", ".eslintrc.json", ".eslintrc.yml", "eslint.config.js", "eslint.config.mjs",
    ".prettierrc", ".prettierrc.js", ".prettierrc.json", "prettier.config.js",
    ".editorconfig",
    "biome.json",
    ".env.example",
    "docker-compose.yml", "docker-compose.yaml", "Dockerfile",
    "pyproject.toml", "setup.py", "setup.cfg", "ruff.toml", ".pre-commit-config.yaml",
    "Cargo.toml",
    "go.mod",
    "Gemfile",
    "composer.json",
]

CI_FILES: list[str] = [
    ".github/workflows/*.yml",
    ".github/workflows/*.yaml",
    ".gitlab-ci.yml",
    "Jenkinsfile",
    ".circleci/config.yml",
    ".travis.yml",
    "bitbucket-pipelines.yml",
    "azure-pipelines.yml",
]

MONOREPO_MARKERS: list[str] = [
    "lerna.json",
    "pnpm-workspace.yaml",
    "turbo.json",
    "nx.json",
    "rush.json",
]
WORKSPACE_GLOBS: list[str] = ["packages/*/package.json", "apps/*/package.json"]

FEATURE_DIRS = ("features", "modules", "domains", "pages", "routes")
MODULE_DIRS = (
    "router", "routers", "middleware", "middlewares",
    "adapter", "adapters", "helper", "helpers",
    "plugin", "plugins", "handler", "handlers",
    "client", "utils", "hooks", "providers",
)
LAYER_DIRS = ("controllers", "services", "models", "repositories")

SOURCE_DIR = "src"
# Paths sampled for naming: at most three components, e.g. src/auth/login.ts
_SAMPLE_DEPTH = 3

_CAMEL_HUMP_RE = re.compile(r"[a-z][A-Z]")


def detect_patterns(root: Path, ignore: Iterable[str] = ()) -> PatternInfo:
    ignore = list(ignore)
    source_files = _sample_source_files(root, ignore)

    return PatternInfo(
        naming_convention=detect_naming_convention(source_files),
        file_organization=detect_file_organization(
            source_files, _top_level_dirs(root, ignore), _source_sub_dirs(root, ignore)
        ),
        has_monorepo=detect_monorepo(root),
        config_files=tuple(cf for cf in CONFIG_FILES if file_exists(root / cf)),
        ci_files=tuple(hit for pattern in CI_FILES for hit in glob_paths(root, pattern)),
    )


def _top_level_dirs(root: Path, ignore: list[str]) -> list[str]:
    _, dirs = walk_tree(root, ignore, max_file_depth=0, max_dir_depth=1)
    return dirs


def _source_sub_dirs(root: Path, ignore: list[str]) -> list[str]:
    src = root / SOURCE_DIR
    if not dir_exists(src):
        return []
    _, dirs = walk_tree(src, ignore, max_file_depth=0, max_dir_depth=1)
    return dirs


def _sample_source_files(root: Path, ignore: list[str]) -> list[str]:
    src = root / SOURCE_DIR
    if not dir_exists(src):
        return []
    files, _ = walk_tree(src, ignore, max_file_depth=_SAMPLE_DEPTH - 1)
    return [f"{SOURCE_DIR}/{f}" for f in files]


# ── Naming convention ────────────────────────────────────────────────────


def classify_name(name: str) -> str | None:
    """Classify a basename (extension stripped), or None if no rule matches."""
    if "_" in name:
        return "snake"
    if "-" in name:
        return "kebab"
    if name[:1].isupper():
        return "pascal"
    if _CAMEL_HUMP_RE.search(name):
        return "camel"
    return None


def detect_naming_convention(files: Iterable[str]) -> NamingConvention:
    counts = {"camel": 0, "snake": 0, "kebab": 0, "pascal": 0}
    for f in files:
        kind = classify_name(PurePosixPath(f).stem)
        if kind:
            counts[kind] += 1

    total = sum(counts.values())
    if total == 0:
        return "mixed"
    best = max(counts.values())
    if best / total < 0.5:
        return "mixed"

    # Exact ties resolve kebab > snake > Pascal > camel
    if counts["kebab"] == best:
        return "kebab-case"
    if counts["snake"] == best:
        return "snake_case"
    if counts["pascal"] == best:
        return "PascalCase"
    return "camelCase"


# ── File organization ────────────────────────────────────────────────────


def detect_file_organization(
    files: Iterable[str],
    top_level_dirs: Iterable[str] = (),
    src_sub_dirs: Iterable[str] = (),
) -> str:
    """Classify layout from top-level dirs plus the dirs directly under src/.

    Directories are taken from the listings passed in and from the parents
    of *files*.
    """
    top_dirs: set[str] = set(top_level_dirs)
    src_dirs: set[str] = set(src_sub_dirs)
    for f in files:
        parts = f.split("/")
        if len(parts) > 1:
            top_dirs.add(parts[0])
        if parts[0] == SOURCE_DIR and len(parts) > 2:
            src_dirs.add(parts[1])
    all_dirs = top_dirs | src_dirs

    if any(d in all_dirs for d in FEATURE_DIRS):
        return "feature-based"
    if sum(1 for d in MODULE_DIRS if d in all_dirs) >= 2:
        return "module-based"
    if sum(1 for d in LAYER_DIRS if d in all_dirs) >= 2:
        return "layer-based"
    if "components" in all_dirs:
        return "component-based"
    if len(src_dirs) >= 3:
        return "domain-based"
    return "flat"


# ── Monorepo ─────────────────────────────────────────────────────────────


def detect_monorepo(root: Path) -> bool:
    if any(file_exists(root / marker) for marker in MONOREPO_MARKERS):
        return True
    return any(glob_paths(root, pattern) for pattern in WORKSPACE_GLOBS)
