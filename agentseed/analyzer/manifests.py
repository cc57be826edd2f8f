"""Manifest loaders shared by the framework detector and command extractor.

Every loader fails closed: a missing or malformed manifest yields ``None`` or
an empty collection, never an exception.
"""

from __future__ import annotations

import json
import re
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

if sys.version_info >= (3, 11):
    import tomllib
else:
    import tomli as tomllib

import structlog

from agentseed.analyzer.fs import file_exists, read_text

log = structlog.get_logger("agentseed.analyzer")

# PEP 508 simplified: name followed by optional extras, specifiers and markers
_PEP508_NAME_RE = re.compile(r"^([A-Za-z0-9]([A-Za-z0-9._-]*[A-Za-z0-9])?)")
_NORMALIZE_RE = re.compile(r"[-_.]+")

# Python package-manager lockfiles, ordered by precedence
PYTHON_LOCKFILES: list[tuple[str, str]] = [
    ("uv.lock", "uv run "),
    ("poetry.lock", "poetry run "),
    ("Pipfile.lock", "pipenv run "),
    ("pdm.lock", "pdm run "),
]


def normalize_name(name: str) -> str:
    """Lower-case a Python distribution name and fold ``_``/``.`` runs to ``-``."""
    return _NORMALIZE_RE.sub("-", name).lower()


def parse_requirement_name(raw: str) -> str | None:
    """Return the normalised package name of a requirement line, or None.

    Version specifiers, extras and environment markers are stripped;
    comments, blank lines and pip options (``-r``, ``-e``, ``--index-url``)
    yield None.
    """
    line = raw.split("#", 1)[0].strip()
    if not line or line.startswith("-"):
        return None
    m = _PEP508_NAME_RE.match(line)
    if not m:
        return None
    return normalize_name(m.group(1))


def load_json(path: Path) -> dict[str, Any] | None:
    if not file_exists(path):
        return None
    try:
        data = json.loads(read_text(path))
    except (OSError, ValueError):
        log.debug("manifest.unparseable", path=str(path))
        return None
    return data if isinstance(data, dict) else None


def load_toml(path: Path) -> dict[str, Any] | None:
    if not file_exists(path):
        return None
    try:
        return tomllib.loads(read_text(path))
    except (OSError, tomllib.TOMLDecodeError):
        log.debug("manifest.unparseable", path=str(path))
        return None


def load_package_json(root: Path) -> dict[str, Any] | None:
    return load_json(root / "package.json")


def load_pyproject(root: Path) -> dict[str, Any] | None:
    return load_toml(root / "pyproject.toml")


def get_table(data: Any, *keys: str) -> dict[str, Any]:
    """Follow *keys* through nested TOML/JSON tables; ``{}`` when any level is not a table."""
    for key in keys:
        if not isinstance(data, dict):
            return {}
        data = data.get(key)
    return data if isinstance(data, dict) else {}


def python_prefix(root: Path) -> str:
    """Command prefix implied by the first Python lockfile found (``""`` if none)."""
    for lockfile, prefix in PYTHON_LOCKFILES:
        if file_exists(root / lockfile):
            return prefix
    return ""


# ── Python dependency set ────────────────────────────────────────────────


def load_python_deps(root: Path) -> set[str]:
    """Merge Python dependency names from every supported manifest.

    Sources: requirements.txt, PEP 621 ``project.dependencies``, Poetry
    dependency tables, setup.cfg ``install_requires`` and Pipfile packages.
    Names are normalised with :func:`normalize_name`.
    """
    pyproject = load_pyproject(root) or {}
    sources: list[tuple[str, Callable[[], list[str]]]] = [
        ("requirements.txt", lambda: _requirements_txt(root)),
        ("pyproject.toml", lambda: _pep621_deps(pyproject) + _poetry_deps(pyproject)),
        ("setup.cfg", lambda: _setup_cfg_deps(root)),
        ("Pipfile", lambda: _pipfile_deps(root)),
    ]
    deps: set[str] = set()
    for name, source in sources:
        try:
            deps.update(source())
        except (OSError, ValueError, TypeError, AttributeError) as exc:
            log.debug("manifest.deps_failed", source=name, root=str(root), error=str(exc))
    return deps


def has_python_dependency(deps: set[str] | frozenset[str], *names: str) -> bool:
    return any(normalize_name(n) in deps for n in names)


def _requirements_txt(root: Path) -> list[str]:
    path = root / "requirements.txt"
    if not file_exists(path):
        return []
    try:
        content = read_text(path)
    except OSError:
        return []
    names = (parse_requirement_name(line) for line in content.splitlines())
    return [n for n in names if n]


def _pep621_deps(pyproject: dict[str, Any]) -> list[str]:
    project = pyproject.get("project")
    if not isinstance(project, dict):
        return []
    raw = project.get("dependencies", [])
    if not isinstance(raw, list):
        return []
    names = (parse_requirement_name(item) for item in raw if isinstance(item, str))
    return [n for n in names if n]


def _poetry_deps(pyproject: dict[str, Any]) -> list[str]:
    poetry = get_table(pyproject, "tool", "poetry")
    if not poetry:
        return []

    tables: list[Any] = [poetry.get("dependencies"), poetry.get("dev-dependencies")]
    groups = poetry.get("group")
    if isinstance(groups, dict):
        tables.extend(g.get("dependencies") for g in groups.values() if isinstance(g, dict))

    names: list[str] = []
    for table in tables:
        if not isinstance(table, dict):
            continue
        names.extend(normalize_name(k) for k in table if k.lower() != "python")
    return names


def _setup_cfg_deps(root: Path) -> list[str]:
    path = root / "setup.cfg"
    if not file_exists(path):
        return []
    try:
        content = read_text(path)
    except OSError:
        return []

    names: list[str] = []
    in_options = False
    in_block = False
    for raw_line in content.splitlines():
        stripped = raw_line.strip()

        if stripped.startswith("[") and stripped.endswith("]"):
            in_options = stripped.lower() == "[options]"
            in_block = False
            continue
        if not in_options:
            continue

        if stripped.startswith("install_requires"):
            key, _, value = stripped.partition("=")
            if key.strip() != "install_requires":
                continue
            in_block = True
            name = parse_requirement_name(value)
            if name:
                names.append(name)
            continue

        if in_block:
            # Continuation lines are indented; anything else ends the block.
            if raw_line[:1] in (" ", "\t") and stripped:
                name = parse_requirement_name(stripped)
                if name:
                    names.append(name)
            elif stripped:
                in_block = False

    return names


def _pipfile_deps(root: Path) -> list[str]:
    data = load_toml(root / "Pipfile")
    if data is None:
        return []
    names: list[str] = []
    for section in ("packages", "dev-packages"):
        table = data.get(section)
        if isinstance(table, dict):
            names.extend(normalize_name(k) for k in table)
    return names
