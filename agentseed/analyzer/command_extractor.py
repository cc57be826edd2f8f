"""Command extraction — per-ecosystem probes producing runnable commands.

Each probe is independent and fails closed: a missing or malformed manifest
contributes no commands and never aborts sibling probes. The Python
package-manager prefix (``uv run ``, ``poetry run `` ...) is computed once per
root and handed to every Python-ecosystem probe through :class:`ProbeContext`.
"""

from __future__ import annotations

import re
from collections.abc import Callable
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import structlog

from agentseed.analyzer.fs import dir_exists, file_exists, glob_paths, read_text
from agentseed.analyzer.manifests import (
    get_table,
    has_python_dependency,
    load_package_json,
    load_pyproject,
    load_python_deps,
    python_prefix,
)
from agentseed.analyzer.models import CommandInfo

log = structlog.get_logger("agentseed.analyzer")

# package.json scripts always surfaced (plus anything starting with test/build)
IMPORTANT_SCRIPTS = frozenset(
    {
        "dev", "start", "build", "test", "lint", "format",
        "preview", "serve", "watch", "check", "typecheck",
        "e2e", "test:unit", "test:e2e", "test:watch",
    }
)

# JS lockfile -> replacement for "npm run", ordered by precedence
JS_LOCKFILES: list[tuple[tuple[str, ...], str]] = [
    (("pnpm-lock.yaml",), "pnpm"),
    (("yarn.lock",), "yarn"),
    (("bun.lockb", "bun.lock"), "bun run"),
]

_MAKE_TARGET_RE = re.compile(r"^([A-Za-z_][\w-]*):(?!=)", re.MULTILINE)


@dataclass(frozen=True)
class ProbeContext:
    """Per-root facts shared by all probes, computed once per extraction."""

    prefix: str = ""
    python_deps: frozenset[str] = field(default_factory=frozenset)

    def has_dep(self, *names: str) -> bool:
        return has_python_dependency(self.python_deps, *names)


Probe = Callable[[Path, ProbeContext], list[CommandInfo]]


def extract_commands(root: Path) -> list[CommandInfo]:
    """Return the union of commands from every recognised ecosystem at *root*."""
    ctx = ProbeContext(prefix=python_prefix(root), python_deps=frozenset(load_python_deps(root)))
    commands: list[CommandInfo] = []
    for name, probe in PROBES:
        commands.extend(_run_probe(name, probe, root, ctx))
    return commands


def _run_probe(name: str, probe: Probe, root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    try:
        return probe(root, ctx)
    except (OSError, ValueError, TypeError, AttributeError, KeyError) as exc:
        log.debug("commands.probe_failed", probe=name, root=str(root), error=str(exc))
        return []


def _fixed(source: str, prefix: str, pairs: list[tuple[str, str]]) -> list[CommandInfo]:
    return [CommandInfo(name=n, command=f"{prefix}{cmd}", source=source) for n, cmd in pairs]


# ── JavaScript / build graph ─────────────────────────────────────────────


def _package_json(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    pkg = load_package_json(root)
    if pkg is None:
        return []
    scripts = pkg.get("scripts")
    if not isinstance(scripts, dict):
        return []

    runner = "npm run"
    for lockfiles, replacement in JS_LOCKFILES:
        if any(file_exists(root / lf) for lf in lockfiles):
            runner = replacement
            break

    return [
        CommandInfo(name=name, command=f"{runner} {name}", source="package.json scripts")
        for name in scripts
        if name in IMPORTANT_SCRIPTS or name.startswith(("test", "build"))
    ]


def _makefile(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    path = root / "Makefile"
    if not file_exists(path):
        return []
    seen: dict[str, None] = {}
    for m in _MAKE_TARGET_RE.finditer(read_text(path)):
        target = m.group(1)
        if not target.startswith((".", "_")):
            seen.setdefault(target)
    return [CommandInfo(name=t, command=f"make {t}", source="Makefile") for t in seen]


# ── Python project ───────────────────────────────────────────────────────


def _python_project(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    p = ctx.prefix
    commands: list[CommandInfo] = []
    pyproject = load_pyproject(root) or {}

    if file_exists(root / "manage.py"):
        commands.extend(
            _fixed(
                "Django",
                p,
                [
                    ("runserver", "python manage.py runserver"),
                    ("migrate", "python manage.py migrate"),
                    ("makemigrations", "python manage.py makemigrations"),
                    ("test", "python manage.py test"),
                ],
            )
        )

    if _has_pytest(root, pyproject, ctx):
        commands.append(CommandInfo(name="test", command=f"{p}pytest", source="pytest"))

    script_tables: list[tuple[dict[str, Any], str, str]] = [
        (get_table(pyproject, "project", "scripts"), "", "pyproject.toml scripts"),
        (get_table(pyproject, "tool", "poetry", "scripts"), "", "Poetry scripts"),
        (get_table(pyproject, "tool", "poe", "tasks"), "poe ", "Poe tasks"),
        (
            get_table(pyproject, "tool", "hatch", "envs", "default", "scripts"),
            "hatch run ",
            "Hatch scripts",
        ),
    ]
    for table, runner, source in script_tables:
        commands.extend(
            CommandInfo(name=name, command=f"{p}{runner}{name}", source=source) for name in table
        )
    return commands


def _has_pytest(root: Path, pyproject: dict[str, Any], ctx: ProbeContext) -> bool:
    if file_exists(root / "pytest.ini") or file_exists(root / "conftest.py"):
        return True
    if "pytest" in get_table(pyproject, "tool"):
        return True
    setup_cfg = root / "setup.cfg"
    if file_exists(setup_cfg) and "[tool:pytest]" in read_text(setup_cfg):
        return True
    return ctx.has_dep("pytest")


# ── Fixed-command ecosystems ─────────────────────────────────────────────


def _cargo(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    if not file_exists(root / "Cargo.toml"):
        return []
    return _fixed(
        "Cargo.toml",
        "",
        [("build", "cargo build"), ("test", "cargo test"), ("run", "cargo run"), ("check", "cargo check")],
    )


def _go(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    if not file_exists(root / "go.mod"):
        return []
    return _fixed(
        "go.mod",
        "",
        [("build", "go build ./..."), ("test", "go test ./..."), ("vet", "go vet ./...")],
    )


def _dbt(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    if not file_exists(root / "dbt_project.yml"):
        return []
    return _fixed(
        "dbt",
        "",
        [
            ("run", "dbt run"),
            ("test", "dbt test"),
            ("build", "dbt build"),
            ("compile", "dbt compile"),
            ("docs", "dbt docs generate && dbt docs serve"),
            ("seed", "dbt seed"),
            ("snapshot", "dbt snapshot"),
        ],
    )


def _airflow(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    has_airflow = (
        file_exists(root / "airflow.cfg")
        or dir_exists(root / "dags")
        or ctx.has_dep("apache-airflow")
    )
    if not has_airflow:
        return []
    return _fixed(
        "Airflow",
        "",
        [
            ("webserver", "airflow webserver"),
            ("scheduler", "airflow scheduler"),
            ("test-dag", "airflow dags test <dag_id>"),
            ("list-dags", "airflow dags list"),
        ],
    )


def _dagster(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    if not (file_exists(root / "workspace.yaml") or ctx.has_dep("dagster")):
        return []
    return _fixed(
        "Dagster",
        ctx.prefix,
        [("dev", "dagster dev"), ("materialize", "dagster asset materialize --select '*'")],
    )


def _prefect(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    if not (file_exists(root / "prefect.yaml") or ctx.has_dep("prefect")):
        return []
    return _fixed(
        "Prefect",
        ctx.prefix,
        [("server", "prefect server start"), ("deploy", "prefect deploy --all")],
    )


def _spark(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    if not ctx.has_dep("pyspark"):
        return []
    return _fixed("Spark", ctx.prefix, [("submit", "spark-submit <app.py>")])


def _alembic(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    if not file_exists(root / "alembic.ini"):
        return []
    return _fixed(
        "Alembic",
        ctx.prefix,
        [
            ("upgrade", "alembic upgrade head"),
            ("downgrade", "alembic downgrade -1"),
            ("revision", 'alembic revision --autogenerate -m "<message>"'),
            ("history", "alembic history"),
        ],
    )


def _great_expectations(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    has_gx = (
        dir_exists(root / "great_expectations")
        or dir_exists(root / "gx")
        or ctx.has_dep("great-expectations")
    )
    if not has_gx:
        return []
    return _fixed(
        "Great Expectations",
        ctx.prefix,
        [
            ("checkpoint", "great_expectations checkpoint run <checkpoint>"),
            ("docs", "great_expectations docs build"),
        ],
    )


def _mlflow(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    if not (file_exists(root / "MLproject") or ctx.has_dep("mlflow")):
        return []
    return _fixed("MLflow", ctx.prefix, [("ui", "mlflow ui"), ("run", "mlflow run .")])


def _dvc(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    if not (file_exists(root / "dvc.yaml") or dir_exists(root / ".dvc")):
        return []
    return _fixed(
        "DVC",
        ctx.prefix,
        [("repro", "dvc repro"), ("pull", "dvc pull"), ("push", "dvc push")],
    )


def _jupyter(root: Path, ctx: ProbeContext) -> list[CommandInfo]:
    has_notebooks = bool(glob_paths(root, "*.ipynb")) or bool(glob_paths(root, "notebooks/*.ipynb"))
    if not (has_notebooks or ctx.has_dep("jupyterlab", "notebook", "jupyter")):
        return []
    return _fixed("Jupyter", ctx.prefix, [("notebook", "jupyter lab")])


# Emission order of the extracted commands.
PROBES: list[tuple[str, Probe]] = [
    ("package.json", _package_json),
    ("makefile", _makefile),
    ("python", _python_project),
    ("cargo", _cargo),
    ("go", _go),
    ("dbt", _dbt),
    ("airflow", _airflow),
    ("dagster", _dagster),
    ("prefect", _prefect),
    ("spark", _spark),
    ("alembic", _alembic),
    ("great-expectations", _great_expectations),
    ("mlflow", _mlflow),
    ("dvc", _dvc),
    ("jupyter", _jupyter),
]
