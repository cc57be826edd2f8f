"""Tests for command extraction across ecosystems."""

from __future__ import annotations

import json
from pathlib import Path

from agentseed.analyzer.command_extractor import ProbeContext, _run_probe, extract_commands
from agentseed.analyzer.models import CommandInfo


def _pkg(scripts: dict[str, str]) -> str:
    return json.dumps({"name": "demo", "scripts": scripts})


def _by_name(commands: list[CommandInfo], source: str) -> dict[str, str]:
    return {c.name: c.command for c in commands if c.source == source}


# ── package.json ──


class TestPackageJsonScripts:
    def test_npm_without_lockfile(self, make_repo):
        root = make_repo({"package.json": _pkg({"build": "tsup", "dev": "tsx watch"})})
        commands = extract_commands(root)

        assert CommandInfo("build", "npm run build", "package.json scripts") in commands
        assert CommandInfo("dev", "npm run dev", "package.json scripts") in commands

    def test_pnpm_lockfile(self, make_repo):
        root = make_repo({"package.json": _pkg({"build": "tsup"}), "pnpm-lock.yaml": ""})

        assert _by_name(extract_commands(root), "package.json scripts") == {"build": "pnpm build"}

    def test_yarn_lockfile(self, make_repo):
        root = make_repo({"package.json": _pkg({"test": "jest"}), "yarn.lock": ""})

        assert _by_name(extract_commands(root), "package.json scripts") == {"test": "yarn test"}

    def test_bun_lockfile(self, make_repo):
        root = make_repo({"package.json": _pkg({"dev": "vite"}), "bun.lockb": ""})

        assert _by_name(extract_commands(root), "package.json scripts") == {"dev": "bun run dev"}

    def test_pnpm_wins_over_yarn(self, make_repo):
        root = make_repo(
            {"package.json": _pkg({"build": "x"}), "pnpm-lock.yaml": "", "yarn.lock": ""}
        )

        assert _by_name(extract_commands(root), "package.json scripts") == {"build": "pnpm build"}

    def test_unimportant_scripts_filtered(self, make_repo):
        root = make_repo(
            {
                "package.json": _pkg(
                    {
                        "postinstall": "x",
                        "release": "x",
                        "test:integration": "x",
                        "build:docs": "x",
                        "lint": "x",
                    }
                )
            }
        )
        names = list(_by_name(extract_commands(root), "package.json scripts"))

        assert names == ["test:integration", "build:docs", "lint"]

    def test_malformed_package_json_fails_closed(self, make_repo):
        root = make_repo({"package.json": "{not json", "Cargo.toml": "[package]\nname='x'\n"})
        commands = extract_commands(root)

        assert all(c.source != "package.json scripts" for c in commands)
        assert any(c.source == "Cargo.toml" for c in commands)

    def test_scripts_not_a_mapping(self, make_repo):
        root = make_repo({"package.json": json.dumps({"scripts": ["build"]})})

        assert extract_commands(root) == []


# ── Makefile ──


class TestMakefile:
    def test_targets_in_order_deduplicated(self, make_repo):
        root = make_repo(
            {
                "Makefile": (
                    ".PHONY: build test\n"
                    "CC := gcc\n"
                    "build:\n\tgo build\n"
                    "test: build\n\tgo test\n"
                    "_internal:\n\ttrue\n"
                    "build:\n\techo again\n"
                )
            }
        )
        commands = [c for c in extract_commands(root) if c.source == "Makefile"]

        assert [c.command for c in commands] == ["make build", "make test"]

    def test_variable_assignment_not_a_target(self, make_repo):
        root = make_repo({"Makefile": "VERSION:=1.0\nall:\n\techo\n"})
        commands = [c for c in extract_commands(root) if c.source == "Makefile"]

        assert [c.name for c in commands] == ["all"]


# ── Python ──


class TestPythonProject:
    def test_django_manage_py(self, make_repo):
        root = make_repo({"manage.py": "", "poetry.lock": ""})
        django = _by_name(extract_commands(root), "Django")

        assert django == {
            "runserver": "poetry run python manage.py runserver",
            "migrate": "poetry run python manage.py migrate",
            "makemigrations": "poetry run python manage.py makemigrations",
            "test": "poetry run python manage.py test",
        }

    def test_pytest_from_pyproject_section(self, make_repo):
        root = make_repo(
            {"pyproject.toml": "[tool.pytest.ini_options]\ntestpaths = ['tests']\n", "uv.lock": ""}
        )

        assert CommandInfo("test", "uv run pytest", "pytest") in extract_commands(root)

    def test_pytest_from_setup_cfg(self, make_repo):
        root = make_repo({"setup.cfg": "[tool:pytest]\naddopts = -q\n"})

        assert CommandInfo("test", "pytest", "pytest") in extract_commands(root)

    def test_pytest_from_requirements(self, make_repo):
        root = make_repo({"requirements.txt": "pytest>=8\n"})

        assert CommandInfo("test", "pytest", "pytest") in extract_commands(root)

    def test_script_tables(self, make_repo):
        root = make_repo(
            {
                "pyproject.toml": (
                    "[project]\nname = 'demo'\n"
                    "[project.scripts]\ndemo = 'demo.cli:main'\n"
                    "[tool.poe.tasks]\nlint = 'ruff check .'\n"
                    "[tool.hatch.envs.default.scripts]\ncov = 'pytest --cov'\n"
                ),
                "uv.lock": "",
            }
        )
        commands = extract_commands(root)

        assert CommandInfo("demo", "uv run demo", "pyproject.toml scripts") in commands
        assert CommandInfo("lint", "uv run poe lint", "Poe tasks") in commands
        assert CommandInfo("cov", "uv run hatch run cov", "Hatch scripts") in commands

    def test_poetry_scripts(self, make_repo):
        root = make_repo(
            {
                "pyproject.toml": "[tool.poetry]\nname = 'x'\n[tool.poetry.scripts]\nserve = 'x:main'\n",
                "poetry.lock": "",
            }
        )

        assert CommandInfo("serve", "poetry run serve", "Poetry scripts") in extract_commands(root)

    def test_invalid_pyproject_fails_closed(self, make_repo):
        root = make_repo({"pyproject.toml": "[project\nname=", "manage.py": ""})
        commands = extract_commands(root)

        assert any(c.source == "Django" for c in commands)
        assert all(c.source not in ("pyproject.toml scripts", "pytest") for c in commands)

    def test_scalar_tool_key_fails_closed(self, make_repo):
        root = make_repo({"pyproject.toml": "tool = \"pytest\"\n", "Cargo.toml": "", "manage.py": ""})
        commands = extract_commands(root)

        assert list(_by_name(commands, "Cargo.toml")) == ["build", "test", "run", "check"]
        assert any(c.source == "Django" for c in commands)
        assert all(c.source != "pytest" for c in commands)


# ── Data / ML ecosystems ──


class TestDataEcosystems:
    def test_dagster_with_uv(self, make_repo):
        root = make_repo(
            {"pyproject.toml": "[project]\nname='p'\ndependencies=['dagster>=1.5']\n", "uv.lock": ""}
        )
        commands = extract_commands(root)

        assert CommandInfo("dev", "uv run dagster dev", "Dagster") in commands
        assert (
            CommandInfo("materialize", "uv run dagster asset materialize --select '*'", "Dagster")
            in commands
        )

    def test_dagster_workspace_without_prefix(self, make_repo):
        root = make_repo({"workspace.yaml": "load_from: []\n"})

        assert _by_name(extract_commands(root), "Dagster")["dev"] == "dagster dev"

    def test_alembic_with_uv(self, make_repo):
        root = make_repo({"alembic.ini": "[alembic]\n", "uv.lock": ""})
        alembic = _by_name(extract_commands(root), "Alembic")

        assert alembic["upgrade"] == "uv run alembic upgrade head"
        assert alembic["downgrade"] == "uv run alembic downgrade -1"
        assert alembic["history"] == "uv run alembic history"

    def test_dbt_has_no_prefix(self, make_repo):
        root = make_repo({"dbt_project.yml": "name: x\n", "uv.lock": ""})
        dbt = _by_name(extract_commands(root), "dbt")

        assert dbt["run"] == "dbt run"
        assert len(dbt) == 7

    def test_airflow_dags_directory(self, make_repo):
        root = make_repo({"dags/": ""})

        assert "webserver" in _by_name(extract_commands(root), "Airflow")

    def test_prefect_spark_mlflow_from_requirements(self, make_repo):
        root = make_repo(
            {"requirements.txt": "prefect==2.14\npyspark[sql]\nMLflow ; python_version>'3.8'\n"}
        )
        commands = extract_commands(root)

        assert CommandInfo("server", "prefect server start", "Prefect") in commands
        assert CommandInfo("submit", "spark-submit <app.py>", "Spark") in commands
        assert CommandInfo("ui", "mlflow ui", "MLflow") in commands

    def test_great_expectations_directory(self, make_repo):
        root = make_repo({"gx/": "", "pdm.lock": ""})
        gx = _by_name(extract_commands(root), "Great Expectations")

        assert gx["docs"] == "pdm run great_expectations docs build"

    def test_dvc_hidden_directory(self, make_repo):
        root = make_repo({".dvc/config": ""})

        assert set(_by_name(extract_commands(root), "DVC")) == {"repro", "pull", "push"}

    def test_jupyter_notebooks(self, make_repo):
        root = make_repo({"notebooks/explore.ipynb": "{}", "Pipfile.lock": ""})

        assert CommandInfo("notebook", "pipenv run jupyter lab", "Jupyter") in extract_commands(root)


class TestFixedEcosystems:
    def test_cargo(self, make_repo):
        root = make_repo({"Cargo.toml": "[package]\nname = 'x'\n"})

        assert list(_by_name(extract_commands(root), "Cargo.toml")) == ["build", "test", "run", "check"]

    def test_go(self, make_repo):
        root = make_repo({"go.mod": "module example.com/x\n"})

        assert _by_name(extract_commands(root), "go.mod")["test"] == "go test ./..."


class TestExtractCommandsGeneral:
    def test_empty_repo(self, tmp_path: Path):
        assert extract_commands(tmp_path) == []

    def test_probe_order(self, make_repo):
        root = make_repo(
            {
                "package.json": _pkg({"build": "x"}),
                "Makefile": "all:\n\ttrue\n",
                "Cargo.toml": "",
                "alembic.ini": "",
            }
        )
        sources = []
        for c in extract_commands(root):
            if c.source not in sources:
                sources.append(c.source)

        assert sources == ["package.json scripts", "Makefile", "Cargo.toml", "Alembic"]

    def test_idempotent(self, make_repo):
        root = make_repo({"package.json": _pkg({"build": "x"}), "alembic.ini": "", "uv.lock": ""})

        assert extract_commands(root) == extract_commands(root)

    def test_failing_probe_is_contained(self, tmp_path: Path):
        def broken(root, ctx):
            raise OSError("permission denied")

        assert _run_probe("broken", broken, tmp_path, ProbeContext()) == []
