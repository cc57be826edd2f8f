"""Framework detection — confidence-scored signature matching."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Any

import structlog

from agentseed.analyzer.fs import path_exists
from agentseed.analyzer.manifests import load_package_json, load_python_deps, normalize_name
from agentseed.analyzer.models import FrameworkCategory, FrameworkInfo

log = structlog.get_logger("agentseed.analyzer")

# Contribution of each independent signal class
FILE_WEIGHT = 0.5
DEPENDENCY_WEIGHT = 0.8
DEV_DEPENDENCY_WEIGHT = 0.7


@dataclass(frozen=True)
class FrameworkSignature:
    name: str
    category: FrameworkCategory
    files: tuple[str, ...] = ()  # trailing "/" marks a directory
    dependencies: tuple[str, ...] = ()
    dev_dependencies: tuple[str, ...] = ()


def _sig(name: str, category: FrameworkCategory, **indicators: tuple[str, ...]) -> FrameworkSignature:
    return FrameworkSignature(name=name, category=category, **indicators)


# Declaration order is the tie-break order for equal confidence.
FRAMEWORKS: list[FrameworkSignature] = [
    # Web frameworks
    _sig("Next.js", "web", files=("next.config.js", "next.config.mjs", "next.config.ts"), dependencies=("next",)),
    _sig("React", "web", dependencies=("react",)),
    _sig("Vue", "web", dependencies=("vue",)),
    _sig("Nuxt", "web", files=("nuxt.config.ts", "nuxt.config.js"), dependencies=("nuxt",)),
    _sig("Svelte", "web", dependencies=("svelte",)),
    _sig("SvelteKit", "web", files=("svelte.config.js",), dependencies=("@sveltejs/kit",)),
    _sig("Angular", "web", files=("angular.json",), dependencies=("@angular/core",)),
    _sig("Astro", "web", files=("astro.config.mjs", "astro.config.ts"), dependencies=("astro",)),
    _sig("Remix", "web", dependencies=("@remix-run/react",)),
    _sig("Gatsby", "web", files=("gatsby-config.js", "gatsby-config.ts"), dependencies=("gatsby",)),
    _sig("Streamlit", "web", files=(".streamlit/config.toml",), dependencies=("streamlit",)),
    # API frameworks
    _sig("Express", "api", dependencies=("express",)),
    _sig("Fastify", "api", dependencies=("fastify",)),
    _sig("NestJS", "api", dependencies=("@nestjs/core",)),
    _sig("Hono", "api", dependencies=("hono",)),
    _sig("Koa", "api", dependencies=("koa",)),
    _sig("Flask", "api", files=("app.py",), dependencies=("flask",)),
    _sig("Django", "api", files=("manage.py",), dependencies=("django",)),
    _sig("FastAPI", "api", dependencies=("fastapi",)),
    _sig("Spring Boot", "api", files=("pom.xml", "build.gradle")),
    # Testing
    _sig("Vitest", "testing", dev_dependencies=("vitest",)),
    _sig("Jest", "testing", dev_dependencies=("jest",)),
    _sig("Mocha", "testing", dev_dependencies=("mocha",)),
    _sig("Playwright", "testing", dev_dependencies=("@playwright/test", "playwright")),
    _sig("Cypress", "testing", dev_dependencies=("cypress",)),
    _sig("pytest", "testing", files=("pytest.ini", "conftest.py"), dependencies=("pytest",)),
    # Build tools
    _sig("Vite", "build", files=("vite.config.ts", "vite.config.js"), dev_dependencies=("vite",)),
    _sig("Webpack", "build", files=("webpack.config.js", "webpack.config.ts"), dev_dependencies=("webpack",)),
    _sig("tsup", "build", dev_dependencies=("tsup",)),
    _sig("esbuild", "build", dev_dependencies=("esbuild",)),
    _sig("Turbopack", "build", files=("turbo.json",)),
    _sig("Rollup", "build", files=("rollup.config.js", "rollup.config.ts"), dev_dependencies=("rollup",)),
    # ORM
    _sig("Prisma", "orm", files=("prisma/schema.prisma",), dependencies=("@prisma/client",)),
    _sig("Drizzle", "orm", dependencies=("drizzle-orm",)),
    _sig("TypeORM", "orm", dependencies=("typeorm",)),
    _sig("Sequelize", "orm", dependencies=("sequelize",)),
    _sig("SQLAlchemy", "orm", dependencies=("sqlalchemy",)),
    # Data / ETL / analytics
    _sig("dbt", "data", files=("dbt_project.yml",), dependencies=("dbt-core",)),
    _sig("Apache Airflow", "etl", files=("airflow.cfg", "dags/"), dependencies=("apache-airflow", "airflow")),
    _sig("Dagster", "etl", files=("workspace.yaml",), dependencies=("dagster",)),
    _sig("Prefect", "etl", files=("prefect.yaml",), dependencies=("prefect",)),
    _sig("Luigi", "etl", dependencies=("luigi",)),
    _sig("Apache Spark", "data", dependencies=("pyspark",)),
    _sig("Pandas", "data", dependencies=("pandas",)),
    _sig("Polars", "data", dependencies=("polars",)),
    _sig("Great Expectations", "data", files=("great_expectations/", "gx/"), dependencies=("great-expectations",)),
    _sig("Alembic", "data", files=("alembic.ini", "alembic/"), dependencies=("alembic",)),
    _sig("Flyway", "data", files=("flyway.conf",)),
    _sig("Liquibase", "data", files=("liquibase.properties", "changelog.xml")),
    _sig("Jupyter", "data", files=("notebooks/",), dependencies=("jupyterlab", "notebook", "jupyter")),
    # MLOps
    _sig("MLflow", "mlops", files=("MLproject",), dependencies=("mlflow",)),
    _sig("DVC", "mlops", files=("dvc.yaml", ".dvc/"), dependencies=("dvc",)),
    _sig("scikit-learn", "mlops", dependencies=("scikit-learn",)),
    _sig("PyTorch", "mlops", dependencies=("torch",)),
    _sig("TensorFlow", "mlops", dependencies=("tensorflow",)),
    # Streaming
    _sig("Kafka", "streaming", dependencies=("kafkajs", "kafka-python", "confluent-kafka")),
    _sig("Faust", "streaming", dependencies=("faust-streaming", "faust")),
    _sig("Apache Flink", "streaming", dependencies=("apache-flink",)),
    # Infrastructure
    _sig("Terraform", "other", files=("main.tf", "terraform.tfvars")),
]


def detect_frameworks(root: Path) -> list[FrameworkInfo]:
    """Score every catalog signature against *root*; return non-zero hits.

    Result is sorted by descending confidence; ties keep catalog order.
    """
    pkg = load_package_json(root) or {}
    runtime = _dep_map(pkg, "dependencies")
    dev = _dep_map(pkg, "devDependencies")
    py_deps = load_python_deps(root)
    return score_frameworks(root, FRAMEWORKS, runtime, dev, py_deps)


def score_frameworks(
    root: Path,
    catalog: list[FrameworkSignature],
    runtime: dict[str, Any],
    dev: dict[str, Any],
    py_deps: set[str],
) -> list[FrameworkInfo]:
    detected: list[FrameworkInfo] = []
    for sig in catalog:
        confidence = 0.0

        if any(path_exists(root, f) for f in sig.files):
            confidence += FILE_WEIGHT

        if any(d in runtime or d in dev for d in sig.dependencies):
            confidence += DEPENDENCY_WEIGHT

        if any(d in dev for d in sig.dev_dependencies):
            confidence += DEV_DEPENDENCY_WEIGHT

        if py_deps and any(normalize_name(d) in py_deps for d in sig.dependencies):
            confidence += DEPENDENCY_WEIGHT

        if confidence > 0:
            detected.append(
                FrameworkInfo(
                    name=sig.name,
                    category=sig.category,
                    confidence=round(min(confidence, 1.0), 2),
                )
            )

    if detected:
        log.debug("frameworks.detected", names=[f.name for f in detected])
    return sorted(detected, key=lambda f: f.confidence, reverse=True)


def _dep_map(pkg: dict[str, Any], key: str) -> dict[str, Any]:
    deps = pkg.get(key)
    return deps if isinstance(deps, dict) else {}
