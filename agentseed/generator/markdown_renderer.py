"""Static (no-LLM) rendering of the six core sections."""

from __future__ import annotations

from agentseed.analyzer.models import AnalysisResult

# Well-known directory descriptions
DIR_DESCRIPTIONS: dict[str, str] = {
    "src": "Source code",
    "lib": "Library code",
    "app": "Application code",
    "bin": "CLI entry points / executables",
    "dist": "Build output",
    "build": "Build output",
    "out": "Build output",
    "tests": "Test files",
    "test": "Test files",
    "__tests__": "Test files",
    "spec": "Test specifications",
    "docs": "Documentation",
    "doc": "Documentation",
    "config": "Configuration files",
    "scripts": "Build/automation scripts",
    "public": "Static public assets",
    "static": "Static assets",
    "assets": "Project assets",
    "styles": "Stylesheets",
    "components": "UI components",
    "pages": "Page components / routes",
    "routes": "Route handlers",
    "api": "API endpoints",
    "middleware": "Middleware functions",
    "middlewares": "Middleware functions",
    "utils": "Utility functions",
    "helpers": "Helper functions",
    "hooks": "Custom hooks",
    "types": "Type definitions",
    "models": "Data models / dbt models",
    "services": "Service layer",
    "controllers": "Request handlers",
    "schemas": "Validation / schema definitions",
    "migrations": "Database migrations",
    "fixtures": "Test fixtures / seed data",
    "packages": "Monorepo packages",
    "apps": "Monorepo applications",
    "plugins": "Plugin modules",
    "adapters": "Platform adapters",
    "adapter": "Platform adapters",
    "router": "Routing logic",
    "routers": "Routing logic",
    "client": "Client-side code",
    "server": "Server-side code",
    "benchmarks": "Performance benchmarks",
    "examples": "Example code",
    "templates": "Template files",
    "i18n": "Internationalization",
    "locales": "Locale files",
    "dags": "Airflow DAG definitions",
    "pipelines": "Data pipelines",
    "etl": "ETL jobs",
    "sql": "SQL queries / scripts",
    "queries": "SQL queries",
    "macros": "dbt macros / reusable SQL",
    "seeds": "dbt seed data (CSV)",
    "snapshots": "dbt snapshots",
    "analyses": "dbt ad-hoc analyses",
    "transforms": "Data transformations",
    "warehouse": "Data warehouse definitions",
    "staging": "Staging layer models",
    "marts": "Data mart models",
    "raw": "Raw data ingestion",
    "alembic": "Alembic migration scripts",
    "notebooks": "Jupyter / data notebooks",
    "data": "Data files",
    "jobs": "Scheduled jobs / tasks",
    "connectors": "Data source connectors",
}

_MAX_STACK_LANGUAGES = 5
_MAX_KEY_DIRS = 15


def render_core_content(
    analysis: AnalysisResult,
    llm_content: str | None = None,
    subfolder_path: str | None = None,
) -> str:
    """Return trimmed LLM content when given, else the static six-section render."""
    if llm_content:
        return llm_content.strip()
    return _render_static(analysis)


def _render_static(analysis: AnalysisResult) -> str:
    lines: list[str] = []
    lines += _project_context(analysis)
    lines += _stack(analysis)
    lines += _commands(analysis)
    lines += _conventions(analysis)
    lines += _architecture(analysis)
    lines += _boundaries(analysis)
    return "\n".join(lines)


def _project_context(analysis: AnalysisResult) -> list[str]:
    lines = ["## Project Context", ""]
    if not analysis.languages:
        lines += ["Project details could not be determined from static analysis alone.", ""]
        return lines

    patterns = analysis.patterns
    structure = analysis.structure
    primary = analysis.languages[0].name
    frameworks = [f.name for f in analysis.frameworks if f.category in ("web", "api")]

    extras: list[str] = []
    if patterns.has_monorepo:
        extras.append("monorepo")
    if patterns.file_organization != "flat":
        extras.append(f"{patterns.file_organization} architecture")
    suffix = f" Uses {', '.join(extras)}." if extras else ""

    if frameworks:
        lines.append(
            f"A {primary} project using {', '.join(frameworks)}. "
            f"Contains {structure.total_files} files across {structure.total_dirs} directories.{suffix}"
        )
    else:
        lines.append(
            f"A {primary} project with {structure.total_files} files "
            f"across {structure.total_dirs} directories.{suffix}"
        )
    lines.append("")
    return lines


def _stack(analysis: AnalysisResult) -> list[str]:
    lines = ["## Stack", ""]
    if analysis.languages:
        lines.append("**Languages:**")
        lines += [f"- {lang.name} ({lang.percentage}%)" for lang in analysis.languages[:_MAX_STACK_LANGUAGES]]
        lines.append("")
    if analysis.frameworks:
        lines.append("**Frameworks & Tools:**")
        lines += [f"- {fw.name} ({fw.category})" for fw in analysis.frameworks]
        lines.append("")
    return lines


def _commands(analysis: AnalysisResult) -> list[str]:
    lines = ["## Commands", ""]
    if analysis.commands:
        lines.append("```bash")
        lines += [f"{cmd.command}  # {cmd.name}" for cmd in analysis.commands]
        lines.append("```")
    else:
        lines.append("No commands detected. Check project documentation for build/run instructions.")
    lines.append("")
    return lines


def _conventions(analysis: AnalysisResult) -> list[str]:
    patterns = analysis.patterns
    lines = [
        "## Conventions",
        "",
        f"- **Naming**: {patterns.naming_convention}",
        f"- **File organization**: {patterns.file_organization}",
    ]
    if patterns.has_monorepo:
        lines.append("- **Monorepo**: Yes")
    if patterns.config_files:
        lines.append(f"- **Config files**: {', '.join(patterns.config_files)}")
    if patterns.ci_files:
        lines.append(f"- **CI/CD**: {', '.join(patterns.ci_files)}")
    lines.append("")
    return lines


def _architecture(analysis: AnalysisResult) -> list[str]:
    lines = ["## Architecture", ""]
    if analysis.structure.entry_points:
        lines += [f"**Entry points:** {', '.join(analysis.structure.entry_points)}", ""]

    lines.append("**Key directories:**")
    top_dirs = [e for e in analysis.structure.tree if e.type == "directory" and e.depth == 0]
    for entry in top_dirs[:_MAX_KEY_DIRS]:
        name = entry.path.rstrip("/")
        desc = DIR_DESCRIPTIONS.get(name)
        lines.append(f"- `{name}/` - {desc}" if desc else f"- `{name}/`")
    lines.append("")
    return lines


def _boundaries(analysis: AnalysisResult) -> list[str]:
    patterns = analysis.patterns
    lines = ["## Boundaries", "", "**Always:**"]

    test_cmd = next((c for c in analysis.commands if c.name == "test"), None)
    if test_cmd:
        lines.append(f"- Run `{test_cmd.command}` before committing changes")
    else:
        lines.append("- Run existing tests before committing changes")

    lint_cmd = next((c for c in analysis.commands if c.name in ("lint", "check", "typecheck")), None)
    if lint_cmd:
        lines.append(f"- Run `{lint_cmd.command}` before committing")

    lines += [
        f"- Follow {patterns.naming_convention} naming convention",
        f"- Follow {patterns.file_organization} file organization",
        "",
        "**Ask first:**",
        "- Adding new dependencies",
        "- Changing project configuration files",
    ]
    if patterns.ci_files:
        lines.append("- Modifying CI/CD pipelines")
    if patterns.has_monorepo:
        lines.append("- Adding new packages/workspaces")
    lines += [
        "",
        "**Never:**",
        "- Commit secrets, API keys, or .env files",
        "- Delete or overwrite test files without understanding them",
        "- Force push to main/master branch",
    ]
    if patterns.has_monorepo:
        lines.append("- Make cross-package changes without checking downstream effects")
    return lines
