"""CLI entry point: agentseed.

Subcommands:
    agentseed init [-f all] [-p claude]   # Context files for the current repository
    agentseed scan [PATH]                 # Root files plus scoped files per subfolder
    agentseed analyze [PATH] --json       # Print the raw analysis
"""

from __future__ import annotations

import asyncio
import functools
import json
import sys
from collections.abc import Callable
from pathlib import Path
from typing import Any

import click
import structlog
from dotenv import load_dotenv

from agentseed import __version__
from agentseed.analyzer import AnalysisResult, analyze
from agentseed.commands import CommandOptions, run_init, run_scan
from agentseed.config import load_config
from agentseed.core.logging import LOG_FORMATS, setup_logging
from agentseed.exceptions import AgentseedError
from agentseed.generator import FORMAT_CHOICES

log = structlog.get_logger("agentseed.cli")

_PROVIDERS = ["claude", "openai", "ollama"]


def _generation_options(func: Callable[..., Any]) -> Callable[..., Any]:
    """Options shared by init and scan."""
    options = [
        click.option("-d", "--dry-run", is_flag=True, help="Show output without writing files"),
        click.option(
            "-f",
            "--format",
            "fmt",
            type=click.Choice(FORMAT_CHOICES),
            default="agents",
            show_default=True,
            help="Output format",
        ),
        click.option(
            "-p",
            "--provider",
            type=click.Choice(_PROVIDERS),
            default=None,
            help="LLM provider (enables LLM enhancement)",
        ),
        click.option("-m", "--model", default=None, help="LLM model to use (overrides default)"),
        click.option("--force", is_flag=True, help="Regenerate all files even if unchanged"),
    ]
    for option in reversed(options):
        func = option(func)
    return _logging_options(func)


def _logging_options(func: Callable[..., Any]) -> Callable[..., Any]:
    func = click.option(
        "--log-format",
        type=click.Choice(LOG_FORMATS),
        default=None,
        help="Log rendering on stderr (default: $AGENTSEED_LOG_FORMAT or console)",
    )(func)
    return click.option("-v", "--verbose", is_flag=True, help="Verbose logging")(func)


def _run(coro_factory: Callable[[], Any]) -> None:
    """Run a command coroutine; report AgentseedError and exit with status 1."""
    try:
        asyncio.run(coro_factory())
    except AgentseedError as e:
        log.debug("cli.failed", code=e.code, error=str(e))
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(__version__, prog_name="agentseed")
def main() -> None:
    """Analyze a codebase and seed AI coding agents with context."""
    load_dotenv(Path.cwd() / ".env")


@main.command("init")
@click.option("-o", "--output", default=None, help="Output file path (overrides format default)")
@_generation_options
def init_cmd(
    output: str | None,
    dry_run: bool,
    fmt: str,
    provider: str | None,
    model: str | None,
    force: bool,
    verbose: bool,
    log_format: str | None,
) -> None:
    """Analyze the current repository and generate AI context files."""
    setup_logging(verbose, log_format)
    options = CommandOptions(
        format=fmt, dry_run=dry_run, output=output, provider=provider, model=model, force=force
    )
    _run(functools.partial(run_init, Path.cwd(), options))


@main.command("scan")
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False))
@_generation_options
def scan_cmd(
    path: str,
    dry_run: bool,
    fmt: str,
    provider: str | None,
    model: str | None,
    force: bool,
    verbose: bool,
    log_format: str | None,
) -> None:
    """Scan for subfolders and generate scoped AI context files."""
    setup_logging(verbose, log_format)
    options = CommandOptions(format=fmt, dry_run=dry_run, provider=provider, model=model, force=force)
    _run(functools.partial(run_scan, Path(path), options))


@main.command("analyze")
@click.argument("path", default=".", type=click.Path(exists=True, file_okay=False))
@click.option("--json", "as_json", is_flag=True, help="Print the analysis as JSON")
@_logging_options
def analyze_cmd(path: str, as_json: bool, verbose: bool, log_format: str | None) -> None:
    """Run static analysis only and print the result."""
    setup_logging(verbose, log_format)
    root = Path(path)

    async def _analyze() -> None:
        config = load_config(root, no_llm=True)
        result = await analyze(root, config)
        if as_json:
            click.echo(json.dumps(result.to_dict(), indent=2))
        else:
            _print_summary(result)

    _run(_analyze)


def _print_summary(result: AnalysisResult) -> None:
    click.echo("Languages:")
    for lang in result.languages:
        click.echo(f"  {lang.name}: {lang.percentage}% ({lang.file_count} files)")
    click.echo("\nFrameworks:")
    for fw in result.frameworks:
        click.echo(f"  {fw.name} ({fw.category}, {fw.confidence})")
    click.echo("\nCommands:")
    for cmd in result.commands:
        click.echo(f"  {cmd.command}  # {cmd.name} [{cmd.source}]")
    click.echo(f"\nFiles: {result.structure.total_files}  Dirs: {result.structure.total_dirs}")
    click.echo(f"Naming: {result.patterns.naming_convention}")
    click.echo(f"Organization: {result.patterns.file_organization}")
    if result.structure.entry_points:
        click.echo(f"Entry points: {', '.join(result.structure.entry_points)}")


if __name__ == "__main__":
    main()
