"""``agentseed init``: analyze one repository and write its context files."""

from __future__ import annotations

from pathlib import Path

import click
import structlog

from agentseed.analyzer import analyze
from agentseed.commands._common import CommandOptions, is_fresh, make_meta, print_usage, write_output
from agentseed.config import load_config
from agentseed.generator import FORMATS, generate, render_core_content, render_for_format, resolve_formats
from agentseed.providers import UsageTracker
from agentseed.utils.git import get_head_sha, is_git_repo

log = structlog.get_logger("agentseed.commands")


async def run_init(root: Path, options: CommandOptions) -> None:
    root = root.resolve()
    formats = resolve_formats(options.format)

    click.echo(f"agentseed init ({root})")
    click.echo(f"Formats: {', '.join(FORMATS[f].name for f in formats)}")
    if not options.use_llm:
        click.echo("Static analysis mode. Use --provider claude for LLM enhancement.")

    config = load_config(root, provider=options.provider, model=options.model, no_llm=not options.use_llm)

    def output_path(fmt: str) -> Path:
        return root / (options.output or FORMATS[fmt].output_path)

    git_repo = is_git_repo(root)
    current_sha = get_head_sha(root) if git_repo else None

    if not options.force and not options.dry_run and current_sha:
        if all(is_fresh(output_path(fmt), current_sha, root) for fmt in formats):
            click.echo("All files are up to date. Use --force to regenerate.")
            return

    click.echo("Analyzing repository...")
    analysis = await analyze(root, config)

    tracker = UsageTracker(config.model or "")
    if config.no_llm:
        core_content = render_core_content(analysis)
    else:
        click.echo("Generating with LLM...")
        # Core content is format-agnostic, one call serves every format
        result = await generate(root, analysis, config, formats[0])
        core_content = result.core_content
        tracker.add(result.usage)

    if options.dry_run:
        for fmt in formats:
            click.echo(f"\n--- {FORMATS[fmt].name} (dry run) ---\n")
            click.echo(render_for_format(fmt, analysis, core_content))
        print_usage(tracker)
        return

    meta = make_meta(current_sha)
    skipped = 0
    for fmt in formats:
        path = output_path(fmt)
        if not options.force and current_sha and is_fresh(path, current_sha, root):
            click.echo(f"  {FORMATS[fmt].name} is up to date, skipping")
            skipped += 1
            continue
        write_output(path, render_for_format(fmt, analysis, core_content, None, meta))
        log.debug("init.written", path=str(path))
        click.echo(f"{FORMATS[fmt].name} written to {path}")

    if skipped:
        click.echo(f"{skipped} file(s) skipped (unchanged). Use --force to regenerate all.")
    print_usage(tracker)
