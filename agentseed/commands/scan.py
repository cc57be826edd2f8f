"""``agentseed scan``: root context files plus one scoped file set per qualifying subfolder."""

from __future__ import annotations

from pathlib import Path

import click
import structlog

from agentseed.analyzer import analyze
from agentseed.analyzer.fs import file_exists, read_text
from agentseed.commands._common import CommandOptions, is_fresh, make_meta, print_usage, write_output
from agentseed.config import load_config
from agentseed.generator import (
    FORMATS,
    SubfolderContext,
    compute_subfolder_delta,
    generate,
    render_core_content,
    render_for_format,
    resolve_formats,
)
from agentseed.providers import UsageTracker
from agentseed.scanner import detect_subfolders
from agentseed.utils.git import get_head_sha, get_path_sha, is_git_repo

log = structlog.get_logger("agentseed.commands")


async def run_scan(root: Path, options: CommandOptions) -> None:
    root = root.resolve()
    formats = resolve_formats(options.format)

    click.echo(f"agentseed scan ({root})")
    click.echo(f"Formats: {', '.join(FORMATS[f].name for f in formats)}")

    config = load_config(root, provider=options.provider, model=options.model, no_llm=not options.use_llm)
    tracker = UsageTracker(config.model or "")

    git_repo = is_git_repo(root)
    root_sha = get_head_sha(root) if git_repo else None

    click.echo("Analyzing root...")
    root_analysis = await analyze(root, config)

    root_needs_regen = True
    if not options.force and not options.dry_run and root_sha:
        root_needs_regen = not all(
            is_fresh(root / FORMATS[fmt].output_path, root_sha, root) for fmt in formats
        )

    if not root_needs_regen:
        click.echo("Root files are up to date, skipping")
        agents_path = root / FORMATS["agents"].output_path
        root_core = read_text(agents_path) if file_exists(agents_path) else ""
    elif config.no_llm:
        root_core = render_core_content(root_analysis)
    else:
        click.echo("Generating root with LLM...")
        result = await generate(root, root_analysis, config, formats[0])
        root_core = result.core_content
        tracker.add(result.usage)

    click.echo("Detecting subfolders...")
    subfolders = detect_subfolders(root)

    if options.dry_run:
        for fmt in formats:
            click.echo(f"\n--- Root {FORMATS[fmt].name} ---\n")
            click.echo(render_for_format(fmt, root_analysis, root_core))
        click.echo(f"\nDetected {len(subfolders)} subfolder(s):")
        for sf in subfolders:
            click.echo(f"  {sf.relative_path} - {sf.reason}")
        print_usage(tracker)
        return

    if root_needs_regen:
        root_meta = make_meta(root_sha)
        for fmt in formats:
            write_output(
                root / FORMATS[fmt].output_path,
                render_for_format(fmt, root_analysis, root_core, None, root_meta),
            )
        click.echo(f"Root files written ({', '.join(FORMATS[f].name for f in formats)})")

    total = len(subfolders)
    skipped = 0
    # One subfolder at a time, so at most one LLM call is in flight
    for i, sf in enumerate(subfolders, start=1):
        progress = f"[{i}/{total}]"
        sf_dir = root / sf.relative_path
        sf_sha = get_path_sha(root, sf.relative_path) if git_repo else None

        if not options.force and sf_sha:
            if all(
                is_fresh(sf_dir / FORMATS[fmt].output_path, sf_sha, root, sf.relative_path)
                for fmt in formats
            ):
                click.echo(f"{progress} {sf.relative_path}/ unchanged, skipping")
                skipped += 1
                continue

        sf_analysis = await analyze(sf_dir, config)
        if config.no_llm:
            delta = compute_subfolder_delta(root_analysis, sf_analysis)
            sf_core = render_core_content(delta, None, sf.relative_path)
        else:
            click.echo(f"{progress} Generating {sf.relative_path}...")
            result = await generate(
                sf_dir,
                sf_analysis,
                config,
                formats[0],
                SubfolderContext(root_analysis=root_analysis, subfolder_path=sf.relative_path),
            )
            sf_core = result.core_content
            tracker.add(result.usage)

        sf_meta = make_meta(sf_sha)
        for fmt in formats:
            write_output(
                sf_dir / FORMATS[fmt].output_path,
                render_for_format(fmt, sf_analysis, sf_core, sf.relative_path, sf_meta),
            )
        log.debug("scan.subfolder_written", path=sf.relative_path)
        click.echo(f"{progress} {sf.relative_path}/ files written")

    if skipped:
        click.echo(f"{skipped} subfolder(s) skipped (unchanged). Use --force to regenerate all.")
    print_usage(tracker)
