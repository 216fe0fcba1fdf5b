"""CLI interface for depsweep."""

from __future__ import annotations

import json
import logging
import os
import sys
import time
from functools import partial
from pathlib import Path

import click

from depsweep.core.scanner import TreeScanner
from depsweep.models.scan_result import ScanOptions, ScanResult
from depsweep.reporter import ConsoleReporter
from depsweep.settings import Settings
from depsweep.utils import dir_size

log = logging.getLogger(__name__)

BANNER = "🗑️  depsweep — reclaim disk space from dependency directories"


def _setup_logging(verbosity: int) -> None:
    level = logging.WARNING
    if verbosity == 1:
        level = logging.INFO
    elif verbosity >= 2:
        level = logging.DEBUG
    logging.basicConfig(level=level, format="%(levelname)s: %(message)s")


def _check_target(target: Path) -> str | None:
    """Return an error message if ``target`` cannot be scanned, else None."""
    if not target.exists():
        return f"Directory not found: {target}"
    if not target.is_dir() or not os.access(target, os.R_OK | os.X_OK):
        return f"Cannot access directory: {target}"
    return None


def _ask(prompt: str) -> bool:
    return click.confirm(click.style(prompt, fg="yellow"), default=False)


@click.command(context_settings={"help_option_names": ["-h", "--help"]})
@click.argument("directory", required=False, type=click.Path(path_type=Path))
@click.option("--scan", "-s", "report_only", is_flag=True, help="Scan only (don't delete)")
@click.option("--dry-run", "-d", is_flag=True, help="Show what would be deleted")
@click.option("--confirm", "-c", is_flag=True, help="Ask for confirmation before each deletion")
@click.option("--verbose", "-v", count=True, help="Verbose output (-vv also enables debug logging)")
@click.option("--target-name", "-n", default=None, help="Directory name to look for (default: node_modules)")
@click.option("--yes", "-y", is_flag=True, help="Skip the confirmation before deleting")
@click.option("--json", "as_json", is_flag=True, help="Output as JSON")
def main(
    directory: Path | None,
    report_only: bool,
    dry_run: bool,
    confirm: bool,
    verbose: int,
    target_name: str | None,
    yes: bool,
    as_json: bool,
) -> None:
    """Find and delete dependency directories (node_modules by default) under DIRECTORY.

    DIRECTORY defaults to the current working directory.
    """
    _setup_logging(verbose)

    options = ScanOptions(
        report_only=report_only,
        simulate=dry_run,
        per_item_confirm=confirm,
        verbose=verbose > 0,
    )
    if as_json and options.action == "delete" and (confirm or not yes):
        raise click.UsageError("--json needs --scan, --dry-run or --yes, and cannot be combined with --confirm")

    settings = Settings()
    log.debug("Using settings from %s", settings.path)
    name = target_name or settings.target_name
    if "/" in name:
        raise click.BadParameter("must be a single directory name", param_hint="--target-name")

    target = (directory or Path.cwd()).expanduser().resolve()
    reporter = ConsoleReporter(options, name)

    if not as_json:
        click.echo(click.style(BANNER, fg="cyan", bold=True))
        click.echo()

    problem = _check_target(target)
    if problem:
        click.echo(click.style(f"❌ {problem}", fg="red"), err=True)
        sys.exit(1)

    try:
        _run(target, name, options, settings, reporter, yes=yes, as_json=as_json)
    except (KeyboardInterrupt, click.Abort):
        click.echo(click.style("\n\n👋 Operation cancelled by user", fg="yellow"), err=True)
        sys.exit(130)


def _run(
    target: Path,
    name: str,
    options: ScanOptions,
    settings: Settings,
    reporter: ConsoleReporter,
    *,
    yes: bool,
    as_json: bool,
) -> None:
    if not as_json:
        reporter.header(target)

    if options.action == "delete" and not options.per_item_confirm and not yes:
        click.echo(click.style(f"\n⚠️  WARNING: This will permanently delete all {name} directories!", fg="yellow"))
        if not _ask("Continue?"):
            click.echo(click.style("Operation cancelled.", fg="yellow"))
            return

    scanner = TreeScanner(
        name,
        measure_size=partial(dir_size, method=settings.size_method),
        confirm=_ask,
        on_match=None if as_json else reporter.on_match,
        on_error=None if as_json else reporter.on_error,
        on_progress=None if as_json else reporter.on_progress,
    )

    if not as_json:
        reporter.searching()

    start = time.monotonic()
    result = scanner.scan(target, options, ScanResult())
    elapsed = time.monotonic() - start

    if as_json:
        data = {
            "mode": options.mode_label.lower().replace(" ", "_"),
            "target": str(target),
            "target_name": name,
            "elapsed_seconds": round(elapsed, 3),
            **result.to_dict(),
        }
        click.echo(json.dumps(data, indent=2))
        return

    reporter.summary(result, elapsed)
