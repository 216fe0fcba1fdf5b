"""Console output for scan runs."""

from __future__ import annotations

from pathlib import Path

import click

from depsweep.models.scan_result import ErrorRecord, MatchRecord, ScanOptions, ScanResult
from depsweep.utils import bytes_to_human, format_elapsed

_RULE = "=" * 60


class ConsoleReporter:
    """Prints per-match lines and the final summary with click."""

    def __init__(self, options: ScanOptions, target_name: str) -> None:
        self.options = options
        self.target_name = target_name

    def header(self, target: Path) -> None:
        click.echo(click.style(f"Mode: {self.options.mode_label}", fg="magenta"))
        click.echo(click.style(f"Target: {target}", fg="blue"))
        click.echo(click.style(f"Looking for: {self.target_name}", fg="blue"))
        click.echo(click.style(f"Verbose: {'ON' if self.options.verbose else 'OFF'}", fg="blue"))

    def searching(self) -> None:
        click.echo(f"\n{click.style(f'🔍 Searching for {self.target_name} directories...', fg='cyan')}\n")

    # ── scanner callbacks ────────────────────────────────────────────────

    def on_match(self, match: MatchRecord, status: str) -> None:
        size_str = bytes_to_human(match.size_bytes)
        match status:
            case "found":
                click.echo(
                    f"{click.style('Found:', fg='blue')} {match.path} {click.style(f'({size_str})', fg='green')}"
                )
            case "skipped":
                click.echo(click.style("Skipped", fg="yellow"))
            case "deleted":
                click.echo(
                    f"{click.style('Deleted:', fg='red')} {match.path} "
                    f"{click.style(f'(freed {size_str})', fg='green')}"
                )

    def on_error(self, error: ErrorRecord) -> None:
        click.echo(click.style(f"Failed to delete {error.path}: {error.message}", fg="red"), err=True)

    def on_progress(self, path: Path, status: str) -> None:
        match status:
            case "measuring":
                click.echo(click.style("Calculating size... ", fg="yellow"), nl=False)
            case "deleting":
                click.echo(click.style("Deleting... ", fg="red"), nl=False)
            case "measured" | "removed":
                click.echo(click.style("✓", fg="green"))
            case "failed":
                click.echo(click.style("✗", fg="red"))

    # ── summary ──────────────────────────────────────────────────────────

    def summary(self, result: ScanResult, elapsed: float) -> None:
        click.echo(f"\n{click.style(_RULE, fg='cyan')}")
        click.echo(click.style("📊 SUMMARY", bold=True))
        click.echo(click.style(_RULE, fg="cyan"))

        if result.match_count == 0 and not result.errors:
            click.echo(click.style(f"✨ No {self.target_name} directories found!", fg="green"))
        else:
            self._totals(result)

        if self.options.verbose and result.skipped_dirs:
            click.echo(click.style(f"\nSkipped unreadable directories: {result.skipped_dirs}", fg="yellow"))

        click.echo(click.style(f"\n⏱️  Operation completed in {format_elapsed(elapsed)}", fg="magenta"))

    def _totals(self, result: ScanResult) -> None:
        click.echo(f"{click.style('Found:', fg='blue')} {result.match_count} {self.target_name} directories")
        click.echo(f"{click.style('Total size:', fg='blue')} {bytes_to_human(result.total_bytes)}")

        if self.options.report_only:
            click.echo(click.style("\n💡 Run without --scan to delete these directories", fg="yellow"))
        elif self.options.simulate:
            click.echo(
                click.style(
                    "\n💡 This was a dry run. Add --confirm or remove --dry-run to actually delete",
                    fg="yellow",
                )
            )
        else:
            freed = bytes_to_human(result.freed_bytes)
            click.echo(click.style(f"\n✅ Successfully freed {freed} of disk space!", fg="green"))

        if result.errors:
            click.echo(click.style(f"\n❌ Errors encountered: {len(result.errors)}", fg="red"))
            if self.options.verbose:
                for error in result.errors:
                    click.echo(click.style(f"  • {error.path}: {error.message}", fg="red"))
