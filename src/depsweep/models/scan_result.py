"""Scan options and result dataclasses."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path


@dataclass(frozen=True, slots=True)
class ScanOptions:
    """Mode flags for a single run.

    ``report_only`` takes precedence over ``simulate``; both only report.
    ``per_item_confirm`` is honoured in delete mode alone.
    """

    report_only: bool = False
    simulate: bool = False
    per_item_confirm: bool = False
    verbose: bool = False

    @property
    def action(self) -> str:
        """Per-match action: 'report' or 'delete'."""
        if self.report_only or self.simulate:
            return "report"
        return "delete"

    @property
    def mode_label(self) -> str:
        if self.report_only:
            return "SCAN"
        if self.simulate:
            return "DRY RUN"
        return "DELETE"


@dataclass(frozen=True, slots=True)
class MatchRecord:
    """A directory whose name matched the target name."""

    path: Path
    size_bytes: int
    parent_dir: Path


@dataclass(frozen=True, slots=True)
class ErrorRecord:
    """A failed delete attempt."""

    path: Path
    message: str


@dataclass(slots=True)
class ScanResult:
    """Running totals threaded through one scan.

    A declined match stays in ``matches`` but its size and count are
    backed out of ``total_bytes`` and ``match_count``.
    """

    total_bytes: int = 0
    match_count: int = 0
    matches: list[MatchRecord] = field(default_factory=list)
    errors: list[ErrorRecord] = field(default_factory=list)
    declined_count: int = 0
    skipped_dirs: int = 0

    @property
    def freed_bytes(self) -> int:
        """Bytes of matches not declined and not failed to delete."""
        failed = {e.path for e in self.errors}
        return self.total_bytes - sum(m.size_bytes for m in self.matches if m.path in failed)

    def add_match(self, match: MatchRecord) -> None:
        self.matches.append(match)
        self.match_count += 1
        self.total_bytes += match.size_bytes

    def decline(self, match: MatchRecord) -> None:
        """Back a previously added match out of the totals."""
        self.match_count -= 1
        self.total_bytes -= match.size_bytes
        self.declined_count += 1

    def add_error(self, path: Path, message: str) -> ErrorRecord:
        error = ErrorRecord(path=path, message=message)
        self.errors.append(error)
        return error

    def to_dict(self) -> dict:
        """Plain-data form used for JSON output."""
        return {
            "total_bytes": self.total_bytes,
            "freed_bytes": self.freed_bytes,
            "match_count": self.match_count,
            "declined_count": self.declined_count,
            "skipped_dirs": self.skipped_dirs,
            "matches": [
                {
                    "path": str(m.path),
                    "size_bytes": m.size_bytes,
                    "parent_dir": str(m.parent_dir),
                }
                for m in self.matches
            ],
            "errors": [{"path": str(e.path), "message": e.message} for e in self.errors],
        }
