"""Depth-first scan-and-act walk over a directory tree."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Callable

from depsweep.models.scan_result import ErrorRecord, MatchRecord, ScanOptions, ScanResult
from depsweep.utils import bytes_to_human, dir_size, list_directory, remove_tree

log = logging.getLogger(__name__)

DEFAULT_TARGET_NAME = "node_modules"

ListDirectory = Callable[[Path], list[tuple[str, bool]]]
SizeProbe = Callable[[Path], int]
Deleter = Callable[[Path], None]
ConfirmPrompt = Callable[[str], bool]
MatchCallback = Callable[[MatchRecord, str], None]  # (match, status)
ErrorCallback = Callable[[ErrorRecord], None]
ProgressCallback = Callable[[Path, str], None]  # (path, status)


def _never_confirm(prompt: str) -> bool:
    return False


class TreeScanner:
    """Finds directories named ``target_name`` and reports or deletes them.

    Matched directories are never descended into: a match and everything
    below it is measured and deleted as one unit.  All filesystem access and
    user interaction goes through the injected callables so the walk itself
    stays a plain synchronous recursion.

    Statuses passed to ``on_match``: ``found``, ``skipped``, ``deleted``.
    Statuses passed to ``on_progress`` (verbose runs only): ``measuring``
    and ``measured`` around the size probe, ``deleting`` followed by
    ``removed`` or ``failed`` around the delete.
    """

    def __init__(
        self,
        target_name: str = DEFAULT_TARGET_NAME,
        *,
        measure_size: SizeProbe | None = None,
        remove: Deleter | None = None,
        confirm: ConfirmPrompt | None = None,
        list_dir: ListDirectory | None = None,
        on_match: MatchCallback | None = None,
        on_error: ErrorCallback | None = None,
        on_progress: ProgressCallback | None = None,
    ) -> None:
        if not target_name or "/" in target_name:
            raise ValueError(f"Invalid target directory name: {target_name!r}")
        self.target_name = target_name
        self._measure_size = measure_size or dir_size
        self._remove = remove or remove_tree
        self._confirm = confirm or _never_confirm
        self._list_dir = list_dir or list_directory
        self._on_match = on_match
        self._on_error = on_error
        self._on_progress = on_progress

    def scan(
        self,
        current_dir: Path | str,
        options: ScanOptions,
        result: ScanResult | None = None,
    ) -> ScanResult:
        """Walk ``current_dir`` and act on every match below it.

        Args:
            current_dir: Directory to start from.
            options: Mode flags for this run.
            result: Accumulator to add to.  A fresh one is created if omitted.

        Returns:
            The accumulator, for convenience.
        """
        if result is None:
            result = ScanResult()
        self._walk(Path(current_dir), options, result)
        return result

    def _walk(self, current_dir: Path, options: ScanOptions, result: ScanResult) -> None:
        try:
            entries = self._list_dir(current_dir)
        except OSError as e:
            log.debug("Skipping unreadable directory %s: %s", current_dir, e)
            result.skipped_dirs += 1
            return

        for name, is_dir in entries:
            if not is_dir:
                continue
            full_path = current_dir / name
            if name == self.target_name:
                self._handle_match(full_path, current_dir, options, result)
            else:
                self._walk(full_path, options, result)

    def _handle_match(
        self,
        path: Path,
        parent_dir: Path,
        options: ScanOptions,
        result: ScanResult,
    ) -> None:
        match = MatchRecord(path=path, size_bytes=self._probe(path, options), parent_dir=parent_dir)
        result.add_match(match)

        if options.action == "report":
            self._notify(match, "found")
            return

        if options.per_item_confirm:
            prompt = f"Delete {path} ({bytes_to_human(match.size_bytes)})?"
            if not self._confirm(prompt):
                result.decline(match)
                self._notify(match, "skipped")
                return

        self._progress(path, "deleting", options)
        try:
            self._remove(path)
        except OSError as e:
            log.info("Failed to delete %s: %s", path, e)
            self._progress(path, "failed", options)
            error = result.add_error(path, str(e))
            if self._on_error:
                self._on_error(error)
            return
        self._progress(path, "removed", options)
        self._notify(match, "deleted")

    def _probe(self, path: Path, options: ScanOptions) -> int:
        self._progress(path, "measuring", options)
        try:
            size = max(int(self._measure_size(path)), 0)
        except Exception:
            log.debug("Size probe failed for %s", path, exc_info=True)
            size = 0
        self._progress(path, "measured", options)
        return size

    def _progress(self, path: Path, status: str, options: ScanOptions) -> None:
        if options.verbose and self._on_progress:
            self._on_progress(path, status)

    def _notify(self, match: MatchRecord, status: str) -> None:
        if self._on_match:
            self._on_match(match, status)
