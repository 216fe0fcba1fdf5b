"""Shared utility functions."""

from __future__ import annotations

import logging
import os
import shutil
import subprocess
from pathlib import Path

log = logging.getLogger(__name__)

_KB = 1024
_MB = 1024 * _KB
_GB = 1024 * _MB

SIZE_METHODS = ("du", "python")


def xdg_config_home() -> Path:
    """Return XDG_CONFIG_HOME, defaulting to ~/.config."""
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def list_directory(path: Path | str) -> list[tuple[str, bool]]:
    """List the immediate entries of a directory as (name, is_directory) pairs.

    Symlinks are reported as non-directories so the walk never follows them.
    Entries whose type cannot be determined are reported as non-directories.

    Raises:
        OSError: if the directory itself cannot be listed.
    """
    entries: list[tuple[str, bool]] = []
    with os.scandir(path) as it:
        for entry in it:
            try:
                is_dir = entry.is_dir(follow_symlinks=False)
            except OSError:
                is_dir = False
            entries.append((entry.name, is_dir))
    return entries


def dir_size(path: Path | str, method: str = "du") -> int:
    """Calculate the total size of a directory tree in bytes.

    ``du`` reports on-disk usage and is used when installed; otherwise, or
    when ``method`` is ``"python"``, apparent file sizes are summed with
    ``os.scandir``.  Never raises: an unmeasurable tree counts as 0.
    """
    if method == "du":
        try:
            return _dir_size_du(str(path))
        except FileNotFoundError:
            log.debug("du not available, measuring %s with os.scandir", path)
        except (OSError, subprocess.SubprocessError):
            log.debug("du failed for %s", path, exc_info=True)
            return 0
    return _dir_size_scandir(path)


def _dir_size_du(path_str: str) -> int:
    """Measure with ``du -sk`` (supported by both GNU and BSD du)."""
    proc = subprocess.run(
        ["du", "-sk", path_str],
        capture_output=True, timeout=300,
    )
    # du exits non-zero on partially unreadable trees but still prints a total
    first = proc.stdout.split(b"\t", 1)[0].strip()
    try:
        return int(first) * _KB
    except ValueError:
        return 0


def _dir_size_scandir(path: Path | str) -> int:
    """Sum apparent file sizes with os.scandir (pure Python)."""
    total = 0
    stack: list[Path | str] = [path]
    while stack:
        current = stack.pop()
        try:
            with os.scandir(current) as it:
                for entry in it:
                    try:
                        if entry.is_file(follow_symlinks=False):
                            total += entry.stat(follow_symlinks=False).st_size
                        elif entry.is_dir(follow_symlinks=False):
                            stack.append(entry.path)
                    except OSError:
                        pass
        except OSError:
            pass
    return total


def remove_tree(path: Path | str) -> None:
    """Recursively delete a directory tree.

    Raises:
        OSError: if any part of the tree could not be removed.
    """
    shutil.rmtree(path)


def bytes_to_human(size_bytes: int) -> str:
    """Convert byte count to a human-readable string."""
    if size_bytes < 0:
        return f"-{bytes_to_human(-size_bytes)}"
    if size_bytes == 0:
        return "0 B"
    if size_bytes < _KB:
        return f"{size_bytes} B"
    if size_bytes < _MB:
        return f"{size_bytes / _KB:.2f} KB"
    if size_bytes < _GB:
        return f"{size_bytes / _MB:.2f} MB"
    return f"{size_bytes / _GB:.2f} GB"


def format_elapsed(seconds: float) -> str:
    """Format an elapsed time as a human-readable string."""
    if seconds < 1:
        return f"{seconds * 1000:.0f} ms"
    if seconds < 60:
        return f"{seconds:.2f}s"
    minutes = int(seconds) // 60
    secs = seconds - minutes * 60
    return f"{minutes}m {secs:.0f}s"
