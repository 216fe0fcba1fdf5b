"""Shared test fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


def write_file(path: Path, size: int) -> Path:
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(b"x" * size)
    return path


def snapshot(root: Path) -> list[str]:
    """Every path below ``root``, relative and sorted."""
    return sorted(str(p.relative_to(root)) for p in root.rglob("*"))


@pytest.fixture
def isolate_config(tmp_path, monkeypatch):
    """Redirect the settings file to a temp directory."""
    config_home = tmp_path / "config"
    config_home.mkdir()
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "depsweep" / "settings.json"


@pytest.fixture
def projects(tmp_path):
    """A workspace with two projects holding node_modules at different depths.

    projects/a/node_modules          2048 bytes
    projects/b/c/node_modules          10 bytes
    """
    root = tmp_path / "projects"
    write_file(root / "a" / "package.json", 20)
    write_file(root / "a" / "node_modules" / "left-pad" / "index.js", 2048)
    write_file(root / "b" / "README.md", 5)
    write_file(root / "b" / "c" / "node_modules" / "tiny.js", 10)
    (root / "empty").mkdir()
    return root
