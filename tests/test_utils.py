"""Tests for size probing, deletion and formatting helpers."""

from __future__ import annotations

import os
import shutil
import subprocess

import pytest

from conftest import write_file
from depsweep.utils import (
    bytes_to_human,
    dir_size,
    format_elapsed,
    list_directory,
    remove_tree,
    xdg_config_home,
)


@pytest.fixture
def tree(tmp_path):
    root = tmp_path / "node_modules"
    write_file(root / "a.js", 1000)
    write_file(root / "pkg" / "b.js", 2000)
    write_file(root / "pkg" / "deep" / "c.js", 96)
    return root


class TestBytesToHuman:
    @pytest.mark.parametrize(
        "size, expected",
        [
            (0, "0 B"),
            (1, "1 B"),
            (1023, "1023 B"),
            (1024, "1.00 KB"),
            (1536, "1.50 KB"),
            (1024 * 1024, "1.00 MB"),
            (2048 * 1024 + 10 * 1024, "2.01 MB"),
            (3 * 1024**3 // 2, "1.50 GB"),
            (5 * 1024**4, "5120.00 GB"),
            (-1024, "-1.00 KB"),
        ],
    )
    def test_formats(self, size, expected):
        assert bytes_to_human(size) == expected


class TestFormatElapsed:
    def test_milliseconds(self):
        assert format_elapsed(0.25) == "250 ms"

    def test_seconds(self):
        assert format_elapsed(3.456) == "3.46s"

    def test_minutes(self):
        assert format_elapsed(125) == "2m 5s"


class TestDirSize:
    def test_python_method_sums_file_sizes(self, tree):
        assert dir_size(tree, method="python") == 3096

    @pytest.mark.skipif(shutil.which("du") is None, reason="du not installed")
    def test_du_reports_disk_usage(self, tree):
        size = dir_size(tree)
        assert size > 0
        assert size % 1024 == 0

    def test_falls_back_without_du(self, tree, monkeypatch):
        def no_du(*args, **kwargs):
            raise FileNotFoundError("du")

        monkeypatch.setattr(subprocess, "run", no_du)
        assert dir_size(tree, method="du") == 3096

    def test_du_timeout_is_zero(self, tree, monkeypatch):
        def slow_du(*args, **kwargs):
            raise subprocess.TimeoutExpired("du", 300)

        monkeypatch.setattr(subprocess, "run", slow_du)
        assert dir_size(tree) == 0

    def test_du_unparseable_output_is_zero(self, tree, monkeypatch):
        monkeypatch.setattr(
            subprocess,
            "run",
            lambda *a, **kw: subprocess.CompletedProcess(a, 1, stdout=b"", stderr=b"du: boom"),
        )
        assert dir_size(tree) == 0

    def test_du_output_parsed(self, tree, monkeypatch):
        monkeypatch.setattr(
            subprocess,
            "run",
            lambda *a, **kw: subprocess.CompletedProcess(a, 0, stdout=f"12\t{tree}\n".encode(), stderr=b""),
        )
        assert dir_size(tree) == 12 * 1024

    @pytest.mark.parametrize("method", ["du", "python"])
    def test_missing_directory_is_zero(self, tmp_path, method):
        assert dir_size(tmp_path / "missing", method=method) == 0

    def test_python_method_ignores_symlinks(self, tree, tmp_path):
        outside = write_file(tmp_path / "outside.bin", 5000)
        os.symlink(outside, tree / "link.bin")
        os.symlink(tmp_path, tree / "loop")
        assert dir_size(tree, method="python") == 3096


class TestListDirectory:
    def test_lists_names_and_types(self, tree):
        os.symlink(tree / "pkg", tree / "pkg-link")
        entries = dict(list_directory(tree))
        assert entries == {"a.js": False, "pkg": True, "pkg-link": False}

    def test_raises_for_missing(self, tmp_path):
        with pytest.raises(OSError):
            list_directory(tmp_path / "missing")

    def test_raises_for_file(self, tree):
        with pytest.raises(OSError):
            list_directory(tree / "a.js")


class TestRemoveTree:
    def test_removes_everything(self, tree):
        remove_tree(tree)
        assert not tree.exists()

    def test_raises_for_missing(self, tmp_path):
        with pytest.raises(OSError):
            remove_tree(tmp_path / "missing")


def test_xdg_config_home(monkeypatch, tmp_path):
    monkeypatch.setenv("XDG_CONFIG_HOME", str(tmp_path))
    assert xdg_config_home() == tmp_path
