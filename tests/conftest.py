"""Pytest configuration and shared fixtures.

This module contains fixtures used across all test modules.
"""

import os
from pathlib import Path

import pytest
from clannad.filesystem.memory import MemoryFileSystem


@pytest.fixture
def scenario_fs() -> MemoryFileSystem:
    """In-memory tree: /root/a.txt, /root/sub/b.txt, /root/link -> sub."""
    fs = MemoryFileSystem()
    fs.add_file("/root/a.txt", b"123456")
    fs.add_file("/root/sub/b.txt", b"abc")
    fs.add_symlink("/root/link", "sub")
    return fs


@pytest.fixture
def disk_tree(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """On-disk tree mirroring scenario_fs, with the working directory at its parent.

    Layout (relative to the working directory):
        root/a.txt
        root/sub/b.txt
        root/link -> sub
    """
    root = tmp_path / "root"
    (root / "sub").mkdir(parents=True)
    (root / "a.txt").write_text("123456")
    (root / "sub" / "b.txt").write_text("abc")
    os.symlink("sub", root / "link")
    monkeypatch.chdir(tmp_path)
    return root


@pytest.fixture
def isolated_config(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Point XDG_CONFIG_HOME at a temporary directory and return the config path."""
    config_home = tmp_path / "xdg-config"
    monkeypatch.setenv("XDG_CONFIG_HOME", str(config_home))
    return config_home / "clannad" / "config.toml"


@pytest.fixture
def parent_step_tree(tmp_path: Path) -> Path:
    """On-disk tree with a link whose target steps out of a directory symlink.

    Layout:
        root/real/inner/
        root/real/f.txt
        root/d -> real/inner
        root/l -> d/../f.txt      (resolves to root/real/f.txt)
    """
    root = tmp_path / "root"
    (root / "real" / "inner").mkdir(parents=True)
    (root / "real" / "f.txt").write_text("parent")
    os.symlink("real/inner", root / "d")
    os.symlink("d/../f.txt", root / "l")
    return root
