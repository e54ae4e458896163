"""
PollWatch Test Configuration.

Pytest fixtures and configuration.
Requires Python 3.11+.
"""

import os
import sys
from pathlib import Path

import pytest

from watcher.conduit import ChangeConduit


@pytest.fixture
def set_mtime():
    """Pin a file's access and modification time to whole seconds."""

    def pin(path: Path, seconds: int) -> None:
        os.utime(path, (seconds, seconds))

    return pin


@pytest.fixture
def base_time() -> int:
    """A fixed timestamp well in the past."""
    return 1_600_000_000


@pytest.fixture
def conduit() -> ChangeConduit:
    """Create an empty change conduit."""
    return ChangeConduit()


@pytest.fixture
def sample_tree(tmp_path: Path, base_time: int, set_mtime) -> Path:
    """Create a small directory tree with pinned timestamps."""
    root = tmp_path / "project"
    (root / "src" / "pkg").mkdir(parents=True)
    (root / "docs").mkdir()
    (root / "empty").mkdir()

    files = [
        root / "README.md",
        root / "src" / "main.c",
        root / "src" / "pkg" / "util.c",
        root / "docs" / "index.txt",
    ]
    for i, path in enumerate(files):
        path.write_text(f"content {i}\n")
        set_mtime(path, base_time + i)

    return root


@pytest.fixture
def python_command():
    """Build an argv that runs a Python snippet in a fresh interpreter."""

    def build(code: str) -> list[str]:
        return [sys.executable, "-c", code]

    return build
