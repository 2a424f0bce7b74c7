"""Shared fixtures."""

from __future__ import annotations

from pathlib import Path

import pytest


def snapshot(root: Path) -> dict[str, bytes | None]:
    """Map each relative path under *root* to its bytes (None for directories)."""
    return {
        p.relative_to(root).as_posix(): (None if p.is_dir() else p.read_bytes())
        for p in root.rglob("*")
    }


@pytest.fixture
def save_tree(tmp_path: Path) -> Path:
    """A small save directory: two files, a nested folder and an empty folder."""
    root = tmp_path / "0000000000000001"
    (root / "sub").mkdir(parents=True)
    (root / "empty").mkdir()
    (root / "a.txt").write_bytes(b"x")
    (root / "sub" / "b.txt").write_bytes(b"y")
    return root
