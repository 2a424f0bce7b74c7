"""Shared utility functions."""

from __future__ import annotations

from pathlib import Path

ILLEGAL_FILENAME_CHARS = '<>:"/\\|?*'


def format_size(size_bytes: int) -> str:
    """Format byte count to human-readable string."""
    if size_bytes < 1024:
        return f"{size_bytes} B"
    elif size_bytes < 1024 * 1024:
        return f"{size_bytes / 1024:.1f} KB"
    elif size_bytes < 1024 * 1024 * 1024:
        return f"{size_bytes / (1024 * 1024):.1f} MB"
    else:
        return f"{size_bytes / (1024 * 1024 * 1024):.2f} GB"


def sanitize_filename(name: str) -> str:
    """Replace characters that cannot appear in a backup label."""
    for ch in ILLEGAL_FILENAME_CHARS:
        name = name.replace(ch, "_")
    name = name.replace("\n", " ").replace("\r", "").replace("\t", " ")
    name = "".join(ch for ch in name if ch.isprintable()).strip()
    while "  " in name:
        name = name.replace("  ", " ")
    return name.strip(". ")


def is_within(path: Path, parent: Path) -> bool:
    """True if *path* is *parent* or lies beneath it, after resolving symlinks."""
    return Path(path).resolve().is_relative_to(Path(parent).resolve())
