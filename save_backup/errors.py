"""Error types raised by the backup engine.

Filesystem failures are plain ``OSError`` and propagate unchanged.
"""

from __future__ import annotations


class BackupError(Exception):
    """Base class for errors raised by save_backup itself."""


class ArchiveFormatError(BackupError):
    """Archive could not be opened or one of its entries is unreadable."""


class BackupNotFoundError(BackupError, FileNotFoundError):
    """Backup directory or selected archive does not exist."""


class BackupLocationError(BackupError):
    """Backup archives would live inside the save tree they snapshot."""
