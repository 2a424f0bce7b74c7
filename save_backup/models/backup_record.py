"""Backup record models."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path


@dataclass(frozen=True)
class BackupRecord:
    """Metadata decoded from (or encoded into) an archive filename."""

    title_id: str
    label: str | None
    timestamp: datetime
    archive_filename: str

    @property
    def display_time(self) -> str:
        return self.timestamp.strftime("%Y-%m-%d %H:%M:%S")


@dataclass(frozen=True)
class CatalogEntry:
    """One selectable row of the restore catalog."""

    display_name: str
    archive_filename: str
    record: BackupRecord | None = None
    is_go_back: bool = False

    @property
    def is_opaque(self) -> bool:
        """True for files whose name does not follow the backup grammar."""
        return not self.is_go_back and self.record is None


GO_BACK = CatalogEntry(display_name="Go back", archive_filename="", is_go_back=True)


@dataclass
class ArchiveEntry:
    """A single member of a backup archive."""

    relative_path: str  # posix form, directories end with "/"
    is_dir: bool
    size: int = 0
    mode: int | None = None


@dataclass
class BackupResult:
    """Result of a backup operation."""

    archive_path: Path
    record: BackupRecord
    entry_count: int = 0
    size: int = 0


@dataclass
class RestoreResult:
    """Result of a restore operation."""

    archive_path: Path | None = None
    restored_paths: list[Path] = field(default_factory=list)
    cancelled: bool = False
