"""Backup manager — snapshot the save directory into a named ZIP."""

from __future__ import annotations

from datetime import datetime
from pathlib import Path

from loguru import logger

from save_backup.core.archive import ArchiveWriter
from save_backup.core.name_codec import NameCodec
from save_backup.errors import BackupLocationError
from save_backup.models.backup_record import BackupResult
from save_backup.utils import is_within, sanitize_filename


class BackupManager:
    """Writes one archive per call into the backup directory."""

    def __init__(
        self,
        source_dir: Path,
        backup_dir: Path,
        codec: NameCodec | None = None,
        writer: ArchiveWriter | None = None,
    ) -> None:
        self._source_dir = Path(source_dir)
        self._backup_dir = Path(backup_dir)
        self._codec = codec or NameCodec()
        self._writer = writer or ArchiveWriter()

    @property
    def source_dir(self) -> Path:
        return self._source_dir

    @property
    def backup_dir(self) -> Path:
        return self._backup_dir

    def create_backup(
        self, label: str | None = None, timestamp: datetime | None = None
    ) -> BackupResult:
        """Archive the source directory under a name encoding *label* and the time."""
        if is_within(self._backup_dir, self._source_dir):
            raise BackupLocationError(
                f"Backup directory {self._backup_dir} is inside the save directory {self._source_dir}"
            )
        if label is not None:
            label = sanitize_filename(label) or None
        record = self._codec.make_record(label, timestamp)

        self._backup_dir.mkdir(parents=True, exist_ok=True)
        archive_path = self._backup_dir / record.archive_filename

        logger.info(f"Backing up {self._source_dir} to {archive_path}")
        count = self._writer.write(self._source_dir, archive_path)

        result = BackupResult(
            archive_path=archive_path,
            record=record,
            entry_count=count,
            size=archive_path.stat().st_size,
        )
        logger.info(f"Created backup: {archive_path.name} ({count} entries)")
        return result
