"""List archives in the backup directory for selection."""

from __future__ import annotations

import errno
from pathlib import Path

from loguru import logger

from save_backup.core.name_codec import ARCHIVE_SUFFIX, NameCodec
from save_backup.errors import BackupNotFoundError
from save_backup.models.backup_record import GO_BACK, BackupRecord, CatalogEntry


class BackupCatalog:
    """Re-reads the backup directory on every call; holds no state of its own."""

    def __init__(self, codec: NameCodec, title_name: str = "") -> None:
        self._codec = codec
        self._title_name = title_name

    def list_backups(self, backup_dir: str | Path) -> list[CatalogEntry]:
        """
        Return the selectable backups in *backup_dir*, ``GO_BACK`` first.

        Decoded backups come newest first (ties by filename), followed by
        files that do not match the naming grammar, ordered by filename.
        """
        backup_dir = Path(backup_dir)
        if not backup_dir.is_dir():
            raise BackupNotFoundError(
                errno.ENOENT, "Backup directory does not exist", str(backup_dir)
            )

        records: list[BackupRecord] = []
        opaque: list[str] = []
        for path in backup_dir.iterdir():
            if not path.is_file() or path.suffix.lower() != ARCHIVE_SUFFIX:
                continue
            decoded = self._codec.decode(path.name)
            if isinstance(decoded, BackupRecord):
                records.append(decoded)
            else:
                opaque.append(decoded)

        records.sort(key=lambda r: r.archive_filename)
        records.sort(key=lambda r: r.timestamp, reverse=True)

        entries = [GO_BACK]
        entries.extend(
            CatalogEntry(
                display_name=self._codec.display_name(r, self._title_name),
                archive_filename=r.archive_filename,
                record=r,
            )
            for r in records
        )
        entries.extend(CatalogEntry(display_name=name, archive_filename=name) for name in sorted(opaque))

        logger.debug(f"Catalog of {backup_dir}: {len(records)} backups, {len(opaque)} unrecognised")
        return entries

    @staticmethod
    def resolve(backup_dir: str | Path, entry: CatalogEntry) -> Path:
        """Map a catalog selection back to its archive path."""
        if entry.is_go_back:
            raise ValueError("The go-back entry has no archive")
        return Path(backup_dir) / entry.archive_filename
