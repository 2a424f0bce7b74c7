"""Restore coordinator — wipe the save directory and repopulate it from a backup."""

from __future__ import annotations

import errno
import shutil
from pathlib import Path

from loguru import logger

from save_backup.core.archive import ArchiveReader
from save_backup.core.catalog import BackupCatalog
from save_backup.errors import BackupLocationError, BackupNotFoundError
from save_backup.models.backup_record import CatalogEntry, RestoreResult
from save_backup.utils import is_within


class RestoreCoordinator:
    """
    Destructive restore: the target tree is deleted, recreated empty and then
    extracted into. There is no staging copy; if extraction fails partway the
    target keeps only what was extracted so far.
    """

    def __init__(self, reader: ArchiveReader | None = None) -> None:
        self._reader = reader or ArchiveReader()

    def restore_entry(
        self,
        target_dir: str | Path,
        backup_dir: str | Path,
        entry: CatalogEntry,
    ) -> RestoreResult:
        """Restore the catalog selection *entry*; the go-back entry touches nothing."""
        if entry.is_go_back:
            return RestoreResult(cancelled=True)

        archive_path = BackupCatalog.resolve(backup_dir, entry)
        if not archive_path.is_file():
            raise BackupNotFoundError(
                errno.ENOENT, "Selected backup not found", str(archive_path)
            )
        return self.restore(target_dir, archive_path)

    def restore(self, target_dir: str | Path, archive_path: str | Path) -> RestoreResult:
        """Replace *target_dir* with the contents of *archive_path*."""
        target_dir = Path(target_dir)
        archive_path = Path(archive_path)
        if is_within(archive_path, target_dir):
            raise BackupLocationError(
                f"Refusing to restore: {archive_path} is inside {target_dir}, which is wiped first"
            )

        logger.info(f"Restoring {target_dir} from {archive_path.name}")
        if target_dir.exists():
            shutil.rmtree(target_dir)
        target_dir.mkdir(parents=True)

        restored = self._reader.extract(archive_path, target_dir)
        logger.info(f"Restored {len(restored)} entries from {archive_path.name}")
        return RestoreResult(archive_path=archive_path, restored_paths=restored)
