"""ZIP archive engine — snapshot a directory tree and restore it verbatim."""

from __future__ import annotations

import errno
import os
import zipfile
import zlib
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from loguru import logger

from save_backup.core.permissions import PermissionPort, get_permission_port, mode_from_zipinfo
from save_backup.errors import ArchiveFormatError, BackupNotFoundError
from save_backup.models.backup_record import ArchiveEntry

PART_SUFFIX = ".part"

# Raised by zipfile while reading a damaged or truncated member.
_CORRUPT_ERRORS = (zipfile.BadZipFile, zlib.error, EOFError)


def _raise_walk_error(error: OSError) -> None:
    raise error


def _walk(source_dir: Path) -> Iterator[Path]:
    """Yield every path under *source_dir*, parents before children, sorted per level.

    Unreadable directories raise instead of being skipped.
    """
    for dirpath, dirnames, filenames in os.walk(source_dir, onerror=_raise_walk_error):
        dirnames.sort()
        filenames.sort()
        root = Path(dirpath)
        for name in filenames:
            yield root / name
        for name in dirnames:
            yield root / name


class ArchiveWriter:
    """Serialize a directory tree into a single ZIP file."""

    def __init__(self, compression: int = zipfile.ZIP_DEFLATED) -> None:
        self._compression = compression

    def write(self, source_dir: str | Path, archive_path: str | Path) -> int:
        """
        Archive every file and directory under *source_dir* into *archive_path*.

        Entries are stored relative to *source_dir*, parents before children.
        The archive is assembled next to the destination as ``<name>.part``
        and renamed into place once complete, so a failed write never leaves
        a ``.zip`` behind. An existing archive at *archive_path* is replaced.

        Returns the number of entries written.
        """
        source_dir = Path(source_dir)
        archive_path = Path(archive_path)
        if not source_dir.exists():
            raise FileNotFoundError(errno.ENOENT, "Source directory not found", str(source_dir))
        if not source_dir.is_dir():
            raise NotADirectoryError(errno.ENOTDIR, "Source is not a directory", str(source_dir))

        part_path = archive_path.with_name(archive_path.name + PART_SUFFIX)
        count = 0
        try:
            with zipfile.ZipFile(
                part_path, "w", self._compression, strict_timestamps=False
            ) as zf:
                for child in _walk(source_dir):
                    if not (child.is_dir() or child.is_file()):
                        logger.warning(f"Skipping special file: {child}")
                        continue
                    # zipfile appends "/" to directory names and records st_mode
                    zf.write(child, child.relative_to(source_dir).as_posix())
                    count += 1
            os.replace(part_path, archive_path)
        except BaseException:
            part_path.unlink(missing_ok=True)
            raise

        logger.debug(f"Wrote {count} entries from {source_dir} to {archive_path.name}")
        return count


class ArchiveReader:
    """Deserialize a ZIP archive back into a directory tree."""

    def __init__(self, permissions: PermissionPort | None = None) -> None:
        self._permissions = permissions or get_permission_port()

    def entries(self, archive_path: str | Path) -> list[ArchiveEntry]:
        """List archive members without extracting them."""
        with self._open(archive_path) as zf:
            return [
                ArchiveEntry(
                    relative_path=info.filename,
                    is_dir=info.is_dir(),
                    size=info.file_size,
                    mode=mode_from_zipinfo(info),
                )
                for info in zf.infolist()
            ]

    def extract(self, archive_path: str | Path, target_dir: str | Path) -> list[Path]:
        """
        Extract every member of *archive_path* under *target_dir*, in stored order.

        Existing directories are reused and existing files overwritten.
        Stored permission modes are applied through the PermissionPort; file
        modes right after the file is written, directory modes once all
        entries are in place (deepest first) so a read-only directory does
        not block its own contents.

        Not atomic: on failure *target_dir* keeps whatever was extracted
        before the error.
        """
        target_dir = Path(target_dir)
        extracted: list[Path] = []
        dir_modes: list[tuple[Path, int]] = []

        with self._open(archive_path) as zf:
            for info in zf.infolist():
                try:
                    dest = Path(zf.extract(info, target_dir))
                except _CORRUPT_ERRORS as e:
                    raise ArchiveFormatError(
                        f"Unreadable entry {info.filename!r} in {Path(archive_path).name}: {e}"
                    ) from e
                extracted.append(dest)

                mode = mode_from_zipinfo(info)
                if mode is None:
                    continue
                if info.is_dir():
                    dir_modes.append((dest, mode))
                else:
                    self._permissions.apply(dest, mode)

        for path, mode in sorted(dir_modes, key=lambda item: len(item[0].parts), reverse=True):
            self._permissions.apply(path, mode)

        logger.debug(f"Extracted {len(extracted)} entries into {target_dir}")
        return extracted

    @contextmanager
    def _open(self, archive_path: str | Path) -> Iterator[zipfile.ZipFile]:
        archive_path = Path(archive_path)
        if not archive_path.is_file():
            raise BackupNotFoundError(
                errno.ENOENT, "Backup archive not found", str(archive_path)
            )
        try:
            zf = zipfile.ZipFile(archive_path, "r")
        except _CORRUPT_ERRORS as e:
            raise ArchiveFormatError(f"Corrupt backup archive {archive_path.name}: {e}") from e
        with zf:
            yield zf
