"""Apply stored permission bits on POSIX; do nothing elsewhere."""

from __future__ import annotations

import os
import stat
import zipfile
from pathlib import Path
from typing import Protocol


class PermissionPort(Protocol):
    """Applies a stored permission mode to an extracted path."""

    @property
    def supported(self) -> bool: ...

    def apply(self, path: Path, mode: int) -> None: ...


class PosixPermissions:
    """PermissionPort backed by ``os.chmod``."""

    @property
    def supported(self) -> bool:
        return True

    def apply(self, path: Path, mode: int) -> None:
        os.chmod(path, stat.S_IMODE(mode))


class NoopPermissions:
    """PermissionPort for platforms without POSIX mode bits."""

    @property
    def supported(self) -> bool:
        return False

    def apply(self, path: Path, mode: int) -> None:
        return None


def get_permission_port(enabled: bool = True) -> PermissionPort:
    """Pick the permission implementation for the running platform."""
    if enabled and os.name == "posix":
        return PosixPermissions()
    return NoopPermissions()


def mode_from_zipinfo(info: zipfile.ZipInfo) -> int | None:
    """Return the permission bits stored in *info*, or None if it carries none."""
    mode = stat.S_IMODE(info.external_attr >> 16)
    return mode or None
