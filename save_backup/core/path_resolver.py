"""Locate the Ryujinx save directory and the backup directory."""

from __future__ import annotations

import os
import platform
from pathlib import Path
from typing import TYPE_CHECKING

from save_backup.config import BackupDirStrategy

if TYPE_CHECKING:
    from save_backup.config import Config, ToolProfile

BACKUPS_FOLDER = "Backups"


def default_emulator_root() -> Path:
    """Ryujinx's data directory for the current user."""
    if platform.system() == "Windows":
        appdata = os.environ.get("APPDATA", str(Path.home() / "AppData" / "Roaming"))
        return Path(appdata) / "Ryujinx"
    return Path.home() / ".config" / "Ryujinx"


def save_root(emulator_root: Path) -> Path:
    # Ryujinx save path:  bis/user/save/<title_id>/
    return emulator_root / "bis" / "user" / "save"


def resolve_source_dir(config: Config) -> Path:
    """The live save tree that backups snapshot and restores overwrite."""
    if config.source_path:
        return config.source_path
    root = config.emulator_path or default_emulator_root()
    return save_root(root) / config.title_id


def resolve_backup_dir(config: Config, profile: ToolProfile | None = None) -> Path:
    """Where archives are written and listed; *profile* defaults to config.profile."""
    if config.backup_path:
        return config.backup_path
    profile = profile or config.profile
    if profile.backup_dir_strategy is BackupDirStrategy.DATA_DIR:
        return config.data_dir / "backups" / config.title_id
    root = config.emulator_path or default_emulator_root()
    return save_root(root) / BACKUPS_FOLDER
