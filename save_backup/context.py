"""Application context — service container for dependency injection."""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from save_backup.config import Config, ToolProfile
    from save_backup.core.backup import BackupManager
    from save_backup.core.catalog import BackupCatalog
    from save_backup.core.name_codec import NameCodec
    from save_backup.core.restore import RestoreCoordinator


@dataclass
class AppContext:
    """Everything a command needs, wired once at startup."""

    config: Config
    profile: ToolProfile
    source_dir: Path
    backup_dir: Path

    codec: NameCodec
    catalog: BackupCatalog
    backup_manager: BackupManager
    restore_coordinator: RestoreCoordinator
