"""Application entry point — wires services and runs the command line."""

from __future__ import annotations

import sys

from save_backup.cli import build_parser, run
from save_backup.config import Config, ToolProfile, get_config
from save_backup.context import AppContext
from save_backup.core.archive import ArchiveReader, ArchiveWriter
from save_backup.core.backup import BackupManager
from save_backup.core.catalog import BackupCatalog
from save_backup.core.name_codec import NameCodec
from save_backup.core.path_resolver import resolve_backup_dir, resolve_source_dir
from save_backup.core.permissions import get_permission_port
from save_backup.core.restore import RestoreCoordinator
from save_backup.logger import setup_logger


def create_context(
    config: Config | None = None, profile: ToolProfile | None = None
) -> AppContext:
    """Wire all services and return an AppContext."""
    config = config or get_config()
    profile = profile or config.profile

    source_dir = resolve_source_dir(config)
    backup_dir = resolve_backup_dir(config, profile)

    codec = NameCodec(config.title_id)
    permissions = get_permission_port(config.apply_permissions)

    return AppContext(
        config=config,
        profile=profile,
        source_dir=source_dir,
        backup_dir=backup_dir,
        codec=codec,
        catalog=BackupCatalog(codec, config.title_name),
        backup_manager=BackupManager(source_dir, backup_dir, codec, ArchiveWriter()),
        restore_coordinator=RestoreCoordinator(ArchiveReader(permissions)),
    )


def main(argv: list[str] | None = None) -> int:
    """Application entry point."""
    args = build_parser().parse_args(argv)
    config = get_config()

    setup_logger(config.data_dir / "logs", config.log_level, verbose=args.verbose)

    ctx = create_context(config)
    return run(ctx, args)


if __name__ == "__main__":
    sys.exit(main())
