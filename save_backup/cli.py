"""Command-line front end: argparse subcommands plus a plain-text menu.

Usage:
    python main.py                      # interactive menu
    python main.py backup --label Save1
    python main.py list
    python main.py restore <archive.zip> --yes
    python main.py paths
"""

from __future__ import annotations

import argparse
from typing import TYPE_CHECKING, Callable

from loguru import logger

from save_backup.errors import BackupError
from save_backup.models.backup_record import CatalogEntry
from save_backup.utils import format_size

if TYPE_CHECKING:
    from save_backup.context import AppContext

InputFn = Callable[[str], str]


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="save-backup",
        description="Back up and restore a Ryujinx save directory as ZIP archives.",
    )
    parser.add_argument("-v", "--verbose", action="store_true", help="Show debug output")
    sub = parser.add_subparsers(dest="command")

    backup = sub.add_parser("backup", help="Create a new backup")
    backup.add_argument("--label", help="Name stored in the archive filename")
    backup.add_argument(
        "--no-label",
        action="store_true",
        help="Do not ask for a label even if prompting is enabled",
    )

    sub.add_parser("list", help="List backups in the backup directory")

    restore = sub.add_parser("restore", help="Replace the save directory with a backup")
    restore.add_argument("archive", nargs="?", help="Archive filename; omit to choose from a list")
    restore.add_argument("-y", "--yes", action="store_true", help="Do not ask for confirmation")

    sub.add_parser("paths", help="Show the resolved save and backup directories")
    return parser


def run(ctx: AppContext, args: argparse.Namespace, input_fn: InputFn = input) -> int:
    """Dispatch *args*; returns the process exit code. Never exits by itself."""
    try:
        if args.command == "backup":
            return cmd_backup(ctx, args.label, ask=not args.no_label, input_fn=input_fn)
        if args.command == "list":
            return cmd_list(ctx)
        if args.command == "restore":
            return cmd_restore(ctx, args.archive, confirm=not args.yes, input_fn=input_fn)
        if args.command == "paths":
            return cmd_paths(ctx)
        return interactive_menu(ctx, input_fn)
    except (BackupError, OSError) as e:
        logger.error(str(e))
        return 1


def cmd_backup(
    ctx: AppContext,
    label: str | None = None,
    ask: bool = True,
    input_fn: InputFn = input,
) -> int:
    if label is None and ask and ctx.profile.prompt_for_label:
        default = ctx.config.default_label
        answer = input_fn(f"Enter a name for the backup [{default}]: ").strip()
        label = answer or default

    result = ctx.backup_manager.create_backup(label)
    name = ctx.codec.display_name(result.record, ctx.config.title_name)
    print(f"Backup complete: {name} -> {result.archive_path} ({format_size(result.size)})")
    return 0


def cmd_list(ctx: AppContext) -> int:
    entries = ctx.catalog.list_backups(ctx.backup_dir)
    if len(entries) == 1:
        print(f"No backups found in {ctx.backup_dir}")
        return 0
    for index, entry in enumerate(entries[1:], start=1):
        print(f"{index:>3}  {entry.display_name}")
    return 0


def cmd_restore(
    ctx: AppContext,
    archive: str | None = None,
    confirm: bool = True,
    input_fn: InputFn = input,
) -> int:
    entries = ctx.catalog.list_backups(ctx.backup_dir)
    if archive is None:
        entry = choose_entry(entries, input_fn)
    else:
        entry = next(
            (e for e in entries if e.archive_filename == archive),
            CatalogEntry(display_name=archive, archive_filename=archive),
        )

    if not entry.is_go_back and confirm:
        answer = input_fn(
            f"Delete {ctx.source_dir} and restore '{entry.display_name}'? [y/N]: "
        )
        if answer.strip().lower() not in ("y", "yes"):
            print("Restore cancelled.")
            return 0

    result = ctx.restore_coordinator.restore_entry(ctx.source_dir, ctx.backup_dir, entry)
    if result.cancelled:
        return 0
    print(f"Restore complete: {len(result.restored_paths)} entries from {entry.archive_filename}")
    return 0


def cmd_paths(ctx: AppContext) -> int:
    print(f"Save directory:   {ctx.source_dir}")
    print(f"Backup directory: {ctx.backup_dir}")
    print(f"Config file:      {ctx.config.path}")
    return 0


def choose_entry(entries: list[CatalogEntry], input_fn: InputFn = input) -> CatalogEntry:
    """Print the catalog and read an index; anything invalid picks "Go back"."""
    for index, entry in enumerate(entries):
        print(f"{index:>3}  {entry.display_name}")
    answer = input_fn("Select a backup to restore: ").strip()
    try:
        index = int(answer)
    except ValueError:
        return entries[0]
    if 0 <= index < len(entries):
        return entries[index]
    return entries[0]


def interactive_menu(ctx: AppContext, input_fn: InputFn = input) -> int:
    """Backup / Restore / Exit loop. Errors abort the current action only."""
    while True:
        print("\n  1  Backup\n  2  Restore\n  0  Exit")
        try:
            choice = input_fn("What would you like to do? ").strip().lower()
        except EOFError:
            return 0

        if choice in ("0", "q", "exit"):
            return 0
        try:
            if choice == "1":
                cmd_backup(ctx, input_fn=input_fn)
            elif choice == "2":
                cmd_restore(ctx, input_fn=input_fn)
            else:
                print(f"Unknown choice: {choice}")
        except EOFError:
            return 0
        except (BackupError, OSError) as e:
            logger.error(str(e))
