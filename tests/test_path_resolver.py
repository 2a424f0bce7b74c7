"""Tests for save/backup directory resolution."""

from __future__ import annotations

from pathlib import Path

import pytest

from save_backup.config import BackupDirStrategy, Config, ToolProfile
from save_backup.core.path_resolver import (
    default_emulator_root,
    resolve_backup_dir,
    resolve_source_dir,
)


@pytest.fixture
def config(tmp_path: Path) -> Config:
    config = Config(data_dir=tmp_path / "data")
    config.set("emulator_path", str(tmp_path / "Ryujinx"))
    return config


class TestPaths:
    def test_source_under_save_root(self, config: Config, tmp_path: Path) -> None:
        expected = tmp_path / "Ryujinx" / "bis" / "user" / "save" / "0000000000000001"
        assert resolve_source_dir(config) == expected

    def test_backup_dir_save_root_strategy(self, config: Config, tmp_path: Path) -> None:
        assert resolve_backup_dir(config) == tmp_path / "Ryujinx" / "bis" / "user" / "save" / "Backups"

    def test_backup_dir_data_dir_strategy(self, config: Config, tmp_path: Path) -> None:
        config.set("backup_dir_strategy", "data_dir")
        assert resolve_backup_dir(config) == tmp_path / "data" / "backups" / "0000000000000001"

    def test_explicit_paths_win(self, config: Config, tmp_path: Path) -> None:
        with config.batch_update():
            config.source_path = tmp_path / "saves"
            config.backup_path = tmp_path / "archives"
        assert resolve_source_dir(config) == tmp_path / "saves"
        assert resolve_backup_dir(config) == tmp_path / "archives"

    def test_default_root_is_ryujinx(self) -> None:
        assert default_emulator_root().name == "Ryujinx"

    def test_profile_overrides_config_strategy(self, config: Config, tmp_path: Path) -> None:
        profile = ToolProfile(prompt_for_label=False, backup_dir_strategy=BackupDirStrategy.DATA_DIR)
        assert resolve_backup_dir(config, profile) == tmp_path / "data" / "backups" / "0000000000000001"
