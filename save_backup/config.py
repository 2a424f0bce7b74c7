"""Tool configuration stored as JSON in the data directory."""

from __future__ import annotations

import json
import os
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from enum import StrEnum
from pathlib import Path
from typing import Any, Iterator

from loguru import logger

from save_backup.core.name_codec import DEFAULT_TITLE_ID, is_valid_title_id

_instance: "Config | None" = None

_DEFAULT_DATA_DIR = Path.home() / ".config" / "save-backup"
DATA_DIR_ENV = "SAVE_BACKUP_HOME"


class BackupDirStrategy(StrEnum):
    """Where archives are stored when no explicit backup_path is configured."""

    SAVE_ROOT = "save_root"  # <emulator>/bis/user/save/Backups
    DATA_DIR = "data_dir"  # <data dir>/backups/<title_id>


@dataclass(frozen=True)
class ToolProfile:
    """The two knobs that distinguish otherwise identical tool variants."""

    prompt_for_label: bool = True
    backup_dir_strategy: BackupDirStrategy = BackupDirStrategy.SAVE_ROOT


def get_config() -> Config:
    """Return the process-wide Config, creating it on first use."""
    global _instance
    if _instance is None:
        env_dir = os.environ.get(DATA_DIR_ENV)
        _instance = Config(Path(env_dir) if env_dir else None)
    return _instance


def reset_config() -> None:
    """Reset the global config instance (for testing)."""
    global _instance
    _instance = None


class Config:
    """JSON-based configuration with atomic saves."""

    _DEFAULTS: dict[str, Any] = {
        "title_id": DEFAULT_TITLE_ID,
        "title_name": "ACNH",
        "emulator_path": "",
        "source_path": "",
        "backup_path": "",
        "backup_dir_strategy": BackupDirStrategy.SAVE_ROOT.value,
        "prompt_for_label": True,
        "default_label": "Backup",
        "apply_permissions": True,
        "log_level": "INFO",
    }

    def __init__(self, data_dir: Path | None = None) -> None:
        self._data: dict[str, Any] = {}
        self._dir = data_dir or _DEFAULT_DATA_DIR
        self._path = self._dir / "config.json"
        self._lock = threading.Lock()
        self._defer_save = False
        self._load()

    def _load(self) -> None:
        """Load config from disk, merging with defaults."""
        self._data = json.loads(json.dumps(self._DEFAULTS))  # deep copy defaults
        if not self._path.exists():
            return
        try:
            with open(self._path, encoding="utf-8") as f:
                user_data = json.load(f)
        except (json.JSONDecodeError, OSError) as e:
            logger.warning(f"Failed to load config, using defaults: {e}")
            return
        if isinstance(user_data, dict):
            self._data.update(user_data)
        else:
            logger.warning(f"Ignoring config file without a JSON object: {self._path}")

    def save(self) -> None:
        """Persist config to disk via a temp file and rename."""
        if self._defer_save:
            return
        with self._lock:
            self._dir.mkdir(parents=True, exist_ok=True)
            tmp_path = self._path.with_suffix(".tmp")
            try:
                with open(tmp_path, "w", encoding="utf-8") as f:
                    json.dump(self._data, f, ensure_ascii=False, indent=2)
                tmp_path.replace(self._path)
            except OSError as e:
                logger.error(f"Failed to save config: {e}")
                tmp_path.unlink(missing_ok=True)

    @contextmanager
    def batch_update(self) -> Iterator[None]:
        """Group several set() calls into a single write."""
        self._defer_save = True
        try:
            yield
        finally:
            self._defer_save = False
            self.save()

    # ── Generic access ──

    def get(self, key: str, default: Any = None) -> Any:
        return self._data.get(key, default)

    def set(self, key: str, value: Any) -> None:
        self._data[key] = value
        self.save()

    # ── Typed properties ──

    @property
    def data_dir(self) -> Path:
        return self._dir

    @property
    def path(self) -> Path:
        return self._path

    @property
    def title_id(self) -> str:
        raw = str(self._data.get("title_id") or DEFAULT_TITLE_ID)
        if not is_valid_title_id(raw):
            logger.warning(f"Invalid title_id {raw!r}, using {DEFAULT_TITLE_ID}")
            return DEFAULT_TITLE_ID
        return raw

    @property
    def title_name(self) -> str:
        return str(self._data.get("title_name", ""))

    @property
    def emulator_path(self) -> Path | None:
        raw = self._data.get("emulator_path", "")
        return Path(raw).expanduser() if raw else None

    @property
    def source_path(self) -> Path | None:
        raw = self._data.get("source_path", "")
        return Path(raw).expanduser() if raw else None

    @source_path.setter
    def source_path(self, value: Path | None) -> None:
        self.set("source_path", str(value) if value else "")

    @property
    def backup_path(self) -> Path | None:
        raw = self._data.get("backup_path", "")
        return Path(raw).expanduser() if raw else None

    @backup_path.setter
    def backup_path(self, value: Path | None) -> None:
        self.set("backup_path", str(value) if value else "")

    @property
    def backup_dir_strategy(self) -> BackupDirStrategy:
        raw = self._data.get("backup_dir_strategy", BackupDirStrategy.SAVE_ROOT.value)
        try:
            return BackupDirStrategy(raw)
        except ValueError:
            logger.warning(f"Unknown backup_dir_strategy {raw!r}, using save_root")
            return BackupDirStrategy.SAVE_ROOT

    @property
    def prompt_for_label(self) -> bool:
        return bool(self._data.get("prompt_for_label", True))

    @property
    def default_label(self) -> str:
        return str(self._data.get("default_label", "Backup"))

    @property
    def apply_permissions(self) -> bool:
        return bool(self._data.get("apply_permissions", True))

    @property
    def log_level(self) -> str:
        return str(self._data.get("log_level", "INFO"))

    @property
    def profile(self) -> ToolProfile:
        return ToolProfile(
            prompt_for_label=self.prompt_for_label,
            backup_dir_strategy=self.backup_dir_strategy,
        )
