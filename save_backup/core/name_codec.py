"""Backup filename codec. The archive filename is the only metadata store.

Two grammars are recognised, tried in this order::

    <title_id>_<label>_<YYYY-MM-DD>_<HH-MM-SS>.zip
    <title_id>_<YYYY-MM-DD>_<HH-MM-SS>.zip

The label capture is greedy, so a label that itself contains ``_`` or a
date-like fragment is kept whole; only the trailing date/time pair is parsed.
"""

from __future__ import annotations

import re
from datetime import datetime

from save_backup.models.backup_record import BackupRecord

DEFAULT_TITLE_ID = "0000000000000001"
ARCHIVE_SUFFIX = ".zip"

_DATE_FORMAT = "%Y-%m-%d"
_TIME_FORMAT = "%H-%M-%S"
_TITLE_ID_RE = re.compile(r"[0-9A-Fa-f]{16}")


def is_valid_title_id(title_id: str) -> bool:
    """Title ids are 16 hex digits, e.g. ``01006F8002326000``."""
    return bool(_TITLE_ID_RE.fullmatch(title_id))


class NameCodec:
    """Encode/decode backup metadata to and from archive filenames."""

    def __init__(self, title_id: str = DEFAULT_TITLE_ID) -> None:
        if not is_valid_title_id(title_id):
            raise ValueError(f"Title id must be 16 hex digits: {title_id!r}")
        self._title_id = title_id
        prefix = re.escape(title_id)
        self._with_label = re.compile(
            rf"^{prefix}_(.+)_(\d{{4}}-\d{{2}}-\d{{2}})_(\d{{2}}-\d{{2}}-\d{{2}})\.zip$"
        )
        self._without_label = re.compile(
            rf"^{prefix}_(\d{{4}}-\d{{2}}-\d{{2}})_(\d{{2}}-\d{{2}}-\d{{2}})\.zip$"
        )

    @property
    def title_id(self) -> str:
        return self._title_id

    def encode(self, label: str | None = None, timestamp: datetime | None = None) -> str:
        """Build the archive filename for *label* taken at *timestamp* (local time)."""
        label = self._normalize_label(label)
        if timestamp is None:
            timestamp = datetime.now()
        stamp = timestamp.strftime(f"{_DATE_FORMAT}_{_TIME_FORMAT}")
        if label is None:
            return f"{self._title_id}_{stamp}{ARCHIVE_SUFFIX}"
        return f"{self._title_id}_{label}_{stamp}{ARCHIVE_SUFFIX}"

    def make_record(
        self, label: str | None = None, timestamp: datetime | None = None
    ) -> BackupRecord:
        """Create the record that :meth:`decode` would return for the encoded name."""
        if timestamp is None:
            timestamp = datetime.now()
        timestamp = timestamp.replace(microsecond=0)
        return BackupRecord(
            title_id=self._title_id,
            label=self._normalize_label(label),
            timestamp=timestamp,
            archive_filename=self.encode(label, timestamp),
        )

    def decode(self, filename: str) -> BackupRecord | str:
        """Parse *filename*; anything unrecognised comes back unchanged."""
        label: str | None = None
        match = self._with_label.match(filename)
        if match:
            label, date_part, time_part = match.groups()
        else:
            match = self._without_label.match(filename)
            if not match:
                return filename
            date_part, time_part = match.groups()

        try:
            timestamp = datetime.strptime(
                f"{date_part}_{time_part}", f"{_DATE_FORMAT}_{_TIME_FORMAT}"
            )
        except ValueError:
            return filename

        return BackupRecord(
            title_id=self._title_id,
            label=label,
            timestamp=timestamp,
            archive_filename=filename,
        )

    @staticmethod
    def display_name(record: BackupRecord, title_name: str = "") -> str:
        """Human-readable catalog text, e.g. ``ACNH Save1 2024-05-01 12:30:00``."""
        parts = [title_name, record.label or "", record.display_time]
        return " ".join(p for p in parts if p)

    @staticmethod
    def _normalize_label(label: str | None) -> str | None:
        if label is None or not label.strip():
            return None
        if "/" in label or "\\" in label:
            raise ValueError(f"Backup label cannot contain path separators: {label!r}")
        if not label.isprintable():
            raise ValueError(f"Backup label cannot contain control characters: {label!r}")
        return label
