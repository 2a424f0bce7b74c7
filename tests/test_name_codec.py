"""Tests for the backup filename codec."""

from __future__ import annotations

from datetime import datetime

import pytest

from save_backup.core.name_codec import NameCodec
from save_backup.models.backup_record import BackupRecord

STAMP = datetime(2024, 5, 1, 12, 30, 0)


@pytest.fixture
def codec() -> NameCodec:
    return NameCodec()


class TestEncode:
    def test_labeled(self, codec: NameCodec) -> None:
        assert codec.encode("Save1", STAMP) == "0000000000000001_Save1_2024-05-01_12-30-00.zip"

    def test_without_label(self, codec: NameCodec) -> None:
        assert codec.encode(None, STAMP) == "0000000000000001_2024-05-01_12-30-00.zip"

    def test_blank_label_uses_unlabeled_form(self, codec: NameCodec) -> None:
        assert codec.encode("   ", STAMP) == codec.encode(None, STAMP)

    def test_zero_padding(self, codec: NameCodec) -> None:
        name = codec.encode(None, datetime(2024, 1, 2, 3, 4, 5))
        assert name == "0000000000000001_2024-01-02_03-04-05.zip"

    def test_custom_title_id(self) -> None:
        codec = NameCodec("0100000000010000")
        assert codec.encode("A", STAMP).startswith("0100000000010000_A_")

    def test_invalid_title_id(self) -> None:
        with pytest.raises(ValueError):
            NameCodec("ACNH")

    def test_hex_title_id(self) -> None:
        codec = NameCodec("01006F8002326000")
        record = codec.decode(codec.encode("Save1", STAMP))
        assert isinstance(record, BackupRecord)
        assert record.title_id == "01006F8002326000"
        assert record.label == "Save1"

    @pytest.mark.parametrize("label", ["a\nb", "tab\there", "bell\x07"])
    def test_label_with_control_character_rejected(self, codec: NameCodec, label: str) -> None:
        with pytest.raises(ValueError):
            codec.encode(label, STAMP)

    def test_label_with_separator_rejected(self, codec: NameCodec) -> None:
        with pytest.raises(ValueError):
            codec.encode("a/b", STAMP)


class TestDecode:
    def test_labeled(self, codec: NameCodec) -> None:
        record = codec.decode("0000000000000001_Save1_2024-05-01_12-30-00.zip")
        assert isinstance(record, BackupRecord)
        assert record.label == "Save1"
        assert record.timestamp == STAMP

    def test_without_label(self, codec: NameCodec) -> None:
        record = codec.decode("0000000000000001_2024-05-01_12-30-00.zip")
        assert isinstance(record, BackupRecord)
        assert record.label is None
        assert record.timestamp == STAMP

    def test_round_trip_truncates_to_seconds(self, codec: NameCodec) -> None:
        stamp = datetime(2024, 5, 1, 12, 30, 0, 987654)
        record = codec.decode(codec.encode("Island", stamp))
        assert isinstance(record, BackupRecord)
        assert (record.label, record.timestamp) == ("Island", STAMP)

    def test_make_record_matches_decode(self, codec: NameCodec) -> None:
        record = codec.make_record("Save1", STAMP)
        assert codec.decode(record.archive_filename) == record

    def test_greedy_label(self, codec: NameCodec) -> None:
        label = "before_2023-01-01_00-00-00"
        record = codec.decode(codec.encode(label, STAMP))
        assert isinstance(record, BackupRecord)
        assert record.label == label
        assert record.timestamp == STAMP

    def test_date_shaped_label(self, codec: NameCodec) -> None:
        record = codec.decode(codec.encode("2020-02-02", STAMP))
        assert isinstance(record, BackupRecord)
        assert record.label == "2020-02-02"

    @pytest.mark.parametrize(
        "name",
        [
            "random.zip",
            "0000000000000001_2024-13-01_12-30-00.zip",
            "0000000000000001_Save1_2024-05-01_25-00-00.zip",
            "0000000000000002_Save1_2024-05-01_12-30-00.zip",
            "0000000000000001_Save1_2024-05-01_12-30-00.zip.bak",
            "",
        ],
    )
    def test_opaque_fallback(self, codec: NameCodec, name: str) -> None:
        assert codec.decode(name) == name


class TestDisplayName:
    def test_with_label(self, codec: NameCodec) -> None:
        record = codec.make_record("Save1", STAMP)
        assert codec.display_name(record, "ACNH") == "ACNH Save1 2024-05-01 12:30:00"

    def test_without_label_or_title(self, codec: NameCodec) -> None:
        record = codec.make_record(None, STAMP)
        assert codec.display_name(record) == "2024-05-01 12:30:00"
