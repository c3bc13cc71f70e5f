"""Tests for finding and reading saves in a directory."""

from __future__ import annotations

import logging
import os
from pathlib import Path

import pytest

from titan_souls.core import SaveFileInfo, SaveLocator, ParsedSave


def _set_mtime(path: Path, timestamp: float) -> None:
    os.utime(path, (timestamp, timestamp))


@pytest.fixture
def save_dir(tmp_path: Path, write_save, make_save_text, sample_save_text: str) -> Path:
    """A save directory with good, broken and unrelated files."""
    older = write_save("saves/save1.sav", sample_save_text)
    newer = write_save("saves/save2.sav", make_save_text('<Save><Key id="Door2"/><Deaths count="0"/></Save>'))
    write_save("saves/nochecksum.sav", "<Save/>\n")
    write_save("saves/badint.sav", make_save_text('<Save><Deaths count="lots"/></Save>'))
    write_save("saves/notes.txt", sample_save_text)
    (tmp_path / "saves" / "folder.sav").mkdir()

    _set_mtime(older, 1_600_000_000)
    _set_mtime(newer, 1_700_000_000)
    return tmp_path / "saves"


class TestFindSaveFiles:
    def test_matches_pattern_and_skips_directories(self, save_dir: Path) -> None:
        names = [p.name for p in SaveLocator().find_save_files(save_dir)]

        assert names == ["badint.sav", "nochecksum.sav", "save1.sav", "save2.sav"]

    def test_custom_pattern(self, save_dir: Path) -> None:
        names = [p.name for p in SaveLocator(pattern="*.txt").find_save_files(save_dir)]

        assert names == ["notes.txt"]

    def test_missing_directory_gives_empty_list(self, tmp_path: Path) -> None:
        assert SaveLocator().find_save_files(tmp_path / "nowhere") == []


class TestRead:
    def test_valid_save(self, save_dir: Path) -> None:
        info = SaveLocator().read(save_dir / "save1.sav")

        assert isinstance(info, SaveFileInfo)
        assert info.filename == "save1.sav"
        assert info.slot_name == "save1"
        assert info.file_size == (save_dir / "save1.sav").stat().st_size
        assert info.save.source_path == save_dir / "save1.sav"
        assert info.bosses_slain_count == 2
        assert info.keys_unlocked_count == 1

    def test_invalid_save_is_skipped(self, save_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="titan_souls"):
            assert SaveLocator().read(save_dir / "nochecksum.sav") is None

        assert "no checksum line" in caplog.text

    def test_format_error_is_logged_and_skipped(self, save_dir: Path, caplog: pytest.LogCaptureFixture) -> None:
        with caplog.at_level(logging.WARNING, logger="titan_souls"):
            assert SaveLocator().read(save_dir / "badint.sav") is None

        assert "badint.sav" in caplog.text

    def test_missing_file_is_skipped(self, tmp_path: Path) -> None:
        assert SaveLocator().read(tmp_path / "gone.sav") is None

    def test_non_utf8_file_is_skipped(self, tmp_path: Path) -> None:
        path = tmp_path / "latin.sav"
        path.write_bytes(b"<Save id='\xff'/>\n" + b"a" * 32)

        assert SaveLocator().read(path) is None

    def test_strict_locator_skips_titan_before_kills(self, write_save, make_save_text) -> None:
        path = write_save("order.sav", make_save_text('<Save><Titan id="A"/></Save>'))

        assert SaveLocator(strict=True).read(path) is None
        assert SaveLocator().read(path).save.bosses_slain == ("A",)


class TestGetSaves:
    def test_returns_valid_saves_newest_first(self, save_dir: Path) -> None:
        saves = SaveLocator().get_saves(save_dir)

        assert [s.filename for s in saves] == ["save2.sav", "save1.sav"]
        assert saves[0].save.keys_unlocked == ("Door2",)
        assert saves[0].save.deaths == 0

    def test_empty_directory(self, tmp_path: Path) -> None:
        assert SaveLocator().get_saves(tmp_path) == []


class TestSaveFileInfo:
    def test_counts_for_missing_collections(self) -> None:
        info = SaveFileInfo(file_path=Path("slot.sav"), save=ParsedSave(is_valid=True))

        assert info.bosses_slain_count == 0
        assert info.keys_unlocked_count == 0
        assert info.modified_time is None

    def test_slot_name_without_extension(self) -> None:
        info = SaveFileInfo(file_path=Path("profile"), save=ParsedSave())

        assert info.slot_name == "profile"
