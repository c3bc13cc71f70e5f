"""Discovery of Titan Souls save files in a save directory."""

from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Optional

from .errors import SaveFileError
from .save_parser import ParsedSave, read_savefile
from ..logging_config import get_logger

logger = get_logger("save_locator")

DEFAULT_PATTERN = "*.sav"


@dataclass
class SaveFileInfo:
    """A save file found on disk together with its parsed contents."""
    file_path: Path
    save: ParsedSave
    modified_time: Optional[datetime] = None
    file_size: int = 0

    @property
    def filename(self) -> str:
        return self.file_path.name

    @property
    def slot_name(self) -> str:
        """Get the filename without extension (e.g., save1.sav -> save1)."""
        name = self.file_path.name
        if '.' in name:
            return name.split('.')[0]
        return name

    @property
    def bosses_slain_count(self) -> int:
        return len(self.save.bosses_slain) if self.save.bosses_slain else 0

    @property
    def keys_unlocked_count(self) -> int:
        return len(self.save.keys_unlocked) if self.save.keys_unlocked else 0


class SaveLocator:
    """Finds and reads the save files in a directory.

    Files that cannot be read or parsed are logged and skipped, so one
    broken save never hides the others.
    """

    def __init__(self, pattern: str = DEFAULT_PATTERN, strict: bool = False):
        """Initialize the save locator.

        Args:
            pattern: Glob pattern selecting save files inside the directory
            strict: Passed on to the payload parser
        """
        self.pattern = pattern
        self.strict = strict

    def find_save_files(self, save_directory: Path) -> list[Path]:
        """List the files in a directory matching the save pattern.

        Args:
            save_directory: Path to the save directory

        Returns:
            Matching files sorted by name, or an empty list if the
            directory does not exist
        """
        if not save_directory.is_dir():
            logger.debug("Save directory %s does not exist", save_directory)
            return []

        return sorted(
            (p for p in save_directory.glob(self.pattern) if p.is_file()),
            key=lambda p: p.name,
        )

    def read(self, file_path: Path) -> Optional[SaveFileInfo]:
        """Read a single save file.

        Args:
            file_path: Path to the save file

        Returns:
            SaveFileInfo, or None if the file cannot be read, fails to parse
            or has no valid checksum line
        """
        try:
            save = read_savefile(file_path, strict=self.strict)
            stat = file_path.stat()
        except (OSError, UnicodeDecodeError, SaveFileError) as e:
            # Log error but keep scanning
            logger.warning("Error reading save %s: %s", file_path, e)
            return None

        if not save.is_valid:
            logger.warning("Skipping %s: no checksum line", file_path)
            return None

        return SaveFileInfo(
            file_path=file_path,
            save=save,
            modified_time=datetime.fromtimestamp(stat.st_mtime),
            file_size=stat.st_size,
        )

    def get_saves(self, save_directory: Path) -> list[SaveFileInfo]:
        """Read every valid save in a directory.

        Args:
            save_directory: Path to the save directory

        Returns:
            List of SaveFileInfo, sorted by modification time (newest first)
        """
        saves = []
        for file_path in self.find_save_files(save_directory):
            info = self.read(file_path)
            if info:
                saves.append(info)

        saves.sort(key=lambda s: s.modified_time or datetime.min, reverse=True)
        logger.debug("Found %d valid saves in %s", len(saves), save_directory)
        return saves
