"""Configuration data models"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import Optional

from .paths import AppPaths


@dataclass
class Settings:
    """Reader settings"""
    save_directory: Optional[Path] = None
    save_pattern: str = AppPaths.SAVE_PATTERN_DEFAULT
    strict_ordering: bool = False

    def is_valid(self) -> bool:
        """Check if the configured save directory exists.

        Returns:
            True if save_directory is configured and exists
        """
        return self.save_directory is not None and self.save_directory.is_dir()


@dataclass
class AppConfiguration:
    """Complete reader configuration"""
    settings: Settings = field(default_factory=Settings)

    def get_save_directory(self) -> Path:
        """Get the configured save directory, falling back to the default.

        Returns:
            The save directory to scan
        """
        return self.settings.save_directory or AppPaths.SAVE_DEFAULT
