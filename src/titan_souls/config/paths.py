"""Default paths for save files and configuration"""

import os
from pathlib import Path


class AppPaths:
    """Default paths for Titan Souls saves and reader configuration.

    All paths use environment variable expansion for portability.
    """

    # Default save location of the game
    SAVE_DEFAULT = Path(os.path.expandvars(r"%USERPROFILE%\Documents\My Games\Titan Souls"))

    # Default glob used to pick save files out of the save directory
    SAVE_PATTERN_DEFAULT = "*.sav"

    # Configuration file location
    CONFIG_DIR = Path(os.path.expandvars(r"%APPDATA%\TitanSoulsSaveReader"))
    CONFIG_FILE = CONFIG_DIR / "configuration.xml"

    # Log file
    LOG_FILE = CONFIG_DIR / "titan_souls.log"

    @classmethod
    def expand_path(cls, path_str: str) -> Path:
        """Expand environment variables and the user's home in a path string.

        Args:
            path_str: Path string potentially containing environment variables

        Returns:
            Path object with expanded variables
        """
        return Path(os.path.expanduser(os.path.expandvars(path_str.strip())))
