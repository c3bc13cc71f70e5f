"""Titan Souls Save Reader - Save file parser for Titan Souls.

This package provides:
    - Splitting a save file into its trailing checksum line and XML payload
    - Parsing the payload into a typed, read-only ParsedSave record
      (time played, deaths, bosses slain, keys unlocked)
    - Locating and reading every save file in a save directory
    - XML-backed settings stored in %APPDATA%/TitanSoulsSaveReader

Package Structure:
    config: Configuration management, paths and schemas
    core: Save file splitting, payload parsing, save discovery and errors
    logging_config: Logger setup shared by all modules

Quick Start:
    Read a single save file::

        from titan_souls.core import read_savefile
        save = read_savefile(Path("save.sav"))
        if save.is_valid:
            print(save.deaths, save.time_played)

    Or scan a save directory::

        from titan_souls.core import SaveLocator
        for info in SaveLocator().get_saves(Path("saves")):
            print(info.slot_name, info.bosses_slain_count)

Configuration:
    - Config file: %APPDATA%/TitanSoulsSaveReader/configuration.xml
    - Log file: %APPDATA%/TitanSoulsSaveReader/titan_souls.log
"""

__version__ = "1.0.0"
__app_name__ = "Titan Souls Save Reader"
