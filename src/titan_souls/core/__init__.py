"""Core save file logic.

Submodules:
    save_parser: split_content and PayloadParser for the checksum + XML format
    save_locator: SaveLocator for finding and reading saves in a directory
    errors: Exception hierarchy rooted at SaveFileError

Loading a file and parsing its text are separate stages so the parser can
be used on any string:

    load_save_text(path) -> str
    parse_save_text(text) -> ParsedSave
    read_savefile(path)  -> ParsedSave  (both stages)
"""

from .errors import (
    FormatError,
    MarkupError,
    SaveFileError,
    SequenceError,
    StructuralError,
)
from .save_locator import SaveFileInfo, SaveLocator
from .save_parser import (
    NOT_FOUND,
    ParsedSave,
    PayloadParser,
    SplitResult,
    load_save_text,
    parse_save_text,
    read_savefile,
    split_content,
)

__all__ = [
    "FormatError",
    "MarkupError",
    "SaveFileError",
    "SequenceError",
    "StructuralError",
    "SaveFileInfo",
    "SaveLocator",
    "NOT_FOUND",
    "ParsedSave",
    "PayloadParser",
    "SplitResult",
    "load_save_text",
    "parse_save_text",
    "read_savefile",
    "split_content",
]
