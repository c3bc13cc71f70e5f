"""Parser for Titan Souls save files.

A save file is plain text in two parts:
- An XML payload spread over any number of lines
- A final line holding a 32-character checksum (an MD5 hex digest)

Example::

    <?xml version="1.0" encoding="utf-8"?>
    <Save>
      <Kills count="2"><Titan id="Eyecube"/><Titan id="Knight"/></Kills>
      <Key id="Door1"/>
      <time val="7260"/>
      <Deaths count="14"/>
    </Save>
    0123456789abcdef0123456789abcdef

The checksum is only used as a structural signal; it is never recomputed.
Play time is stored in 1/60 second ticks, so dividing by 60 gives seconds.
"""

import re
import xml.etree.ElementTree as ET
from dataclasses import dataclass, replace
from datetime import timedelta
from pathlib import Path
from typing import Iterator, Optional

from .errors import FormatError, MarkupError, SequenceError, StructuralError
from ..logging_config import get_logger

logger = get_logger("save_parser")

CHECKSUM_LENGTH = 32

# Sentinel for numeric fields missing from the payload
NOT_FOUND = -1

TICKS_PER_SECOND = 60

_INT32_MIN = -(2 ** 31)
_INT32_MAX = 2 ** 31 - 1
_INTEGER_PATTERN = re.compile(r"[+-]?[0-9]+")

# The XML declaration has to stay in front of the synthetic fragment root
_DECLARATION_PATTERN = re.compile(r"\s*(<\?xml\b[^>]*\?>)")
_FRAGMENT_ROOT = "_save_payload"


@dataclass(frozen=True)
class SplitResult:
    """A save file separated into checksum and XML payload."""
    checksum: str = ""
    payload: str = ""
    is_valid: bool = False


@dataclass(frozen=True)
class ParsedSave:
    """Player progress read from a save file.

    Check ``is_valid`` before trusting any other field. ``bosses_slain`` and
    ``keys_unlocked`` stay None until their first element is seen, which is
    distinct from an empty collection.
    """
    is_valid: bool = False
    checksum: str = ""
    payload: str = ""
    time_played_raw: int = NOT_FOUND
    deaths: int = NOT_FOUND
    bosses_slain: Optional[tuple[str, ...]] = None
    declared_kill_count: Optional[int] = None  # <Kills count>, never enforced
    keys_unlocked: Optional[tuple[str, ...]] = None
    source_path: Optional[Path] = None

    @property
    def time_played(self) -> timedelta:
        """Time spent in game, in whole seconds.

        Zero when the payload had no <time> element.
        """
        if self.time_played_raw == NOT_FOUND:
            return timedelta(0)
        # Truncates toward zero, as the game does
        return timedelta(seconds=int(self.time_played_raw / TICKS_PER_SECOND))

    @property
    def filename(self) -> Optional[str]:
        return self.source_path.name if self.source_path else None

    def require_valid(self) -> "ParsedSave":
        """Return this save, raising StructuralError if it is not valid."""
        if not self.is_valid:
            where = f" in {self.source_path}" if self.source_path else ""
            raise StructuralError(f"No {CHECKSUM_LENGTH}-character checksum line found{where}")
        return self


@dataclass
class _SaveBuilder:
    """Mutable accumulator filled during a single pass over the payload."""
    time_played_raw: int = NOT_FOUND
    deaths: int = NOT_FOUND
    bosses_slain: Optional[list[str]] = None
    declared_kill_count: Optional[int] = None
    keys_unlocked: Optional[list[str]] = None

    def build(self, payload: str, checksum: str = "") -> ParsedSave:
        return ParsedSave(
            is_valid=True,
            checksum=checksum,
            payload=payload,
            time_played_raw=self.time_played_raw,
            deaths=self.deaths,
            bosses_slain=tuple(self.bosses_slain) if self.bosses_slain is not None else None,
            declared_kill_count=self.declared_kill_count,
            keys_unlocked=tuple(self.keys_unlocked) if self.keys_unlocked is not None else None,
        )


def split_content(content: str) -> SplitResult:
    """Separate the checksum line from the XML payload.

    Args:
        content: String containing the whole save file

    Returns:
        SplitResult; checksum and payload are empty if the last line,
        stripped, is not exactly 32 characters long
    """
    lines = content.split("\n")
    # Unreachable: str.split returns at least one line
    if not lines:
        return SplitResult()

    checksum = lines[-1].strip()
    if len(checksum) != CHECKSUM_LENGTH:
        logger.debug("Last line is %d characters long, expected a %d-character checksum",
                     len(checksum), CHECKSUM_LENGTH)
        return SplitResult()

    # Line breaks are not reinserted; the XML does not depend on them
    payload = "".join(lines[:-1])
    return SplitResult(checksum=checksum, payload=payload, is_valid=True)


def _parse_int(element: ET.Element, attribute: str) -> int:
    """Read a signed 32-bit integer attribute.

    Surrounding whitespace and a leading sign are accepted.

    Raises:
        FormatError: If the attribute is missing, not an integer or out of range
    """
    value = element.get(attribute)
    if value is None or not _INTEGER_PATTERN.fullmatch(value.strip()):
        raise FormatError(element.tag, attribute, value)

    number = int(value.strip())
    if not _INT32_MIN <= number <= _INT32_MAX:
        raise FormatError(element.tag, attribute, value)
    return number


class PayloadParser:
    """Walks the element-start events of a save payload.

    Recognised elements:
        <Kills count="N">   starts the list of bosses slain
        <Titan id="..."/>   a boss slain, in document order
        <Key id="..."/>     an unlocked key, in document order
        <time val="N"/>     play time in 1/60 second ticks
        <Deaths count="N"/> number of player deaths

    Anything else is ignored.
    """

    def __init__(self, strict: bool = False):
        """Initialize the payload parser.

        Args:
            strict: If True, a <Titan> before any <Kills> raises SequenceError.
                    Otherwise the boss list is started implicitly.
        """
        self.strict = strict

    def parse(self, payload: str, checksum: str = "") -> ParsedSave:
        """Parse an XML payload into a ParsedSave.

        Args:
            payload: XML content of a save whose checksum line was valid
            checksum: Checksum to carry onto the result

        Returns:
            A valid ParsedSave with every recognised element applied

        Raises:
            FormatError: If an integer attribute cannot be parsed
            SequenceError: In strict mode, if <Titan> precedes <Kills>
            MarkupError: If the payload is not well-formed XML
        """
        builder = _SaveBuilder()
        for element in self._iter_start_elements(payload):
            self._apply(builder, element)

        save = builder.build(payload, checksum)
        logger.debug(
            "Parsed save: time=%d deaths=%d bosses=%s keys=%s",
            save.time_played_raw,
            save.deaths,
            len(save.bosses_slain) if save.bosses_slain is not None else None,
            len(save.keys_unlocked) if save.keys_unlocked is not None else None,
        )
        return save

    @staticmethod
    def _iter_start_elements(payload: str) -> Iterator[ET.Element]:
        """Yield each element of the payload as it opens, in document order.

        The payload is read as an XML fragment: it may hold several
        top-level elements, or none at all.
        """
        match = _DECLARATION_PATTERN.match(payload)
        declaration, body = (match.group(1), payload[match.end():]) if match else ("", payload)

        pull_parser = ET.XMLPullParser(events=("start",))
        try:
            # Syntax errors are queued and raised by read_events in document order
            pull_parser.feed(f"{declaration}<{_FRAGMENT_ROOT}>{body}</{_FRAGMENT_ROOT}>")
            events = pull_parser.read_events()
            next(events, None)  # fragment root
            for _event, element in events:
                yield element

            close_error = None
            try:
                pull_parser.close()
            except ET.ParseError as e:
                close_error = e

            # Elements completed while closing come before the close error
            for _event, element in pull_parser.read_events():
                yield element
            if close_error is not None:
                raise close_error
        except ET.ParseError as e:
            raise MarkupError(f"Save payload is not well-formed XML: {e}") from e

    def _apply(self, builder: _SaveBuilder, element: ET.Element) -> None:
        """Update the builder from a single opened element."""
        tag = element.tag

        if tag == "Kills":
            builder.declared_kill_count = _parse_int(element, "count")
            builder.bosses_slain = []

        elif tag == "Key":
            if builder.keys_unlocked is None:
                builder.keys_unlocked = []
            builder.keys_unlocked.append(element.get("id", ""))

        elif tag == "Titan":
            titan_id = element.get("id", "")
            if builder.bosses_slain is None:
                if self.strict:
                    raise SequenceError(f"<Titan id={titan_id!r}> appears before <Kills>")
                logger.warning("<Titan id=%r> appears before <Kills>, starting boss list", titan_id)
                builder.bosses_slain = []
            builder.bosses_slain.append(titan_id)

        elif tag == "time":
            builder.time_played_raw = _parse_int(element, "val")

        elif tag == "Deaths":
            builder.deaths = _parse_int(element, "count")


def parse_save_text(
    content: str,
    strict: bool = False,
    source_path: Optional[Path] = None,
) -> ParsedSave:
    """Split and parse the full text of a save file.

    Args:
        content: String containing the whole save file
        strict: Passed on to PayloadParser
        source_path: Optional file the content was read from

    Returns:
        ParsedSave; if the checksum line is missing, an invalid ParsedSave
        with every field at its default

    Raises:
        FormatError, SequenceError, MarkupError: See PayloadParser.parse
    """
    split = split_content(content)
    if not split.is_valid:
        return ParsedSave(source_path=source_path)

    save = PayloadParser(strict=strict).parse(split.payload, split.checksum)
    if source_path is not None:
        save = replace(save, source_path=source_path)
    return save


def load_save_text(file_path: Path) -> str:
    """Read the whole save file into a string.

    Newlines are kept as written and a UTF-8 byte order mark is dropped.

    Args:
        file_path: Path to the save file

    Raises:
        OSError: If the file cannot be read
        UnicodeDecodeError: If the file is not UTF-8
    """
    with open(file_path, "r", encoding="utf-8-sig", newline="") as f:
        return f.read()


def read_savefile(file_path: Path, strict: bool = False) -> ParsedSave:
    """Load and parse a save file.

    Args:
        file_path: Path to the save file
        strict: Passed on to PayloadParser

    Returns:
        ParsedSave with ``source_path`` set to file_path
    """
    logger.debug("Reading save file %s", file_path)
    content = load_save_text(file_path)
    return parse_save_text(content, strict=strict, source_path=Path(file_path))
