"""Exceptions raised while reading Titan Souls save files."""


class SaveFileError(Exception):
    """Base exception for save file parsing errors."""


class StructuralError(SaveFileError):
    """Raised when a save has no trailing 32-character checksum line.

    The parsing pipeline itself never raises this; it reports the condition
    through ``ParsedSave.is_valid``. ``ParsedSave.require_valid`` raises it
    for callers that prefer an exception.
    """


class FormatError(SaveFileError, ValueError):
    """Raised when an attribute expected to hold an integer does not."""

    def __init__(self, element: str, attribute: str, value):
        self.element = element
        self.attribute = attribute
        self.value = value
        if value is None:
            message = f"<{element}> is missing its '{attribute}' attribute"
        else:
            message = f"<{element} {attribute}={value!r}> is not a 32-bit integer"
        super().__init__(message)


class SequenceError(SaveFileError):
    """Raised when an element appends to a collection not yet started.

    Only raised in strict mode, e.g. a <Titan> element before <Kills>.
    """


class MarkupError(SaveFileError):
    """Raised when the XML payload cannot be tokenized."""
