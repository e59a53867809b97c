"""Escaping strategies to represent filenames as editable lines of text."""

import unicodedata
from enum import Enum
from urllib.parse import unquote_to_bytes

from burne.exceptions import EscapeError
from burne.names import Filename


# Unicode categories always escaped by the percent strategy: control characters
# (including line feed and NUL) and line/paragraph separators.
PERCENT_ESCAPED_CATEGORIES = frozenset({"Cc", "Zl", "Zp"})
PERCENT_ESCAPED_CHARS = frozenset("% ")

# Lone surrogates produced by the "surrogateescape" error handler for bytes
# that are not part of valid UTF-8.
_SURROGATE_ESCAPE_LOW = 0xDC80
_SURROGATE_ESCAPE_HIGH = 0xDCFF


class Escape(str, Enum):
    """Escape method for filenames written to the editable list."""

    NONE = "none"
    PERCENT = "percent"


class LineSeparator(Enum):
    """Character terminating each line of the editable list."""

    LINE_FEED = b"\n"
    NULL = b"\0"

    @classmethod
    def from_null_data_flag(cls, null_data: bool) -> "LineSeparator":
        return cls.NULL if null_data else cls.LINE_FEED


def encode_name(name: Filename, escape: Escape, separator: LineSeparator) -> str:
    """Encode a raw filename as a single line of text (without the separator).

    Raises:
        EscapeError: If the name cannot be represented with the given strategy.
    """
    if escape is Escape.PERCENT:
        return _percent_encode(name)

    try:
        text = name.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EscapeError(name, "filename is not valid UTF-8") from e
    if separator.value in name:
        raise EscapeError(name, "filename contains the line separator")
    return text


def decode_line(line: bytes, escape: Escape, separator: LineSeparator) -> Filename:
    """Decode one line of the edited list back to a raw filename.

    Raises:
        EscapeError: If the line cannot be decoded with the given strategy.
    """
    if escape is Escape.PERCENT:
        return unquote_to_bytes(line)

    try:
        line.decode("utf-8")
    except UnicodeDecodeError as e:
        raise EscapeError(line, "line is not valid UTF-8") from e
    if separator.value in line:
        raise EscapeError(line, "line contains the line separator")
    return line


def _percent_encode(name: Filename) -> str:
    """Percent-encode unsafe characters while keeping printable text readable."""
    parts: list[str] = []
    for char in name.decode("utf-8", "surrogateescape"):
        code = ord(char)
        if _SURROGATE_ESCAPE_LOW <= code <= _SURROGATE_ESCAPE_HIGH:
            parts.append(f"%{code - 0xDC00:02X}")
        elif char in PERCENT_ESCAPED_CHARS or unicodedata.category(char) in PERCENT_ESCAPED_CATEGORIES:
            parts.extend(f"%{byte:02X}" for byte in char.encode("utf-8"))
        else:
            parts.append(char)
    return "".join(parts)
