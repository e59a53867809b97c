"""Helpers for raw filenames.

Filenames are kept as ``bytes`` throughout so that names which are not valid
UTF-8 survive a rename untouched.
"""

import os


Filename = bytes

SEPARATOR = os.fsencode(os.sep)
RESERVED_NAMES = (b".", b"..")


def display_name(name: Filename) -> str:
    """Render a raw filename for humans, escaping undecodable bytes."""
    return name.decode("utf-8", "backslashreplace")


def destination_problem(name: Filename) -> str | None:
    """Return why ``name`` cannot be a destination inside the directory, or None if it can."""
    if not name:
        return "empty filename"
    if name in RESERVED_NAMES:
        return "reserved filename"
    if SEPARATOR in name or b"/" in name:
        return "filename contains a path separator"
    if b"\0" in name:
        return "filename contains a NUL byte"
    return None
