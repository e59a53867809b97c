"""Directory snapshot data model."""

import logging
import os
from pathlib import Path
from typing import BinaryIO

from pydantic import BaseModel, ConfigDict, Field

from burne.escaping import Escape, LineSeparator, decode_line, encode_name
from burne.exceptions import LineCountError, SnapshotError
from burne.names import Filename


logger = logging.getLogger(__name__)


class DirectorySnapshot(BaseModel):
    """Sorted names of the direct children of a directory, taken once.

    The order of ``entries`` is the order of lines in the editable list, so the
    edited lines can be paired with the entries one by one.
    """

    model_config = ConfigDict(frozen=True)

    base_dir: Path = Field(description="Directory the entries belong to")
    entries: tuple[Filename, ...] = Field(description="Raw filenames sorted by their bytes")

    def __len__(self) -> int:
        return len(self.entries)

    @classmethod
    def capture(cls, base_dir: Path | str) -> "DirectorySnapshot":
        """List ``base_dir`` and return a snapshot of its entries.

        Raises:
            SnapshotError: If the directory cannot be listed.
        """
        path = Path(base_dir)
        try:
            names = os.listdir(os.fsencode(path))
        except OSError as e:
            raise SnapshotError(f"failed to list directory {path}: {e}") from e

        snapshot = cls(base_dir=path, entries=tuple(sorted(names)))
        logger.debug("Captured %d entries from %s", len(snapshot), path)
        return snapshot

    def write(self, stream: BinaryIO, escape: Escape, separator: LineSeparator) -> None:
        """Write one escaped line per entry, each terminated by ``separator``.

        Every entry is encoded before anything is written, so an unrepresentable
        name leaves ``stream`` untouched.
        """
        lines = [encode_name(name, escape, separator).encode("utf-8") for name in self.entries]
        for line in lines:
            stream.write(line + separator.value)

    def read_destinations(self, data: bytes, escape: Escape, separator: LineSeparator) -> list[Filename]:
        """Decode the edited list into one destination per entry, in entry order.

        Trailing empty lines beyond the entry count are ignored.

        Raises:
            LineCountError: If there are too few lines, or extra non-empty lines.
            EscapeError: If a line cannot be decoded.
        """
        lines = split_lines(data, separator)
        expected = len(self.entries)

        if len(lines) < expected or any(lines[expected:]):
            raise LineCountError(expected=expected, actual=len(lines))

        return [decode_line(line, escape, separator) for line in lines[:expected]]


def split_lines(data: bytes, separator: LineSeparator) -> list[bytes]:
    """Split ``data`` into lines; a final separator does not start a new line."""
    if not data:
        return []
    lines = data.split(separator.value)
    if data.endswith(separator.value):
        lines.pop()
    return lines
