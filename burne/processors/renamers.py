"""Rename backends performing single renames inside a base directory."""

import logging
import os
import tempfile
from abc import ABC, abstractmethod
from pathlib import Path

from rich.console import Console
from rich.markup import escape

from burne.exceptions import PlanExecutionError
from burne.names import Filename, display_name


logger = logging.getLogger(__name__)

TEMP_DIR_PREFIX = ".burne-"
DRY_RUN_TEMP_DIR = b"<tempdir>"


class Renamer(ABC):
    """Base class for rename backends.

    Paths given to a renamer are relative to its base directory and may have
    one extra component when they point into the temporary directory.
    """

    def __init__(self, base_dir: Path) -> None:
        self.base_dir = base_dir

    @abstractmethod
    def rename(self, source: Filename, destination: Filename) -> None:
        """Rename ``source`` to ``destination``."""
        pass

    @abstractmethod
    def make_temp_dir(self) -> Filename:
        """Create a uniquely named holding directory and return its relative name."""
        pass

    @abstractmethod
    def remove_temp_dir(self, name: Filename) -> None:
        """Remove the holding directory created by :meth:`make_temp_dir`."""
        pass


class FsRenamer(Renamer):
    """Renamer that renames files on the filesystem."""

    def _resolve(self, name: Filename) -> bytes:
        return os.path.join(os.fsencode(self.base_dir), name)

    def rename(self, source: Filename, destination: Filename) -> None:
        """Rename ``source`` to ``destination``.

        A destination that is the source itself, as in a case-only rename on a
        case-insensitive filesystem, does not count as existing.

        Raises:
            FileExistsError: If ``destination`` already exists as another file.
            OSError: If the rename itself fails.
        """
        source_path = self._resolve(source)
        destination_path = self._resolve(destination)
        if os.path.lexists(destination_path) and not _same_entry(source_path, destination_path):
            raise FileExistsError(f"Target file already exists: {os.fsdecode(destination_path)}")

        logger.debug("Renaming %r -> %r", display_name(source), display_name(destination))
        os.rename(source_path, destination_path)

    def make_temp_dir(self) -> Filename:
        # Not removed on failure: it may hold a user file mid-cycle.
        path = tempfile.mkdtemp(prefix=os.fsencode(TEMP_DIR_PREFIX), dir=os.fsencode(self.base_dir))
        logger.debug("Created temporary directory %r", os.fsdecode(path))
        return os.path.basename(path)

    def remove_temp_dir(self, name: Filename) -> None:
        """Remove the holding directory.

        Raises:
            PlanExecutionError: If it cannot be removed, e.g. because it is not empty.
        """
        path = self._resolve(name)
        try:
            os.rmdir(path)
        except OSError as e:
            raise PlanExecutionError(f"failed to remove temporary directory {os.fsdecode(path)}: {e}") from e
        logger.debug("Removed temporary directory %r", os.fsdecode(path))


def _same_entry(source_path: bytes, destination_path: bytes) -> bool:
    try:
        return os.path.samestat(os.lstat(source_path), os.lstat(destination_path))
    except OSError:
        return False


class DryRunRenamer(Renamer):
    """Renamer that only prints the renames it is asked to perform."""

    def __init__(self, base_dir: Path, console: Console | None = None) -> None:
        """Initialize the renamer.

        Args:
            base_dir: Directory the renames would happen in.
            console: Console to print to. Defaults to a new stdout console.
        """
        super().__init__(base_dir)
        self.console = console or Console()
        self.operations: list[tuple[Filename, Filename]] = []

    def rename(self, source: Filename, destination: Filename) -> None:
        self.operations.append((source, destination))
        self.console.print(
            f"[cyan]{escape(repr(display_name(source)))}[/cyan] -> "
            f"[green]{escape(repr(display_name(destination)))}[/green]",
            highlight=False,
            emoji=False,
            soft_wrap=True,
        )

    def make_temp_dir(self) -> Filename:
        return DRY_RUN_TEMP_DIR

    def remove_temp_dir(self, name: Filename) -> None:
        pass
