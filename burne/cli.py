"""CLI entrypoints."""

import logging
import os
import tempfile
from pathlib import Path
from typing import BinaryIO, NoReturn

import click
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape as escape_markup

from burne.editor import launch_editor
from burne.escaping import Escape, LineSeparator
from burne.exceptions import BurneError
from burne.models.snapshot import DirectorySnapshot
from burne.processors.plan_builder import PlanBuilder
from burne.processors.plan_executor import PlanExecutor
from burne.processors.renamers import DryRunRenamer, FsRenamer, Renamer


console = Console()
error_console = Console(stderr=True)

LOG_LEVELS = ("DEBUG", "INFO", "WARNING", "ERROR")


def source_dir_argument(**kwargs):
    return click.argument(
        "source_dir",
        type=click.Path(exists=True, file_okay=False, path_type=Path),
        **kwargs,
    )


escape_option = click.option(
    "-e",
    "--escape",
    "escape_method",
    type=click.Choice([method.value for method in Escape]),
    default=Escape.NONE.value,
    help="Escape method for filenames in the list.",
)
null_data_option = click.option(
    "-z",
    "--null-data",
    is_flag=True,
    default=False,
    help="Separate lines by NUL characters instead of line feeds.",
)
dry_run_option = click.option(
    "-n",
    "--dry-run",
    is_flag=True,
    default=False,
    help="Print the renames instead of performing them.",
)


def _configure_logging(level: str) -> None:
    logging.basicConfig(
        level=level,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), show_path=False)],
        force=True,
    )


def _abort(error: Exception) -> NoReturn:
    error_console.print(f"[bold red]Error:[/bold red] {escape_markup(str(error))}", soft_wrap=True, emoji=False)
    raise SystemExit(1) from error


def _rename(snapshot: DirectorySnapshot, data: bytes, escape: Escape, separator: LineSeparator, dry_run: bool) -> None:
    """Plan the renames described by the edited list and run them."""
    destinations = snapshot.read_destinations(data, escape, separator)
    plan = PlanBuilder(snapshot).build(destinations)

    if plan.is_empty:
        console.print("[yellow]Nothing to rename.[/yellow]")
        return

    renamer: Renamer
    if dry_run:
        renamer = DryRunRenamer(snapshot.base_dir, console=console)
    else:
        renamer = FsRenamer(snapshot.base_dir)
    PlanExecutor(renamer).run(plan)

    if dry_run:
        console.print(f"[yellow]Dry run:[/yellow] {plan.rename_count} file(s) would be renamed.")
    else:
        console.print(f"[bold green]Successfully renamed {plan.rename_count} file(s).[/bold green]")


@click.group(context_settings=dict(show_default=True))
@click.option(
    "--log-level",
    type=click.Choice(LOG_LEVELS, case_sensitive=False),
    default="WARNING",
    envvar="BURNE_LOG",
    help="Log level for diagnostics written to stderr.",
)
def cli(log_level: str) -> None:
    """burne - Bulk rename files by editing their names in your editor."""
    _configure_logging(log_level.upper())


@cli.command("edit")
@source_dir_argument(default=".")
@escape_option
@dry_run_option
@null_data_option
def edit(source_dir: Path, escape_method: str, dry_run: bool, null_data: bool) -> None:
    """Rename the files in SOURCE_DIR by editing their names.

    The names are written one per line to a temporary file which is opened
    in $VISUAL or $EDITOR. After the editor exits, each line is the new name
    of the file originally on that line.
    """
    escape = Escape(escape_method)
    separator = LineSeparator.from_null_data_flag(null_data)

    try:
        snapshot = DirectorySnapshot.capture(source_dir)
        if not snapshot.entries:
            console.print(f"[yellow]No files in [bold cyan]{escape_markup(str(source_dir))}[/bold cyan].[/yellow]")
            return

        fd, temp_name = tempfile.mkstemp(prefix="burne-", suffix=".txt")
        temp_path = Path(temp_name)
        try:
            with os.fdopen(fd, "wb") as stream:
                snapshot.write(stream, escape, separator)
            launch_editor(temp_path)
            data = temp_path.read_bytes()
        finally:
            temp_path.unlink(missing_ok=True)

        _rename(snapshot, data, escape, separator, dry_run)
    except (BurneError, OSError) as e:
        _abort(e)


@cli.command("list")
@source_dir_argument(default=".")
@escape_option
@null_data_option
def list_names(source_dir: Path, escape_method: str, null_data: bool) -> None:
    """Write the names in SOURCE_DIR to stdout, in the order `apply` expects."""
    stdout: BinaryIO = click.get_binary_stream("stdout")
    try:
        snapshot = DirectorySnapshot.capture(source_dir)
        snapshot.write(stdout, Escape(escape_method), LineSeparator.from_null_data_flag(null_data))
    except (BurneError, OSError) as e:
        _abort(e)
    stdout.flush()


@cli.command("apply")
@source_dir_argument()
@click.argument("list_file", type=click.File("rb"))
@escape_option
@dry_run_option
@null_data_option
def apply(source_dir: Path, list_file: BinaryIO, escape_method: str, dry_run: bool, null_data: bool) -> None:
    """Rename the files in SOURCE_DIR to the names listed in LIST_FILE.

    LIST_FILE holds one name per line in the order printed by `list`.
    Use `-` to read it from stdin.

    Examples:

        burne list photos > names.txt && sed -i 's/^IMG_/holiday_/' names.txt

        burne apply photos names.txt
    """
    try:
        snapshot = DirectorySnapshot.capture(source_dir)
        data = list_file.read()
        _rename(snapshot, data, Escape(escape_method), LineSeparator.from_null_data_flag(null_data), dry_run)
    except (BurneError, OSError) as e:
        _abort(e)
