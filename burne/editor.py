"""Launch the user's editor on the editable list."""

import logging
import os
import shlex
import subprocess
from pathlib import Path

from burne.exceptions import EditorError


logger = logging.getLogger(__name__)

EDITOR_ENV_VARS = ("VISUAL", "EDITOR")


def get_editor() -> list[str]:
    """Return the editor command from ``$VISUAL`` or ``$EDITOR``.

    The value is split like a shell would, so ``"code --wait"`` works.

    Raises:
        EditorError: If neither variable is set to a non-empty command.
    """
    for var in EDITOR_ENV_VARS:
        command = shlex.split(os.environ.get(var, ""))
        if command:
            logger.debug("Using editor from $%s: %r", var, command)
            return command
    raise EditorError("failed to get editor: set the VISUAL or EDITOR environment variable")


def launch_editor(path: Path) -> None:
    """Open ``path`` in the user's editor and wait for it to exit.

    Raises:
        EditorError: If no editor is configured, it cannot be started,
            or it exits unsuccessfully.
    """
    command = [*get_editor(), str(path)]
    try:
        completed = subprocess.run(command, check=False)
    except OSError as e:
        raise EditorError(f"failed to run the editor {command[0]!r}: {e}") from e

    if completed.returncode != 0:
        raise EditorError(
            f"the editor exited unsuccessfully: exit_code={completed.returncode}",
            exit_code=completed.returncode,
        )
