"""Execute rename plans through a rename backend."""

import logging
import os

from burne.models.plan import RenameChain, RenamePlan
from burne.names import Filename
from burne.processors.renamers import Renamer


logger = logging.getLogger(__name__)


class PlanExecutor:
    """Runs the renames of a plan in an order that never overwrites a file."""

    def __init__(self, renamer: Renamer) -> None:
        """Initialize the executor.

        Args:
            renamer: Backend performing the individual renames.
        """
        self.renamer = renamer
        self.rename_count = 0

    def run(self, plan: RenamePlan) -> int:
        """Execute every chain and cycle of ``plan``.

        Failures are not rolled back: renames already done stay done and the
        temporary directory is left in place if a cycle was interrupted.

        Returns:
            Number of renames issued.

        Raises:
            OSError: If a rename fails.
            PlanExecutionError: If the temporary directory cannot be removed.
        """
        self.rename_count = 0

        for chain in plan.chains:
            self._run_chain(chain.names)

        if plan.cycles:
            temp_dir = self.renamer.make_temp_dir()
            for cycle in plan.cycles:
                self._run_cycle(cycle, temp_dir)
            self.renamer.remove_temp_dir(temp_dir)

        logger.debug("Issued %d rename(s)", self.rename_count)
        return self.rename_count

    def _run_chain(self, names: list[Filename]) -> None:
        # Last rename first, so every destination has been vacated already.
        for index in range(len(names) - 1, 0, -1):
            self._rename(names[index - 1], names[index])

    def _run_cycle(self, cycle: RenameChain, temp_dir: Filename) -> None:
        names = cycle.names
        held = os.path.join(temp_dir, names[-1])

        self._rename(names[-1], held)
        self._run_chain(names)
        self._rename(held, names[0])

    def _rename(self, source: Filename, destination: Filename) -> None:
        self.renamer.rename(source, destination)
        self.rename_count += 1
