"""Build rename plans from a directory snapshot and edited destinations."""

import logging
from collections.abc import Sequence
from pathlib import Path

from burne.exceptions import DuplicateDestinationError, InvalidDestinationError, LineCountError
from burne.models.plan import RenameChain, RenameMapping, RenamePlan
from burne.models.snapshot import DirectorySnapshot
from burne.names import Filename, destination_problem


logger = logging.getLogger(__name__)


def build_mapping(snapshot: DirectorySnapshot, destinations: Sequence[Filename]) -> RenameMapping:
    """Pair snapshot entries with destinations, line by line.

    Args:
        snapshot: Snapshot the editable list was written from.
        destinations: Destination filename for each entry, in entry order.

    Returns:
        Mapping of every entry whose destination differs from its name.

    Raises:
        LineCountError: If there are fewer destinations than entries.
        DuplicateDestinationError: If two entries share a destination.
        InvalidDestinationError: If a destination would leave the directory.
    """
    if len(destinations) < len(snapshot.entries):
        raise LineCountError(expected=len(snapshot.entries), actual=len(destinations))

    claimed: dict[Filename, Filename] = {}
    renames: dict[Filename, Filename] = {}
    for source, destination in zip(snapshot.entries, destinations):
        problem = destination_problem(destination)
        if problem is not None:
            raise InvalidDestinationError(source, destination, problem)
        if destination in claimed:
            raise DuplicateDestinationError(claimed[destination], source, destination)
        claimed[destination] = source

        if source != destination:
            renames[source] = destination

    return RenameMapping(renames=renames)


def build_plan(base_dir: Path, mapping: RenameMapping) -> RenamePlan:
    """Decompose a mapping into acyclic chains and cycles.

    Every name is a source at most once and a destination at most once, so the
    mapping splits into disjoint paths and disjoint cycles. Pairs are drained
    from the reversed mapping in arbitrary order; the resulting set of chains
    and cycles does not depend on that order, and the returned plan lists them
    sorted so it is fully deterministic.
    """
    remaining = mapping.reversed()
    # Chains in forward order, keyed by their last name.
    chains_by_end: dict[Filename, list[Filename]] = {}
    cycles: list[RenameChain] = []

    while remaining:
        destination, source = remaining.popitem()

        if source in chains_by_end:
            chain = chains_by_end.pop(source)
            chain.append(destination)
            chains_by_end[destination] = chain
            continue

        # Trace backward from destination; ``traced`` is in reverse rename order.
        traced = [destination, source]
        while True:
            front = traced[-1]
            if front in chains_by_end:
                head = chains_by_end.pop(front)
                chains_by_end[destination] = head + traced[-2::-1]
                break

            predecessor = remaining.pop(front, None)
            if predecessor is None:
                chains_by_end[destination] = traced[::-1]
                break
            if predecessor == destination:
                cycles.append(RenameChain(names=traced[::-1], cyclic=True))
                break
            traced.append(predecessor)

    plan = RenamePlan(
        base_dir=base_dir,
        chains=sorted((RenameChain(names=names) for names in chains_by_end.values()), key=_first_name),
        cycles=sorted((cycle.canonical() for cycle in cycles), key=_first_name),
    )
    logger.debug("Planned %d chain(s) and %d cycle(s)", len(plan.chains), len(plan.cycles))
    return plan


def _first_name(chain: RenameChain) -> Filename:
    return chain.names[0]


class PlanBuilder:
    """Builds the rename plan for one directory snapshot."""

    def __init__(self, snapshot: DirectorySnapshot) -> None:
        """Initialize the builder.

        Args:
            snapshot: Snapshot the destinations will be paired with.
        """
        self.snapshot = snapshot

    def build(self, destinations: Sequence[Filename]) -> RenamePlan:
        """Validate ``destinations`` and return the plan implementing them."""
        mapping = build_mapping(self.snapshot, destinations)
        logger.debug("Mapping has %d rename(s)", len(mapping))
        return build_plan(self.snapshot.base_dir, mapping)
