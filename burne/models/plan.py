"""Rename plan data models."""

from collections.abc import Iterator
from pathlib import Path

from pydantic import BaseModel, Field

from burne.names import Filename, display_name


class RenameMapping(BaseModel):
    """Source to destination filenames, without no-op entries."""

    renames: dict[Filename, Filename] = Field(
        description="Destination filename keyed by source filename",
        default_factory=dict,
    )

    def __len__(self) -> int:
        return len(self.renames)

    def reversed(self) -> dict[Filename, Filename]:
        """Return the destination to source mapping."""
        return {destination: source for source, destination in self.renames.items()}


class RenameChain(BaseModel):
    """A sequence ``f0 -> f1 -> ... -> fn`` of renames.

    For a cycle, ``names`` lists the members once and ``fn`` is renamed back to
    ``f0``.
    """

    names: list[Filename] = Field(description="Filenames in rename order")
    cyclic: bool = Field(description="Whether the last name is renamed to the first", default=False)

    def __len__(self) -> int:
        return len(self.names)

    def __str__(self) -> str:
        names = [display_name(name) for name in self.names]
        if self.cyclic:
            names.append(names[0])
        return " -> ".join(repr(name) for name in names)

    def pairs(self) -> Iterator[tuple[Filename, Filename]]:
        """Yield each ``(source, destination)`` of the chain in forward order."""
        yield from zip(self.names, self.names[1:])
        if self.cyclic:
            yield self.names[-1], self.names[0]

    def canonical(self) -> "RenameChain":
        """Return the chain with a cycle rotated to start at its smallest name."""
        if not self.cyclic or not self.names:
            return self
        start = self.names.index(min(self.names))
        return RenameChain(names=self.names[start:] + self.names[:start], cyclic=True)


class RenamePlan(BaseModel):
    """Chains and cycles of renames inside one directory."""

    base_dir: Path = Field(description="Directory all renames happen in")
    chains: list[RenameChain] = Field(description="Acyclic rename chains", default_factory=list)
    cycles: list[RenameChain] = Field(description="Cyclic rename chains", default_factory=list)

    @property
    def rename_count(self) -> int:
        """Number of renames in the mapping the plan was built from."""
        return sum(len(chain) - 1 for chain in self.chains) + sum(len(cycle) for cycle in self.cycles)

    @property
    def is_empty(self) -> bool:
        return not self.chains and not self.cycles

    def to_mapping(self) -> RenameMapping:
        """Rebuild the source to destination mapping the plan implements."""
        renames: dict[Filename, Filename] = {}
        for chain in [*self.chains, *self.cycles]:
            renames.update(chain.pairs())
        return RenameMapping(renames=renames)

    def summary(self) -> str:
        """Return a human-readable summary of the plan."""
        lines = [
            "Rename Plan Summary:",
            f"  Renames: {self.rename_count}",
            f"  Chains: {len(self.chains)}",
            f"  Cycles: {len(self.cycles)}",
        ]
        return "\n".join(lines)
