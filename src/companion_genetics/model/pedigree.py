"""PedigreeNode dataclass: one companion in an ancestry tree."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime

from companion_genetics.model.genome import Genome


@dataclass(frozen=True)
class PedigreeNode:
    """A companion linked to the parents it was bred from.

    Nodes are immutable. The genome is owned by the node (a clone taken at
    creation), while parents are shared references: the same ancestor may be
    reachable through more than one path.
    """

    id: str
    name: str
    genome: Genome = field(repr=False)
    parent1: PedigreeNode | None = field(default=None, repr=False)
    parent2: PedigreeNode | None = field(default=None, repr=False)
    generation: int = 0
    birth_date: datetime = field(default_factory=lambda: datetime.now(UTC))

    @property
    def parents(self) -> list[PedigreeNode]:
        """Present parents, parent1 first."""
        return [p for p in (self.parent1, self.parent2) if p is not None]
