"""Pedigree tree: ancestry of companions linked by breeding.

Pedigrees are DAGs: two lineages may share an ancestor. All traversals use
explicit stacks so depth is bounded by the caller, not the interpreter's
recursion limit.
"""

from __future__ import annotations

import json
import logging
from datetime import UTC, datetime
from typing import Any

from pydantic import BaseModel, Field

from companion_genetics.engine.codec import clone_genome
from companion_genetics.engine.context import require_aware
from companion_genetics.model.genome import Genome
from companion_genetics.model.pedigree import PedigreeNode

logger = logging.getLogger(__name__)

DEFAULT_SERIALIZE_DEPTH = 3


def create_node(
    id: str,
    name: str,
    genome: Genome,
    parent1: PedigreeNode | None = None,
    parent2: PedigreeNode | None = None,
    *,
    now: datetime | None = None,
) -> PedigreeNode:
    """Create a pedigree node holding a private copy of the genome.

    Generation is 0 for a node with no parents, otherwise one more than the
    highest parent generation.

    Raises:
        ValueError: If now is a naive datetime.
    """
    parents = [p for p in (parent1, parent2) if p is not None]
    generation = max(p.generation for p in parents) + 1 if parents else 0
    node = PedigreeNode(
        id=id,
        name=name,
        genome=clone_genome(genome),
        parent1=parent1,
        parent2=parent2,
        generation=generation,
        birth_date=require_aware(now, "now") if now is not None else datetime.now(UTC),
    )
    logger.debug("Created pedigree node %s (generation %d)", id, generation)
    return node


def get_ancestors(node: PedigreeNode, max_depth: int | None = None) -> list[PedigreeNode]:
    """Collect every ancestor in pre-order.

    Order is parent1, parent1's ancestors, parent2, parent2's ancestors.
    An ancestor reachable through several paths appears once per path.

    Args:
        node: Node whose ancestors to collect.
        max_depth: Generations to walk up (1 = parents only, 0 = none).
            None = all.

    Returns:
        Ancestors, duplicates included.
    """
    if max_depth is not None and max_depth <= 0:
        return []
    ancestors: list[PedigreeNode] = []
    stack: list[tuple[PedigreeNode, int]] = [(p, 1) for p in reversed(node.parents)]
    while stack:
        current, depth = stack.pop()
        ancestors.append(current)
        if max_depth is not None and depth >= max_depth:
            continue
        stack.extend((p, depth + 1) for p in reversed(current.parents))
    return ancestors


def unique_ancestors(node: PedigreeNode) -> list[PedigreeNode]:
    """Ancestors deduplicated by id, first occurrence kept."""
    seen: set[str] = set()
    unique: list[PedigreeNode] = []
    for ancestor in get_ancestors(node):
        if ancestor.id not in seen:
            seen.add(ancestor.id)
            unique.append(ancestor)
    return unique


def get_pedigree_depth(node: PedigreeNode) -> int:
    """Length of the longest parent chain above a node (0 without parents)."""
    depths: dict[int, int] = {}
    stack: list[tuple[PedigreeNode, bool]] = [(node, False)]
    while stack:
        current, expanded = stack.pop()
        key = id(current)
        if key in depths:
            continue
        parents = current.parents
        if not parents:
            depths[key] = 0
        elif expanded:
            depths[key] = max(depths[id(p)] for p in parents) + 1
        else:
            stack.append((current, True))
            stack.extend((p, False) for p in parents if id(p) not in depths)
    return depths[id(node)]


def _node_record(node: PedigreeNode) -> dict[str, Any]:
    return {
        "id": node.id,
        "name": node.name,
        "generation": node.generation,
        "birth_date": node.birth_date.isoformat(),
    }


def serialize_pedigree(
    node: PedigreeNode, max_depth: int = DEFAULT_SERIALIZE_DEPTH
) -> dict[str, Any]:
    """Serialize a pedigree to nested records, bounded in depth.

    Parents are included while the remaining depth is above zero. Nodes past
    the cutoff are left out entirely, with no placeholder.

    Args:
        node: Root of the snapshot.
        max_depth: Parent levels to include (0 = the node only).

    Returns:
        Nested dict of id/name/generation/birth_date/parent1/parent2.
    """
    root = _node_record(node)
    stack: list[tuple[PedigreeNode, dict[str, Any], int]] = [(node, root, max_depth)]
    while stack:
        current, record, remaining = stack.pop()
        if remaining <= 0:
            continue
        for key in ("parent1", "parent2"):
            parent = getattr(current, key)
            if parent is not None:
                parent_record = _node_record(parent)
                record[key] = parent_record
                stack.append((parent, parent_record, remaining - 1))
    return root


class PedigreeSnapshot(BaseModel):
    """Transport form of a depth-bounded pedigree."""

    id: str = Field(description="Companion id")
    name: str = Field(description="Display name")
    generation: int = Field(ge=0, description="Breeding generation")
    birth_date: datetime = Field(description="Creation timestamp")
    parent1: PedigreeSnapshot | None = None
    parent2: PedigreeSnapshot | None = None

    def depth(self) -> int:
        """Depth of the snapshot itself (0 when it carries no parents)."""
        best = 0
        stack: list[tuple[PedigreeSnapshot, int]] = [(self, 0)]
        while stack:
            current, level = stack.pop()
            best = max(best, level)
            stack.extend((p, level + 1) for p in (current.parent1, current.parent2) if p)
        return best


PedigreeSnapshot.model_rebuild()


def pedigree_to_json(node: PedigreeNode, max_depth: int = DEFAULT_SERIALIZE_DEPTH) -> str:
    """Serialize a pedigree to JSON text."""
    return json.dumps(serialize_pedigree(node, max_depth))


def load_pedigree_snapshot(text: str) -> PedigreeSnapshot:
    """Parse pedigree JSON text into a validated snapshot.

    Raises:
        pydantic.ValidationError: If the text is not a valid pedigree record.
    """
    return PedigreeSnapshot.model_validate_json(text)
