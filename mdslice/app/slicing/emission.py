"""
Value types passed between the resolver and the rebuilder.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Tuple

from mdslice.app.schemas.nodes import Node


@dataclass(frozen=True)
class Span:
    """Half-open `[start, end)` character range of a node."""

    start: int
    end: int

    def is_outside(self, start: int, end: int) -> bool:
        return self.end <= start or self.start >= end

    def is_inside(self, start: int, end: int) -> bool:
        return self.start >= start and self.end <= end


class EmissionKind(str, Enum):
    NONE = "none"
    ONE = "one"
    MANY = "many"


@dataclass(frozen=True)
class Emission:
    """
    What resolving one source node produced: nothing, one node, or a
    run of nodes that replaces it in its parent (unwrapped wrapper).

    An isolated run came from an unwrapped block: its text never merges
    with the siblings around it.
    """

    kind: EmissionKind
    nodes: Tuple[Node, ...] = ()
    isolated: bool = False

    @classmethod
    def none(cls) -> "Emission":
        return _NOTHING

    @classmethod
    def one(cls, node: Node) -> "Emission":
        return cls(EmissionKind.ONE, (node,))

    @classmethod
    def many(cls, nodes: List[Node], *, isolated: bool = False) -> "Emission":
        if not nodes:
            return _NOTHING
        return cls(EmissionKind.MANY, tuple(nodes), isolated)


_NOTHING = Emission(EmissionKind.NONE)


@dataclass
class SliceStats:
    """Mutable per-call bookkeeping of partial-node decisions."""

    partial_nodes: int = 0
    modified_types: List[str] = field(default_factory=list)

    def record_partial(self) -> None:
        self.partial_nodes += 1

    def record_modified(self, node_type: str) -> None:
        if node_type not in self.modified_types:
            self.modified_types.append(node_type)
