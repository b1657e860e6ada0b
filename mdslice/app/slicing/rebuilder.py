"""
Recursive reassembly of container nodes.

Child offsets are computed against the source tree's geometry: each child
starts where the previous sibling's original span ended, no matter how
much of that sibling survived. The document is never flattened to find
offsets.
"""

from __future__ import annotations

from typing import List

from mdslice.app.config import SliceConfig
from mdslice.app.schemas.nodes import Node, children_of
from mdslice.app.slicing.emission import Emission
from mdslice.app.slicing.length import LengthCache, node_length
from mdslice.app.slicing.postprocess import merge_adjacent_text
from mdslice.app.slicing.resolver import BoundaryResolver


class TreeRebuilder:
    """
    Walks a container's children in order, resolving each one at its
    computed start offset and splicing the results into a new child list.
    """

    def __init__(
        self,
        *,
        resolver: BoundaryResolver,
        config: SliceConfig,
        cache: LengthCache,
        end: int,
    ) -> None:
        self._resolver = resolver
        self._config = config
        self._cache = cache
        self._end = end

    def resolve(self, node: Node, node_start: int) -> Emission:
        return self._resolver.resolve(node, node_start, self)

    def rebuild_children(self, node: Node, node_start: int) -> List[Node]:
        # Runs of siblings that may merge with each other; an isolated
        # emission gets a run of its own.
        runs: List[List[Node]] = [[]]
        offset = node_start

        for child in children_of(node):
            # Everything from here on starts at or after the range end.
            if offset >= self._end:
                break

            emission = self.resolve(child, offset)
            if emission.isolated:
                runs.append(list(emission.nodes))
                runs.append([])
            else:
                runs[-1].extend(emission.nodes)
            offset += node_length(child, self._cache)

        rebuilt: List[Node] = []
        for run in runs:
            if self._config.text.merge_adjacent_text:
                run = merge_adjacent_text(run)
            rebuilt.extend(run)

        return rebuilt
