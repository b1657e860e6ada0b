"""
Public slicing entry points.

Range validation is strict: malformed bounds raise InvalidRangeError before
any traversal happens. A valid range that selects no content (start past
the end of the document, or clamped down to nothing) is a normal outcome
and yields a result whose `node` is None.
"""

from __future__ import annotations

import copy
import logging
from typing import Any, Optional

from mdslice.app.config import SliceConfig
from mdslice.app.errors import InvalidRangeError
from mdslice.app.schemas.nodes import Node
from mdslice.app.schemas.result import SliceBoundaries, SliceInfo, SliceResult
from mdslice.app.slicing.emission import Emission, EmissionKind, SliceStats
from mdslice.app.slicing.length import LengthCache, node_length
from mdslice.app.slicing.rebuilder import TreeRebuilder
from mdslice.app.slicing.resolver import BoundaryResolver

logger = logging.getLogger(__name__)


def _require_position(name: str, value: Any) -> int:
    # bool is an int subclass; True/False are not offsets.
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidRangeError(f"{name} position must be an integer")
    if value < 0:
        raise InvalidRangeError(f"{name} position must be non-negative")
    return value


def validate_range(start: Any, end: Any = None) -> None:
    """
    Reject malformed ranges.

    Raises InvalidRangeError for non-integer or negative bounds and for
    `end <= start`. `end=None` means "to the end of the document".
    """
    _require_position("Start", start)
    if end is None:
        return
    _require_position("End", end)
    if end <= start:
        raise InvalidRangeError("End position must be greater than start")


def _as_tree(emission: Emission) -> Optional[Node]:
    if emission.kind is EmissionKind.NONE:
        return None
    if emission.kind is EmissionKind.ONE:
        return emission.nodes[0]
    # A non-root top-level block was unwrapped; a root keeps the result
    # a tree.
    return {"type": "root", "children": list(emission.nodes)}


def slice_tree(
    tree: Optional[Node],
    start: int,
    end: Optional[int] = None,
    config: Optional[SliceConfig] = None,
    *,
    cache: Optional[LengthCache] = None,
) -> SliceResult:
    """
    Extract the `[start, end)` character range of an mdast tree.

    Returns the rebuilt tree together with the effective (clamped)
    boundaries and diagnostics. The input tree is never modified; every
    node in the result is a fresh clone.

    Args:
        tree: Root node, or None.
        start: Inclusive start offset.
        end: Exclusive end offset. Defaults to the document length and is
            clamped to it when larger.
        config: Slicing policy. Defaults to `SliceConfig()`.
        cache: Length cache to reuse across calls on the same tree.
    """
    validate_range(start, end)

    if tree is None:
        return SliceResult.empty()

    if config is None:
        config = SliceConfig()
    if cache is None:
        cache = LengthCache()

    original_length = node_length(tree, cache)

    if original_length == 0:
        # Nothing to cut: an empty document is returned whole from offset 0.
        if start == 0:
            return SliceResult(
                node=copy.deepcopy(tree),
                boundaries=SliceBoundaries(start=0, end=0),
            )
        return SliceResult(boundaries=SliceBoundaries(start=start, end=0))

    effective_end = original_length if end is None else min(end, original_length)
    boundaries = SliceBoundaries(start=start, end=effective_end)

    if start >= effective_end:
        logger.debug(
            "Slice start %d is beyond document length %d",
            start,
            original_length,
        )
        return SliceResult(
            boundaries=boundaries,
            info=SliceInfo(original_length=original_length),
        )

    stats = SliceStats()
    resolver = BoundaryResolver(
        start=start,
        end=effective_end,
        config=config,
        cache=cache,
        stats=stats,
    )
    rebuilder = TreeRebuilder(
        resolver=resolver,
        config=config,
        cache=cache,
        end=effective_end,
    )

    node = _as_tree(rebuilder.resolve(tree, 0))

    # Output nodes are measured with a throwaway cache so a shared cache
    # only ever holds source nodes.
    sliced_length = node_length(node)

    logger.debug(
        "Sliced [%d, %d) of %d characters into %d characters "
        "(%d partial nodes, modified types: %s)",
        start,
        effective_end,
        original_length,
        sliced_length,
        stats.partial_nodes,
        stats.modified_types,
    )

    return SliceResult(
        node=node,
        boundaries=boundaries,
        info=SliceInfo(
            original_length=original_length,
            sliced_length=sliced_length,
            has_partial_nodes=stats.partial_nodes > 0,
            modified_node_types=list(stats.modified_types),
        ),
    )


def slice_markdown(
    tree: Optional[Node],
    start: int,
    end: Optional[int] = None,
    config: Optional[SliceConfig] = None,
    *,
    cache: Optional[LengthCache] = None,
) -> Optional[Node]:
    """Like `slice_tree`, returning only the rebuilt node."""
    return slice_tree(tree, start, end, config, cache=cache).node
