"""
Offset queries over an mdast tree.

All offsets use the same geometry as slicing: positions in the pre-order
concatenation of character-bearing leaf values (text, inline code, code).
"""

from __future__ import annotations

from typing import Iterator, List, Optional, Tuple

from mdslice.app.schemas.nodes import (
    CHARACTER_BEARING_TYPES,
    Node,
    children_of,
    is_parent,
    node_type,
    text_value,
)
from mdslice.app.schemas.result import NodePosition
from mdslice.app.slicing.emission import Span
from mdslice.app.slicing.length import LengthCache, node_length


def get_tree_length(tree: Optional[Node], *, cache: Optional[LengthCache] = None) -> int:
    """Total character length of a tree; 0 for None."""
    return node_length(tree, cache)


def iter_spans(
    tree: Optional[Node],
    *,
    cache: Optional[LengthCache] = None,
) -> Iterator[Tuple[Node, Span]]:
    """Yield `(node, span)` for every node of the tree, in pre-order."""
    if tree is None:
        return
    if cache is None:
        cache = LengthCache()
    yield from _walk(tree, 0, cache)


def _walk(node: Node, start: int, cache: LengthCache) -> Iterator[Tuple[Node, Span]]:
    yield node, Span(start, start + node_length(node, cache))

    if node_type(node) in CHARACTER_BEARING_TYPES or not is_parent(node):
        return

    offset = start
    for child in children_of(node):
        yield from _walk(child, offset, cache)
        offset += node_length(child, cache)


def get_node_position(
    tree: Optional[Node],
    target: Node,
    *,
    cache: Optional[LengthCache] = None,
) -> Optional[NodePosition]:
    """
    Span of `target` inside `tree`, matched by identity.

    Returns None when the object is not part of the tree, even if an equal
    node is.
    """
    for node, span in iter_spans(tree, cache=cache):
        if node is target:
            return NodePosition(start=span.start, end=span.end)
    return None


def document_text(tree: Optional[Node]) -> str:
    """Concatenated character-bearing leaf text, in document order."""
    if tree is None:
        return ""
    return "".join(
        text_value(node)
        for node, _ in iter_spans(tree)
        if node_type(node) in CHARACTER_BEARING_TYPES
    )


def find_text_positions(tree: Optional[Node], needle: str) -> List[int]:
    """
    Start offsets of every occurrence of `needle`, in document order.

    Matching is literal and case-sensitive over the whole document text, so
    an occurrence may span several leaves. Matches may overlap: the scan
    resumes one character after each hit ("aa" in "aaaa" -> [0, 1, 2]).
    An empty needle matches nothing.
    """
    if not needle:
        return []

    haystack = document_text(tree)
    positions: List[int] = []

    index = haystack.find(needle)
    while index != -1:
        positions.append(index)
        index = haystack.find(needle, index + 1)

    return positions
