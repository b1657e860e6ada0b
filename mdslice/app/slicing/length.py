"""
Character length of mdast nodes.

Length is the number of characters a node contributes to the document's
leaf-text concatenation: `len(value)` for text, inline code and code
blocks; the sum of children for containers; 0 for everything else.

Lengths are counted in Python `str` units (code points). JavaScript mdast
tooling counts UTF-16 code units, so offsets differ for text containing
characters outside the Basic Multilingual Plane.
"""

from __future__ import annotations

import logging
import threading
from typing import Any, Dict, Mapping, Optional, Tuple

from mdslice.app.schemas.nodes import (
    CHARACTER_BEARING_TYPES,
    children_of,
    is_parent,
    node_type,
)

logger = logging.getLogger(__name__)


class LengthCache:
    """
    Memoized node lengths keyed by node identity.

    The cache holds a reference to every node it has measured, so an id
    can never be reused by a different object while its entry exists.
    Entries are never invalidated: the slicer never mutates nodes, and
    every node it emits is a fresh object with its own identity.

    A single cache may be shared by concurrent slice calls over the same
    tree; reads and writes are guarded by a lock.
    """

    def __init__(self) -> None:
        self._entries: Dict[int, Tuple[Mapping[str, Any], int]] = {}
        self._lock = threading.Lock()

    def get(self, node: Mapping[str, Any]) -> Optional[int]:
        with self._lock:
            entry = self._entries.get(id(node))
        if entry is None or entry[0] is not node:
            return None
        return entry[1]

    def put(self, node: Mapping[str, Any], length: int) -> None:
        with self._lock:
            self._entries[id(node)] = (node, length)

    def clear(self) -> None:
        with self._lock:
            self._entries.clear()

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)


def node_length(
    node: Optional[Mapping[str, Any]],
    cache: Optional[LengthCache] = None,
) -> int:
    """Return the character length of `node` (0 for None)."""
    if node is None:
        return 0
    if cache is None:
        cache = LengthCache()
    return _measure(node, cache)


def _measure(node: Mapping[str, Any], cache: LengthCache) -> int:
    cached = cache.get(node)
    if cached is not None:
        return cached

    kind = node_type(node)

    if kind in CHARACTER_BEARING_TYPES:
        value = node.get("value")
        if isinstance(value, str):
            length = len(value)
        else:
            logger.warning(
                "Node of type %s has non-string value %r; treating as empty",
                kind,
                type(value).__name__,
            )
            length = 0
    elif is_parent(node):
        length = sum(_measure(child, cache) for child in children_of(node))
    else:
        length = 0

    cache.put(node, length)
    return length
