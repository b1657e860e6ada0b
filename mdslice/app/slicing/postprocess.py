"""
Text cleanup applied after structural slicing decisions.

- Boundary whitespace policy for truncated, non-code text
- Merge of adjacent plain-text siblings
"""

from __future__ import annotations

import re
from typing import List

from mdslice.app.config import WhitespacePolicy
from mdslice.app.schemas.nodes import Node, clone_leaf, node_type, text_value

# Whitespace runs with non-whitespace on both sides.
_INTERIOR_WHITESPACE_RE = re.compile(r"(?<=\S)\s+(?=\S)")


def apply_whitespace_policy(
    value: str,
    policy: WhitespacePolicy,
    *,
    cut_start: bool,
    cut_end: bool,
) -> str:
    """
    Clean a truncated text value.

    `cut_start` / `cut_end` say which edges were produced by the range
    boundary. TRIM only touches those edges; an edge that is the node's own
    edge keeps its whitespace.
    """
    if policy is WhitespacePolicy.TRIM:
        if cut_start:
            value = value.lstrip()
        if cut_end:
            value = value.rstrip()
        return value

    if policy is WhitespacePolicy.NORMALIZE:
        return _INTERIOR_WHITESPACE_RE.sub(" ", value)

    return value


def merge_adjacent_text(children: List[Node]) -> List[Node]:
    """
    Collapse runs of consecutive `text` siblings into a single leaf.

    The first leaf of a run keeps its attributes, except `position`, which
    no longer describes the merged value; the values of the rest are
    appended to it. Input nodes are never modified.
    """
    merged: List[Node] = []

    for child in children:
        if (
            merged
            and node_type(child) == "text"
            and node_type(merged[-1]) == "text"
        ):
            previous = merged[-1]
            combined = clone_leaf(previous, text_value(previous) + text_value(child))
            combined.pop("position", None)
            merged[-1] = combined
        else:
            merged.append(child)

    return merged
