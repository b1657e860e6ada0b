"""
mdast node shapes as seen by the slicer.

Nodes are plain dicts in the shape produced by mdast-compatible parsers:
every node carries a string `type`; leaves carry a `value`; containers
carry a `children` list. Any other key is a pass-through attribute and is
copied onto clones untouched.

This module defines:
- the closed category taxonomy and its total classifier
- explicit clone builders (the only way new nodes are produced)
"""

from __future__ import annotations

from enum import Enum
from typing import Any, Dict, Final, FrozenSet, List, Mapping, Optional

Node = Dict[str, Any]


# ---------------------------------------------------------------------------
# Categories
# ---------------------------------------------------------------------------


class NodeCategory(str, Enum):
    """
    Behavior class a node type maps to.

    The set is closed. Types not listed in the classifier table map to
    UNKNOWN, which is a defined behavior and never an error.
    """

    TEXT = "text"
    INLINE_CODE = "inline-code"
    CODE_BLOCK = "code-block"
    FORMATTING = "formatting"
    MEDIA = "media"
    ROOT = "root"
    BLOCK = "block"
    LIST = "list"
    ATOMIC = "atomic"
    UNKNOWN = "unknown"


_CATEGORY_BY_TYPE: Final[Mapping[str, NodeCategory]] = {
    "text": NodeCategory.TEXT,
    "inlineCode": NodeCategory.INLINE_CODE,
    "code": NodeCategory.CODE_BLOCK,
    "emphasis": NodeCategory.FORMATTING,
    "strong": NodeCategory.FORMATTING,
    "delete": NodeCategory.FORMATTING,
    "link": NodeCategory.MEDIA,
    "linkReference": NodeCategory.MEDIA,
    "image": NodeCategory.MEDIA,
    "imageReference": NodeCategory.MEDIA,
    "root": NodeCategory.ROOT,
    "paragraph": NodeCategory.BLOCK,
    "heading": NodeCategory.BLOCK,
    "blockquote": NodeCategory.BLOCK,
    "listItem": NodeCategory.BLOCK,
    "table": NodeCategory.BLOCK,
    "tableRow": NodeCategory.BLOCK,
    "tableCell": NodeCategory.BLOCK,
    "footnoteDefinition": NodeCategory.BLOCK,
    "list": NodeCategory.LIST,
    "break": NodeCategory.ATOMIC,
    "thematicBreak": NodeCategory.ATOMIC,
}

# Leaf types whose `value` counts toward document length.
CHARACTER_BEARING_TYPES: Final[FrozenSet[str]] = frozenset(
    {"text", "inlineCode", "code"}
)

# Leaf categories that are subject to truncation.
LEAF_CATEGORIES: Final[FrozenSet[NodeCategory]] = frozenset(
    {NodeCategory.TEXT, NodeCategory.INLINE_CODE, NodeCategory.CODE_BLOCK}
)

# Leaf categories whose sliced value keeps its whitespace verbatim.
CODE_CATEGORIES: Final[FrozenSet[NodeCategory]] = frozenset(
    {NodeCategory.INLINE_CODE, NodeCategory.CODE_BLOCK}
)


def classify(node_type: Optional[str]) -> NodeCategory:
    """Map a node type tag to its category. Total: unknown tags -> UNKNOWN."""
    if not isinstance(node_type, str):
        return NodeCategory.UNKNOWN
    return _CATEGORY_BY_TYPE.get(node_type, NodeCategory.UNKNOWN)


# ---------------------------------------------------------------------------
# Accessors (tolerant of malformed input)
# ---------------------------------------------------------------------------


def node_type(node: Mapping[str, Any]) -> Optional[str]:
    value = node.get("type")
    return value if isinstance(value, str) else None


def is_parent(node: Mapping[str, Any]) -> bool:
    """True if the node carries a usable `children` list."""
    return isinstance(node.get("children"), list)


def children_of(node: Mapping[str, Any]) -> List[Node]:
    children = node.get("children")
    if not isinstance(children, list):
        return []
    return [child for child in children if isinstance(child, dict)]


def text_value(node: Mapping[str, Any]) -> str:
    """Return the node's `value`, or "" when it is missing or not a string."""
    value = node.get("value")
    return value if isinstance(value, str) else ""


# ---------------------------------------------------------------------------
# Clone builders
# ---------------------------------------------------------------------------


def clone_node(node: Mapping[str, Any]) -> Node:
    """Shallow clone with every attribute carried over."""
    return dict(node)


def clone_leaf(node: Mapping[str, Any], value: str) -> Node:
    """Clone a leaf, replacing only its `value`."""
    clone = dict(node)
    clone["value"] = value
    return clone


def clone_container(node: Mapping[str, Any], children: List[Node]) -> Node:
    """Clone a container, replacing only its `children`."""
    clone = dict(node)
    clone["children"] = children
    return clone
