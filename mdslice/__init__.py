from .app.config import (
    BehaviorConfig,
    BlockPolicy,
    ContentInclusionConfig,
    FormattingPolicy,
    LeafPolicy,
    MediaPolicy,
    SliceConfig,
    TextCleanupConfig,
    WhitespacePolicy,
)
from .app.errors import InvalidConfigError, InvalidRangeError, SliceError
from .app.schemas.nodes import NodeCategory, classify
from .app.schemas.result import NodePosition, SliceBoundaries, SliceInfo, SliceResult
from .app.search.positions import (
    find_text_positions,
    get_node_position,
    get_tree_length,
    iter_spans,
)
from .app.slicing.length import LengthCache
from .app.slicing.slicer import slice_markdown, slice_tree

__all__ = [
    "BehaviorConfig",
    "BlockPolicy",
    "ContentInclusionConfig",
    "FormattingPolicy",
    "LeafPolicy",
    "MediaPolicy",
    "SliceConfig",
    "TextCleanupConfig",
    "WhitespacePolicy",
    "InvalidConfigError",
    "InvalidRangeError",
    "SliceError",
    "NodeCategory",
    "classify",
    "NodePosition",
    "SliceBoundaries",
    "SliceInfo",
    "SliceResult",
    "find_text_positions",
    "get_node_position",
    "get_tree_length",
    "iter_spans",
    "LengthCache",
    "slice_markdown",
    "slice_tree",
]
