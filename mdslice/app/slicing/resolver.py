"""
Boundary resolution for a single node.

Given a node, its start offset and the requested range, the resolver
decides whether the node is outside the range (dropped), fully inside
(cloned, containers still recursed) or partial (the configured policy for
the node's category decides). Container contents are produced by the
rebuilder passed in by the caller, which keeps the two modules free of
import cycles.
"""

from __future__ import annotations

from typing import FrozenSet, List, Protocol

from mdslice.app.config import (
    BlockPolicy,
    FormattingPolicy,
    LeafPolicy,
    MediaPolicy,
    SliceConfig,
)
from mdslice.app.schemas.nodes import (
    CODE_CATEGORIES,
    LEAF_CATEGORIES,
    Node,
    NodeCategory,
    classify,
    clone_container,
    clone_leaf,
    clone_node,
    is_parent,
    node_type,
    text_value,
)
from mdslice.app.slicing.emission import Emission, SliceStats, Span
from mdslice.app.slicing.length import LengthCache, node_length
from mdslice.app.slicing.postprocess import apply_whitespace_policy


class ChildRebuilder(Protocol):
    def rebuild_children(self, node: Node, node_start: int) -> List[Node]:
        ...


class BoundaryResolver:
    """
    Applies the per-category policy matrix to one node at a time.

    One instance serves exactly one slice call: the range, configuration,
    length cache and statistics are fixed at construction.
    """

    def __init__(
        self,
        *,
        start: int,
        end: int,
        config: SliceConfig,
        cache: LengthCache,
        stats: SliceStats,
    ) -> None:
        self._start = start
        self._end = end
        self._config = config
        self._cache = cache
        self._stats = stats
        self._excluded_types: FrozenSet[str] = config.content.excluded_types()

    def span_of(self, node: Node, node_start: int) -> Span:
        return Span(node_start, node_start + node_length(node, self._cache))

    def resolve(
        self,
        node: Node,
        node_start: int,
        rebuilder: ChildRebuilder,
    ) -> Emission:
        span = self.span_of(node, node_start)

        if span.is_outside(self._start, self._end):
            return Emission.none()

        kind = node_type(node)
        if kind in self._excluded_types:
            return Emission.none()

        category = classify(kind)
        partial = not span.is_inside(self._start, self._end)
        if partial:
            self._stats.record_partial()

        if category in LEAF_CATEGORIES:
            return self._resolve_leaf(node, span, category, partial)
        if category is NodeCategory.FORMATTING:
            return self._resolve_formatting(node, span, partial, rebuilder)
        if category is NodeCategory.MEDIA:
            return self._resolve_media(node, span, partial, rebuilder)
        if category is NodeCategory.ROOT:
            # The document itself is always recursed; no policy applies.
            return self._keep_container(node, span, rebuilder)
        if category is NodeCategory.BLOCK:
            return self._resolve_block(node, span, partial, rebuilder)
        if category is NodeCategory.LIST:
            children = rebuilder.rebuild_children(node, span.start)
            if not children:
                return Emission.none()
            return Emission.one(clone_container(node, children))
        if category is NodeCategory.ATOMIC:
            return Emission.one(clone_node(node))

        # Unknown type: generic container when it has children, otherwise
        # an atomic pass-through.
        if is_parent(node):
            return self._keep_container(node, span, rebuilder)
        return Emission.one(clone_node(node))

    # ------------------------------------------------------------------
    # Leaves
    # ------------------------------------------------------------------

    def _resolve_leaf(
        self,
        node: Node,
        span: Span,
        category: NodeCategory,
        partial: bool,
    ) -> Emission:
        if not partial:
            return Emission.one(clone_node(node))

        kind = node_type(node) or ""
        policy = self._config.behavior.policy_for(kind, category)

        if policy is LeafPolicy.INCLUDE_FULL:
            return Emission.one(clone_node(node))

        self._stats.record_modified(kind)

        if policy is LeafPolicy.EXCLUDE_FULL:
            return Emission.none()

        value = text_value(node)
        slice_start = max(0, self._start - span.start)
        slice_end = min(len(value), self._end - span.start)
        sliced = value[slice_start:slice_end]

        if category not in CODE_CATEGORIES:
            sliced = apply_whitespace_policy(
                sliced,
                self._config.text.whitespace,
                cut_start=span.start < self._start,
                cut_end=span.end > self._end,
            )

        if not sliced:
            return Emission.none()
        return Emission.one(clone_leaf(node, sliced))

    # ------------------------------------------------------------------
    # Wrappers
    # ------------------------------------------------------------------

    def _resolve_formatting(
        self,
        node: Node,
        span: Span,
        partial: bool,
        rebuilder: ChildRebuilder,
    ) -> Emission:
        if not partial:
            return self._keep_container(node, span, rebuilder)

        kind = node_type(node) or ""
        policy = self._config.behavior.policy_for(kind, NodeCategory.FORMATTING)

        if policy is FormattingPolicy.EXCLUDE:
            self._stats.record_modified(kind)
            return Emission.none()

        if policy is FormattingPolicy.STRIP:
            self._stats.record_modified(kind)
            return Emission.many(rebuilder.rebuild_children(node, span.start))

        # PRESERVE and EXTEND keep the wrapper; EXTEND is not reported as
        # a modification.
        return self._keep_container(node, span, rebuilder)

    def _resolve_media(
        self,
        node: Node,
        span: Span,
        partial: bool,
        rebuilder: ChildRebuilder,
    ) -> Emission:
        if not partial:
            return self._keep_media(node, span, rebuilder)

        kind = node_type(node) or ""
        policy = self._config.behavior.policy_for(kind, NodeCategory.MEDIA)

        if policy is MediaPolicy.STRIP:
            self._stats.record_modified(kind)
            return Emission.none()

        if policy is MediaPolicy.CONTENT_ONLY:
            self._stats.record_modified(kind)
            return Emission.many(rebuilder.rebuild_children(node, span.start))

        return self._keep_media(node, span, rebuilder)

    def _resolve_block(
        self,
        node: Node,
        span: Span,
        partial: bool,
        rebuilder: ChildRebuilder,
    ) -> Emission:
        if not partial:
            return self._keep_container(node, span, rebuilder)

        kind = node_type(node) or ""
        policy = self._config.behavior.policy_for(kind, NodeCategory.BLOCK)

        if policy is BlockPolicy.EXCLUDE:
            self._stats.record_modified(kind)
            return Emission.none()

        if policy is BlockPolicy.UNWRAP:
            self._stats.record_modified(kind)
            return Emission.many(
                rebuilder.rebuild_children(node, span.start), isolated=True
            )

        return self._keep_container(node, span, rebuilder)

    # ------------------------------------------------------------------
    # Helpers
    # ------------------------------------------------------------------

    def _keep_media(
        self,
        node: Node,
        span: Span,
        rebuilder: ChildRebuilder,
    ) -> Emission:
        # Images carry no children; links do.
        if is_parent(node):
            return self._keep_container(node, span, rebuilder)
        return Emission.one(clone_node(node))

    def _keep_container(
        self,
        node: Node,
        span: Span,
        rebuilder: ChildRebuilder,
    ) -> Emission:
        children = rebuilder.rebuild_children(node, span.start)
        if not children and not self._config.preserve_empty_blocks:
            return Emission.none()
        return Emission.one(clone_container(node, children))
