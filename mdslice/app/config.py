"""
Slicing policy configuration.

A SliceConfig is an immutable policy record: per-category behavior for
nodes that straddle a range boundary, text cleanup options, and content
inclusion toggles. Every field has a documented default, so callers only
spell out what they want to change.

Configuration is read-only once built and never influences anything other
than how partially-included nodes are resolved.
"""

from __future__ import annotations

import os
from enum import Enum
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional, Type

from pydantic import (
    BaseModel,
    ConfigDict,
    Field,
    ValidationError,
    field_serializer,
    field_validator,
)

from mdslice.app.errors import InvalidConfigError
from mdslice.app.schemas.nodes import NodeCategory, classify


# ---------------------------------------------------------------------------
# Policy enumerations
# ---------------------------------------------------------------------------


class LeafPolicy(str, Enum):
    """Partial behavior for text, inline code and code blocks."""

    TRUNCATE = "truncate"
    INCLUDE_FULL = "include-full"
    EXCLUDE_FULL = "exclude-full"


class FormattingPolicy(str, Enum):
    """Partial behavior for emphasis, strong and delete wrappers."""

    PRESERVE = "preserve"
    STRIP = "strip"
    EXTEND = "extend"
    EXCLUDE = "exclude"


class MediaPolicy(str, Enum):
    """Partial behavior for links, images and their reference forms."""

    PRESERVE = "preserve"
    STRIP = "strip"
    CONTENT_ONLY = "content-only"


class BlockPolicy(str, Enum):
    """Partial behavior for structural containers."""

    INCLUDE = "include"
    EXCLUDE = "exclude"
    UNWRAP = "unwrap"


class WhitespacePolicy(str, Enum):
    """Whitespace handling applied to truncated non-code text."""

    TRIM = "trim"
    NORMALIZE = "normalize"
    PRESERVE = "preserve"


# Older vocabulary (one behavior string per node type) accepted as input.
_LEGACY_ALIASES: Dict[Type[Enum], Dict[str, str]] = {
    LeafPolicy: {
        "trim": "truncate",
        "preserve": "include-full",
        "exclude": "exclude-full",
    },
    FormattingPolicy: {
        "trim": "strip",
        "content": "preserve",
    },
    MediaPolicy: {
        "content": "preserve",
        "trim": "content-only",
        "exclude": "strip",
    },
    BlockPolicy: {},
}

POLICY_BY_CATEGORY: Dict[NodeCategory, Type[Enum]] = {
    NodeCategory.TEXT: LeafPolicy,
    NodeCategory.INLINE_CODE: LeafPolicy,
    NodeCategory.CODE_BLOCK: LeafPolicy,
    NodeCategory.FORMATTING: FormattingPolicy,
    NodeCategory.MEDIA: MediaPolicy,
    NodeCategory.BLOCK: BlockPolicy,
}


def normalize_policy(policy_type: Type[Enum], raw: Any) -> Enum:
    """
    Resolve a raw behavior string (or enum member) to a policy member.

    Raises ValueError for values outside the policy's vocabulary.
    """
    if isinstance(raw, policy_type):
        return raw
    if isinstance(raw, Enum):
        raw = raw.value
    if not isinstance(raw, str):
        raise ValueError(f"Policy must be a string, got {type(raw).__name__}")

    value = raw.strip().lower().replace("_", "-")
    value = _LEGACY_ALIASES.get(policy_type, {}).get(value, value)

    try:
        return policy_type(value)
    except ValueError:
        allowed = sorted(m.value for m in policy_type)  # type: ignore[attr-defined]
        raise ValueError(
            f"Unsupported {policy_type.__name__} '{raw}'. "
            f"Allowed values: {allowed}"
        ) from None


# ---------------------------------------------------------------------------
# Configuration sections
# ---------------------------------------------------------------------------


class BehaviorConfig(BaseModel):
    """
    Per-category partial-node behavior.

    `by_type` overrides the category default for a single node type, e.g.
    `{"emphasis": "strip"}` strips emphasis while strong stays preserved.
    """

    text: LeafPolicy = Field(
        LeafPolicy.TRUNCATE,
        description="Behavior for partially-included text leaves",
    )

    inline_code: LeafPolicy = Field(
        LeafPolicy.TRUNCATE,
        description="Behavior for partially-included inline code",
    )

    code: LeafPolicy = Field(
        LeafPolicy.TRUNCATE,
        description="Behavior for partially-included fenced code blocks",
    )

    formatting: FormattingPolicy = Field(
        FormattingPolicy.PRESERVE,
        description="Behavior for partially-included formatting wrappers",
    )

    media: MediaPolicy = Field(
        MediaPolicy.PRESERVE,
        description="Behavior for partially-included links and images",
    )

    block: BlockPolicy = Field(
        BlockPolicy.INCLUDE,
        description="Behavior for partially-included block containers",
    )

    by_type: Mapping[str, str] = Field(
        default_factory=dict,
        validate_default=True,
        description="Per-node-type overrides keyed by mdast type tag (read-only)",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    @field_validator("text", "inline_code", "code", mode="before")
    @classmethod
    def normalize_leaf_policies(cls, v: Any) -> Enum:
        return normalize_policy(LeafPolicy, v)

    @field_validator("formatting", mode="before")
    @classmethod
    def normalize_formatting_policy(cls, v: Any) -> Enum:
        return normalize_policy(FormattingPolicy, v)

    @field_validator("media", mode="before")
    @classmethod
    def normalize_media_policy(cls, v: Any) -> Enum:
        return normalize_policy(MediaPolicy, v)

    @field_validator("block", mode="before")
    @classmethod
    def normalize_block_policy(cls, v: Any) -> Enum:
        return normalize_policy(BlockPolicy, v)

    @field_validator("by_type", mode="before")
    @classmethod
    def validate_type_overrides(cls, v: Any) -> Dict[str, str]:
        if v is None:
            return {}
        if not isinstance(v, Mapping):
            raise ValueError("by_type must be a mapping of node type to policy")

        resolved: Dict[str, str] = {}
        for node_type, raw in v.items():
            policy_type = POLICY_BY_CATEGORY.get(classify(node_type))
            if policy_type is None:
                raise ValueError(
                    f"Node type '{node_type}' has no configurable partial behavior"
                )
            resolved[node_type] = normalize_policy(policy_type, raw).value
        return resolved

    @field_validator("by_type", mode="after")
    @classmethod
    def freeze_type_overrides(cls, v: Mapping[str, str]) -> Mapping[str, str]:
        return MappingProxyType(dict(v))

    @field_serializer("by_type")
    def serialize_type_overrides(self, v: Mapping[str, str]) -> Dict[str, str]:
        return dict(v)

    def __deepcopy__(self, memo: Optional[Dict[int, Any]] = None) -> "BehaviorConfig":
        # Immutable, and the read-only override mapping cannot be deep-copied.
        return self

    def policy_for(self, node_type: Optional[str], category: NodeCategory) -> Optional[Enum]:
        """
        Effective policy for a node, or None for categories without one.
        """
        policy_type = POLICY_BY_CATEGORY.get(category)
        if policy_type is None:
            return None

        if node_type is not None and node_type in self.by_type:
            return policy_type(self.by_type[node_type])

        if category is NodeCategory.TEXT:
            return self.text
        if category is NodeCategory.INLINE_CODE:
            return self.inline_code
        if category is NodeCategory.CODE_BLOCK:
            return self.code
        if category is NodeCategory.FORMATTING:
            return self.formatting
        if category is NodeCategory.MEDIA:
            return self.media
        return self.block


class TextCleanupConfig(BaseModel):
    """Text boundary cleanup applied after structural decisions."""

    whitespace: WhitespacePolicy = Field(
        WhitespacePolicy.TRIM,
        description="Whitespace handling on truncated text edges",
    )

    merge_adjacent_text: bool = Field(
        True,
        description="Merge sibling text leaves left adjacent by slicing",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    @field_validator("whitespace", mode="before")
    @classmethod
    def normalize_whitespace_policy(cls, v: Any) -> Enum:
        if isinstance(v, bool):
            # trimWhitespace-style boolean toggle
            return WhitespacePolicy.TRIM if v else WhitespacePolicy.PRESERVE
        return normalize_policy(WhitespacePolicy, v)


class ContentInclusionConfig(BaseModel):
    """
    Toggles for auxiliary content.

    Disabled node types are dropped from the output. They still occupy
    their original span, so offsets of everything after them are unchanged.
    """

    html: bool = Field(
        True,
        description="Keep raw `html` nodes",
    )

    definitions: bool = Field(
        True,
        description="Keep link/image reference `definition` nodes",
    )

    footnote_definitions: bool = Field(
        True,
        description="Keep `footnoteDefinition` nodes",
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    def excluded_types(self) -> frozenset:
        excluded = set()
        if not self.html:
            excluded.add("html")
        if not self.definitions:
            excluded.add("definition")
        if not self.footnote_definitions:
            excluded.add("footnoteDefinition")
        return frozenset(excluded)


class SliceConfig(BaseModel):
    """
    Complete slicing policy.

    Defaults: truncate leaves, preserve formatting and media, include
    blocks, trim cut text edges, merge adjacent text, keep empty blocks.
    """

    behavior: BehaviorConfig = Field(default_factory=BehaviorConfig)

    text: TextCleanupConfig = Field(default_factory=TextCleanupConfig)

    content: ContentInclusionConfig = Field(default_factory=ContentInclusionConfig)

    preserve_empty_blocks: bool = Field(
        True,
        description=(
            "Keep block containers whose children were all sliced away. "
            "Lists are pruned regardless."
        ),
    )

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
    )

    # ------------------------------------------------------------------
    # Construction
    # ------------------------------------------------------------------

    @classmethod
    def from_env(cls) -> "SliceConfig":
        """
        Load configuration from MDSLICE_* environment variables.

        Unset variables fall back to the model defaults.
        """

        def env_bool(name: str, default: bool) -> bool:
            raw = os.getenv(name)
            if raw is None:
                return default
            return raw.lower() in {"1", "true", "yes", "on"}

        behavior: Dict[str, Any] = {}
        for field_name, env_name in (
            ("text", "MDSLICE_TEXT_POLICY"),
            ("inline_code", "MDSLICE_INLINE_CODE_POLICY"),
            ("code", "MDSLICE_CODE_POLICY"),
            ("formatting", "MDSLICE_FORMATTING_POLICY"),
            ("media", "MDSLICE_MEDIA_POLICY"),
            ("block", "MDSLICE_BLOCK_POLICY"),
        ):
            raw = os.getenv(env_name)
            if raw:
                behavior[field_name] = raw

        try:
            return cls(
                behavior=BehaviorConfig(**behavior),
                text=TextCleanupConfig(
                    whitespace=os.getenv("MDSLICE_WHITESPACE", "trim"),
                    merge_adjacent_text=env_bool(
                        "MDSLICE_MERGE_ADJACENT_TEXT", True
                    ),
                ),
                content=ContentInclusionConfig(
                    html=env_bool("MDSLICE_INCLUDE_HTML", True),
                    definitions=env_bool("MDSLICE_INCLUDE_DEFINITIONS", True),
                    footnote_definitions=env_bool(
                        "MDSLICE_INCLUDE_FOOTNOTE_DEFINITIONS", True
                    ),
                ),
                preserve_empty_blocks=env_bool(
                    "MDSLICE_PRESERVE_EMPTY_BLOCKS", True
                ),
            )
        except ValidationError as exc:
            raise InvalidConfigError(
                f"Invalid MDSLICE_* environment configuration: {exc}"
            ) from exc
