"""
Result schemas returned by the public slicing API.

All models are frozen. Field names are snake_case in Python and serialize
with camelCase aliases (`originalLength`, `hasPartialNodes`, ...) so that
results can be handed to JavaScript-side mdast tooling unchanged.
"""

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


_RESULT_MODEL_CONFIG = ConfigDict(
    frozen=True,
    extra="forbid",
    alias_generator=to_camel,
    populate_by_name=True,
)


class SliceBoundaries(BaseModel):
    """Effective `[start, end)` after clamping to the document length."""

    start: int = Field(0, ge=0)
    end: int = Field(0, ge=0)

    model_config = _RESULT_MODEL_CONFIG


class SliceInfo(BaseModel):
    """
    Diagnostics describing what a slice call did.
    """

    original_length: int = Field(
        0,
        ge=0,
        description="Character length of the input tree",
    )

    sliced_length: int = Field(
        0,
        ge=0,
        description="Character length of the returned tree",
    )

    has_partial_nodes: bool = Field(
        False,
        description="Whether any node straddled a range boundary",
    )

    modified_node_types: List[str] = Field(
        default_factory=list,
        description=(
            "Node types altered by a partial policy, in order of first "
            "occurrence"
        ),
    )

    model_config = _RESULT_MODEL_CONFIG


class SliceResult(BaseModel):
    """Sliced tree plus effective boundaries and diagnostics."""

    node: Optional[Dict[str, Any]] = Field(
        None,
        description="Rebuilt tree, or None when the range selects nothing",
    )

    boundaries: SliceBoundaries = Field(default_factory=SliceBoundaries)

    info: SliceInfo = Field(default_factory=SliceInfo)

    model_config = _RESULT_MODEL_CONFIG

    @classmethod
    def empty(cls, *, original_length: int = 0) -> "SliceResult":
        return cls(info=SliceInfo(original_length=original_length))


class NodePosition(BaseModel):
    """Span of a node inside its tree."""

    start: int = Field(..., ge=0)
    end: int = Field(..., ge=0)

    model_config = _RESULT_MODEL_CONFIG
