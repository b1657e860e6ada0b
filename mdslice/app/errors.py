"""
Exception types raised by the slicing library.

Only caller mistakes raise. A range that simply selects no content is a
normal outcome and is reported as a null node, never as an exception.
"""

from __future__ import annotations


class SliceError(RuntimeError):
    """Base class for all errors raised by mdslice."""


class InvalidRangeError(SliceError, ValueError):
    """
    Raised when a requested range is rejected before traversal.

    Covers non-integer bounds, negative bounds and inverted or empty
    ranges (`end <= start`).
    """


class InvalidConfigError(SliceError, ValueError):
    """Raised when slicing configuration cannot be built from its source."""
