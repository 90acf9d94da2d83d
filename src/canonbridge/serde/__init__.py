"""Serde adapters between canonical values and pydantic.

This module provides the per-variant format selectors, the byte visitor they
decode through, and the sequence lifters for homogeneous lists.
"""

from __future__ import annotations

from .collection import CompressedVec, SequenceLifter, UncompressedVec, uncompressed_vec, vec
from .selector import (
    CanonicalBytes,
    CanonicalValidator,
    Compressed,
    FormatSelector,
    Uncompressed,
    compressed,
    uncompressed,
)
from .visitor import ByteVisitor

__all__ = [
    "ByteVisitor",
    "FormatSelector",
    "CanonicalBytes",
    "CanonicalValidator",
    "compressed",
    "uncompressed",
    "Compressed",
    "Uncompressed",
    "SequenceLifter",
    "vec",
    "uncompressed_vec",
    "CompressedVec",
    "UncompressedVec",
]
