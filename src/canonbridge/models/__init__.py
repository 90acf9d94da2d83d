"""Pydantic model base for canonical values."""

from __future__ import annotations

from .base import CANONICAL_CONFIG, CanonicalModel

__all__ = [
    "CANONICAL_CONFIG",
    "CanonicalModel",
]
