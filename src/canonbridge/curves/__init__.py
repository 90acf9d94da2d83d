"""Reference value types implementing the canonical encoding capability.

These are ordinary capability providers: the serde adapters treat them exactly
like any user-defined type.
"""

from __future__ import annotations

from .point import ECPoint, P256Point, P384Point, Secp256k1Point
from .scalar import MODULUS, Scalar

__all__ = [
    "ECPoint",
    "Secp256k1Point",
    "P256Point",
    "P384Point",
    "Scalar",
    "MODULUS",
]
