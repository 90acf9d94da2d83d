"""Exception hierarchy for canonbridge.

This module defines all custom exceptions used throughout the package.
All exceptions inherit from CanonbridgeError for easy catching of any canonbridge-specific error.

Note that the serde adapters never let these cross the pydantic boundary: encode
failures surface as a generic serialization error and decode failures as an
``invalid_value`` validation error.
"""

from __future__ import annotations


class CanonbridgeError(Exception):
    """Base exception for all canonbridge errors."""

    pass


class EncodeError(CanonbridgeError):
    """Raised when a value cannot produce one of its canonical forms.

    Examples:
        - Point at infinity has no affine encoding
        - Value was built without validation (model_construct) and is not encodable
        - Scalar outside the field range
    """

    pass


class DecodeError(CanonbridgeError):
    """Raised when bytes cannot be interpreted as a canonical value.

    Examples:
        - Truncated data or trailing bytes (length mismatch)
        - Unknown or mismatched SEC1 prefix byte
        - Point is not on the curve
        - Non-canonical scalar (value >= field modulus)
        - Corrupted outer container (MessagePack / JSON)
    """

    pass


class CapabilityError(CanonbridgeError):
    """Raised when a type does not implement the canonical encoding capability.

    Examples:
        - ``Compressed[int]``
        - A class providing only the encode half of the contract
    """

    pass
