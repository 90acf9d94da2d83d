"""canonbridge: canonical encodings inside pydantic models

A Python library for embedding cryptographic values (curve points, field
elements, ...) in pydantic models. Values expose two canonical byte forms,
compressed and uncompressed; canonbridge chooses one per field and carries
it through pydantic exactly, byte for byte.

Key Features:
- Capability contract for value types (CanonicalSerialize / CanonicalDeserialize)
- Per-field selection of the compressed or uncompressed form
- Homogeneous lists of values
- Decode failures reported as ordinary pydantic validation errors
- Works with any outer format: JSON, python dicts, MessagePack

Quick Start:
    >>> from canonbridge import CanonicalModel, Compressed, Uncompressed
    >>> from canonbridge.curves import P256Point
    >>>
    >>> class KeyPair(CanonicalModel):
    ...     signing: Compressed[P256Point]
    ...     encryption: Uncompressed[P256Point]
    >>>
    >>> pair = KeyPair(signing=P256Point.generate(), encryption=P256Point.generate())
    >>> data = pair.model_dump_json()
    >>> KeyPair.model_validate_json(data) == pair
    True

The compressed form is the default: ``canonbridge.serialize`` and
``canonbridge.deserialize`` are the compressed selector's, and
``Canonical[T]`` is ``Compressed[T]``.
"""

from __future__ import annotations

from .exceptions import CanonbridgeError, CapabilityError, DecodeError, EncodeError
from .formats import from_json, from_msgpack, to_json, to_msgpack
from .models import CANONICAL_CONFIG, CanonicalModel
from .serde import (
    ByteVisitor,
    CanonicalBytes,
    CanonicalValidator,
    Compressed,
    CompressedVec,
    FormatSelector,
    SequenceLifter,
    Uncompressed,
    UncompressedVec,
    compressed,
    uncompressed,
    uncompressed_vec,
    vec,
)
from .traits import (
    CanonicalDeserialize,
    CanonicalSerialize,
    CanonicalValue,
    EncodingVariant,
    expect_length,
    is_canonical,
)

# Compressed is the default form
serialize = compressed.serialize
deserialize = compressed.deserialize
Canonical = Compressed

__version__ = "0.1.0"

__all__ = [
    # Core API
    "serialize",
    "deserialize",
    "Canonical",
    # Capability contract
    "CanonicalSerialize",
    "CanonicalDeserialize",
    "CanonicalValue",
    "EncodingVariant",
    "is_canonical",
    "expect_length",
    # Selectors
    "FormatSelector",
    "CanonicalBytes",
    "CanonicalValidator",
    "ByteVisitor",
    "compressed",
    "uncompressed",
    "Compressed",
    "Uncompressed",
    # Sequences
    "SequenceLifter",
    "vec",
    "uncompressed_vec",
    "CompressedVec",
    "UncompressedVec",
    # Models and formats
    "CanonicalModel",
    "CANONICAL_CONFIG",
    "to_json",
    "from_json",
    "to_msgpack",
    "from_msgpack",
    # Exceptions
    "CanonbridgeError",
    "EncodeError",
    "DecodeError",
    "CapabilityError",
    # Version
    "__version__",
]
