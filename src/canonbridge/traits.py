"""Canonical encoding capability contract.

A value type plugs into the serde adapters by implementing both halves of the
contract: :class:`CanonicalSerialize` (produce the compressed and uncompressed
byte forms) and :class:`CanonicalDeserialize` (rebuild a value from either
form). The adapters never look inside the bytes; they only pick which of the
two forms to ask for.

Example:
    >>> class Counter(CanonicalValue):
    ...     def __init__(self, n: int) -> None:
    ...         self.n = n
    ...     def serialize_compressed(self) -> bytes:
    ...         return self.n.to_bytes(4, "big")
    ...     def serialize_uncompressed(self) -> bytes:
    ...         return self.n.to_bytes(8, "big")
    ...     @classmethod
    ...     def deserialize_compressed(cls, data: bytes) -> Counter:
    ...         return cls(int.from_bytes(expect_length(data, 4), "big"))
    ...     @classmethod
    ...     def deserialize_uncompressed(cls, data: bytes) -> Counter:
    ...         return cls(int.from_bytes(expect_length(data, 8), "big"))
"""

from __future__ import annotations

import enum
from abc import ABC, abstractmethod
from typing import Any, TypeVar

from .exceptions import DecodeError

T = TypeVar("T", bound="CanonicalDeserialize")


class EncodingVariant(enum.Enum):
    """The two canonical wire forms."""

    COMPRESSED = "compressed"
    UNCOMPRESSED = "uncompressed"


class CanonicalSerialize(ABC):
    """Encode half of the capability contract."""

    @abstractmethod
    def serialize_compressed(self) -> bytes:
        """Return the compressed form.

        Raises:
            EncodeError: If the value has no compressed representation
        """

    @abstractmethod
    def serialize_uncompressed(self) -> bytes:
        """Return the uncompressed form.

        Raises:
            EncodeError: If the value has no uncompressed representation
        """

    def serialize_with(self, variant: EncodingVariant) -> bytes:
        if variant is EncodingVariant.COMPRESSED:
            return self.serialize_compressed()
        return self.serialize_uncompressed()

    def serialized_size(self, variant: EncodingVariant) -> int:
        """Byte length of the given form."""
        return len(self.serialize_with(variant))

    def compressed_size(self) -> int:
        return self.serialized_size(EncodingVariant.COMPRESSED)

    def uncompressed_size(self) -> int:
        return self.serialized_size(EncodingVariant.UNCOMPRESSED)


class CanonicalDeserialize(ABC):
    """Decode half of the capability contract.

    Implementations must consume the whole buffer: short input and trailing
    bytes are both a DecodeError.
    """

    @classmethod
    @abstractmethod
    def deserialize_compressed(cls: type[T], data: bytes) -> T:
        """Rebuild a value from its compressed form.

        Raises:
            DecodeError: If data is not a valid compressed encoding
        """

    @classmethod
    @abstractmethod
    def deserialize_uncompressed(cls: type[T], data: bytes) -> T:
        """Rebuild a value from its uncompressed form.

        Raises:
            DecodeError: If data is not a valid uncompressed encoding
        """

    @classmethod
    def deserialize_with(cls: type[T], data: bytes, variant: EncodingVariant) -> T:
        if variant is EncodingVariant.COMPRESSED:
            return cls.deserialize_compressed(data)
        return cls.deserialize_uncompressed(data)


class CanonicalValue(CanonicalSerialize, CanonicalDeserialize):
    """Convenience base for types implementing both halves."""


def is_canonical(tp: Any) -> bool:
    """Check whether ``tp`` is a class implementing the full contract."""
    return (
        isinstance(tp, type)
        and issubclass(tp, CanonicalSerialize)
        and issubclass(tp, CanonicalDeserialize)
    )


def expect_length(data: bytes, length: int) -> bytes:
    """Return ``data`` as bytes if it is exactly ``length`` bytes long.

    Raises:
        DecodeError: On any other length
    """
    if len(data) != length:
        raise DecodeError(f"expected {length} bytes, got {len(data)} bytes")
    return bytes(data)
