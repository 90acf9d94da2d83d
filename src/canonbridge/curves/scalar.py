"""Prime-field scalars.

Scalars are elements of the BLS12-381 scalar field, encoded as 32 bytes in
little-endian order. A field element has nothing to compress, so both canonical
forms are the same bytes. Encodings of integers at or above the modulus are
rejected rather than reduced.
"""

from __future__ import annotations

import secrets
from typing import Any, TypeVar, Union

from ..exceptions import DecodeError
from ..traits import CanonicalValue, expect_length

S = TypeVar("S", bound="Scalar")

# BLS12-381 scalar field order r
MODULUS = 0x73EDA753299D7D483339D80809A1D80553BDA402FFFE5BFEFFFFFFFF00000001
BYTE_LENGTH = 32


class Scalar(CanonicalValue):
    """Element of the BLS12-381 scalar field.

    Args:
        value: Integer, reduced modulo the field order
    """

    __slots__ = ("value",)

    def __init__(self, value: int) -> None:
        self.value = value % MODULUS

    @classmethod
    def random(cls: type[S]) -> S:
        return cls(secrets.randbelow(MODULUS))

    def serialize_compressed(self) -> bytes:
        return self.value.to_bytes(BYTE_LENGTH, "little")

    def serialize_uncompressed(self) -> bytes:
        return self.serialize_compressed()

    @classmethod
    def deserialize_compressed(cls: type[S], data: bytes) -> S:
        value = int.from_bytes(expect_length(data, BYTE_LENGTH), "little")
        if value >= MODULUS:
            raise DecodeError("non-canonical scalar: value is not below the field modulus")
        return cls(value)

    @classmethod
    def deserialize_uncompressed(cls: type[S], data: bytes) -> S:
        return cls.deserialize_compressed(data)

    def __int__(self) -> int:
        return self.value

    def __add__(self, other: Union[Scalar, int]) -> Scalar:
        return type(self)(self.value + int(other))

    def __sub__(self, other: Union[Scalar, int]) -> Scalar:
        return type(self)(self.value - int(other))

    def __mul__(self, other: Union[Scalar, int]) -> Scalar:
        return type(self)(self.value * int(other))

    def __neg__(self) -> Scalar:
        return type(self)(-self.value)

    __radd__ = __add__
    __rmul__ = __mul__

    def __eq__(self, other: Any) -> bool:
        if isinstance(other, Scalar):
            return self.value == other.value
        return NotImplemented

    def __hash__(self) -> int:
        return hash((Scalar, self.value))

    def __repr__(self) -> str:
        return f"Scalar(0x{self.value:x})"
