"""Elliptic-curve points with SEC1 canonical encodings.

Points wrap a ``cryptography`` public key. The compressed form is the SEC1 /
X9.62 compressed point (``0x02`` or ``0x03`` followed by x), the uncompressed
form is ``0x04`` followed by x and y. Decoding is strict: the length and
prefix must match the requested form exactly and the point must lie on the
curve.
"""

from __future__ import annotations

from typing import Any, ClassVar, TypeVar

from cryptography.hazmat.primitives.asymmetric import ec
from cryptography.hazmat.primitives.serialization import Encoding, PublicFormat

from ..exceptions import DecodeError, EncodeError
from ..traits import CanonicalValue, expect_length

P = TypeVar("P", bound="ECPoint")

COMPRESSED_PREFIXES = (0x02, 0x03)
UNCOMPRESSED_PREFIX = 0x04


class ECPoint(CanonicalValue):
    """Affine point on a short Weierstrass curve.

    Subclasses pick the curve through the ``curve`` class attribute.

    Args:
        key: Public key holding the point; must be on the subclass curve
    """

    curve: ClassVar[ec.EllipticCurve]

    def __init__(self, key: ec.EllipticCurvePublicKey) -> None:
        if key.curve.name != self.curve.name:
            raise ValueError(
                f"{type(self).__name__} expects a {self.curve.name} key, got {key.curve.name}"
            )
        self._key = key

    @classmethod
    def generate(cls: type[P]) -> P:
        """Random point (the public key of a fresh private key)."""
        return cls(ec.generate_private_key(cls.curve).public_key())

    @classmethod
    def from_coordinates(cls: type[P], x: int, y: int) -> P:
        """Build a point from affine coordinates.

        Raises:
            ValueError: If (x, y) is not on the curve
        """
        return cls(ec.EllipticCurvePublicNumbers(x, y, cls.curve).public_key())

    @classmethod
    def coordinate_size(cls) -> int:
        return (cls.curve.key_size + 7) // 8

    @property
    def key(self) -> ec.EllipticCurvePublicKey:
        return self._key

    @property
    def x(self) -> int:
        return self._key.public_numbers().x

    @property
    def y(self) -> int:
        return self._key.public_numbers().y

    def serialize_compressed(self) -> bytes:
        return self._public_bytes(PublicFormat.CompressedPoint)

    def serialize_uncompressed(self) -> bytes:
        return self._public_bytes(PublicFormat.UncompressedPoint)

    @classmethod
    def deserialize_compressed(cls: type[P], data: bytes) -> P:
        data = expect_length(data, 1 + cls.coordinate_size())
        if data[0] not in COMPRESSED_PREFIXES:
            raise DecodeError(f"invalid compressed point prefix 0x{data[0]:02x}")
        return cls._from_encoded_point(data)

    @classmethod
    def deserialize_uncompressed(cls: type[P], data: bytes) -> P:
        data = expect_length(data, 1 + 2 * cls.coordinate_size())
        if data[0] != UNCOMPRESSED_PREFIX:
            raise DecodeError(f"invalid uncompressed point prefix 0x{data[0]:02x}")
        return cls._from_encoded_point(data)

    @classmethod
    def _from_encoded_point(cls: type[P], data: bytes) -> P:
        try:
            key = ec.EllipticCurvePublicKey.from_encoded_point(cls.curve, data)
        except ValueError as e:
            raise DecodeError(f"not a point on {cls.curve.name}: {e}") from e
        return cls(key)

    def _public_bytes(self, fmt: PublicFormat) -> bytes:
        try:
            return self._key.public_bytes(Encoding.X962, fmt)
        except ValueError as e:
            raise EncodeError(f"cannot encode {type(self).__name__}: {e}") from e

    def __eq__(self, other: Any) -> bool:
        if type(other) is not type(self):
            return NotImplemented
        return self._key.public_numbers() == other._key.public_numbers()

    def __hash__(self) -> int:
        numbers = self._key.public_numbers()
        return hash((type(self), numbers.x, numbers.y))

    def __repr__(self) -> str:
        return f"{type(self).__name__}(x=0x{self.x:x}, y=0x{self.y:x})"


class Secp256k1Point(ECPoint):
    """Point on secp256k1 (33 bytes compressed, 65 uncompressed)."""

    curve = ec.SECP256K1()


class P256Point(ECPoint):
    """Point on NIST P-256 / secp256r1 (33 bytes compressed, 65 uncompressed)."""

    curve = ec.SECP256R1()


class P384Point(ECPoint):
    """Point on NIST P-384 / secp384r1 (49 bytes compressed, 97 uncompressed)."""

    curve = ec.SECP384R1()
