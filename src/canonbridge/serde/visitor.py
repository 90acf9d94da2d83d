"""Byte visitor: turns one contiguous byte buffer into a canonical value.

The visitor is the receiving end of the serde adapters. It is bound to a
target type and an encoding variant and does nothing except call the matching
decode capability, translating any failure into pydantic's generic error
model.
"""

from __future__ import annotations

from typing import Any, Generic, TypeVar

from pydantic_core import PydanticCustomError
from structlog import get_logger

from ..traits import CanonicalDeserialize, EncodingVariant

logger = get_logger()

V = TypeVar("V", bound=CanonicalDeserialize)

_BUFFER_TYPES = (bytes, bytearray, memoryview)


class ByteVisitor(Generic[V]):
    """Decode raw bytes into ``target`` using one fixed variant.

    Args:
        target: Type implementing the canonical decode capability
        variant: Which canonical form the bytes are expected in
    """

    __slots__ = ("target", "variant", "log")

    def __init__(self, target: type[V], variant: EncodingVariant) -> None:
        self.target = target
        self.variant = variant
        self.log = logger.new(target=self.expecting(), variant=variant.value)

    def expecting(self) -> str:
        """Name of the expected type, used in diagnostics."""
        return self.target.__qualname__

    def visit_bytes(self, data: bytes) -> V:
        """Decode ``data``.

        Raises:
            PydanticCustomError: ``invalid_value`` carrying the received bytes
                and the expected type name
        """
        raw = bytes(data)
        try:
            return self.target.deserialize_with(raw, self.variant)
        except Exception:
            self.log.debug("canonical decode failed", length=len(raw))
            raise PydanticCustomError(
                "invalid_value",
                "invalid value: byte array {bytes}, expected {expected}",
                {"bytes": list(raw), "expected": self.expecting()},
            ) from None

    def validate_python(self, value: Any) -> V:
        """Accept an instance of the target as-is, or a byte buffer to decode."""
        if isinstance(value, self.target):
            return value
        if isinstance(value, _BUFFER_TYPES):
            return self.visit_bytes(value)
        raise self._invalid_type(value)

    def _invalid_type(self, value: Any) -> PydanticCustomError:
        return PydanticCustomError(
            "invalid_type",
            "invalid type: {received}, expected {expected}",
            {"received": type(value).__name__, "expected": self.expecting()},
        )
