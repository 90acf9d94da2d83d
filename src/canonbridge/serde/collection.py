"""Sequences of canonical values.

A :class:`SequenceLifter` reuses a single-value :class:`FormatSelector` for
homogeneous lists: every element is wrapped in the selector's annotation and
pydantic's own list handling does the rest, so the result is a list of byte
strings in the original order.

Example:
    class Batch(CanonicalModel):
        keys: CompressedVec[P256Point]
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated, Any, Sequence, TypeVar

from pydantic import TypeAdapter

from ..models.base import CANONICAL_CONFIG
from ..traits import CanonicalSerialize
from .selector import FormatSelector, compressed, uncompressed

V = TypeVar("V")


class SequenceLifter:
    """Lift a :class:`FormatSelector` to ordered sequences of one value type."""

    def __init__(self, selector: FormatSelector) -> None:
        self.selector = selector

    def __repr__(self) -> str:
        return f"SequenceLifter({self.selector.variant.value})"

    def __getitem__(self, target: type[V]) -> Any:
        return list[self.selector[target]]

    def adapter(self, target: type[V]) -> TypeAdapter[Any]:
        return _adapter(self, target)

    def serialize(self, values: Sequence[CanonicalSerialize]) -> list[bytes]:
        """Serialize each element, keeping order.

        Raises:
            PydanticSerializationError: If any element cannot be encoded
        """
        if not values:
            return []
        return self.adapter(type(values[0])).dump_python(list(values))

    def deserialize(self, items: Sequence[bytes], target: type[V]) -> list[V]:
        """Deserialize a list of byte strings into values, keeping order.

        Raises:
            ValidationError: If any element does not decode; the error location
                is the element index
        """
        return self.adapter(target).validate_python(items)

    def serialize_json(self, values: Sequence[CanonicalSerialize]) -> bytes:
        if not values:
            return b"[]"
        return self.adapter(type(values[0])).dump_json(list(values))

    def deserialize_json(self, data: str | bytes, target: type[V]) -> list[V]:
        return self.adapter(target).validate_json(data)


@lru_cache(maxsize=None)
def _adapter(lifter: SequenceLifter, target: type[Any]) -> TypeAdapter[Any]:
    return TypeAdapter(lifter[target], config=CANONICAL_CONFIG)


vec = SequenceLifter(compressed)
uncompressed_vec = SequenceLifter(uncompressed)


class _LifterMeta(type):
    """Metaclass that makes ``CompressedVec[T]`` return ``list[Annotated[T, ...]]`` at runtime."""

    lifter: SequenceLifter

    def __getitem__(cls, target: type[V]) -> type[list[V]]:
        return cls.lifter[target]  # type: ignore[no-any-return]


if TYPE_CHECKING:
    CompressedVec = Annotated[list[V], ...]
    UncompressedVec = Annotated[list[V], ...]
else:

    class CompressedVec(metaclass=_LifterMeta):
        """CompressedVec[T] annotates a list field of compressed values."""

        lifter = vec

    class UncompressedVec(metaclass=_LifterMeta):
        """UncompressedVec[T] annotates a list field of uncompressed values."""

        lifter = uncompressed_vec
