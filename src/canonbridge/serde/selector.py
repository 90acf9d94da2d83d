"""Format selectors: embed canonical values in pydantic models.

A :class:`FormatSelector` is bound to one :class:`EncodingVariant` and offers
the field-level hooks pydantic understands:

- ``selector[T]`` (or ``Compressed[T]`` / ``Uncompressed[T]``) annotates a field
  for both directions.
- ``selector.serializer()`` only overrides serialization (a ``PlainSerializer``).
- ``selector.validator(T)`` only overrides validation (a ``CanonicalValidator``).

Usage:
    from canonbridge import Compressed, Uncompressed
    from canonbridge.curves import Secp256k1Point

    class Transfer(CanonicalModel):
        sender: Compressed[Secp256k1Point]
        receiver: Uncompressed[Secp256k1Point]

The serialized value is always a single ``bytes`` object; how those bytes are
framed (base64 in JSON, ``bin`` in MessagePack, ...) is up to pydantic and the
outer format.
"""

from __future__ import annotations

from functools import lru_cache
from typing import TYPE_CHECKING, Annotated, Any, TypeVar

from pydantic import (
    GetCoreSchemaHandler,
    GetJsonSchemaHandler,
    PlainSerializer,
    PydanticSchemaGenerationError,
    TypeAdapter,
)
from pydantic.json_schema import JsonSchemaValue
from pydantic_core import CoreSchema, core_schema
from structlog import get_logger

from ..exceptions import CapabilityError
from ..models.base import CANONICAL_CONFIG
from ..traits import CanonicalSerialize, EncodingVariant, is_canonical
from .visitor import ByteVisitor

logger = get_logger()

V = TypeVar("V")


class FormatSelector:
    """Adapter between canonical values and pydantic for one encoding variant.

    Args:
        variant: The canonical form this selector reads and writes
    """

    def __init__(self, variant: EncodingVariant) -> None:
        self.variant = variant
        self.log = logger.new(variant=variant.value)

    def __repr__(self) -> str:
        return f"FormatSelector({self.variant.value})"

    def __getitem__(self, target: type[V]) -> Any:
        return Annotated[target, CanonicalBytes(self)]

    def encode(self, value: CanonicalSerialize) -> bytes:
        """Produce the canonical bytes for ``value``.

        This is the field serializer pydantic calls. The cause of a failure is
        dropped on purpose so capability internals never reach the caller.

        Raises:
            ValueError: ``serialize_<variant> failed``
        """
        try:
            return value.serialize_with(self.variant)
        except Exception:
            self.log.debug("canonical encode failed", value_type=type(value).__qualname__)
            raise ValueError(f"serialize_{self.variant.value} failed") from None

    def visitor(self, target: type[V]) -> ByteVisitor[Any]:
        _check_capability(target)
        return ByteVisitor(target, self.variant)

    def schema(self, target: type[V]) -> CoreSchema:
        """Pydantic core schema for a field of type ``target``."""
        return self.validation_schema(
            target,
            serialization=core_schema.plain_serializer_function_ser_schema(
                self.encode, return_schema=core_schema.bytes_schema()
            ),
        )

    def validation_schema(
        self, target: type[V], serialization: core_schema.SerSchema | None = None
    ) -> CoreSchema:
        """Validation half of :meth:`schema`.

        JSON strings are turned into bytes by pydantic's own bytes schema, so
        ``val_json_bytes`` applies exactly as it does for a plain ``bytes``
        field. Python input goes through the visitor directly.
        """
        visitor = self.visitor(target)
        return core_schema.json_or_python_schema(
            json_schema=core_schema.no_info_after_validator_function(
                visitor.visit_bytes, core_schema.bytes_schema()
            ),
            python_schema=core_schema.no_info_plain_validator_function(visitor.validate_python),
            serialization=serialization,
        )

    def serializer(self) -> PlainSerializer:
        """Serialization-only hook, for use inside ``Annotated``."""
        return PlainSerializer(self.encode, return_type=bytes)

    def validator(self, target: type[V]) -> CanonicalValidator:
        """Validation-only hook decoding into ``target``, for use inside ``Annotated``."""
        _check_capability(target)
        return CanonicalValidator(self, target)

    def adapter(self, target: type[V]) -> TypeAdapter[Any]:
        return _adapter(self, target)

    def serialize(self, value: CanonicalSerialize) -> bytes:
        """Serialize a single value through pydantic.

        Raises:
            PydanticSerializationError: If the value cannot be encoded
        """
        return self.adapter(type(value)).dump_python(value)

    def deserialize(self, data: bytes, target: type[V]) -> V:
        """Deserialize a single value through pydantic.

        Raises:
            ValidationError: ``invalid_value`` if data does not decode
        """
        return self.adapter(target).validate_python(data)

    def serialize_json(self, value: CanonicalSerialize) -> bytes:
        return self.adapter(type(value)).dump_json(value)

    def deserialize_json(self, data: str | bytes, target: type[V]) -> V:
        return self.adapter(target).validate_json(data)


class CanonicalBytes:
    """``Annotated`` marker routing a field through a :class:`FormatSelector`."""

    __slots__ = ("selector",)

    def __init__(self, selector: FormatSelector) -> None:
        self.selector = selector

    def __repr__(self) -> str:
        return f"CanonicalBytes({self.selector.variant.value})"

    def __get_pydantic_core_schema__(self, source_type: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        return self.selector.schema(source_type)

    def __get_pydantic_json_schema__(
        self, schema: CoreSchema, handler: GetJsonSchemaHandler
    ) -> JsonSchemaValue:
        json_schema = handler(schema)
        json_schema = handler.resolve_ref_schema(json_schema)
        json_schema["description"] = f"{self.selector.variant.value} canonical encoding"
        return json_schema


class CanonicalValidator:
    """``Annotated`` marker that only overrides validation.

    Whatever serializer the inner schema carries (for example a
    ``selector.serializer()`` placed before it) is kept.
    """

    __slots__ = ("selector", "target")

    def __init__(self, selector: FormatSelector, target: type[Any]) -> None:
        self.selector = selector
        self.target = target

    def __repr__(self) -> str:
        return f"CanonicalValidator({self.selector.variant.value}, {self.target.__qualname__})"

    def __get_pydantic_core_schema__(self, source_type: Any, handler: GetCoreSchemaHandler) -> CoreSchema:
        try:
            inner = handler(source_type)
        except PydanticSchemaGenerationError:
            inner = None
        serialization = inner.get("serialization") if inner is not None else None
        return self.selector.validation_schema(self.target, serialization=serialization)


def _check_capability(target: Any) -> None:
    if not is_canonical(target):
        raise CapabilityError(
            f"{target!r} does not implement CanonicalSerialize and CanonicalDeserialize"
        )


@lru_cache(maxsize=None)
def _adapter(selector: FormatSelector, target: type[Any]) -> TypeAdapter[Any]:
    return TypeAdapter(selector[target], config=CANONICAL_CONFIG)


compressed = FormatSelector(EncodingVariant.COMPRESSED)
uncompressed = FormatSelector(EncodingVariant.UNCOMPRESSED)


class _SelectorMeta(type):
    """Metaclass that makes ``Compressed[T]`` return ``Annotated[T, ...]`` at runtime."""

    selector: FormatSelector

    def __getitem__(cls, target: type[V]) -> type[V]:
        return cls.selector[target]  # type: ignore[no-any-return]


if TYPE_CHECKING:
    # For type checking: Compressed[T] is just T
    Compressed = Annotated[V, ...]
    Uncompressed = Annotated[V, ...]
else:

    class Compressed(metaclass=_SelectorMeta):
        """Compressed[T] annotates a field to travel in compressed form."""

        selector = compressed

    class Uncompressed(metaclass=_SelectorMeta):
        """Uncompressed[T] annotates a field to travel in uncompressed form."""

        selector = uncompressed
