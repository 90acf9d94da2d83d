"""Outer wire formats for models holding canonical values.

The serde adapters only ever hand pydantic a ``bytes`` object; the helpers
here pick how the whole model is framed. JSON goes through pydantic directly
(bytes as base64, see :mod:`canonbridge.models.base`), MessagePack goes through
``msgpack`` with canonical bytes stored as native ``bin`` values.
"""

from __future__ import annotations

from typing import Any, TypeVar

import msgpack
from pydantic import BaseModel

from .exceptions import DecodeError

M = TypeVar("M", bound=BaseModel)


def to_json(model: BaseModel) -> bytes:
    """Serialize a model to JSON bytes.

    Raises:
        PydanticSerializationError: If a canonical field cannot be encoded
    """
    return model.model_dump_json().encode("utf-8")


def from_json(model_class: type[M], data: str | bytes) -> M:
    """Deserialize a model from JSON.

    Raises:
        ValidationError: If the JSON is malformed or a canonical field does not decode
    """
    return model_class.model_validate_json(data)


def to_msgpack(model: BaseModel) -> bytes:
    """Serialize a model to MessagePack.

    Example:
        >>> data = to_msgpack(Commitment(point=P256Point.generate()))
        >>> from_msgpack(Commitment, data)
        Commitment(point=P256Point(...))
    """
    return msgpack.packb(model.model_dump(mode="python"), use_bin_type=True)


def from_msgpack(model_class: type[M], data: bytes) -> M:
    """Deserialize a model from MessagePack.

    Raises:
        DecodeError: If data is not a single well-formed MessagePack object
        ValidationError: If a field does not validate
    """
    payload = _unpack(data)
    return model_class.model_validate(payload)


def _unpack(data: bytes) -> Any:
    try:
        return msgpack.unpackb(data, raw=False, strict_map_key=True)
    except (msgpack.UnpackException, ValueError) as e:
        raise DecodeError(f"Invalid MessagePack payload: {e}") from e
