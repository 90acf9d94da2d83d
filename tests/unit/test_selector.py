"""Unit tests for the format selectors and the byte visitor."""

from __future__ import annotations

import base64
import json
from typing import Annotated, Callable

import pytest
from pydantic import BaseModel, ValidationError
from pydantic_core import PydanticCustomError, PydanticSerializationError

import canonbridge
from canonbridge import (
    ByteVisitor,
    Canonical,
    CanonicalModel,
    CapabilityError,
    Compressed,
    EncodeError,
    EncodingVariant,
    Uncompressed,
    compressed,
    uncompressed,
)
from canonbridge.curves import P256Point, P384Point, Scalar


def _b64(text: str) -> bytes:
    """Decode base64 in either alphabet."""
    return base64.urlsafe_b64decode(text.replace("+", "-").replace("/", "_"))


class Broken(Scalar):
    """Scalar whose encoders always fail."""

    def serialize_compressed(self) -> bytes:
        raise EncodeError("secret internal detail")

    def serialize_uncompressed(self) -> bytes:
        raise EncodeError("secret internal detail")


class PointMessage(CanonicalModel):
    """Message with one field per variant."""

    short: Compressed[P256Point]
    long: Uncompressed[P256Point]


class ScalarMessage(CanonicalModel):
    """Message with the default (compressed) annotation."""

    value: Canonical[Scalar]


class BrokenMessage(CanonicalModel):
    """Message whose field cannot be encoded."""

    value: Compressed[Broken]


class HookMessage(CanonicalModel):
    """Message using separate serialize and validate hooks."""

    point: Annotated[P256Point, uncompressed.serializer(), uncompressed.validator(P256Point)]


class TestFieldRoundTrip:
    """Test annotated fields through pydantic."""

    def test_python_mode(self, p256_point: P256Point) -> None:
        """Test model_dump gives the canonical bytes and validates back."""
        msg = PointMessage(short=p256_point, long=p256_point)
        dumped = msg.model_dump()

        assert dumped["short"] == p256_point.serialize_compressed()
        assert dumped["long"] == p256_point.serialize_uncompressed()
        assert len(dumped["short"]) == 33
        assert len(dumped["long"]) == 65
        assert PointMessage.model_validate(dumped) == msg

    def test_json_mode(self, p256_point: P256Point) -> None:
        """Test JSON carries the bytes as base64."""
        msg = PointMessage(short=p256_point, long=p256_point)
        data = json.loads(msg.model_dump_json())

        assert _b64(data["short"]) == p256_point.serialize_compressed()
        assert _b64(data["long"]) == p256_point.serialize_uncompressed()
        assert PointMessage.model_validate_json(msg.model_dump_json()) == msg

    def test_bytearray_input(self, p256_point: P256Point) -> None:
        """Test any contiguous byte buffer is accepted."""
        data = bytearray(p256_point.serialize_compressed())
        msg = PointMessage(short=data, long=memoryview(p256_point.serialize_uncompressed()))
        assert msg.short == p256_point
        assert msg.long == p256_point

    def test_scalar_forms_identical(self, scalar: Scalar) -> None:
        """Test both selectors emit identical bytes for a scalar."""
        assert compressed.serialize(scalar) == uncompressed.serialize(scalar)
        assert compressed.deserialize(uncompressed.serialize(scalar), Scalar) == scalar
        assert uncompressed.deserialize(compressed.serialize(scalar), Scalar) == scalar

    def test_default_annotation(self, scalar: Scalar) -> None:
        """Test Canonical[T] is the compressed form."""
        msg = ScalarMessage(value=scalar)
        assert msg.model_dump()["value"] == scalar.serialize_compressed()
        assert ScalarMessage.model_validate_json(msg.model_dump_json()) == msg

    def test_plain_base_model(self, p256_point: P256Point) -> None:
        """Test the annotations work on a plain BaseModel in python mode."""

        class Plain(BaseModel):
            point: Compressed[P256Point]

        dumped = Plain(point=p256_point).model_dump()
        assert Plain.model_validate(dumped).point == p256_point


class TestSeparateHooks:
    """Test serializer() and validator() used on their own."""

    def test_roundtrip(self, p256_point: P256Point) -> None:
        """Test the hook pair behaves like the combined annotation."""
        msg = HookMessage(point=p256_point)
        dumped = msg.model_dump()

        assert dumped["point"] == p256_point.serialize_uncompressed()
        assert HookMessage.model_validate(dumped) == msg
        assert HookMessage.model_validate_json(msg.model_dump_json()) == msg

    def test_validator_rejects_bad_bytes(self) -> None:
        """Test the validation hook reports invalid_value."""
        with pytest.raises(ValidationError) as exc_info:
            HookMessage.model_validate({"point": b"\x04\x00"})
        assert exc_info.value.errors()[0]["type"] == "invalid_value"

    def test_validator_rejects_bad_base64(self) -> None:
        """Test undecodable JSON strings are rejected."""
        with pytest.raises(ValidationError) as exc_info:
            HookMessage.model_validate_json('{"point": "abcde"}')
        assert exc_info.value.errors()[0]["type"] == "bytes_invalid_encoding"

    @pytest.mark.parametrize(
        ("mangle", "accepted"),
        [
            (lambda text: text, True),
            (lambda text: text.rstrip("="), True),
            (lambda text: "!!" + text, False),
        ],
        ids=["padded", "unpadded", "garbage-prefix"],
    )
    def test_json_bytes_match_combined_annotation(
        self, p256_point: P256Point, mangle: Callable[[str], str], accepted: bool
    ) -> None:
        """Test the validation hook reads JSON bytes exactly like Uncompressed[T]."""
        text = mangle(base64.urlsafe_b64encode(p256_point.serialize_uncompressed()).decode())
        short = base64.urlsafe_b64encode(p256_point.serialize_compressed()).decode()

        def outcome(model: type[CanonicalModel], payload: dict[str, str]) -> bool | str:
            try:
                model.model_validate_json(json.dumps(payload))
            except ValidationError as e:
                return e.errors()[0]["type"]
            return True

        hook = outcome(HookMessage, {"point": text})
        combined = outcome(PointMessage, {"short": short, "long": text})
        assert hook == combined
        assert (hook is True) is accepted

    def test_json_schema(self) -> None:
        """Test the hook pair documents the field as a string."""
        point = HookMessage.model_json_schema()["properties"]["point"]
        assert point["type"] == "string"

    def test_validator_keeps_serializer(self, p256_point: P256Point) -> None:
        """Test the validation hook does not replace a serializer before it."""
        data = HookMessage(point=p256_point).model_dump_json()
        assert _b64(json.loads(data)["point"]) == p256_point.serialize_uncompressed()


class TestDecodeErrors:
    """Test decode failures at the pydantic boundary."""

    def test_invalid_value(self, p256_point: P256Point) -> None:
        """Test short input reports the bytes and the expected type."""
        data = p256_point.serialize_compressed()[:-1]
        with pytest.raises(ValidationError, match="invalid value: byte array") as exc_info:
            PointMessage.model_validate({"short": data, "long": p256_point})

        error = exc_info.value.errors()[0]
        assert error["type"] == "invalid_value"
        assert error["loc"] == ("short",)
        assert error["ctx"]["expected"] == "P256Point"
        assert error["ctx"]["bytes"] == list(data)

    @pytest.mark.parametrize("variant", list(EncodingVariant))
    def test_corrupted(self, p256_point: P256Point, variant: EncodingVariant) -> None:
        """Test short, long and flagged buffers are all rejected."""
        selector = compressed if variant is EncodingVariant.COMPRESSED else uncompressed
        data = selector.serialize(p256_point)

        for bad in (data[:-1], data + b"\x00", bytes([data[0] ^ 0x80]) + data[1:]):
            with pytest.raises(ValidationError):
                selector.deserialize(bad, P256Point)

    def test_wrong_variant(self, p256_point: P256Point) -> None:
        """Test uncompressed bytes are rejected by the compressed selector."""
        with pytest.raises(ValidationError, match="expected P256Point"):
            compressed.deserialize(uncompressed.serialize(p256_point), P256Point)

    def test_wrong_curve(self, p256_point: P256Point) -> None:
        """Test bytes of another curve are rejected."""
        with pytest.raises(ValidationError, match="expected P384Point"):
            compressed.deserialize(compressed.serialize(p256_point), P384Point)

    @pytest.mark.parametrize("value", [42, "abc", {"x": 1}, [1, 2]])
    def test_invalid_type(self, value: object) -> None:
        """Test non-buffer input is rejected with its type name."""
        with pytest.raises(ValidationError) as exc_info:
            PointMessage.model_validate({"short": value, "long": value})

        errors = exc_info.value.errors()
        assert {e["type"] for e in errors} == {"invalid_type"}
        assert errors[0]["ctx"]["received"] == type(value).__name__

    def test_json_not_base64(self) -> None:
        """Test JSON strings must be base64."""
        with pytest.raises(ValidationError):
            ScalarMessage.model_validate_json('{"value": "***"}')


class TestEncodeErrors:
    """Test encode failures at the pydantic boundary."""

    def test_message_is_generic(self) -> None:
        """Test the failure carries a fixed message and no internal detail."""
        msg = BrokenMessage(value=Broken(1))
        with pytest.raises(PydanticSerializationError, match="serialize_compressed failed") as exc_info:
            msg.model_dump()
        assert "secret" not in str(exc_info.value)

    def test_json_mode(self) -> None:
        """Test JSON serialization fails the same way."""
        with pytest.raises(PydanticSerializationError, match="serialize_compressed failed"):
            BrokenMessage(value=Broken(1)).model_dump_json()

    def test_encode_drops_cause(self) -> None:
        """Test the selector's encode raises a plain ValueError without a cause."""
        with pytest.raises(ValueError, match="serialize_uncompressed failed") as exc_info:
            uncompressed.encode(Broken(1))
        assert exc_info.value.__cause__ is None
        assert exc_info.value.__suppress_context__

    def test_selector_serialize(self) -> None:
        """Test the standalone serialize reports a serialization error."""
        with pytest.raises(PydanticSerializationError, match="serialize_compressed failed"):
            compressed.serialize(Broken(1))


class TestCapability:
    """Test types that do not implement the contract."""

    def test_plain_type_rejected(self) -> None:
        """Test annotating a non-canonical type fails at class creation."""
        with pytest.raises(CapabilityError, match="does not implement"):

            class Bad(CanonicalModel):
                value: Compressed[int]

    def test_validator_rejects_plain_type(self) -> None:
        """Test the validation hook checks the target type."""
        with pytest.raises(CapabilityError):
            compressed.validator(bytes)


class TestByteVisitor:
    """Test the byte visitor directly."""

    def test_expecting(self) -> None:
        """Test the expectation string is the type name."""
        assert ByteVisitor(P256Point, EncodingVariant.COMPRESSED).expecting() == "P256Point"

    def test_visit_bytes(self, scalar: Scalar) -> None:
        """Test decoding through the visitor."""
        visitor = ByteVisitor(Scalar, EncodingVariant.UNCOMPRESSED)
        assert visitor.visit_bytes(scalar.serialize_uncompressed()) == scalar

    def test_visit_bytes_error(self) -> None:
        """Test decode failures become invalid_value errors without a cause."""
        visitor = ByteVisitor(Scalar, EncodingVariant.COMPRESSED)
        with pytest.raises(PydanticCustomError) as exc_info:
            visitor.visit_bytes(b"\x01\x02")

        assert exc_info.value.type == "invalid_value"
        assert exc_info.value.context == {"bytes": [1, 2], "expected": "Scalar"}
        assert exc_info.value.__cause__ is None
        assert str(exc_info.value) == "invalid value: byte array [1, 2], expected Scalar"

    def test_instance_passthrough(self, scalar: Scalar) -> None:
        """Test an existing instance is returned unchanged."""
        visitor = ByteVisitor(Scalar, EncodingVariant.COMPRESSED)
        assert visitor.validate_python(scalar) is scalar


class TestDefaultExport:
    """Test the package-level default selector."""

    def test_default_is_compressed(self, p256_point: P256Point) -> None:
        """Test serialize/deserialize use the compressed form."""
        data = canonbridge.serialize(p256_point)
        assert data == p256_point.serialize_compressed()
        assert canonbridge.deserialize(data, P256Point) == p256_point

    def test_aliases(self) -> None:
        """Test the default aliases point at the compressed selector."""
        assert canonbridge.Canonical is Compressed
        assert Compressed.selector is compressed
        assert compressed.variant is EncodingVariant.COMPRESSED
        assert uncompressed.variant is EncodingVariant.UNCOMPRESSED


class TestJsonSchema:
    """Test JSON schema generation."""

    def test_field_schema(self) -> None:
        """Test canonical fields appear as described strings."""
        schema = PointMessage.model_json_schema()
        short = schema["properties"]["short"]
        assert short["type"] == "string"
        assert short["description"] == "compressed canonical encoding"
        assert schema["properties"]["long"]["description"] == "uncompressed canonical encoding"
