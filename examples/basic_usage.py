#!/usr/bin/env python3
"""Basic usage example for canonbridge.

This example demonstrates:
1. Declaring a model with compressed and uncompressed fields
2. Round-tripping through JSON and MessagePack
3. Comparing the sizes of the two canonical forms
4. What a corrupted value looks like to the caller
"""

from __future__ import annotations

from pydantic import ValidationError

from canonbridge import (
    CanonicalModel,
    Compressed,
    CompressedVec,
    Uncompressed,
    from_json,
    from_msgpack,
    to_json,
    to_msgpack,
)
from canonbridge.curves import P256Point, Scalar


class Handshake(CanonicalModel):
    """Handshake message carrying curve points and a scalar."""

    static_key: Compressed[P256Point]
    ephemeral_key: Uncompressed[P256Point]
    prekeys: CompressedVec[P256Point]
    nonce: Compressed[Scalar]


def main() -> None:
    """Run the basic usage example."""
    print("=" * 60)
    print("canonbridge Basic Usage Example")
    print("=" * 60)
    print()

    print("1. Creating a handshake message...")
    msg = Handshake(
        static_key=P256Point.generate(),
        ephemeral_key=P256Point.generate(),
        prekeys=[P256Point.generate() for _ in range(3)],
        nonce=Scalar.random(),
    )
    print(f"   Static key: {msg.static_key}")
    print()

    print("2. Canonical form sizes...")
    print(f"   Compressed point:   {msg.static_key.compressed_size()} bytes")
    print(f"   Uncompressed point: {msg.static_key.uncompressed_size()} bytes")
    print(f"   Scalar (both):      {msg.nonce.compressed_size()} bytes")
    print()

    print("3. JSON round trip...")
    data = to_json(msg)
    print(f"   {len(data)} bytes of JSON")
    assert from_json(Handshake, data) == msg
    print("   ✓ Decoded message matches")
    print()

    print("4. MessagePack round trip...")
    data = to_msgpack(msg)
    print(f"   {len(data)} bytes of MessagePack")
    assert from_msgpack(Handshake, data) == msg
    print("   ✓ Decoded message matches")
    print()

    print("5. Decoding a truncated key...")
    raw = msg.model_dump()
    raw["static_key"] = raw["static_key"][:-1]
    try:
        Handshake.model_validate(raw)
    except ValidationError as e:
        error = e.errors()[0]
        print(f"   ✗ {error['loc'][0]}: {error['type']}, expected {error['ctx']['expected']}")
    print()


if __name__ == "__main__":
    main()
