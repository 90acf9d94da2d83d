"""Pytest configuration and shared fixtures."""

from __future__ import annotations

import pytest

from canonbridge.curves import ECPoint, P256Point, P384Point, Scalar, Secp256k1Point


@pytest.fixture(params=[Secp256k1Point, P256Point, P384Point], ids=lambda cls: cls.__name__)
def point_type(request: pytest.FixtureRequest) -> type[ECPoint]:
    """Every supported curve point type."""
    return request.param


@pytest.fixture
def point(point_type: type[ECPoint]) -> ECPoint:
    """Random point on each supported curve."""
    return point_type.generate()


@pytest.fixture
def p256_point() -> P256Point:
    """Random P-256 point."""
    return P256Point.generate()


@pytest.fixture
def scalar() -> Scalar:
    """Random scalar field element."""
    return Scalar.random()
