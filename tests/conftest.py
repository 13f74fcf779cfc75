"""Shared fixtures."""

import hashlib

import pytest

from secpsig import CurveParams, KeyPair, Point


# y² = x³ + 7 over F_223: 252 points, (47, 71) generates a subgroup of order 21
TOY_CURVE = CurveParams(name="toy223", p=223, a=0, b=7, gx=47, gy=71, n=21, h=12)


@pytest.fixture
def toy_curve() -> CurveParams:
    return TOY_CURVE


@pytest.fixture
def toy_g() -> Point:
    return Point.generator(TOY_CURVE)


@pytest.fixture
def digest() -> bytes:
    return hashlib.sha256(b"hello secp256k1").digest()


@pytest.fixture
def keypair() -> KeyPair:
    return KeyPair.from_secret(
        0xC9AFA9D845BA75166B5C215767B1D6934E50C3DB36E89B127B8A622B120F6721
    )
