"""
Tests for scalars mod n and the curve constants.
"""

import dataclasses

import pytest

from secpsig import (
    ORDER,
    SECP256K1,
    CurveParams,
    FieldElement,
    InvalidInput,
    InvalidScalarRange,
    ModulusMismatch,
    NotInvertible,
    Scalar,
)


class TestCurveParams:
    """secp256k1 constants"""

    def test_values(self) -> None:
        assert SECP256K1.p == 2**256 - 2**32 - 977
        assert SECP256K1.a == 0 and SECP256K1.b == 7
        assert SECP256K1.h == 1
        assert SECP256K1.n.bit_length() == 256
        assert SECP256K1.byte_length == 32
        assert SECP256K1.order_byte_length == 32
        assert SECP256K1.half_order == SECP256K1.n // 2

    def test_immutable(self) -> None:
        with pytest.raises(dataclasses.FrozenInstanceError):
            SECP256K1.n = 7  # type: ignore[misc]

    def test_rejects_generator_off_curve(self) -> None:
        with pytest.raises(InvalidInput):
            CurveParams(name="bad", p=223, a=0, b=7, gx=47, gy=72, n=21)


class TestScalarArithmetic:
    """Arithmetic mod n keeps the Scalar type"""

    def test_reduction(self) -> None:
        assert Scalar(ORDER + 3) == Scalar(3)
        assert Scalar(-1).value == ORDER - 1

    def test_ops_return_scalar(self) -> None:
        a, b = Scalar(5), Scalar(ORDER - 2)
        assert isinstance(a + b, Scalar) and a + b == 3
        assert isinstance(a - b, Scalar) and a - b == 7
        assert isinstance(a * b, Scalar) and a * b == Scalar(-10)
        assert isinstance(-a, Scalar)
        assert isinstance(a.inv(), Scalar)

    def test_inverse(self) -> None:
        k = Scalar(0x1234567890ABCDEF)
        assert k * k.inv() == Scalar.one()
        assert k.inv() == k.inv(method="euclid")
        assert k / k == 1

    def test_zero_not_invertible(self) -> None:
        with pytest.raises(NotInvertible):
            Scalar.zero().inv()

    def test_mismatch_with_coordinate(self) -> None:
        with pytest.raises(ModulusMismatch):
            Scalar(1) + FieldElement(1, SECP256K1.p)

    def test_is_high(self) -> None:
        assert not Scalar(SECP256K1.half_order).is_high()
        assert Scalar(SECP256K1.half_order + 1).is_high()
        assert not (-Scalar(SECP256K1.half_order + 1)).is_high()

    def test_random_in_range(self) -> None:
        for _ in range(8):
            assert 0 < Scalar.random().value < ORDER


class TestScalarRange:
    """Boundary checks for keys, nonces and signature components"""

    def test_order_rejected(self) -> None:
        with pytest.raises(InvalidScalarRange):
            Scalar.nonzero(ORDER)
        with pytest.raises(InvalidScalarRange):
            Scalar.from_bytes(ORDER.to_bytes(32, "big"))

    def test_order_minus_one_accepted(self) -> None:
        assert Scalar.nonzero(ORDER - 1).value == ORDER - 1
        assert Scalar.from_bytes((ORDER - 1).to_bytes(32, "big")).value == ORDER - 1

    def test_zero_rejected_as_nonzero(self) -> None:
        with pytest.raises(InvalidScalarRange):
            Scalar.nonzero(0)
        assert Scalar.from_bytes(b"\x00" * 32).is_zero()

    def test_from_bytes_wrong_length(self) -> None:
        with pytest.raises(InvalidInput):
            Scalar.from_bytes(b"\x01" * 33)

    def test_from_bytes_reduce(self) -> None:
        assert Scalar.from_bytes_reduce(b"\xff" * 32) == Scalar(2**256 - 1)

    def test_roundtrip(self) -> None:
        s = Scalar(0xC0FFEE)
        assert Scalar.from_bytes(s.to_bytes()) == s
        assert len(s.to_bytes()) == 32
