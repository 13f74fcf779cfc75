"""
Scalars: integers modulo the secp256k1 group order *n*.

Private keys, nonces and the signature components r and s all live here.
``Scalar`` is a :class:`~secpsig.field.FieldElement` with the modulus fixed
to *n*, so arithmetic results stay ``Scalar`` and mixing with a coordinate
of F_p raises :class:`~secpsig.errors.ModulusMismatch`.
"""

from __future__ import annotations

import secrets

from .errors import InvalidInput, InvalidScalarRange
from .field import FieldElement
from .params import SECP256K1

ORDER = SECP256K1.n
HALF_ORDER = SECP256K1.half_order
SCALAR_BYTES = SECP256K1.order_byte_length


class Scalar(FieldElement):
    """Element of the scalar field  Z_n  where *n* = ``ORDER``."""

    __slots__ = ()

    def __init__(self, value: int) -> None:
        super().__init__(value, ORDER)

    def _make(self, value: int) -> Scalar:
        return Scalar(value)

    # constructors -----------------------------------------------------------
    @classmethod
    def zero(cls) -> Scalar:
        return cls(0)

    @classmethod
    def one(cls) -> Scalar:
        return cls(1)

    @classmethod
    def random(cls) -> Scalar:
        """Uniform in [1, n-1] via rejection sampling."""
        while True:
            c = int.from_bytes(secrets.token_bytes(SCALAR_BYTES), "big")
            if 0 < c < ORDER:
                return cls(c)

    @classmethod
    def nonzero(cls, value: int) -> Scalar:
        """Wrap *value* without reduction; it must lie in [1, n-1]."""
        if not 0 < value < ORDER:
            raise InvalidScalarRange("scalar must lie in [1, n-1]")
        return cls(value)

    @classmethod
    def from_bytes(cls, data: bytes) -> Scalar:  # type: ignore[override]
        """Decode 32 big-endian bytes; rejects v ≥ n."""
        if len(data) != SCALAR_BYTES:
            raise InvalidInput(f"need {SCALAR_BYTES} bytes, got {len(data)}")
        v = int.from_bytes(data, "big")
        if v >= ORDER:
            raise InvalidScalarRange("scalar out of range")
        return cls(v)

    @classmethod
    def from_bytes_reduce(cls, data: bytes) -> Scalar:
        """Hash-output safe: reduce arbitrary length modulo *n*."""
        return cls(int.from_bytes(data, "big"))

    # predicates -------------------------------------------------------------
    def is_high(self) -> bool:
        """True when  v > n/2  (the non-canonical half for signature s)."""
        return self._v > HALF_ORDER

    def __repr__(self) -> str:
        h = hex(self._v)
        return f"Scalar(0x{h[2:10]}…)" if len(h) > 14 else f"Scalar({h})"
