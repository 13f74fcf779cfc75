"""
Curve domain parameters.

``SECP256K1`` is built once at import time and is a frozen dataclass, so
every consumer shares the same read-only value.  Other ``CurveParams``
instances (tiny textbook curves) are only used to exercise the generic point
arithmetic in tests.

References
----------
- SEC 2 v2 §2.4.1  secp256k1 domain parameters
"""

from __future__ import annotations

from dataclasses import dataclass

from .errors import InvalidInput
from .field import FieldElement


@dataclass(frozen=True)
class CurveParams:
    """Short Weierstrass curve  y² = x³ + a·x + b  over  F_p  with base point."""

    name: str
    p: int          # field prime
    a: int
    b: int
    gx: int         # generator G = (gx, gy)
    gy: int
    n: int          # prime order of G
    h: int = 1      # cofactor

    def __post_init__(self) -> None:
        if not (0 <= self.gx < self.p and 0 <= self.gy < self.p):
            raise InvalidInput(f"{self.name}: generator coordinates not in F_p")
        if not self.contains(self.gx, self.gy):
            raise InvalidInput(f"{self.name}: generator is not on the curve")

    def field(self, value: int) -> FieldElement:
        return FieldElement(value, self.p)

    def contains(self, x: int, y: int) -> bool:
        """Curve equation check on raw coordinates."""
        return (y * y - (x * x * x + self.a * x + self.b)) % self.p == 0

    @property
    def byte_length(self) -> int:
        """Width of an encoded coordinate."""
        return (self.p.bit_length() + 7) // 8

    @property
    def order_byte_length(self) -> int:
        """Width of an encoded scalar."""
        return (self.n.bit_length() + 7) // 8

    @property
    def half_order(self) -> int:
        """⌊n/2⌋, the largest canonical (low) s."""
        return self.n >> 1


SECP256K1 = CurveParams(
    name="secp256k1",
    p=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEFFFFFC2F,
    a=0,
    b=7,
    gx=0x79BE667EF9DCBBAC55A06295CE870B07029BFCDB2DCE28D959F2815B16F81798,
    gy=0x483ADA7726A3C4655DA4FBFC0E1108A8FD17B448A68554199C47D08FFB10D4B8,
    n=0xFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFFEBAAEDCE6AF48A03BBFD25E8CD0364141,
    h=1,
)
