"""
Prime-field arithmetic  F_p.

``FieldElement`` is the leaf type of the package: curve coordinates are
elements of F_p and :class:`~secpsig.scalar.Scalar` is the same structure
over the group order *n*.  Values are reduced on construction, so every
instance is in canonical form  0 ≤ v < p.
"""

from __future__ import annotations

from typing import Optional, Union

from .errors import InvalidInput, ModulusMismatch, NotInvertible


# ── modular inverse strategies ──────────────────────────────────────────
def inverse_fermat(a: int, p: int) -> int:
    """a⁻¹ mod p  as  a^(p-2)  (Fermat's little theorem, *p* prime)."""
    a %= p
    if a == 0:
        raise NotInvertible("cannot invert zero")
    return pow(a, p - 2, p)


def inverse_euclid(a: int, m: int) -> int:
    """a⁻¹ mod m  via the extended Euclidean algorithm."""
    a %= m
    if a == 0:
        raise NotInvertible("cannot invert zero")
    # invariant: old_r ≡ old_s · a  (mod m)
    old_r, r = a, m
    old_s, s = 1, 0
    while r:
        q = old_r // r
        old_r, r = r, old_r - q * r
        old_s, s = s, old_s - q * s
    if old_r != 1:
        raise NotInvertible(f"{a} has no inverse modulo {m}")
    return old_s % m


_INVERSE = {
    "fermat": inverse_fermat,
    "euclid": inverse_euclid,
}


# ── FieldElement ────────────────────────────────────────────────────────
class FieldElement:
    """Element of  F_p  for a prime modulus *p*."""

    __slots__ = ("_v", "_p")

    def __init__(self, value: int, prime: int) -> None:
        if prime < 2:
            raise InvalidInput(f"modulus must be > 1, got {prime}")
        self._p = prime
        self._v = value % prime

    def _make(self, value: int) -> FieldElement:
        """Build a result in the same field (subclasses return their type)."""
        return FieldElement(value, self._p)

    def _coerce(self, o: object) -> Optional[int]:
        """Raw value of a same-field operand, or ``None`` if unsupported."""
        if isinstance(o, FieldElement):
            if o._p != self._p:
                raise ModulusMismatch(
                    f"operands in different fields: {self._p:#x} vs {o._p:#x}"
                )
            return o._v
        if isinstance(o, int) and not isinstance(o, bool):
            return o
        return None

    # constructors -----------------------------------------------------------
    @classmethod
    def from_bytes(cls, data: bytes, prime: int) -> FieldElement:
        """Decode a fixed-width big-endian value; rejects v ≥ p."""
        width = (prime.bit_length() + 7) // 8
        if len(data) != width:
            raise InvalidInput(f"need {width} bytes, got {len(data)}")
        v = int.from_bytes(data, "big")
        if v >= prime:
            raise InvalidInput("field element out of range")
        return cls(v, prime)

    # serialisation ----------------------------------------------------------
    def to_bytes(self) -> bytes:
        return self._v.to_bytes((self._p.bit_length() + 7) // 8, "big")

    @property
    def value(self) -> int:
        return self._v

    @property
    def prime(self) -> int:
        return self._p

    def __int__(self) -> int:
        return self._v

    def is_zero(self) -> bool:
        return self._v == 0

    def is_odd(self) -> bool:
        return self._v & 1 == 1

    # arithmetic -------------------------------------------------------------
    def __add__(self, o: Union[FieldElement, int]) -> FieldElement:
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return self._make(self._v + v)

    def __radd__(self, o: int) -> FieldElement:
        return self.__add__(o)             # int + x, and sum()

    def __sub__(self, o: Union[FieldElement, int]) -> FieldElement:
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return self._make(self._v - v)

    def __rsub__(self, o: int) -> FieldElement:
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return self._make(v - self._v)

    def __mul__(self, o):
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return self._make(self._v * v)

    def __rmul__(self, o):
        return self.__mul__(o)

    def __neg__(self) -> FieldElement:
        return self._make(-self._v)

    def __truediv__(self, o: Union[FieldElement, int]) -> FieldElement:
        v = self._coerce(o)
        if v is None:
            return NotImplemented
        return self * self._make(v).inv()

    def __pow__(self, e: int) -> FieldElement:
        if e < 0:
            return self.inv() ** (-e)
        return self._make(pow(self._v, e, self._p))

    def inv(self, method: str = "fermat") -> FieldElement:
        """
        Multiplicative inverse.

        *method* is ``"fermat"`` (exponentiation, needs *p* prime) or
        ``"euclid"`` (extended Euclid).  Both return the same element.
        """
        try:
            strategy = _INVERSE[method]
        except KeyError:
            raise InvalidInput(f"unknown inverse method {method!r}") from None
        return self._make(strategy(self._v, self._p))

    def sqrt(self) -> Optional[FieldElement]:
        """
        A square root, or ``None`` for a quadratic non-residue.

        For  p ≡ 3 (mod 4)  (secp256k1 and the small test curves) the root
        is a^((p+1)/4); any other prime goes through Tonelli-Shanks.
        """
        p = self._p
        if self._v == 0 or p == 2:
            return self
        if pow(self._v, (p - 1) // 2, p) != 1:
            return None
        if p % 4 == 3:
            return self ** ((p + 1) // 4)

        # Tonelli-Shanks: p - 1 = q·2^m with q odd
        q, m = p - 1, 0
        while q % 2 == 0:
            q //= 2
            m += 1
        z = 2
        while pow(z, (p - 1) // 2, p) != p - 1:
            z += 1
        c = pow(z, q, p)
        t = pow(self._v, q, p)
        r = pow(self._v, (q + 1) // 2, p)
        while t != 1:
            i, t2 = 0, t
            while t2 != 1:
                t2 = t2 * t2 % p
                i += 1
            b = pow(c, 1 << (m - i - 1), p)
            m, c = i, b * b % p
            t, r = t * c % p, r * b % p
        return self._make(r)

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if isinstance(o, FieldElement):
            return self._p == o._p and self._v == o._v
        # only the canonical representative compares equal, so that
        # hash(fe) == hash(int) holds whenever fe == int
        if isinstance(o, int) and not isinstance(o, bool):
            return self._v == o
        return False

    def __hash__(self) -> int:
        return hash(self._v)

    def __bool__(self) -> bool:
        return self._v != 0

    def __repr__(self) -> str:
        h = hex(self._v)
        v = f"0x{h[2:10]}…" if len(h) > 14 else h
        return f"FieldElement({v}, p={self._p.bit_length()}-bit)"
