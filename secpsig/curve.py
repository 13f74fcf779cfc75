"""
Affine elliptic-curve arithmetic in pure Python.

Points live on a :class:`~secpsig.params.CurveParams` curve (secp256k1 by
default).  All group operations are the textbook affine formulas over
:class:`~secpsig.field.FieldElement`: every addition costs one field
inversion, which keeps the code short and auditable at the price of speed.

Nothing here is constant time.  Scalar multiplication strategies are plain
module functions taking ``(k, P)`` so another implementation can be dropped
in without touching ``Point``.

References
----------
- SEC 1 v2 §2.2.1  elliptic curve group law
- SEC 1 v2 §2.3.3 / §2.3.4  point encoding and decoding
"""

from __future__ import annotations

from typing import Optional, Union

from .errors import (
    CurveMismatch,
    InvalidInput,
    InvalidPointEncoding,
    ModulusMismatch,
    PointNotOnCurve,
)
from .field import FieldElement
from .params import CurveParams, SECP256K1


Coordinate = Union[FieldElement, int]


# ── Point ───────────────────────────────────────────────────────────────
class Point:
    """
    Affine point on a short Weierstrass curve, or its point at infinity.

    The identity is represented by ``x is None and y is None`` rather than a
    sentinel coordinate pair; it matches the algebraic convention *P + O = P*.
    The public constructor validates the curve equation, so any instance
    obtained from outside input is on the curve.
    """

    __slots__ = ("_x", "_y", "_curve")

    def __init__(
        self,
        x: Coordinate,
        y: Coordinate,
        curve: CurveParams = SECP256K1,
    ) -> None:
        fx = _to_field(x, curve)
        fy = _to_field(y, curve)
        if not curve.contains(fx.value, fy.value):
            raise PointNotOnCurve(
                f"({fx.value:#x}, {fy.value:#x}) is not on {curve.name}"
            )
        self._x: Optional[FieldElement] = fx
        self._y: Optional[FieldElement] = fy
        self._curve = curve

    @classmethod
    def _trusted(
        cls,
        x: Optional[FieldElement],
        y: Optional[FieldElement],
        curve: CurveParams,
    ) -> Point:
        """Build a point known to be valid (result of group arithmetic)."""
        pt = cls.__new__(cls)
        pt._x = x
        pt._y = y
        pt._curve = curve
        return pt

    # constructors -----------------------------------------------------------
    @classmethod
    def generator(cls, curve: CurveParams = SECP256K1) -> Point:
        """Base point *G* of *curve*."""
        return cls(curve.gx, curve.gy, curve)

    @classmethod
    def identity(cls, curve: CurveParams = SECP256K1) -> Point:
        """Point at infinity, the additive identity."""
        return cls._trusted(None, None, curve)

    @classmethod
    def from_bytes(cls, data: bytes, curve: CurveParams = SECP256K1) -> Point:
        """Deserialise SEC 1 compressed, uncompressed or ``0x00`` (identity)."""
        width = curve.byte_length
        if not data:
            raise InvalidPointEncoding("empty point encoding")
        prefix = data[0]

        if prefix == 0x00:
            if len(data) != 1:
                raise InvalidPointEncoding("identity encoding must be one byte")
            return cls.identity(curve)

        if prefix == 0x04:
            if len(data) != 1 + 2 * width:
                raise InvalidPointEncoding(
                    f"uncompressed point needs {1 + 2 * width} bytes, "
                    f"got {len(data)}"
                )
            try:
                x = FieldElement.from_bytes(data[1:1 + width], curve.p)
                y = FieldElement.from_bytes(data[1 + width:], curve.p)
            except InvalidInput as exc:
                raise InvalidPointEncoding(str(exc)) from exc
            return cls(x, y, curve)

        if prefix in (0x02, 0x03):
            if len(data) != 1 + width:
                raise InvalidPointEncoding(
                    f"compressed point needs {1 + width} bytes, got {len(data)}"
                )
            try:
                x = FieldElement.from_bytes(data[1:], curve.p)
            except InvalidInput as exc:
                raise InvalidPointEncoding(str(exc)) from exc
            y = (x * x * x + curve.a * x + curve.b).sqrt()
            if y is None:
                raise PointNotOnCurve(f"no point with x = {x.value:#x}")
            if y.is_zero() and prefix == 0x03:
                raise InvalidPointEncoding("odd prefix for a point with y = 0")
            if y.is_odd() != (prefix == 0x03):
                y = -y
            return cls._trusted(x, y, curve)

        raise InvalidPointEncoding(f"unknown point prefix {prefix:#04x}")

    # serialisation ----------------------------------------------------------
    def to_bytes(self, compressed: bool = True) -> bytes:
        if self._x is None or self._y is None:
            return b"\x00"
        if compressed:
            prefix = b"\x03" if self._y.is_odd() else b"\x02"
            return prefix + self._x.to_bytes()
        return b"\x04" + self._x.to_bytes() + self._y.to_bytes()

    @property
    def x(self) -> Optional[FieldElement]:
        """Affine x, ``None`` for the identity."""
        return self._x

    @property
    def y(self) -> Optional[FieldElement]:
        return self._y

    @property
    def curve(self) -> CurveParams:
        return self._curve

    def is_inf(self) -> bool:
        return self._x is None

    def is_on_curve(self) -> bool:
        """Re-check the curve equation (the identity counts as on-curve)."""
        if self._x is None or self._y is None:
            return self._x is None and self._y is None
        if self._x.prime != self._curve.p or self._y.prime != self._curve.p:
            return False
        return self._curve.contains(self._x.value, self._y.value)

    # group operations -------------------------------------------------------
    def _check_curve(self, o: Point) -> None:
        if o._curve is not self._curve and o._curve != self._curve:
            raise CurveMismatch(
                f"points on different curves: {self._curve.name} "
                f"vs {o._curve.name}"
            )

    def __neg__(self) -> Point:
        if self._x is None or self._y is None:
            return self
        return Point._trusted(self._x, -self._y, self._curve)

    def double(self) -> Point:
        """2·P  via the tangent line."""
        if self._x is None or self._y is None:
            return self
        if self._y.is_zero():
            return Point.identity(self._curve)      # vertical tangent
        x, y = self._x, self._y
        slope = (3 * x * x + self._curve.a) / (2 * y)
        x3 = slope * slope - 2 * x
        y3 = slope * (x - x3) - y
        return Point._trusted(x3, y3, self._curve)

    def __add__(self, o: Point) -> Point:
        if not isinstance(o, Point):
            return NotImplemented
        self._check_curve(o)
        if self._x is None or self._y is None:
            return o
        if o._x is None or o._y is None:
            return self
        if self._x == o._x:
            if (self._y + o._y).is_zero():
                return Point.identity(self._curve)  # vertical chord, P + (-P)
            return self.double()
        slope = (o._y - self._y) / (o._x - self._x)
        x3 = slope * slope - self._x - o._x
        y3 = slope * (self._x - x3) - self._y
        return Point._trusted(x3, y3, self._curve)

    def __sub__(self, o: Point) -> Point:
        if not isinstance(o, Point):
            return NotImplemented
        return self + (-o)

    def scalar_mul(self, k: int) -> Point:
        """k·P  by double-and-add."""
        return double_and_add(k, self)

    def __mul__(self, k) -> Point:
        return self.__rmul__(k)

    def __rmul__(self, k) -> Point:
        if isinstance(k, FieldElement):
            # only scalars mod the group order act on points
            if k.prime != self._curve.n:
                raise ModulusMismatch(
                    "scalar modulus does not match the curve order"
                )
            return double_and_add(k.value, self)
        if isinstance(k, int) and not isinstance(k, bool):
            return double_and_add(k, self)
        return NotImplemented

    # comparison / hashing ---------------------------------------------------
    def __eq__(self, o: object) -> bool:
        if not isinstance(o, Point):
            return False
        if o._curve is not self._curve and o._curve != self._curve:
            return False
        return self._x == o._x and self._y == o._y

    def __hash__(self) -> int:
        return hash((self._curve.name, self.to_bytes()))

    def __repr__(self) -> str:
        if self._x is None:
            return "Point(∞)"
        return f"Point(0x{self._x.value:064x})"[:42] + "…)"


def _to_field(v: Coordinate, curve: CurveParams) -> FieldElement:
    if isinstance(v, FieldElement):
        if v.prime != curve.p:
            raise ModulusMismatch("coordinate is not an element of the curve field")
        return v
    return curve.field(v)


# ── scalar multiplication strategies ────────────────────────────────────
def double_and_add(k: int, point: Point) -> Point:
    """
    k·P  scanning the bits of *k* from least significant upwards.

    k = 0 and the identity short-circuit to the identity explicitly; a
    negative *k* multiplies ``-P``.
    """
    if k == 0 or point.is_inf():
        return Point.identity(point.curve)
    if k < 0:
        return double_and_add(-k, -point)
    result = Point.identity(point.curve)
    addend = point
    while k:
        if k & 1:
            result = result + addend
        addend = addend.double()
        k >>= 1
    return result


def montgomery_ladder(k: int, point: Point) -> Point:
    """
    k·P  with the Montgomery ladder: one addition and one doubling per bit,
    whatever the bit value.  Same result as :func:`double_and_add`.
    """
    if k == 0 or point.is_inf():
        return Point.identity(point.curve)
    if k < 0:
        return montgomery_ladder(-k, -point)
    r0 = Point.identity(point.curve)
    r1 = point
    # invariant: r1 = r0 + P
    for i in reversed(range(k.bit_length())):
        if (k >> i) & 1:
            r0, r1 = r0 + r1, r1.double()
        else:
            r0, r1 = r0.double(), r0 + r1
    return r0


# ── module-level generator ──────────────────────────────────────────────
G = Point.generator()
