"""
Private / public key objects.

A ``PrivateKey`` is a scalar *d* in [1, n-1]; its ``PublicKey`` is the point
Q = d·G.  Both are immutable and carry only fixed-width byte encodings:
storing the secret safely is the caller's business.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Union

from .curve import G, Point
from .errors import (
    InvalidPointEncoding,
    InvalidPrivateKey,
    InvalidPublicKey,
    InvalidScalarRange,
    PointNotOnCurve,
)
from .params import SECP256K1
from .scalar import SCALAR_BYTES, Scalar


# ── private key ─────────────────────────────────────────────────────────
class PrivateKey:
    """Signing key  d ∈ [1, n-1]."""

    __slots__ = ("_d", "_pub")

    def __init__(self, secret: Union[Scalar, int]) -> None:
        value = secret.value if isinstance(secret, Scalar) else secret
        if isinstance(value, bool) or not isinstance(value, int):
            raise InvalidPrivateKey("private key must be an integer")
        try:
            self._d = Scalar.nonzero(value)
        except InvalidScalarRange as exc:
            raise InvalidPrivateKey("private key must lie in [1, n-1]") from exc
        self._pub = None

    @classmethod
    def from_bytes(cls, data: bytes) -> PrivateKey:
        """Decode a 32-byte big-endian secret."""
        if len(data) != SCALAR_BYTES:
            raise InvalidPrivateKey(
                f"private key must be {SCALAR_BYTES} bytes, got {len(data)}"
            )
        return cls(int.from_bytes(data, "big"))

    @classmethod
    def generate(cls) -> PrivateKey:
        """Fresh key from the OS CSPRNG."""
        return cls(Scalar.random())

    def to_bytes(self) -> bytes:
        return self._d.to_bytes()

    @property
    def secret(self) -> Scalar:
        return self._d

    @property
    def public_key(self) -> PublicKey:
        """Q = d·G, computed on first use."""
        if self._pub is None:
            self._pub = PublicKey(self._d * G)
        return self._pub

    def sign(self, digest: bytes, extra_entropy: bytes = b""):
        """Canonical ECDSA signature of a 32-byte *digest*."""
        from .ecdsa import sign

        return sign(self, digest, extra_entropy=extra_entropy)

    def __eq__(self, o: object) -> bool:
        if not isinstance(o, PrivateKey):
            return False
        return self._d == o._d

    def __hash__(self) -> int:
        return hash(self._d)

    def __repr__(self) -> str:
        return "PrivateKey(<secret>)"


# ── public key ──────────────────────────────────────────────────────────
class PublicKey:
    """Verification key: a non-identity point on secp256k1."""

    __slots__ = ("_point",)

    def __init__(self, point: Point) -> None:
        if not isinstance(point, Point):
            raise InvalidPublicKey("public key must wrap a Point")
        if point.curve != SECP256K1:
            raise InvalidPublicKey(f"public key is on {point.curve.name}")
        if point.is_inf():
            raise InvalidPublicKey("public key is the point at infinity")
        if not point.is_on_curve():
            raise InvalidPublicKey("public key is not on secp256k1")
        self._point = point

    @classmethod
    def from_bytes(cls, data: bytes) -> PublicKey:
        """Deserialise SEC 1 compressed (33 B) or uncompressed (65 B)."""
        if len(data) not in (1 + SECP256K1.byte_length,
                             1 + 2 * SECP256K1.byte_length):
            raise InvalidPublicKey(
                f"public key must be 33 or 65 bytes, got {len(data)}"
            )
        try:
            point = Point.from_bytes(data, SECP256K1)
        except (InvalidPointEncoding, PointNotOnCurve) as exc:
            raise InvalidPublicKey(str(exc)) from exc
        return cls(point)

    def to_bytes(self, compressed: bool = True) -> bytes:
        return self._point.to_bytes(compressed=compressed)

    @property
    def point(self) -> Point:
        return self._point

    def verify(self, digest: bytes, signature, policy=None) -> bool:
        """See :func:`secpsig.ecdsa.verify`."""
        from .ecdsa import VerifyPolicy, verify

        if policy is None:
            policy = VerifyPolicy.PERMISSIVE
        return verify(self, digest, signature, policy)

    def __eq__(self, o: object) -> bool:
        if not isinstance(o, PublicKey):
            return False
        return self._point == o._point

    def __hash__(self) -> int:
        return hash(self._point)

    def __repr__(self) -> str:
        return f"PublicKey({self.to_bytes().hex()})"


# ── key pair ────────────────────────────────────────────────────────────
@dataclass(frozen=True)
class KeyPair:
    """A private key together with its derived public key."""

    private_key: PrivateKey
    public_key: PublicKey

    def __post_init__(self) -> None:
        if self.private_key.public_key != self.public_key:
            raise InvalidPublicKey("public key does not match the private key")

    @classmethod
    def from_secret(cls, secret: Union[Scalar, int]) -> KeyPair:
        sk = PrivateKey(secret)
        return cls(private_key=sk, public_key=sk.public_key)

    @classmethod
    def from_private_bytes(cls, data: bytes) -> KeyPair:
        sk = PrivateKey.from_bytes(data)
        return cls(private_key=sk, public_key=sk.public_key)

    @classmethod
    def generate(cls) -> KeyPair:
        sk = PrivateKey.generate()
        return cls(private_key=sk, public_key=sk.public_key)
