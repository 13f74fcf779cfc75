"""
ECDSA over secp256k1 with RFC 6979 nonces and low-s signatures.

**Signing** (digest *h*, private key *d*):

    k   = RFC6979(d, h)                    (deterministic nonce)
    R   = k·G,   r = x(R) mod n
    s   = k⁻¹ (h + r·d) mod n
    s   = n - s   if s > n/2               (low-s normalisation)

A nonce giving R = ∞, r = 0 or s = 0 is discarded and the DRBG continues
with the next candidate.

**Verification** (public key *Q*):

    w = s⁻¹,  u1 = h·w,  u2 = r·w,   X = u1·G + u2·Q
    accept  iff  X ≠ ∞  and  x(X) mod n = r

Verification accepts both (r, s) and (r, n-s) unless the caller selects
``VerifyPolicy.LOW_S``.

Wire format
-----------
The canonical encoding is 64 raw bytes  r ‖ s  (32-byte big-endian each).
DER  ``SEQUENCE { INTEGER r, INTEGER s }``  is supported as an alternate.

References
----------
- SEC 1 v2 §4.1.3 / §4.1.4  ECDSA signing and verification
- RFC 6979                   deterministic nonces
- BIP-62 / BIP-146           low-s normalisation
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from typing import Union

from cryptography.hazmat.primitives.asymmetric.utils import (
    decode_dss_signature,
    encode_dss_signature,
)

from .curve import G, Point
from .errors import (
    InvalidInput,
    InvalidPublicKey,
    InvalidSignature,
    InvalidSignatureEncoding,
    NonCanonicalSignature,
    NonceDerivationFailed,
    SignatureVerificationFailed,
)
from .hash import check_digest, digest_to_int
from .keys import PrivateKey, PublicKey
from .params import SECP256K1
from .rfc6979 import NonceGenerator
from .scalar import HALF_ORDER, ORDER, SCALAR_BYTES, Scalar

logger = logging.getLogger(__name__)

# nonces tried per signature before giving up; each discard has
# probability about 2^-256
MAX_SIGN_ATTEMPTS = 16

SIGNATURE_BYTES = 2 * SCALAR_BYTES


# ── policy ──────────────────────────────────────────────────────────────
class VerifyPolicy(Enum):
    """Which of the two algebraically valid s values ``verify`` accepts."""

    PERMISSIVE = auto()     # (r, s) and (r, n-s)
    LOW_S = auto()          # only s ≤ n/2


# ── signature ───────────────────────────────────────────────────────────
@dataclass(frozen=True)
class Signature:
    """
    ECDSA signature  (r, s).

    Components are plain integers as decoded from the wire; their range is
    enforced by :func:`verify`, not on construction, so a malformed
    signature can still be represented and rejected with a precise error.
    """

    r: int
    s: int

    def is_low_s(self) -> bool:
        return self.s <= HALF_ORDER

    def normalize(self) -> Signature:
        """Canonical low-s twin of this signature."""
        if self.is_low_s():
            return self
        return Signature(self.r, ORDER - self.s)

    # raw 64-byte form ---------------------------------------------------
    def to_bytes(self) -> bytes:
        """Serialise to 64 bytes: r (32) ‖ s (32)."""
        if not (0 <= self.r < 1 << 256 and 0 <= self.s < 1 << 256):
            raise InvalidSignatureEncoding("r or s does not fit in 32 bytes")
        return self.r.to_bytes(SCALAR_BYTES, "big") + self.s.to_bytes(
            SCALAR_BYTES, "big"
        )

    @classmethod
    def from_bytes(cls, data: bytes) -> Signature:
        if len(data) != SIGNATURE_BYTES:
            raise InvalidSignatureEncoding(
                f"expected {SIGNATURE_BYTES} bytes, got {len(data)}"
            )
        r = int.from_bytes(data[:SCALAR_BYTES], "big")
        s = int.from_bytes(data[SCALAR_BYTES:], "big")
        return cls(r=r, s=s)

    # DER form -----------------------------------------------------------
    def to_der(self) -> bytes:
        if self.r < 0 or self.s < 0:
            raise InvalidSignatureEncoding("DER integers must be non-negative")
        return encode_dss_signature(self.r, self.s)

    @classmethod
    def from_der(cls, data: bytes) -> Signature:
        """Strict DER decode: minimal lengths and integers, no trailing data."""
        try:
            r, s = decode_dss_signature(bytes(data))
        except ValueError as exc:
            raise InvalidSignatureEncoding(f"malformed DER signature: {exc}") from exc
        return cls(r=r, s=s)

    def __repr__(self) -> str:
        return f"Signature(r=0x{self.r:064x}, s=0x{self.s:064x})"


# ── sign / verify ───────────────────────────────────────────────────────
def sign(
    private_key: Union[PrivateKey, Scalar, int],
    digest: bytes,
    extra_entropy: bytes = b"",
) -> Signature:
    """
    Produce the canonical (low-s) signature of *digest*.

    Parameters
    ----------
    private_key : PrivateKey | Scalar | int
        Secret *d* in [1, n-1].
    digest : bytes
        32-byte message digest; hashing is the caller's job.
    extra_entropy : bytes
        Optional RFC 6979 §3.6 additional data.

    Raises
    ------
    InvalidInput
        Wrong digest length, or a key outside [1, n-1]
        (``InvalidScalarRange``).
    NonceDerivationFailed
        ``MAX_SIGN_ATTEMPTS`` nonces were all unusable.
    """
    check_digest(digest)
    d = _secret_of(private_key)
    h = Scalar(digest_to_int(digest))
    nonces = NonceGenerator(d.value, digest, extra_entropy=extra_entropy)

    for _ in range(MAX_SIGN_ATTEMPTS):
        k = Scalar(nonces.next_k())
        R = k * G
        if R.is_inf():
            logger.debug("nonce gave R = infinity, drawing the next one")
            continue
        r = Scalar(R.x.value)              # type: ignore[union-attr]
        if r.is_zero():
            logger.debug("nonce gave r = 0, drawing the next one")
            continue
        s = k.inv() * (h + r * d)
        if s.is_zero():
            logger.debug("nonce gave s = 0, drawing the next one")
            continue
        if s.is_high():
            s = -s
        return Signature(r=r.value, s=s.value)

    raise NonceDerivationFailed(
        f"no usable nonce after {MAX_SIGN_ATTEMPTS} attempts"
    )


def verify(
    public_key: Union[PublicKey, Point],
    digest: bytes,
    signature: Signature,
    policy: VerifyPolicy = VerifyPolicy.PERMISSIVE,
) -> bool:
    """
    Check *signature* over *digest* against *public_key*.

    Returns ``True`` on success and raises otherwise, so a failed check can
    never be mistaken for a falsy success:

    - ``InvalidInput``: digest is not 32 bytes;
    - ``InvalidSignature``: r or s outside [1, n-1];
    - ``NonCanonicalSignature``: s > n/2 under ``VerifyPolicy.LOW_S``;
    - ``InvalidPublicKey``: identity, wrong curve or off-curve point;
    - ``SignatureVerificationFailed``: the signature does not match.
    """
    check_digest(digest)
    if not isinstance(signature, Signature):
        raise InvalidInput("signature must be a Signature")
    if not 0 < signature.r < ORDER:
        raise InvalidSignature("r must lie in [1, n-1]")
    if not 0 < signature.s < ORDER:
        raise InvalidSignature("s must lie in [1, n-1]")
    if policy is VerifyPolicy.LOW_S and not signature.is_low_s():
        raise NonCanonicalSignature("s > n/2 rejected by the low-s policy")

    Q = _point_of(public_key)
    h = Scalar(digest_to_int(digest))
    r = Scalar(signature.r)
    w = Scalar(signature.s).inv()
    u1 = h * w
    u2 = r * w

    X = u1 * G + u2 * Q
    if X.is_inf():
        logger.debug("verification produced the point at infinity")
        raise SignatureVerificationFailed("u1·G + u2·Q is the point at infinity")
    if Scalar(X.x.value) != r:             # type: ignore[union-attr]
        raise SignatureVerificationFailed("signature does not match")
    return True


# ── argument normalisation ──────────────────────────────────────────────
def _secret_of(private_key) -> Scalar:
    if isinstance(private_key, PrivateKey):
        return private_key.secret
    if isinstance(private_key, Scalar):
        return Scalar.nonzero(private_key.value)
    if isinstance(private_key, int) and not isinstance(private_key, bool):
        return Scalar.nonzero(private_key)
    raise InvalidInput("private key must be a PrivateKey, Scalar or int")


def _point_of(public_key) -> Point:
    if isinstance(public_key, PublicKey):
        point = public_key.point
    elif isinstance(public_key, Point):
        point = public_key
    else:
        raise InvalidPublicKey("public key must be a PublicKey or Point")
    if point.curve != SECP256K1:
        raise InvalidPublicKey(f"public key is on {point.curve.name}")
    if point.is_inf():
        raise InvalidPublicKey("public key is the point at infinity")
    if not point.is_on_curve():
        raise InvalidPublicKey("public key is not on secp256k1")
    return point
