"""
Deterministic nonce derivation (RFC 6979 §3.2).

The nonce is the output of an HMAC-DRBG keyed by the private key and the
message digest, so the same ``(x, h)`` always yields the same *k* and no
randomness source is involved.  The generator is iterable: every candidate
after the first continues the DRBG (step H3 "K = HMAC_K(V || 0x00)"), which
is also how a signer proceeds when a nonce is rejected later (r = 0 or s = 0).

References
----------
- RFC 6979  Deterministic Usage of DSA and ECDSA, §3.2, §3.6
"""

from __future__ import annotations

import hashlib
import hmac
import logging
from typing import Iterator

from .errors import InvalidScalarRange, NonceDerivationFailed
from .hash import HashFunc, bits2int, bits2octets, check_digest, int2octets
from .params import SECP256K1

logger = logging.getLogger(__name__)

# consecutive out-of-range candidates before giving up; each rejection has
# probability about 2^-128 on secp256k1
MAX_REJECTIONS = 64


class NonceGenerator:
    """
    HMAC-DRBG seeded from a private key and a digest.

    Parameters
    ----------
    secret : int
        Private key *x*, in [1, order-1].
    digest : bytes
        Message digest *h1*; must be exactly ``hash_func().digest_size``.
    order : int
        Group order *q* (secp256k1 *n* by default).
    hash_func
        Hash constructor for HMAC, SHA-256 by default.
    extra_entropy : bytes
        Optional additional data *k'* (§3.6).  Keeps the output
        deterministic for identical inputs.
    """

    def __init__(
        self,
        secret: int,
        digest: bytes,
        order: int = SECP256K1.n,
        hash_func: HashFunc = hashlib.sha256,
        extra_entropy: bytes = b"",
    ) -> None:
        secret = int(secret)
        if not 0 < secret < order:
            raise InvalidScalarRange("private key must lie in [1, q-1]")
        check_digest(digest, hash_func().digest_size)

        self._order = order
        self._qlen = order.bit_length()
        self._rolen = (self._qlen + 7) // 8
        self._hash = hash_func

        holen = hash_func().digest_size
        seed = int2octets(secret, order) + bits2octets(digest, order) + extra_entropy

        # step b, c
        v = b"\x01" * holen
        k = b"\x00" * holen
        # step d, e
        k = self._hmac(k, v + b"\x00" + seed)
        v = self._hmac(k, v)
        # step f, g
        k = self._hmac(k, v + b"\x01" + seed)
        v = self._hmac(k, v)
        self._k = k
        self._v = v
        self._drawn = False

    def _hmac(self, key: bytes, data: bytes) -> bytes:
        return hmac.new(key, data, self._hash).digest()

    def _reseed(self) -> None:
        self._k = self._hmac(self._k, self._v + b"\x00")
        self._v = self._hmac(self._k, self._v)

    def _candidate(self) -> int:
        """Step h1-h2: fill T with V blocks until it holds qlen bits."""
        t = b""
        while len(t) < self._rolen:
            self._v = self._hmac(self._k, self._v)
            t += self._v
        return bits2int(t, self._qlen)

    def next_k(self) -> int:
        """
        Next nonce in [1, q-1].

        Every call after the first reseeds the DRBG before drawing, as
        required when the previous nonce was rejected by the signer.
        Raises ``NonceDerivationFailed`` after ``MAX_REJECTIONS``
        consecutive out-of-range candidates.
        """
        if self._drawn:
            self._reseed()
        self._drawn = True
        for _ in range(MAX_REJECTIONS + 1):
            k = self._candidate()
            if 0 < k < self._order:
                return k
            logger.debug("RFC 6979 candidate out of range, retrying")
            self._reseed()
        raise NonceDerivationFailed(
            f"no nonce in range after {MAX_REJECTIONS} rejections"
        )

    def __iter__(self) -> Iterator[int]:
        while True:
            yield self.next_k()


def generate_k(
    secret: int,
    digest: bytes,
    order: int = SECP256K1.n,
    hash_func: HashFunc = hashlib.sha256,
    extra_entropy: bytes = b"",
) -> int:
    """First RFC 6979 nonce for ``(secret, digest)``."""
    return NonceGenerator(secret, digest, order, hash_func, extra_entropy).next_k()
