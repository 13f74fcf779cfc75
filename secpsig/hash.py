"""
Digest handling shared by nonce derivation and ECDSA.

Signing and verification consume a pre-computed digest; turning it into an
integer follows SEC 1 §4.1.3 step 5 / RFC 6979 §2.3.2 (``bits2int``): keep
the leftmost ``qlen`` bits.  ``hash_message`` is a convenience for callers
that do not bring their own hashing.
"""

from __future__ import annotations

import hashlib
from typing import Callable

from .errors import InvalidInput
from .params import SECP256K1

HashFunc = Callable[..., "hashlib._Hash"]

DIGEST_BYTES = 32


def hash_message(message: bytes, hash_func: HashFunc = hashlib.sha256) -> bytes:
    """Digest *message*; SHA-256 gives the 32 bytes ``sign`` expects."""
    return hash_func(message).digest()


def bits2int(data: bytes, qlen: int) -> int:
    """Leftmost *qlen* bits of *data* as a non-negative integer."""
    x = int.from_bytes(data, "big")
    blen = len(data) * 8
    if blen > qlen:
        x >>= blen - qlen
    return x


def int2octets(x: int, order: int) -> bytes:
    """*x* as ⌈qlen/8⌉ big-endian bytes."""
    return x.to_bytes((order.bit_length() + 7) // 8, "big")


def bits2octets(data: bytes, order: int) -> bytes:
    """``bits2int`` reduced modulo *order*, re-encoded at order width."""
    z1 = bits2int(data, order.bit_length())
    return int2octets(z1 % order, order)


def check_digest(digest: bytes, size: int = DIGEST_BYTES) -> None:
    if not isinstance(digest, (bytes, bytearray)):
        raise InvalidInput("digest must be bytes")
    if len(digest) != size:
        raise InvalidInput(f"digest must be {size} bytes, got {len(digest)}")


def digest_to_int(digest: bytes, order: int = SECP256K1.n) -> int:
    """h as used in  s = k⁻¹(h + r·d): ``bits2int(digest) mod n``."""
    return bits2int(digest, order.bit_length()) % order
