"""
secpsig: ECDSA on secp256k1 from first principles.

Pure-Python reference implementation of

- **prime-field arithmetic** (``FieldElement``, modular inverses)
- **affine curve arithmetic** on secp256k1 (``Point``, scalar multiplication)
- **ECDSA** with RFC 6979 deterministic nonces and low-s signatures

Correctness first: nothing here runs in constant time, so do not use it to
guard secrets against side-channel attackers.

Quick start
-----------
::

    from secpsig import KeyPair, hash_message, sign, verify

    pair = KeyPair.generate()
    digest = hash_message(b"transfer 1 BTC to Alice")

    sig = sign(pair.private_key, digest)
    assert verify(pair.public_key, digest, sig)

    wire = sig.to_bytes()            # 64 bytes  r ‖ s
"""

import logging

__version__ = "0.1.0"

# ── errors ──────────────────────────────────────────────────────────────
from .errors import (
    ECDSAError,
    ModulusMismatch,
    CurveMismatch,
    NotInvertible,
    PointNotOnCurve,
    InvalidInput,
    InvalidScalarRange,
    InvalidPrivateKey,
    InvalidSignature,
    NonCanonicalSignature,
    InvalidPointEncoding,
    InvalidSignatureEncoding,
    InvalidPublicKey,
    SignatureVerificationFailed,
    NonceDerivationFailed,
)

# ── arithmetic ──────────────────────────────────────────────────────────
from .field import FieldElement, inverse_euclid, inverse_fermat
from .params import CurveParams, SECP256K1
from .curve import Point, G, double_and_add, montgomery_ladder
from .scalar import Scalar, ORDER

# ── keys and signatures ─────────────────────────────────────────────────
from .keys import PrivateKey, PublicKey, KeyPair
from .hash import hash_message
from .rfc6979 import NonceGenerator, generate_k
from .ecdsa import Signature, VerifyPolicy, sign, verify

logging.getLogger(__name__).addHandler(logging.NullHandler())

__all__ = [
    # version
    "__version__",
    # errors
    "ECDSAError", "ModulusMismatch", "CurveMismatch", "NotInvertible",
    "PointNotOnCurve", "InvalidInput", "InvalidScalarRange",
    "InvalidPrivateKey", "InvalidSignature", "NonCanonicalSignature",
    "InvalidPointEncoding", "InvalidSignatureEncoding", "InvalidPublicKey",
    "SignatureVerificationFailed", "NonceDerivationFailed",
    # arithmetic
    "FieldElement", "inverse_euclid", "inverse_fermat",
    "CurveParams", "SECP256K1",
    "Point", "G", "double_and_add", "montgomery_ladder",
    "Scalar", "ORDER",
    # keys and signatures
    "PrivateKey", "PublicKey", "KeyPair",
    "hash_message", "NonceGenerator", "generate_k",
    "Signature", "VerifyPolicy", "sign", "verify",
]
